"""FastMCP server exposing the Maiga partner analytics API.

This server provides six tools backed by https://api.maiga.ai:
- analyse_token: Token technical and fundamental analysis
- mindshare: 24h social sentiment for a token
- token_info: Holder and on-chain information
- market_report: Market reports per analysis mode
- kol_analysis: Crypto influencer statistics on X (Twitter)
- trending_tokens: Top trending tokens in the last 24h

The partner token and transport are configured via MAIGA_* environment
variables. See config.py for available settings.
"""

from __future__ import annotations

import sys
from pathlib import Path

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

# Handle both direct execution and package import
if __package__ in {None, ""}:
    project_src = Path(__file__).resolve().parents[2]
    if project_src.is_dir():
        sys.path.insert(0, project_src.as_posix())
    from servers.maiga.client import MaigaClient
    from servers.maiga.config import MaigaSettings, get_settings
    from servers.maiga.logging_config import configure_logging
    from servers.maiga.schemas import TOOLS
    from servers.maiga.tools import (
        analyse_token,
        init_client,
        kol_analysis,
        market_report,
        mindshare,
        token_info,
        trending_tokens,
    )
else:
    from .client import MaigaClient
    from .config import MaigaSettings, get_settings
    from .logging_config import configure_logging
    from .schemas import TOOLS
    from .tools import (
        analyse_token,
        init_client,
        kol_analysis,
        market_report,
        mindshare,
        token_info,
        trending_tokens,
    )

# Initialize FastMCP application
app = FastMCP(
    name="maiga-api",
    instructions=(
        "Crypto market intelligence from the Maiga partner API: token analysis, "
        "social mindshare, on-chain token information, market reports, KOL statistics "
        "and trending tokens. Every tool returns the raw API response as pretty-printed JSON."
    ),
    version="1.0.0",
)

# Register tools with the titles and descriptions from TOOLS
for _handler in (
    analyse_token,
    mindshare,
    token_info,
    market_report,
    kol_analysis,
    trending_tokens,
):
    _tool = TOOLS[_handler.__name__]
    app.tool(
        _handler,
        name=_tool.name,
        description=_tool.description,
        annotations=ToolAnnotations(
            title=_tool.title,
            readOnlyHint=True,
            openWorldHint=True,
        ),
    )


def create_server(
    settings: MaigaSettings | None = None,
    client: MaigaClient | None = None,
) -> FastMCP:
    """Bind a partner API client built from ``settings`` and return the app.

    Args:
        settings: Server configuration; read from the environment when omitted
        client: Prebuilt client, used instead of one built from ``settings``

    Returns:
        The FastMCP application with all six tools registered
    """
    if client is None:
        client = MaigaClient(settings or get_settings())
    init_client(client)
    return app


def main() -> None:
    """Main entry point for the Maiga MCP server.

    Configures logging, binds the partner API client and starts the server
    with the transport selected in settings (STDIO, HTTP, or SSE).
    """
    settings = get_settings()

    # Configure logging before any other operations
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    server = create_server(settings)
    transport = settings.transport_type

    if transport == "stdio":
        # Default MCP transport for local tool integration
        server.run()
    elif transport == "http":
        server.run(transport="http", host=settings.http_host, port=settings.http_port)
    elif transport == "sse":
        server.run(transport="sse", host=settings.http_host, port=settings.http_port)
    else:
        raise ValueError(f"Unsupported transport type: {transport}")


if __name__ == "__main__":
    main()
