"""Maiga partner API tool implementations.

This module provides six tools, each a one-to-one mapping onto a partner
endpoint:
- analyse_token: Technical and fundamental token analysis
- mindshare: Social sentiment over the last 24 hours
- token_info: Holder information and on-chain analysis
- market_report: Market reports per analysis mode
- kol_analysis: Influence statistics for an X (Twitter) KOL
- trending_tokens: Top trending tokens in the last 24 hours

All of them funnel through ``invoke_tool``, which validates the arguments,
performs the request and converts every failure into text content.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Mapping

from fastmcp import Context
from pydantic import Field, ValidationError

from .client import MaigaClient
from .exceptions import MaigaError, UnknownToolError
from .schemas import TOOLS, ReportMode, ToolResult

logger = logging.getLogger(__name__)

# Client bound at server construction (see server.create_server)
_client: MaigaClient | None = None


def init_client(client: MaigaClient) -> None:
    """Bind the partner API client used by the registered tools.

    Args:
        client: Configured MaigaClient instance
    """
    global _client
    _client = client


def _require_client() -> MaigaClient:
    if _client is None:
        raise RuntimeError("Maiga client is not initialized; call create_server() first")
    return _client


async def invoke_tool(
    tool_name: str,
    arguments: Mapping[str, Any] | None,
    client: MaigaClient,
) -> ToolResult:
    """Validate ``arguments`` and forward them to the tool's partner endpoint.

    Args:
        tool_name: One of the names in TOOLS
        arguments: Raw tool arguments, validated against the tool's request model
        client: Partner API client to send the request with

    Returns:
        ToolResult holding either the pretty-printed response or an error message

    Raises:
        UnknownToolError: If ``tool_name`` has no endpoint mapping
    """
    tool = TOOLS.get(tool_name)
    if tool is None:
        allowed = "', '".join(TOOLS)
        raise UnknownToolError(f"Unknown tool '{tool_name}'. Choose one of '{allowed}'.")

    try:
        request = tool.request_model.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        logger.warning(f"Rejected arguments for {tool_name}: {exc.error_count()} error(s)")
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'arguments'}: {err['msg']}"
            for err in exc.errors()
        )
        return ToolResult.from_text(
            f"{tool.error_label}: invalid arguments: {details}", is_error=True
        )

    try:
        payload = await client.post(tool.endpoint, request.model_dump(mode="json"))
    except MaigaError as exc:
        return ToolResult.from_text(f"{tool.error_label}: {exc}", is_error=True)

    return ToolResult.from_text(json.dumps(payload, indent=2, ensure_ascii=False))


async def _run(ctx: Context, tool_name: str, arguments: dict[str, Any]) -> str:
    await ctx.info(f"Calling Maiga {tool_name}")
    result = await invoke_tool(tool_name, arguments, _require_client())
    if result.is_error:
        await ctx.error(result.text)
    return result.text


async def analyse_token(
    ctx: Context,
    identifier: Annotated[
        str,
        Field(
            description="Token symbol (e.g., 'bitcoin', 'ethereum', 'BTC') or contract address",
            examples=["bitcoin", "BTC"],
        ),
    ],
) -> str:
    """Perform comprehensive technical and fundamental analysis on a cryptocurrency token."""
    return await _run(ctx, "analyse_token", {"identifier": identifier})


async def mindshare(
    ctx: Context,
    identifier: Annotated[
        str,
        Field(description="Token symbol or contract address", examples=["ethereum"]),
    ],
) -> str:
    """Analyze social media sentiment and trending discussions about a token over the last 24 hours."""
    return await _run(ctx, "mindshare", {"identifier": identifier})


async def token_info(
    ctx: Context,
    identifier: Annotated[
        str,
        Field(description="Token contract address or identifier"),
    ],
) -> str:
    """Retrieve detailed token holder information and on-chain analysis."""
    return await _run(ctx, "token_info", {"identifier": identifier})


async def market_report(
    ctx: Context,
    mode: Annotated[
        ReportMode,
        Field(
            description="Analysis mode: Market_Behavior, Open_Interest, Multi_Timeframe, or Fund_Flow",
        ),
    ],
) -> str:
    """Generate a specialized market report for the chosen analysis mode."""
    return await _run(ctx, "market_report", {"mode": mode})


async def kol_analysis(
    ctx: Context,
    username: Annotated[
        str,
        Field(
            description="Twitter username (without @) of the KOL to analyze",
            examples=["VitalikButerin"],
        ),
    ],
) -> str:
    """Analyze the influence and statistics of a cryptocurrency influencer on X (Twitter)."""
    return await _run(ctx, "kol_analysis", {"username": username})


async def trending_tokens(ctx: Context) -> str:
    """Retrieve the top trending tokens of the last 24 hours by social mentions and activity."""
    return await _run(ctx, "trending_tokens", {})
