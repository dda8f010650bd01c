"""Pydantic schemas for Maiga tool requests and results.

Each tool has a frozen request model that rejects unknown fields, so arguments
are validated before any network call. ``TOOLS`` is the single table
mapping a tool to its request model, upstream endpoint and error label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ToolName = Literal[
    "analyse_token",
    "mindshare",
    "token_info",
    "market_report",
    "kol_analysis",
    "trending_tokens",
]

ReportMode = Literal["Market_Behavior", "Open_Interest", "Multi_Timeframe", "Fund_Flow"]


class _BaseRequest(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


# ============================================================================
# Tool Request Schemas
# ============================================================================


class AnalyseTokenRequest(_BaseRequest):
    identifier: str = Field(
        description="Token symbol (e.g., 'bitcoin', 'ethereum', 'BTC') or contract address"
    )


class MindshareRequest(_BaseRequest):
    identifier: str = Field(description="Token symbol or contract address")


class TokenInfoRequest(_BaseRequest):
    identifier: str = Field(description="Token contract address or identifier")


class MarketReportRequest(_BaseRequest):
    mode: ReportMode = Field(
        description="Analysis mode: Market_Behavior, Open_Interest, Multi_Timeframe, or Fund_Flow"
    )


class KolAnalysisRequest(_BaseRequest):
    username: str = Field(description="Twitter username (without @) of the KOL to analyze")


class TrendingTokensRequest(_BaseRequest):
    pass


# ============================================================================
# Tool Result Schemas
# ============================================================================


class TextContent(BaseModel):
    """Single text content item as returned to the MCP caller."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of one tool invocation."""

    content: list[TextContent]
    is_error: bool = Field(default=False, exclude=True)

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> ToolResult:
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    title: str
    description: str
    endpoint: str
    error_label: str
    request_model: type[_BaseRequest]


TOOLS: dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (
        ToolDefinition(
            name="analyse_token",
            title="Token Analysis",
            description="Performs comprehensive technical and fundamental analysis on a cryptocurrency token",
            endpoint="/partner/analyse",
            error_label="Error analyzing token",
            request_model=AnalyseTokenRequest,
        ),
        ToolDefinition(
            name="mindshare",
            title="Mindshare Analysis",
            description="Analyzes social media sentiment and trending discussions about a token over the last 24 hours",
            endpoint="/partner/mindshare",
            error_label="Error analyzing mindshare",
            request_model=MindshareRequest,
        ),
        ToolDefinition(
            name="token_info",
            title="Token Information",
            description="Retrieves detailed token holder information and on-chain analysis",
            endpoint="/partner/token-info",
            error_label="Error fetching token info",
            request_model=TokenInfoRequest,
        ),
        ToolDefinition(
            name="market_report",
            title="Market Reports",
            description="Generates specialized market reports based on different analysis modes",
            endpoint="/partner/report",
            error_label="Error generating market report",
            request_model=MarketReportRequest,
        ),
        ToolDefinition(
            name="kol_analysis",
            title="KOL Analysis",
            description="Analyzes the influence and statistics of cryptocurrency influencers on X (Twitter)",
            endpoint="/partner/kol",
            error_label="Error analyzing KOL",
            request_model=KolAnalysisRequest,
        ),
        ToolDefinition(
            name="trending_tokens",
            title="Trending Tokens",
            description="Retrieves the top trending tokens in the last 24 hours based on social media mentions and activity",
            endpoint="/partner/trending-token",
            error_label="Error fetching trending tokens",
            request_model=TrendingTokensRequest,
        ),
    )
}
