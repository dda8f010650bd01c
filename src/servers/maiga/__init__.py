"""Maiga partner analytics API exposed as MCP tools."""

from .schemas import TOOLS, ToolResult
from .tools import invoke_tool

__version__ = "1.0.0"

__all__ = [
    "TOOLS",
    "ToolResult",
    "invoke_tool",
]
