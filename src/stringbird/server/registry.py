"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from stringbird.features.apply.tools import register_apply_tools
from stringbird.features.extract.tools import register_extract_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    1. Extract (1 tool: extract_strings)
    2. Apply (3 tools: apply_strings, rollback_apply, list_backups)
    """
    register_extract_tools(mcp)
    register_apply_tools(mcp)
