"""MCP server entry point."""

from mcp.server.fastmcp import FastMCP

from stringbird.core.sentry import init_sentry
from stringbird.server.registry import register_all_tools

# Create FastMCP instance
mcp = FastMCP("stringbird")


def run_mcp_server() -> None:
    """Run the MCP server.

    Logging is expected to be configured by the caller. This function:
    1. Initializes Sentry error tracking (if configured)
    2. Registers all MCP tools from all features
    3. Starts the MCP server with stdio transport
    """
    init_sentry()
    register_all_tools(mcp)
    mcp.run(transport="stdio")
