"""Extract feature MCP tool definitions."""

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from stringbird.core.config import load_config
from stringbird.features.extract.service import extract_strings_impl


def register_extract_tools(mcp: FastMCP) -> None:
    """Register extract-related MCP tools.

    Args:
        mcp: FastMCP instance to register tools with
    """

    @mcp.tool()
    def extract_strings(
        files: List[str] = Field(description="Source files to scan, in precedence order (later files win)"),
        store_file: Optional[str] = Field(
            default=None,
            description="Store file to write (default: 'stringbird' in the working directory)"
        )
    ) -> Dict[str, Any]:
        """
        Extract marked literals into the store file.

        A literal is marked by a block comment directly before it:
        ```ts
        const title = /*#page.title*/"Welcome";
        const greeting = /*#greeting*/`Hello ${name}`;
        ```

        The store file is recreated on every run, one `key=value` line per mark.
        Source files are never modified.

        Returns:
        - store_file: Path of the written store
        - keys: Number of entries written
        - overridden: Keys marked in more than one file with different values
        - files: Per-file key counts
        """
        return extract_strings_impl(files, store_file, config=load_config())
