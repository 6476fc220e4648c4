"""Apply feature MCP tool definitions."""

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from stringbird.core.config import load_config
from stringbird.features.apply.service import (
    apply_strings_impl,
    list_backups_impl,
    rollback_apply_impl,
)


def register_apply_tools(mcp: FastMCP) -> None:
    """Register apply-related MCP tools.

    Args:
        mcp: FastMCP instance to register tools with
    """

    @mcp.tool()
    def apply_strings(
        files: List[str] = Field(description="Source files to rewrite in place"),
        store_file: Optional[str] = Field(
            default=None,
            description="Store file to read (default: 'stringbird' in the working directory)"
        ),
        dry_run: bool = Field(
            default=True,
            description="Preview changes without writing files (default: true for safety)"
        ),
        backup: bool = Field(
            default=True,
            description="Back up input files before writing (default: true)"
        )
    ) -> Dict[str, Any]:
        """
        Write edited store values back into marked literals.

        Only literals whose current text differs from the stored value are
        replaced; every other byte of each file is kept as is. A stored value
        must be a literal of the same kind as the one it replaces.

        Returns:
        - dry_run=True: per-file changes and unified diffs
        - dry_run=False: modified_files and backup_id (use with rollback_apply)
        """
        return apply_strings_impl(files, store_file, dry_run=dry_run, backup=backup, config=load_config())

    @mcp.tool()
    def rollback_apply(
        backup_id: str = Field(description="The backup ID returned by apply_strings")
    ) -> Dict[str, Any]:
        """
        Undo an apply_strings run from its backup.

        Only files that run rewrote are restored; files edited since are
        reported as conflicts and left alone.

        Returns:
        - success: True when nothing conflicted or failed
        - restored_files: Files put back to their pre-apply content
        - reverted_changes: Per restored file, the literal changes undone
        - skipped_files: Files the run did not rewrite (or already restored)
        - conflicts: Files edited after the run
        - errors: Any errors encountered
        """
        return rollback_apply_impl(backup_id, config=load_config())

    @mcp.tool()
    def list_backups() -> List[Dict[str, Any]]:
        """
        List backups taken by apply_strings, newest first.

        Returns list of backups with backup_id, timestamp, store_file,
        file_count, rewritten_files and changes.
        """
        return list_backups_impl(config=load_config())
