"""Apply feature - literal rewriting and backup management."""

from stringbird.features.apply.backup import (
    create_backup,
    get_file_hash,
    list_available_backups,
    record_applied_changes,
    restore_backup,
)
from stringbird.features.apply.rewriter import LiteralRewriter, rewrite_literals
from stringbird.features.apply.service import (
    apply_file,
    apply_strings_impl,
    list_backups_impl,
    rollback_apply_impl,
)
from stringbird.features.apply.tools import register_apply_tools

__all__ = [
    # Backup functions
    "create_backup",
    "get_file_hash",
    "record_applied_changes",
    "restore_backup",
    "list_available_backups",
    # Rewriting
    "LiteralRewriter",
    "rewrite_literals",
    # Service functions
    "apply_file",
    "apply_strings_impl",
    "rollback_apply_impl",
    "list_backups_impl",
    # Registration
    "register_apply_tools",
]
