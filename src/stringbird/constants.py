"""Shared constants across the stringbird codebase.

This module centralizes file names, syntax node names and configuration
defaults so the store format and the parser adapter agree on them.
"""


class StoreDefaults:
    """Store file defaults."""

    FILENAME = "stringbird"  # Fixed name, resolved against the working directory
    ENCODING = "utf-8"
    SEPARATOR = "="
    SORT_KEYS = True


class MarkDefaults:
    """Mark comment conventions."""

    PREFIX = "#"  # /*#KEY*/ marks the literal that follows


class ConfigDefaults:
    """Configuration file discovery."""

    FILENAME = ".stringbird.yml"
    ENV_VAR = "STRINGBIRD_CONFIG"


class BackupDefaults:
    """Backup storage for apply runs."""

    DIRECTORY = ".stringbird-backups"
    METADATA_FILE = "backup-metadata.json"


class LoggingDefaults:
    """Logging configuration defaults."""

    DEFAULT_LEVEL = "INFO"
    MAX_BREADCRUMBS = 50  # Maximum Sentry breadcrumbs to keep


class FormattingDefaults:
    """Console output formatting."""

    DIFF_CONTEXT_LINES = 3


class SyntaxNodes:
    """tree-sitter node type names used by the parser adapter."""

    STRING = "string"
    TEMPLATE = "template_string"
    COMMENT = "comment"
    EXPRESSION_STATEMENT = "expression_statement"
    ERROR = "ERROR"


# Dialects understood by the parser adapter
DIALECTS = ("tsx", "typescript", "javascript")
DEFAULT_DIALECT = "tsx"
AUTO_DIALECT = "auto"

# Suffix mapping used when the dialect is "auto"
DIALECT_EXTENSIONS = {
    "typescript": [".ts", ".mts", ".cts"],
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "tsx": [".tsx"],
}
