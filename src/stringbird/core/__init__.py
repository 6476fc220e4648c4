"""Core infrastructure for stringbird."""

from stringbird.core.config import (
    configure_logging_from_env,
    load_config,
    resolve_config_path,
    validate_config_file,
)
from stringbird.core.exceptions import (
    ConfigurationError,
    LiteralKindMismatchError,
    OutputWriteError,
    SourceLoadError,
    SourceParseError,
    StoreFormatError,
    StoreNotFoundError,
    StringBirdError,
)
from stringbird.core.logging import (
    bind_command,
    configure_logging,
    get_logger,
)
from stringbird.core.parser import (
    CommentIndex,
    ParsedExpression,
    SourceTree,
    get_parser,
    parse_expression,
    parse_source,
    resolve_dialect,
)
from stringbird.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "StringBirdError",
    "ConfigurationError",
    "SourceLoadError",
    "SourceParseError",
    "LiteralKindMismatchError",
    "StoreFormatError",
    "StoreNotFoundError",
    "OutputWriteError",
    # Logging
    "bind_command",
    "configure_logging",
    "get_logger",
    # Config
    "configure_logging_from_env",
    "load_config",
    "resolve_config_path",
    "validate_config_file",
    # Parser
    "CommentIndex",
    "ParsedExpression",
    "SourceTree",
    "get_parser",
    "parse_expression",
    "parse_source",
    "resolve_dialect",
    # Sentry
    "init_sentry",
]
