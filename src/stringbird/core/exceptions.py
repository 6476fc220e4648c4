"""Exception hierarchy for stringbird.

Every failure surfaces to the caller and ends the run; nothing here is
recovered locally.
"""

from typing import List, Optional


class StringBirdError(Exception):
    """Base class for all stringbird errors."""


class ConfigurationError(StringBirdError):
    """Raised when a configuration file is missing or invalid."""

    def __init__(self, config_path: str, error: str) -> None:
        self.config_path = config_path
        self.error = error
        super().__init__(f"Invalid configuration at {config_path}: {error}")


class SourceLoadError(StringBirdError):
    """Raised when an input file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")


class SourceParseError(StringBirdError):
    """Raised when a source file or a replacement value fails to parse."""

    def __init__(self, origin: str, diagnostics: Optional[List[str]] = None) -> None:
        self.origin = origin
        self.diagnostics = diagnostics or []
        message = f"Failed to parse {origin}"
        if self.diagnostics:
            message += ": " + "; ".join(self.diagnostics)
        super().__init__(message)


class LiteralKindMismatchError(StringBirdError):
    """Raised when a replacement value is not the literal kind it replaces."""

    def __init__(self, key: str, expected: str, actual: str, origin: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        self.origin = origin
        super().__init__(
            f"Replacement for '{key}' in {origin} must be a {expected} literal, got {actual}"
        )


class StoreFormatError(StringBirdError):
    """Raised when a store line has no '=' separator."""

    def __init__(self, line_number: int, line: str, store_path: Optional[str] = None) -> None:
        self.line_number = line_number
        self.line = line
        self.store_path = store_path
        location = f"{store_path}:{line_number}" if store_path else f"line {line_number}"
        super().__init__(f"Malformed store entry at {location}: missing '=' in {line!r}")


class StoreNotFoundError(StringBirdError):
    """Raised when apply runs without a store file."""

    def __init__(self, store_path: str) -> None:
        self.store_path = store_path
        super().__init__(f"Store file not found: {store_path} (run extract first)")


class OutputWriteError(StringBirdError):
    """Raised when a store or source file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")
