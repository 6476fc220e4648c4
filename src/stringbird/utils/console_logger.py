"""Console output for the command-line interface.

Structured events go to structlog (stderr or a log file); this module is the
human-facing side: progress lines such as ``Parsing src/app.tsx`` and the
final summary. It prints rather than logs so the two streams stay separate.

Usage:
    from stringbird.utils.console_logger import console

    console.log("Parsing src/app.tsx")
    console.success("Output written to stringbird")
    console.error("Failed to parse src/app.tsx")
    console.set_quiet(True)  # Suppress normal output
"""

import json
import sys
from typing import Any, Dict, List, Optional, Union


class ConsoleLogger:
    """Simple console logger for the CLI."""

    def __init__(self, quiet: bool = False) -> None:
        """Initialize console logger.

        Args:
            quiet: If True, suppress normal log output
        """
        self.quiet = quiet

    def set_quiet(self, quiet: bool) -> None:
        self.quiet = quiet

    def log(self, message: str = "", **kwargs: Any) -> None:
        """Output a normal message; suppressed in quiet mode."""
        if not self.quiet:
            print(message, **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        if not self.quiet:
            print(f"✓ {message}", **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Output an error message to stderr, regardless of quiet mode."""
        print(f"ERROR: {message}", file=sys.stderr, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Output a warning message to stderr, regardless of quiet mode."""
        print(f"WARNING: {message}", file=sys.stderr, **kwargs)

    def json(self, data: Union[Dict[str, Any], List[Any]], indent: Optional[int] = 2, **kwargs: Any) -> None:
        """Output data as JSON for programmatic consumption."""
        if not self.quiet:
            print(json.dumps(data, indent=indent), **kwargs)


# Global console logger instance
console = ConsoleLogger()
