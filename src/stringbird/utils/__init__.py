"""Utilities module for stringbird.

- Console output for the CLI
- Source file reading and writing
"""

from .console_logger import ConsoleLogger, console
from .files import read_source, write_source

__all__ = [
    "ConsoleLogger",
    "console",
    "read_source",
    "write_source",
]
