"""Data models for marked literals and their comments."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

# Key -> exact literal source text
StringMap = Dict[str, str]


class LiteralKind(Enum):
    """Literal node variants that can carry a mark."""
    STRING = "string"
    TEMPLATE = "template"


class CommentKind(Enum):
    """Comment token styles."""
    LINE = "line"  # // ...
    BLOCK = "block"  # /* ... */


@dataclass(frozen=True, order=True)
class Span:
    """Byte range [start, end) in the owning file's UTF-8 source."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Comment:
    """A comment token with its delimiters stripped from ``text``."""
    kind: CommentKind
    span: Span
    text: str


@dataclass(frozen=True)
class LiteralNode:
    """A string or template literal addressed by its span.

    ``text`` is the raw source slice, quotes or backticks included.
    ``line`` and ``column`` are 1-based and only used for reporting.
    """
    kind: LiteralKind
    span: Span
    text: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class LiteralChange:
    """A literal that an apply run replaced (or would replace)."""
    key: str
    kind: LiteralKind
    line: int
    original: str
    replacement: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "key": self.key,
            "kind": self.kind.value,
            "line": self.line,
            "original": self.original,
            "replacement": self.replacement,
        }
