"""Data models for stringbird."""

from stringbird.models.config import DialectName, StringBirdConfig
from stringbird.models.literals import (
    Comment,
    CommentKind,
    LiteralChange,
    LiteralKind,
    LiteralNode,
    Span,
    StringMap,
)

__all__ = [
    "Comment",
    "CommentKind",
    "DialectName",
    "LiteralChange",
    "LiteralKind",
    "LiteralNode",
    "Span",
    "StringBirdConfig",
    "StringMap",
]
