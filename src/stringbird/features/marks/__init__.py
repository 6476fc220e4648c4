"""Marks feature - association of mark comments with literals."""

from stringbird.features.marks.resolver import mark_key, resolve_mark

__all__ = [
    "mark_key",
    "resolve_mark",
]
