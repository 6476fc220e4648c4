"""Mark resolution - decides whether a literal carries a ``/*#KEY*/`` mark."""

from typing import Optional

from stringbird.constants import MarkDefaults
from stringbird.core.parser import CommentIndex
from stringbird.models.literals import Comment, CommentKind


def mark_key(comment: Comment) -> Optional[str]:
    """Return the key a comment marks, or None if it is not a mark.

    Only block comments whose text starts with '#' mark a literal. The key is
    everything after the '#', verbatim; an empty key is not a mark.
    """
    if comment.kind != CommentKind.BLOCK:
        return None
    if not comment.text.startswith(MarkDefaults.PREFIX):
        return None
    key = comment.text[len(MarkDefaults.PREFIX):]
    return key or None


def resolve_mark(comments: CommentIndex, position: int) -> Optional[str]:
    """Find the key marking the literal that starts at ``position``.

    Only the last leading comment (the one closest to the literal) is
    consulted, so stacked comments above a literal do not mark it unless
    the innermost one does.

    Args:
        comments: Comment index of the file
        position: Start offset of the literal's span

    Returns:
        The mark key, or None if the literal is unmarked
    """
    leading = comments.leading(position)
    if not leading:
        return None
    return mark_key(leading[-1])
