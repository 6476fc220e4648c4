"""Literal rewriting - splices stored values back into one parsed file."""

from typing import List, Optional

from stringbird.constants import DEFAULT_DIALECT
from stringbird.core.exceptions import LiteralKindMismatchError
from stringbird.core.logging import get_logger
from stringbird.core.parser import SourceTree, parse_expression
from stringbird.features.marks.resolver import resolve_mark
from stringbird.models.literals import LiteralChange, LiteralKind, LiteralNode, StringMap


class LiteralRewriter:
    """Replaces marked literals whose stored value differs from the source.

    A literal is left alone when its key is not in the store or when its
    current text already equals the stored value. Otherwise the stored value
    is parsed on its own and must be a literal of the same kind; the parsed
    node then takes over the original node's span.
    """

    def __init__(self, tree: SourceTree, store: StringMap, dialect: str = DEFAULT_DIALECT) -> None:
        self.tree = tree
        self.store = store
        self.dialect = dialect
        self.changes: List[LiteralChange] = []
        self.logger = get_logger("apply.rewriter")

    def _parse_replacement(self, key: str, node: LiteralNode) -> LiteralNode:
        origin = f"{self.tree.origin}#{key}"
        parsed = parse_expression(self.store[key], self.dialect, origin)
        if parsed.literal is None or parsed.literal.kind != node.kind:
            actual = parsed.literal.kind.value if parsed.literal else parsed.node_type
            self.logger.error(
                "replacement_kind_mismatch",
                origin=self.tree.origin,
                key=key,
                expected=node.kind.value,
                actual=actual,
            )
            raise LiteralKindMismatchError(key, node.kind.value, actual, self.tree.origin)
        return parsed.literal

    def visit(self, node: LiteralNode) -> Optional[bool]:
        key = resolve_mark(self.tree.comments, node.span.start)
        if key is None:
            return node.kind == LiteralKind.TEMPLATE

        if key not in self.store:
            return False

        current = self.tree.slice(node.span)
        if current == self.store[key]:
            return False

        replacement = self._parse_replacement(key, node)
        if replacement.text == current:
            # Stored value only adds comments or whitespace around the same literal
            return False

        spliced = self.tree.replace(node, replacement)
        self.changes.append(LiteralChange(
            key=key,
            kind=node.kind,
            line=node.line,
            original=current,
            replacement=spliced.text,
        ))
        self.logger.debug("literal_replaced", origin=self.tree.origin, key=key, line=node.line)
        return False

    def rewrite(self) -> List[LiteralChange]:
        self.tree.walk_literals(self.visit)
        return self.changes


def rewrite_literals(tree: SourceTree, store: StringMap, dialect: str = DEFAULT_DIALECT) -> List[LiteralChange]:
    """Splice stored values into every marked literal that differs.

    Args:
        tree: Parsed source file; replacements are recorded on it
        store: Key to replacement source text
        dialect: Dialect used to parse replacement values

    Returns:
        The changes recorded on the tree, in source order

    Raises:
        SourceParseError: If a replacement value does not parse
        LiteralKindMismatchError: If a replacement is not the same literal kind
    """
    return LiteralRewriter(tree, store, dialect).rewrite()
