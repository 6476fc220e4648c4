"""Literal extraction - collects marked literals from one parsed file."""

from typing import Optional

from stringbird.core.logging import get_logger
from stringbird.core.parser import SourceTree
from stringbird.features.marks.resolver import resolve_mark
from stringbird.models.literals import LiteralKind, LiteralNode, StringMap


class LiteralExtractor:
    """Builds a StringMap of ``key -> exact source text`` for one tree.

    The tree is never modified. Literals are visited in source order, so when
    a key is marked twice in the same file the later literal wins.
    """

    def __init__(self, tree: SourceTree) -> None:
        self.tree = tree
        self.strings: StringMap = {}
        self.logger = get_logger("extract.extractor")

    def visit(self, node: LiteralNode) -> Optional[bool]:
        key = resolve_mark(self.tree.comments, node.span.start)
        if key is None:
            # Unmarked templates may still hold marked literals in ${...}
            return node.kind == LiteralKind.TEMPLATE

        if key in self.strings and self.strings[key] != node.text:
            self.logger.warning(
                "duplicate_mark_in_file",
                origin=self.tree.origin,
                key=key,
                line=node.line,
            )
        self.strings[key] = self.tree.slice(node.span)
        return False

    def extract(self) -> StringMap:
        self.tree.walk_literals(self.visit)
        return self.strings


def extract_literals(tree: SourceTree) -> StringMap:
    """Collect every marked literal of a parsed file.

    Args:
        tree: Parsed source file

    Returns:
        Mapping of mark key to the literal's exact source text
    """
    return LiteralExtractor(tree).extract()
