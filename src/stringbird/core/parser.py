"""Parser adapter around tree-sitter.

The rest of stringbird only sees the capabilities exposed here: literal
nodes with spans, a comment index queryable by position, span slicing,
span-forced node replacement and rendering back to text. Nothing outside
this module touches tree-sitter types.
"""

import bisect
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, List, Optional

import tree_sitter_javascript as ts_javascript
import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from stringbird.constants import AUTO_DIALECT, DEFAULT_DIALECT, DIALECT_EXTENSIONS, DIALECTS, SyntaxNodes
from stringbird.core.exceptions import SourceParseError
from stringbird.core.logging import get_logger
from stringbird.models.literals import Comment, CommentKind, LiteralKind, LiteralNode, Span

MAX_DIAGNOSTICS = 10

_LITERAL_TYPES = {
    SyntaxNodes.STRING: LiteralKind.STRING,
    SyntaxNodes.TEMPLATE: LiteralKind.TEMPLATE,
}

# Strings under these parents are module specifiers or types, not values
_NON_VALUE_PARENTS = {
    "import_statement",
    "import_require_clause",
    "literal_type",
    "module",
    "enum_body",
}

# Parent type -> field holding a string used as a name or specifier
_NON_VALUE_FIELDS = {
    "pair": "key",
    "pair_pattern": "key",
    "export_statement": "source",
    "public_field_definition": "name",
    "method_definition": "name",
    "method_signature": "name",
    "abstract_method_signature": "name",
    "property_signature": "name",
    "enum_assignment": "name",
}

# Cached parsers, one per dialect
_PARSERS: Dict[str, Parser] = {}

# Called for every literal in source order; returning True descends into a
# template literal's substitutions.
LiteralVisitor = Callable[[LiteralNode], Optional[bool]]


def _load_language(dialect: str) -> Language:
    if dialect == "tsx":
        return Language(ts_typescript.language_tsx())
    if dialect == "typescript":
        return Language(ts_typescript.language_typescript())
    if dialect == "javascript":
        return Language(ts_javascript.language())
    raise ValueError(f"Unsupported dialect: {dialect}. Expected one of {', '.join(DIALECTS)}")


def _is_value_string(node: Node) -> bool:
    parent = node.parent
    if parent is None:
        return True
    if parent.type in _NON_VALUE_PARENTS:
        return False
    field = _NON_VALUE_FIELDS.get(parent.type)
    if field is None:
        return True
    named = parent.child_by_field_name(field)
    return named is None or named.start_byte != node.start_byte


def get_parser(dialect: str = DEFAULT_DIALECT) -> Parser:
    """Get the cached tree-sitter parser for a dialect.

    Args:
        dialect: One of 'tsx', 'typescript', 'javascript'

    Returns:
        tree-sitter Parser instance
    """
    parser = _PARSERS.get(dialect)
    if parser is None:
        parser = Parser(_load_language(dialect))
        _PARSERS[dialect] = parser
    return parser


def resolve_dialect(path: str, dialect: str) -> str:
    """Pick the dialect for a file, mapping 'auto' by file suffix.

    Unknown suffixes fall back to tsx, which accepts both TypeScript and JSX.
    """
    if dialect != AUTO_DIALECT:
        return dialect
    suffix = Path(path).suffix.lower()
    for name, extensions in DIALECT_EXTENSIONS.items():
        if suffix in extensions:
            return name
    return DEFAULT_DIALECT


class CommentIndex:
    """Comments of one source file, queryable by token position."""

    def __init__(self, comments: List[Comment], source: bytes) -> None:
        self._comments = sorted(comments, key=lambda c: c.span.start)
        self._ends = [c.span.end for c in self._comments]
        self._source = source

    def __len__(self) -> int:
        return len(self._comments)

    def leading(self, position: int) -> List[Comment]:
        """Return the comments leading the token that starts at ``position``.

        These are the comments directly before ``position`` separated from it,
        and from each other, by whitespace only. Returned in source order, so
        the last one is the closest to the token.
        """
        idx = bisect.bisect_right(self._ends, position) - 1
        boundary = position
        leading: List[Comment] = []
        while idx >= 0:
            comment = self._comments[idx]
            if self._source[comment.span.end:boundary].strip():
                break
            leading.append(comment)
            boundary = comment.span.start
            idx -= 1
        leading.reverse()
        return leading


def _comment_from_node(node: Node, source: bytes) -> Comment:
    raw = source[node.start_byte:node.end_byte].decode("utf-8")
    span = Span(node.start_byte, node.end_byte)
    if raw.startswith("/*"):
        body = raw[2:-2] if raw.endswith("*/") else raw[2:]
        return Comment(CommentKind.BLOCK, span, body)
    return Comment(CommentKind.LINE, span, raw[2:])


def _collect_diagnostics(root: Node, source: bytes) -> List[str]:
    diagnostics: List[str] = []
    stack = [root]
    while stack and len(diagnostics) < MAX_DIAGNOSTICS:
        node = stack.pop()
        line, column = node.start_point[0] + 1, node.start_point[1] + 1
        if node.is_missing:
            diagnostics.append(f"{line}:{column}: missing {node.type}")
            continue
        if node.type == SyntaxNodes.ERROR:
            snippet = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
            snippet = snippet.splitlines()[0] if snippet else ""
            diagnostics.append(f"{line}:{column}: unexpected {snippet[:40]!r}")
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics or ["syntax error"]


class SourceTree:
    """A parsed source file plus the replacements recorded against it."""

    def __init__(self, origin: str, source: bytes, root: Node, comments: CommentIndex) -> None:
        self.origin = origin
        self.source = source
        self.root = root
        self.comments = comments
        self._replacements: Dict[Span, LiteralNode] = {}

    def slice(self, span: Span) -> str:
        """Exact source text covered by ``span``."""
        return self.source[span.start:span.end].decode("utf-8")

    def to_literal(self, node: Node) -> LiteralNode:
        span = Span(node.start_byte, node.end_byte)
        return LiteralNode(
            kind=_LITERAL_TYPES[node.type],
            span=span,
            text=self.slice(span),
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
        )

    def walk_literals(self, visit: LiteralVisitor) -> None:
        """Visit every string and template literal depth-first in source order.

        Only strings used as values are visited; import sources, literal
        types and quoted property or member names are not. String literals
        have no nested literals. A template literal is only descended into
        when ``visit`` returns True for it.
        """
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.is_named and node.type in _LITERAL_TYPES:
                if node.type == SyntaxNodes.STRING and not _is_value_string(node):
                    continue
                descend = visit(self.to_literal(node))
                if node.type == SyntaxNodes.STRING or not descend:
                    continue
            stack.extend(reversed(node.children))

    def replace(self, original: LiteralNode, new: LiteralNode) -> LiteralNode:
        """Splice ``new`` in place of ``original``.

        The new node takes over the original's span so rendering puts it in
        exactly the same source region.
        """
        spliced = replace(new, span=original.span, line=original.line, column=original.column)
        self._replacements[original.span] = spliced
        return spliced

    @property
    def modified(self) -> bool:
        return bool(self._replacements)

    def render(self) -> str:
        """Render the source with all replacements applied."""
        parts: List[bytes] = []
        cursor = 0
        for span in sorted(self._replacements):
            parts.append(self.source[cursor:span.start])
            parts.append(self._replacements[span].text.encode("utf-8"))
            cursor = span.end
        parts.append(self.source[cursor:])
        return b"".join(parts).decode("utf-8")


def parse_source(text: str, dialect: str = DEFAULT_DIALECT, origin: str = "<source>") -> SourceTree:
    """Parse source text into a SourceTree.

    Args:
        text: Source text
        dialect: Syntax dialect
        origin: File name used in diagnostics

    Returns:
        Parsed SourceTree with its comment index

    Raises:
        SourceParseError: If the source contains syntax errors
    """
    logger = get_logger("parser")
    source = text.encode("utf-8")
    tree = get_parser(dialect).parse(source)
    root = tree.root_node

    if root.has_error:
        diagnostics = _collect_diagnostics(root, source)
        logger.error("parse_failed", origin=origin, dialect=dialect, diagnostics=diagnostics)
        raise SourceParseError(origin, diagnostics)

    comments: List[Comment] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_named and node.type == SyntaxNodes.COMMENT:
            comments.append(_comment_from_node(node, source))
        stack.extend(node.children)

    logger.debug("source_parsed", origin=origin, dialect=dialect, bytes=len(source), comments=len(comments))
    return SourceTree(origin, source, root, CommentIndex(comments, source))


@dataclass(frozen=True)
class ParsedExpression:
    """Result of parsing a standalone expression.

    ``literal`` is set when the expression is a string or template literal;
    ``node_type`` always names the parsed expression's syntax kind.
    """
    node_type: str
    literal: Optional[LiteralNode] = None


def parse_expression(text: str, dialect: str = DEFAULT_DIALECT, origin: str = "<expression>") -> ParsedExpression:
    """Parse text as a single standalone expression.

    Raises:
        SourceParseError: If the text does not parse or is not exactly one expression
    """
    tree = parse_source(text, dialect, origin)
    statements = [
        child for child in tree.root.named_children
        if child.type != SyntaxNodes.COMMENT
    ]
    if len(statements) != 1 or statements[0].type != SyntaxNodes.EXPRESSION_STATEMENT:
        raise SourceParseError(origin, ["expected a single expression"])

    expressions = [
        child for child in statements[0].named_children
        if child.type != SyntaxNodes.COMMENT
    ]
    if len(expressions) != 1:
        raise SourceParseError(origin, ["expected a single expression"])

    expression = expressions[0]
    if expression.type in _LITERAL_TYPES:
        return ParsedExpression(expression.type, tree.to_literal(expression))
    return ParsedExpression(expression.type)
