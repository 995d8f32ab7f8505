"""
Extraction of translatable call sites from JavaScript source.

The source is parsed with esprima and the syntax tree is walked looking for
calls to ``gettext`` (or a configured keyword), either bare or as a method
call such as ``i18n.gettext(...)``, whose first argument is a string literal
or a concatenation of string literals.

Usage Examples:
    >>> from jsgettext.extraction.javascript import extract_call_sites
    >>> extract_call_sites('var s = gettext("Hello " + "world");')
    [CallSite(text='Hello world', line=1, comments=())]
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Literal

import esprima
from esprima.error_handler import Error as EsprimaError
from esprima.nodes import Node

from ..utils.core.exceptions import ParseError
from .catalog import CallSite

logger = logging.getLogger(__name__)

DEFAULT_KEYWORD = "gettext"

SHEBANG_PATTERN = re.compile(r"^#.*")

# Node attributes that hold metadata rather than child nodes
NON_CHILD_KEYS = frozenset(
    {"loc", "range", "leadingComments", "trailingComments", "innerComments", "comments", "tokens", "errors"}
)


def strip_shebang(source: str) -> str:
    """Blank out a leading ``#`` line, keeping its newline so line numbers hold."""
    return SHEBANG_PATTERN.sub("", source, count=1)


def parse_source(
    source: str,
    source_id: str | None = None,
    source_type: Literal["script", "module"] = "script",
) -> Node:
    """
    Parse JavaScript into an esprima syntax tree with locations and comments attached.

    Raises:
        ParseError: If the source is not valid JavaScript
    """
    options = {"loc": True, "range": True, "attachComment": True}
    try:
        if source_type == "module":
            return esprima.parseModule(source, options)
        return esprima.parseScript(source, options)
    except EsprimaError as e:
        line = getattr(e, "lineNumber", None)
        description = getattr(e, "description", None) or str(e)
        raise ParseError(description, source_id=source_id, line=line) from e


def _children(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of ``node`` in source order."""
    for key, value in vars(node).items():
        if key in NON_CHILD_KEYS:
            continue
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:  # pyright: ignore[reportUnknownVariableType]
                if isinstance(item, Node):
                    yield item


def _is_statement(node: Node) -> bool:
    node_type = str(node.type)
    return node_type.endswith("Statement") or node_type.endswith("Declaration")


def walk(tree: Node) -> Iterator[tuple[Node, Node | None]]:
    """
    Pre-order traversal yielding ``(node, comment_anchor)`` pairs.

    The comment anchor is the nearest ancestor, up to and including the
    enclosing statement, that carries leading comments. The enclosing
    statement itself is the anchor when no closer node carries any.
    """
    stack: list[tuple[Node, Node | None]] = [(tree, None)]
    while stack:
        node, anchor = stack.pop()
        yield node, anchor

        if getattr(node, "leadingComments", None) or _is_statement(node):
            anchor = node
        stack.extend((child, anchor) for child in reversed(list(_children(node))))


def callee_name(callee: Node) -> str | None:
    """
    Name a call targets, for the callee shapes that can name a keyword.

    ``gettext(...)`` names ``gettext`` and ``obj.gettext(...)`` names
    ``gettext``. Computed member access and any other callee shape name
    nothing.
    """
    match callee.type:
        case "Identifier":
            return callee.name
        case "MemberExpression" if not callee.computed and callee.property.type == "Identifier":
            return callee.property.name
        case _:
            return None


def resolve_string(node: Node) -> str | None:
    """
    Resolve a string literal or a ``+`` concatenation of string literals.

    Every leaf must be a string literal; any other leaf disqualifies the
    whole expression. Uses an explicit stack, so deeply nested
    concatenations do not hit the recursion limit.

    Returns:
        The concatenated text, or None when the expression is not constant
    """
    parts: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        match current.type:
            case "Literal" if isinstance(current.value, str):
                parts.append(current.value)
            case "BinaryExpression" if current.operator == "+":
                stack.append(current.right)
                stack.append(current.left)
            case _:
                return None
    return "".join(parts)


def collect_comments(anchor: Node | None, add_comments: bool | str) -> tuple[str, ...]:
    """
    Turn the leading comments of ``anchor`` into translator comments.

    With a tag, only comments containing it are kept and their first
    character (the comment marker) is dropped. With ``True`` every comment is
    kept. Comments are whitespace-stripped and deduplicated.
    """
    if not add_comments or anchor is None:
        return ()

    collected: list[str] = []
    for comment in getattr(anchor, "leadingComments", None) or []:
        value = str(comment.value)
        if isinstance(add_comments, str):
            if add_comments not in value:
                continue
            text = value[1:].strip()
        else:
            text = value.strip()
        if text and text not in collected:
            collected.append(text)
    return tuple(collected)


class CallSiteFinder:
    """Finds translation calls in one syntax tree."""

    def __init__(self, keyword: str | None = None, add_comments: bool | str = False) -> None:
        self.keywords: frozenset[str] = frozenset(
            {DEFAULT_KEYWORD} if not keyword else {DEFAULT_KEYWORD, keyword}
        )
        self.add_comments: bool | str = add_comments

    def match(self, node: Node) -> str | None:
        """Return the message text if ``node`` is a translation call."""
        if node.type != "CallExpression":
            return None
        if callee_name(node.callee) not in self.keywords:
            return None
        arguments = node.arguments or []
        if not arguments:
            return None
        return resolve_string(arguments[0])

    def find(self, tree: Node) -> list[CallSite]:
        """Collect call sites in traversal order."""
        sites: list[CallSite] = []
        for node, anchor in walk(tree):
            text = self.match(node)
            if text is None:
                continue
            if getattr(node, "leadingComments", None):
                anchor = node
            line = int(node.loc.start.line)
            sites.append(CallSite(text=text, line=line, comments=collect_comments(anchor, self.add_comments)))
            logger.debug(f"Found translatable string: {text!r} at line {line}")
        return sites


def extract_call_sites(
    source: str,
    keyword: str | None = None,
    add_comments: bool | str = False,
    source_id: str | None = None,
    source_type: Literal["script", "module"] = "script",
) -> list[CallSite]:
    """
    Extract translatable call sites from JavaScript source.

    Args:
        source: JavaScript text
        keyword: Alternate call name recognized alongside ``gettext``
        add_comments: True, or a tag, to collect leading comments as translator comments
        source_id: Identifier used in error messages
        source_type: ``script`` or ``module`` parse goal

    Returns:
        Call sites in source order

    Raises:
        ParseError: If the source is not valid JavaScript
    """
    tree = parse_source(strip_shebang(source), source_id=source_id, source_type=source_type)
    return CallSiteFinder(keyword=keyword, add_comments=add_comments).find(tree)
