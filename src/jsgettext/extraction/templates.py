"""
Template preprocessors that expose embedded script as plain JavaScript.

Each preprocessor turns template text into synthetic JavaScript holding only
the executable fragments of the template, with every fragment on the same
line it occupied in the template. The synthetic script is then handed to the
JavaScript extraction engine unchanged.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from pypugjs.lexer import Lexer

from ..utils.core.exceptions import ParseError

logger = logging.getLogger(__name__)

# Markers allowed right after an open delimiter, e.g. "<%=" and "<%-"
OPEN_MARKERS = ("=", "-", "_")

# Markers allowed right before a close delimiter, e.g. "-%>"
TRIM_MARKERS = ("-", "_")

INCLUDE_PATTERN = re.compile(r"^\s*include\s*\S+\s*$")

GETTEXT_CALL_PATTERN = re.compile(r"""gettext\((?P<literal>"[^"]+"|'[^']+')""", re.IGNORECASE)


class Delimiters(NamedTuple):
    """Open and close delimiters of a tag-based template dialect."""

    open: str
    close: str


EJS_DELIMITERS = Delimiters("<%", "%>")
JINJA_DELIMITERS = Delimiters("{{", "}}")


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def preprocess_tagged(
    text: str,
    delimiters: Delimiters = EJS_DELIMITERS,
    source_id: str | None = None,
) -> str:
    """
    Strip everything but the script fragments from a tag-delimited template.

    Args:
        text: Template text
        delimiters: Tag delimiters, ``<% %>`` for EJS and ``{{ }}`` for Jinja-style templates
        source_id: Identifier used in error messages

    Returns:
        Synthetic JavaScript with one ``;``-terminated statement per tag

    Raises:
        ParseError: If a tag is never closed
    """
    open_tag, close_tag = delimiters
    buf: list[str] = []
    pos = 0

    while True:
        start = text.find(open_tag, pos)
        if start == -1:
            buf.append("\n" * text.count("\n", pos))
            break
        buf.append("\n" * text.count("\n", pos, start))

        begin = start + len(open_tag)
        marker = text[begin:begin + 1]
        if open_tag == EJS_DELIMITERS.open and marker == "%":
            # "<%%" is a literal "<%" in EJS output
            pos = begin + 1
            continue
        is_comment = open_tag == EJS_DELIMITERS.open and marker == "#"
        if marker in OPEN_MARKERS or is_comment:
            begin += 1

        end = text.find(close_tag, begin)
        if end == -1:
            raise ParseError(
                f"Unclosed template tag {open_tag!r}",
                source_id=source_id,
                line=_line_of(text, start),
            )

        fragment = text[begin:end]
        if fragment.endswith(TRIM_MARKERS):
            fragment = fragment[:-1]
        if is_comment or INCLUDE_PATTERN.match(fragment):
            fragment = "\n" * fragment.count("\n")

        buf.append(fragment)
        buf.append(";")
        pos = end + len(close_tag)

    return "".join(buf)


def preprocess_ejs(text: str, source_id: str | None = None) -> str:
    """Expose the script fragments of an EJS template."""
    return preprocess_tagged(text, EJS_DELIMITERS, source_id=source_id)


def preprocess_jinja(text: str, source_id: str | None = None) -> str:
    """Expose the ``{{ }}`` expressions of a Jinja-style template."""
    return preprocess_tagged(text, JINJA_DELIMITERS, source_id=source_id)


def find_gettext_calls(value: object) -> list[str]:
    """
    Find ``gettext("...")`` and ``gettext('...')`` calls in raw template text.

    Matching is purely textual and case-insensitive, and every match is
    rewritten to a lower-case ``gettext(...)`` statement.
    """
    if not isinstance(value, str):
        return []
    return [f"gettext({match.group('literal')})" for match in GETTEXT_CALL_PATTERN.finditer(value)]


def _attribute_values(token: object) -> list[object]:
    attrs = getattr(token, "attrs", None)
    if not attrs:
        return []
    if isinstance(attrs, dict):
        return list(attrs.values())  # pyright: ignore[reportUnknownArgumentType]
    # Some lexer versions produce a list of {"name", "val"} mappings
    return [attr.get("val") for attr in attrs if isinstance(attr, dict)]  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]


def preprocess_jade(text: str, source_id: str | None = None) -> str:
    """
    Expose the gettext calls of a Jade/Pug template.

    The template is tokenized with the pypugjs lexer. Attribute values and the
    raw values of text, piped text (``string``) and code tokens are scanned
    for gettext calls, and each call is placed on the script line matching
    its token's line.

    Args:
        text: Template text
        source_id: Identifier used in error messages

    Returns:
        Synthetic JavaScript, one line per template line

    Raises:
        ParseError: If the lexer rejects the template
    """
    lines: dict[int, list[str]] = {}
    lexer = Lexer(text)

    while True:
        try:
            token = lexer.next()
        except Exception as e:
            # pypugjs reports lexing failures as plain exceptions
            raise ParseError(f"Invalid Jade template: {e}", source_id=source_id, line=lexer.lineno) from e

        token_type = getattr(token, "type", None)
        if token_type == "eos":
            break

        calls: list[str] = []
        match token_type:
            case "attrs":
                for value in _attribute_values(token):
                    calls.extend(find_gettext_calls(value))
            case "text" | "string" | "code":
                calls.extend(find_gettext_calls(getattr(token, "val", None)))
            case _:
                continue

        if calls:
            line = int(getattr(token, "line", lexer.lineno))
            lines.setdefault(line, []).extend(calls)

    last_line = max([text.count("\n") + 1, *lines])
    script = "\n".join(
        "".join(f"{call};" for call in lines.get(number, []))
        for number in range(1, last_line + 1)
    )
    logger.debug(f"Found {sum(len(calls) for calls in lines.values())} gettext call(s) in {source_id or 'Jade template'}")
    return script
