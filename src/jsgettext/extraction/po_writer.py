"""
Rendering of a Catalog into gettext catalog text.

The output follows the conventional .po layout: a header entry whose msgstr
holds the canonicalized headers, followed by one block per message separated
by blank lines. Long or multi-line strings are folded into continuation
lines.
"""

from __future__ import annotations

import logging
import re

from .catalog import Catalog, CatalogEntry

logger = logging.getLogger(__name__)

# Width of the escaped string content of a single folded segment
FOLD_WIDTH = 76

# Maximum width of a rendered "#:" reference line
REFERENCE_WIDTH = 79

ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
}

ESCAPE_PATTERN = re.compile(r'[\\"\n\t\r\a\b\f\v]')
TRAILING_WHITESPACE_PATTERN = re.compile(r"(\s+)\S*$")
TRAILING_PUNCTUATION_PATTERN = re.compile(
    r"([\x21-\x2f0-9\x5b-\x60\x7b-\x7e]+)[^\x21-\x2f0-9\x5b-\x60\x7b-\x7e]*$"
)
CHARSET_PATTERN = re.compile(r"charset\s*=\s*[^\s;]+", re.IGNORECASE)
HEADER_WORD_PATTERN = re.compile(r"^(?:MIME|POT?(?=-)|[a-z])|-[a-z]", re.IGNORECASE)


def escape(value: str) -> str:
    """Escape backslashes, double quotes and control characters."""
    return ESCAPE_PATTERN.sub(lambda match: ESCAPES[match.group(0)], value)


def _ends_inside_escape(segment: str) -> bool:
    """Whether a segment ends with an unpaired backslash."""
    return (len(segment) - len(segment.rstrip("\\"))) % 2 == 1


def fold_line(value: str, width: int = FOLD_WIDTH) -> list[str]:
    """
    Split an escaped string into segments of at most ``width`` characters.

    A segment ends right after the first ``\\n`` escape it contains. When more
    text follows, a segment is cut after its last whitespace run, or else
    after its last punctuation run. Segments never end in the middle of an
    escape sequence, which may make a segment slightly longer than ``width``.

    Args:
        value: Already escaped string
        width: Preferred maximum segment length

    Returns:
        The segments, in order; empty for an empty string
    """
    lines: list[str] = []
    pos = 0
    length = len(value)

    while pos < length:
        line = value[pos:pos + width]

        while _ends_inside_escape(line) and pos + len(line) < length:
            line += value[pos + len(line)]

        newline = line.find("\\n")
        if newline != -1:
            line = line[:newline + 2]
        elif pos + len(line) < length:
            match = TRAILING_WHITESPACE_PATTERN.search(line)
            if match is not None and match.start() > 0:
                line = line[:match.end(1)]
            else:
                match = TRAILING_PUNCTUATION_PATTERN.search(line)
                if (
                    match is not None
                    and match.start() > 0
                    and not _ends_inside_escape(line[:match.end(1)])
                ):
                    line = line[:match.end(1)]

        lines.append(line)
        pos += len(line)

    return lines


def format_string(keyword: str, value: str) -> str:
    """
    Render ``keyword "value"``, folding into continuation lines when needed.

    Args:
        keyword: One of msgctxt, msgid, msgstr
        value: Unescaped string value

    Returns:
        One or more lines joined with newlines
    """
    segments = fold_line(escape(value))
    if len(segments) < 2:
        return f'{keyword} "{segments[0] if segments else ""}"'
    body = "\n".join(f'"{segment}"' for segment in segments)
    return f'{keyword} ""\n{body}'


def format_references(references: list[str], width: int = REFERENCE_WIDTH) -> list[str]:
    """
    Wrap space-joined references into ``#:`` lines no wider than ``width``.

    A single reference longer than the width is kept whole on its own line.
    """
    lines: list[str] = []
    current = ""
    for reference in references:
        if current and len("#: ") + len(current) + 1 + len(reference) > width:
            lines.append(f"#: {current}")
            current = reference
        else:
            current = f"{current} {reference}" if current else reference
    if current:
        lines.append(f"#: {current}")
    return lines


def format_comments(marker: str, comments: list[str], strip: bool = False) -> list[str]:
    """
    Prefix every line of every comment with ``marker``.

    A comment holding newlines becomes several comment lines, since a bare
    continuation line is not valid catalog text.
    """
    return [
        f"{marker} {line.strip() if strip else line}".rstrip()
        for comment in comments
        for line in comment.split("\n")
    ]


def canonical_header_name(key: str) -> str:
    """
    Canonicalize a lower-cased header name.

    ``project-id-version`` becomes ``Project-Id-Version``, and the MIME, POT
    and PO prefixes are fully capitalized.
    """
    return HEADER_WORD_PATTERN.sub(lambda match: match.group(0).upper(), key.strip().lower())


def with_charset(content_type: str, charset: str = "UTF-8") -> str:
    """Force the charset parameter of a Content-Type value."""
    if CHARSET_PATTERN.search(content_type):
        return CHARSET_PATTERN.sub(f"charset={charset}", content_type)
    return f"{content_type.rstrip('; ')}; charset={charset}"


def render_headers(headers: dict[str, str]) -> str:
    """
    Render headers as the msgstr value of the header entry.

    Returns:
        ``Name: value`` lines, each terminated by a newline
    """
    lines: list[str] = []
    for key, value in headers.items():
        if not key.strip():
            continue
        if key.lower() == "content-type":
            value = with_charset(value)
        lines.append(f"{canonical_header_name(key)}: {value.strip()}")
    return "".join(f"{line}\n" for line in lines)


def render_entry(entry: CatalogEntry, msgstr: str | None = None) -> str:
    """
    Render one entry block.

    Args:
        entry: Entry to render
        msgstr: Value to render instead of the entry's own msgstr

    Returns:
        The block, without a trailing newline
    """
    lines: list[str] = []
    lines.extend(format_comments("#", entry.translator_comments))
    lines.extend(format_references(entry.references))
    lines.extend(format_comments("#.", entry.extracted_comments, strip=True))
    if entry.flags:
        lines.append(f"#, {', '.join(entry.flags)}")
    lines.extend(f"#| {line}" for line in entry.previous)
    if entry.msgctxt:
        lines.append(format_string("msgctxt", entry.msgctxt))
    lines.append(format_string("msgid", entry.msgid))
    lines.append(format_string("msgstr", entry.msgstr if msgstr is None else msgstr))
    return "\n".join(lines)


def compile_catalog(catalog: Catalog, sort: bool = False) -> str:
    """
    Render a catalog into gettext catalog text.

    The header entry always comes first. Remaining entries follow in
    first-discovery order, or sorted by context then msgid when ``sort`` is
    set.

    Args:
        catalog: Fully merged catalog
        sort: Order entries lexicographically

    Returns:
        Catalog text ending with a single newline
    """
    header = catalog.ensure_header_entry()
    blocks = [render_entry(header, msgstr=render_headers(catalog.headers))]
    blocks.extend(render_entry(entry) for entry in catalog.iter_entries(sort=sort))

    logger.debug(f"Rendered catalog with {len(blocks) - 1} message(s)")
    return "\n\n".join(blocks) + "\n"
