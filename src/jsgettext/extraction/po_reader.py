"""
Parsing of gettext catalog text back into a Catalog.

Used to seed an extraction run from a previously generated catalog. The
reader accepts the layout produced by po_writer as well as catalogs edited
by translators or other gettext tools, except for plural-form messages.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..utils.core.exceptions import CatalogLoadError
from .catalog import DEFAULT_CHARSET, Catalog, CatalogEntry

logger = logging.getLogger(__name__)

KEYWORD_PATTERN = re.compile(r'^(msgctxt|msgid|msgstr)\s+(".*)$')
PLURAL_PATTERN = re.compile(r"^(msgid_plural|msgstr\[\d+\])\s")
QUOTED_PATTERN = re.compile(r'^"((?:[^"\\]|\\.)*)"\s*$')
ESCAPE_SEQUENCE_PATTERN = re.compile(r"\\(.)")
CHARSET_PATTERN = re.compile(r"charset\s*=\s*([^\s;]+)", re.IGNORECASE)

UNESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}


@dataclass
class _PendingEntry:
    """Fields collected for the entry currently being read."""

    start_line: int = 0
    msgctxt: str | None = None
    msgid: str | None = None
    msgstr: str | None = None
    references: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    translator_comments: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    previous: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.msgid is None and self.msgctxt is None and self.msgstr is None and not (
            self.references
            or self.extracted_comments
            or self.translator_comments
            or self.flags
            or self.previous
        )


def unescape(value: str, line: int | None = None) -> str:
    """
    Decode the escape sequences of a quoted catalog string.

    Raises:
        CatalogLoadError: If an unknown escape sequence is found
    """

    def replace(match: re.Match[str]) -> str:
        char = match.group(1)
        if char not in UNESCAPES:
            raise CatalogLoadError(f"Unknown escape sequence \\{char}", line=line)
        return UNESCAPES[char]

    return ESCAPE_SEQUENCE_PATTERN.sub(replace, value)


def parse_quoted(text: str, line: int) -> str:
    """
    Parse a single ``"..."`` token.

    Raises:
        CatalogLoadError: If the token is not a complete quoted string
    """
    match = QUOTED_PATTERN.match(text.strip())
    if match is None:
        raise CatalogLoadError(f"Malformed quoted string: {text.strip()}", line=line)
    return unescape(match.group(1), line=line)


def parse_header(value: str) -> dict[str, str]:
    """Parse the header entry's msgstr into lower-cased header names and values."""
    headers: dict[str, str] = {}
    for line in value.split("\n"):
        key, separator, header_value = line.strip().partition(":")
        key = key.strip().lower()
        if not key or not separator:
            continue
        headers[key] = header_value.strip()
    return headers


class CatalogParser:
    """Line-oriented reader for gettext catalog text."""

    def __init__(self, text: str, path: str | None = None) -> None:
        self.text: str = text
        self.path: str | None = path
        self.catalog: Catalog = Catalog()
        self._pending: _PendingEntry = _PendingEntry()
        # Field that continuation lines append to
        self._field: str | None = None

    def _error(self, message: str, line: int) -> CatalogLoadError:
        return CatalogLoadError(message, path=self.path, line=line)

    def parse(self) -> Catalog:
        """
        Parse the whole text.

        Returns:
            Catalog holding the parsed headers and entries

        Raises:
            CatalogLoadError: If the text is not valid catalog text
        """
        if self.text.startswith("\ufeff"):
            self.text = self.text[1:]

        for number, raw_line in enumerate(self.text.splitlines(), start=1):
            try:
                self._parse_line(raw_line.strip(), number)
            except CatalogLoadError as e:
                if e.path is None and self.path is not None:
                    raise self._error(e.reason, number) from e
                raise
        self._flush(len(self.text.splitlines()) + 1)

        header = self.catalog.header_entry
        if header is not None:
            self.catalog.headers = parse_header(header.msgstr)
            header.msgstr = ""
            match = CHARSET_PATTERN.search(self.catalog.headers.get("content-type", ""))
            self.catalog.charset = match.group(1).lower() if match else DEFAULT_CHARSET

        logger.info(f"Parsed {len(self.catalog)} message(s) from {self.path or 'catalog text'}")
        return self.catalog

    def _parse_line(self, line: str, number: int) -> None:
        if not line:
            self._flush(number)
            return

        if line.startswith("#"):
            self._parse_comment(line, number)
            return

        if PLURAL_PATTERN.match(line):
            raise self._error("Plural-form messages are not supported", number)

        match = KEYWORD_PATTERN.match(line)
        if match is not None:
            keyword, rest = match.groups()
            self._parse_keyword(keyword, parse_quoted(rest, number), number)
            return

        if line.startswith('"'):
            if self._field is None:
                raise self._error("Continuation line without a keyword", number)
            value = parse_quoted(line, number)
            setattr(self._pending, self._field, getattr(self._pending, self._field) + value)
            return

        raise self._error(f"Unexpected line: {line}", number)

    def _parse_comment(self, line: str, number: int) -> None:
        if self._pending.msgstr is not None:
            self._flush(number)
        self._field = None
        pending = self._pending
        if not pending.start_line:
            pending.start_line = number

        marker, body = line[:2], line[2:].strip()
        match marker:
            case "#:":
                pending.references.extend(body.split())
            case "#.":
                pending.extracted_comments.append(body)
            case "#,":
                pending.flags.extend(flag.strip() for flag in body.split(",") if flag.strip())
            case "#|":
                pending.previous.append(body)
            case "#~":
                logger.warning(f"Skipping obsolete entry line {number}")
            case _:
                text = line[1:]
                pending.translator_comments.append(text[1:] if text.startswith(" ") else text)

    def _parse_keyword(self, keyword: str, value: str, number: int) -> None:
        pending = self._pending
        match keyword:
            case "msgctxt":
                if pending.msgstr is not None:
                    self._flush(number)
                    pending = self._pending
                if pending.msgctxt is not None or pending.msgid is not None:
                    raise self._error("Unexpected msgctxt", number)
                pending.msgctxt = value
            case "msgid":
                if pending.msgstr is not None:
                    self._flush(number)
                    pending = self._pending
                if pending.msgid is not None:
                    raise self._error("msgid without msgstr", number)
                pending.msgid = value
            case _:
                if pending.msgid is None or pending.msgstr is not None:
                    raise self._error("msgstr without msgid", number)
                pending.msgstr = value

        if not pending.start_line:
            pending.start_line = number
        self._field = keyword

    def _flush(self, number: int) -> None:
        pending = self._pending
        self._pending = _PendingEntry()
        self._field = None
        if pending.is_empty:
            return

        if pending.msgid is None:
            if pending.msgctxt is None and pending.msgstr is None:
                # Trailing comments with no message, e.g. obsolete entries
                return
            raise self._error("Entry without msgid", pending.start_line or number)
        if pending.msgstr is None:
            raise self._error("Entry without msgstr", pending.start_line or number)

        context = pending.msgctxt or ""
        if self.catalog.get(pending.msgid, context) is not None:
            raise self._error(f"Duplicate message {pending.msgid!r}", pending.start_line)

        self.catalog.add_entry(
            CatalogEntry(
                msgid=pending.msgid,
                msgctxt=context,
                msgstr=pending.msgstr,
                references=list(dict.fromkeys(pending.references)),
                extracted_comments=list(dict.fromkeys(pending.extracted_comments)),
                translator_comments=pending.translator_comments,
                flags=pending.flags,
                previous=pending.previous,
            )
        )


def parse_catalog(text: str, path: str | None = None) -> Catalog:
    """
    Parse catalog text into a Catalog.

    Args:
        text: Catalog text
        path: Where the text came from, used in error messages

    Returns:
        Parsed catalog

    Raises:
        CatalogLoadError: If the text is not valid catalog text
    """
    return CatalogParser(text, path=path).parse()


def resolve_catalog_path(output: str, output_dir: str | None = None) -> Path:
    """Locate the catalog file from the output and output-dir options."""
    return (Path(output_dir or "") / output).resolve()


def load_catalog(path: Path) -> Catalog:
    """
    Read and parse a catalog file.

    Args:
        path: Path to an existing .po or .pot file

    Returns:
        Parsed catalog

    Raises:
        CatalogLoadError: If the file is missing, unreadable or invalid
    """
    if not path.is_file():
        raise CatalogLoadError("Catalog file not found", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CatalogLoadError(f"Catalog is not valid UTF-8: {e}", path=str(path)) from e
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog: {e}", path=str(path)) from e

    return parse_catalog(text, path=str(path))
