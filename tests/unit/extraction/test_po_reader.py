"""
Tests for reading catalog text back into a Catalog.

This module tests header parsing, entry metadata, continuation lines, the
round trip through the writer and the errors raised for invalid catalogs.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from jsgettext.extraction.po_reader import (
    load_catalog,
    parse_catalog,
    parse_header,
    resolve_catalog_path,
    unescape,
)
from jsgettext.extraction.po_writer import compile_catalog
from jsgettext.utils.core.exceptions import CatalogLoadError

GENERATED_CATALOG = (
    "# SOME DESCRIPTIVE TITLE.\n"
    "# Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER\n"
    "# This file is distributed under the same license as the PACKAGE package.\n"
    "# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.\n"
    'msgid ""\n'
    'msgstr ""\n'
    '"Project-Id-Version: PACKAGE VERSION\\n"\n'
    '"Report-Msgid-Bugs-To: \\n"\n'
    '"POT-Creation-Date: 2024-01-02 03:04+0000\\n"\n'
    '"PO-Revision-Date: YEAR-MO-DA HO:MI+ZONE\\n"\n'
    '"Last-Translator: FULL NAME <EMAIL@ADDRESS>\\n"\n'
    '"Language-Team: LANGUAGE <LL@li.org>\\n"\n'
    '"Language: \\n"\n'
    '"MIME-Version: 1.0\\n"\n'
    '"Content-Type: text/plain; charset=UTF-8\\n"\n'
    '"Content-Transfer-Encoding: 8bit\\n"\n'
    "\n"
    "#: app.js:3 lib/util.js:7\n"
    "#. L10n: Greeting on the start page\n"
    'msgid "Hello"\n'
    'msgstr "Hallo"\n'
    "\n"
    "#: app.js:9\n"
    'msgid ""\n'
    '"This is a long string with \\"quotes\\", newlines \\n"\n'
    '" and such. The line should get folded"\n'
    'msgstr ""\n'
)


class TestRoundTrip:
    """Test that generated catalogs survive a parse and re-render."""

    def test_round_trip_is_identity(self) -> None:
        """Test rendering a parsed catalog reproduces its text."""
        assert compile_catalog(parse_catalog(GENERATED_CATALOG)) == GENERATED_CATALOG

    def test_parsed_contents(self) -> None:
        """Test the parsed headers and entries."""
        catalog = parse_catalog(GENERATED_CATALOG)

        assert catalog.headers["pot-creation-date"] == "2024-01-02 03:04+0000"
        assert catalog.headers["report-msgid-bugs-to"] == ""
        assert catalog.charset == "utf-8"
        assert len(catalog) == 2

        hello = catalog.get("Hello")
        assert hello is not None
        assert hello.msgstr == "Hallo"
        assert hello.references == ["app.js:3", "lib/util.js:7"]
        assert hello.extracted_comments == ["L10n: Greeting on the start page"]

        folded = catalog.get('This is a long string with "quotes", newlines \n and such. The line should get folded')
        assert folded is not None
        assert folded.references == ["app.js:9"]

    def test_header_entry_keeps_comments(self) -> None:
        """Test that the descriptive comment block is read as translator comments."""
        header = parse_catalog(GENERATED_CATALOG).header_entry

        assert header is not None
        assert header.translator_comments[0] == "SOME DESCRIPTIVE TITLE."
        assert header.msgstr == ""


class TestEntryMetadata:
    """Test comments, flags and contexts of hand-edited catalogs."""

    def test_flags_previous_and_context(self) -> None:
        """Test flags, previous values and contexts."""
        text = (
            'msgid ""\n'
            'msgstr "Content-Type: text/plain; charset=ISO-8859-1\\n"\n'
            "\n"
            "# Reviewed\n"
            "#, fuzzy, javascript-format\n"
            '#| msgid "Opne"\n'
            'msgctxt "menu"\n'
            'msgid "Open"\n'
            'msgstr "Öffnen"\n'
        )

        catalog = parse_catalog(text)
        entry = catalog.get("Open", "menu")

        assert catalog.charset == "iso-8859-1"
        assert catalog.get("Open") is None
        assert entry is not None
        assert entry.translator_comments == ["Reviewed"]
        assert entry.flags == ["fuzzy", "javascript-format"]
        assert entry.previous == ['msgid "Opne"']

    def test_obsolete_entries_skipped(self) -> None:
        """Test that obsolete entries are dropped."""
        text = 'msgid "Kept"\nmsgstr ""\n\n#~ msgid "Gone"\n#~ msgstr ""\n'

        catalog = parse_catalog(text)

        assert "Kept" in catalog
        assert "Gone" not in catalog

    def test_byte_order_mark(self) -> None:
        """Test that a leading byte order mark is ignored."""
        assert "Hi" in parse_catalog('\ufeffmsgid "Hi"\nmsgstr ""\n')


class TestInvalidCatalogs:
    """Test errors raised for invalid catalog text."""

    @pytest.mark.parametrize(
        ("text", "line"),
        [
            ('msgid "a"\nmsgid_plural "as"\nmsgstr[0] ""\n', 2),
            ('msgid "a"\nbogus\n', 2),
            ('msgid "a\nmsgstr ""\n', 1),
            ('msgstr "orphan"\n', 1),
            ('msgid "a"\nmsgstr "\\q"\n', 2),
            ('msgid "a"\nmsgstr ""\n\nmsgid "a"\nmsgstr ""\n', 4),
        ],
    )
    def test_error_line(self, text: str, line: int) -> None:
        """Test the reported line of each error."""
        with pytest.raises(CatalogLoadError) as exc_info:
            _ = parse_catalog(text, path="messages.po")

        assert exc_info.value.line == line
        assert exc_info.value.path == "messages.po"
        assert str(exc_info.value).startswith(f"messages.po: line {line}: ")

    def test_missing_msgstr(self) -> None:
        """Test an entry without msgstr."""
        with pytest.raises(CatalogLoadError, match="without msgstr"):
            _ = parse_catalog('msgid "a"\n\nmsgid "b"\nmsgstr ""\n')


class TestHelpers:
    """Test the module-level helpers."""

    def test_unescape(self) -> None:
        """Test escape sequence decoding."""
        assert unescape('say \\"hi\\"\\n\\t\\\\') == 'say "hi"\n\t\\'

    def test_parse_header(self) -> None:
        """Test header parsing ignores lines without a colon."""
        assert parse_header("Language: de\nbroken\nX-Generator: tool: 1\n") == {
            "language": "de",
            "x-generator": "tool: 1",
        }

    def test_resolve_catalog_path(self, tmp_path: Path) -> None:
        """Test the catalog location from output and output-dir."""
        assert resolve_catalog_path("messages.po", str(tmp_path)) == tmp_path.resolve() / "messages.po"
        assert resolve_catalog_path("messages.po") == Path.cwd() / "messages.po"


class TestLoadCatalog:
    """Test loading catalog files."""

    def test_load(self, write_file: Callable[[str, str], Path]) -> None:
        """Test loading an existing file."""
        path = write_file("locale/messages.po", GENERATED_CATALOG)

        assert "Hello" in load_catalog(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a load error."""
        with pytest.raises(CatalogLoadError, match="not found"):
            _ = load_catalog(tmp_path / "missing.po")

    def test_invalid_encoding(self, tmp_path: Path) -> None:
        """Test that a non UTF-8 file is a load error."""
        path = tmp_path / "latin1.po"
        _ = path.write_bytes('msgid "caf\xe9"\nmsgstr ""\n'.encode("latin-1"))

        with pytest.raises(CatalogLoadError, match="UTF-8"):
            _ = load_catalog(path)
