"""
Tests for catalog rendering.

This module tests escaping, line folding, reference wrapping, header
canonicalization and the layout of rendered catalogs.
"""

from __future__ import annotations

import pytest

from jsgettext.extraction.catalog import CallSite, Catalog, CatalogEntry, default_headers
from jsgettext.extraction.po_writer import (
    FOLD_WIDTH,
    canonical_header_name,
    compile_catalog,
    escape,
    fold_line,
    format_references,
    format_string,
    render_entry,
    render_headers,
)


class TestEscaping:
    """Test string escaping."""

    def test_quotes_and_newline(self) -> None:
        """Test quotes, backslashes and control characters."""
        assert escape('Hello "World"\n') == 'Hello \\"World\\"\\n'
        assert escape("tab\there\\ cr\r") == "tab\\there\\\\ cr\\r"

    def test_short_line_not_folded(self) -> None:
        """Test that a short line with a trailing newline stays on one line."""
        assert format_string("msgid", 'Hello "World"\n') == 'msgid "Hello \\"World\\"\\n"'


class TestFolding:
    """Test folding of long and multi-line strings."""

    def test_fold_after_newline(self) -> None:
        """Test that a segment ends right after an embedded newline."""
        value = 'This is a long string with "quotes", newlines \n and such. The line should get folded'

        assert format_string("msgid", value) == (
            'msgid ""\n'
            '"This is a long string with \\"quotes\\", newlines \\n"\n'
            '" and such. The line should get folded"'
        )

    def test_fold_at_whitespace(self) -> None:
        """Test that long lines break after the last whitespace run."""
        value = "word " * 20

        assert fold_line(value) == ["word " * 15, "word " * 5]

    def test_long_message_has_several_segments(self) -> None:
        """Test that a message longer than the width renders as several quoted lines."""
        value = " ".join(f"token{index}" for index in range(40))

        rendered = format_string("msgstr", value)
        lines = rendered.split("\n")

        assert lines[0] == 'msgstr ""'
        assert len(lines) > 2
        assert all(len(line) <= FOLD_WIDTH + 2 for line in lines[1:])
        assert "".join(line[1:-1] for line in lines[1:]) == value

    def test_fold_at_punctuation(self) -> None:
        """Test that lines without whitespace break after punctuation."""
        value = "a" * 70 + "/" + "b" * 20

        assert fold_line(value) == ["a" * 70 + "/", "b" * 20]

    def test_no_fold_at_colon(self) -> None:
        """Test that a colon is not a fold point."""
        value = "a" * 70 + ":" + "b" * 20

        assert fold_line(value) == ["a" * 70 + ":" + "b" * 5, "b" * 15]

    def test_fold_after_digits(self) -> None:
        """Test that digits count as fold points."""
        value = "a" * 60 + "2024" + "b" * 30

        assert fold_line(value) == ["a" * 60 + "2024", "b" * 30]

    def test_segments_never_split_escapes(self) -> None:
        """Test that no segment ends inside an escape sequence."""
        value = escape("x" * 75 + '"' + "y" * 10 + "\t" + "z" * 70)

        segments = fold_line(value)

        assert "".join(segments) == value
        for segment in segments:
            trailing = len(segment) - len(segment.rstrip("\\"))
            assert trailing % 2 == 0

    def test_empty_string(self) -> None:
        """Test the empty string."""
        assert fold_line("") == []
        assert format_string("msgstr", "") == 'msgstr ""'


class TestReferences:
    """Test wrapping of reference comments."""

    def test_single_line(self) -> None:
        """Test references that fit on one line."""
        assert format_references(["a.js:3", "b.js:7"]) == ["#: a.js:3 b.js:7"]

    def test_wrapped(self) -> None:
        """Test that long reference lists wrap within the width."""
        references = [f"lib/components/widget{index}.js:{index}" for index in range(10)]

        lines = format_references(references)

        assert len(lines) > 1
        assert all(len(line) <= 79 for line in lines)
        assert " ".join(line[3:] for line in lines).split() == references

    def test_overlong_reference_kept_whole(self) -> None:
        """Test that a single overlong reference is not split."""
        reference = "a/" * 50 + "file.js:1"

        assert format_references(["x.js:1", reference]) == ["#: x.js:1", f"#: {reference}"]


class TestHeaders:
    """Test header rendering."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("project-id-version", "Project-Id-Version"),
            ("report-msgid-bugs-to", "Report-Msgid-Bugs-To"),
            ("pot-creation-date", "POT-Creation-Date"),
            ("po-revision-date", "PO-Revision-Date"),
            ("mime-version", "MIME-Version"),
            ("content-transfer-encoding", "Content-Transfer-Encoding"),
            ("x-generator", "X-Generator"),
        ],
    )
    def test_canonical_names(self, key: str, expected: str) -> None:
        """Test header name canonicalization."""
        assert canonical_header_name(key) == expected

    def test_charset_forced(self) -> None:
        """Test that the content type always declares UTF-8."""
        rendered = render_headers({"content-type": "text/plain; charset=ISO-8859-1"})

        assert rendered == "Content-Type: text/plain; charset=UTF-8\n"

    def test_charset_added(self) -> None:
        """Test that a content type without charset gets one."""
        assert render_headers({"content-type": "text/plain"}) == "Content-Type: text/plain; charset=UTF-8\n"


class TestEntryRendering:
    """Test rendering of single entries."""

    def test_full_entry(self) -> None:
        """Test the order of comment lines and keywords."""
        entry = CatalogEntry(
            msgid="Open",
            msgctxt="menu",
            msgstr="Öffnen",
            references=["a.js:1", "b.js:2"],
            extracted_comments=["L10n: File menu"],
            translator_comments=["Checked by reviewer"],
            flags=["fuzzy"],
        )

        assert render_entry(entry) == (
            "# Checked by reviewer\n"
            "#: a.js:1 b.js:2\n"
            "#. L10n: File menu\n"
            "#, fuzzy\n"
            'msgctxt "menu"\n'
            'msgid "Open"\n'
            'msgstr "Öffnen"'
        )

    def test_multiline_comments(self) -> None:
        """Test that every line of a multi-line comment gets its marker."""
        entry = CatalogEntry(
            msgid="x",
            extracted_comments=["L10n: first line\n   second line"],
            translator_comments=["Reviewed\n  by two people"],
        )

        assert render_entry(entry) == (
            "# Reviewed\n"
            "#   by two people\n"
            "#. L10n: first line\n"
            "#. second line\n"
            'msgid "x"\n'
            'msgstr ""'
        )

    def test_no_context_line_for_default_context(self) -> None:
        """Test that the empty context is not rendered."""
        assert render_entry(CatalogEntry(msgid="x")) == 'msgid "x"\nmsgstr ""'


class TestCompileCatalog:
    """Test rendering of whole catalogs."""

    def build_catalog(self) -> Catalog:
        """Create a catalog with two messages discovered as b, a."""
        catalog = Catalog.new()
        catalog.apply_headers(default_headers())
        _ = catalog.add_call_site(CallSite(text="b", line=1), "x.js")
        _ = catalog.add_call_site(CallSite(text="a", line=2), "x.js")
        return catalog

    def test_header_layout(self) -> None:
        """Test the descriptive block and header entry."""
        po = compile_catalog(self.build_catalog())

        assert po.startswith(
            "# SOME DESCRIPTIVE TITLE.\n"
            "# Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER\n"
            "# This file is distributed under the same license as the PACKAGE package.\n"
            "# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.\n"
            'msgid ""\n'
            'msgstr ""\n'
            '"Project-Id-Version: PACKAGE VERSION\\n"\n'
            '"Report-Msgid-Bugs-To: \\n"\n'
            '"POT-Creation-Date: '
        )
        assert '"Content-Type: text/plain; charset=UTF-8\\n"\n' in po
        assert po.endswith('msgid "a"\nmsgstr ""\n')

    def test_discovery_order(self) -> None:
        """Test unsorted output keeps discovery order."""
        po = compile_catalog(self.build_catalog())

        assert po.index('msgid "b"') < po.index('msgid "a"')

    def test_sorted(self) -> None:
        """Test sorted output."""
        po = compile_catalog(self.build_catalog(), sort=True)

        assert po.index('msgid "a"') < po.index('msgid "b"')
        assert po.split("\n\n")[1:] == [
            '#: x.js:2\nmsgid "a"\nmsgstr ""',
            '#: x.js:1\nmsgid "b"\nmsgstr ""\n',
        ]
