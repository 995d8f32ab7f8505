"""
Global test configuration fixtures for jsgettext tests.

This module provides reusable pytest fixtures for JavaScript sources,
template sources and catalog files used across the unit and integration
tests.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def comment_source() -> str:
    """JavaScript source with tagged and untagged translator comments."""
    return (
        "// not meant for translators\n"
        "// L10n: Shown when the user logs out\n"
        'logout(gettext("Goodbye"));\n'
        "\n"
        "/* L10n: Label of the save button */\n"
        'button.label = gettext("Save");\n'
    )


@pytest.fixture
def ejs_template() -> str:
    """EJS template with output, scriptlet, trimmed and include tags."""
    return (
        '<h1><%= gettext("Title") %></h1>\n'
        "<% if (user) { %>\n"
        '  <p><%- gettext("Welcome back") -%></p>\n'
        "<% } %>\n"
        "<% include footer %>\n"
    )


@pytest.fixture
def jade_template() -> str:
    """Jade template with gettext calls in code, attributes and piped text."""
    return (
        "doctype html\n"
        "html\n"
        "  head\n"
        '    title= gettext("Page title")\n'
        "  body\n"
        "    a(href=\"/\", title=gettext('Home link')) Home\n"
        "    p\n"
        '      | #{gettext("Piped text")}\n'
    )


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing UTF-8 files below tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")
        return path

    return _write
