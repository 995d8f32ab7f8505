"""
In-memory translation catalog and the merge step of extraction.

A Catalog maps contexts to message ids to CatalogEntry objects. The entry
stored under the empty context and empty msgid is reserved for the catalog
header and its descriptive comment block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

HEADER_COMMENT_LINES: tuple[str, ...] = (
    "SOME DESCRIPTIVE TITLE.",
    "Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER",
    "This file is distributed under the same license as the PACKAGE package.",
    "FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.",
)

DEFAULT_CHARSET = "utf-8"


def comment_lines(comment: str) -> list[str]:
    """Split a comment into stripped, non-empty lines, one per ``#.`` line."""
    return [line.strip() for line in comment.splitlines() if line.strip()]


def get_pot_timestamp(now: datetime | None = None) -> str:
    """
    Format a POT timestamp, always in UTC with a literal +0000 offset.

    Args:
        now: Instant to format (defaults to the current time)

    Returns:
        Timestamp formatted as ``YYYY-MM-DD HH:MM+0000``
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%d %H:%M+0000")


def default_headers() -> dict[str, str]:
    """Header values used when neither a loaded catalog nor the caller sets them."""
    return {
        "project-id-version": "PACKAGE VERSION",
        "report-msgid-bugs-to": "",
        "pot-creation-date": get_pot_timestamp(),
        "po-revision-date": "YEAR-MO-DA HO:MI+ZONE",
        "last-translator": "FULL NAME <EMAIL@ADDRESS>",
        "language-team": "LANGUAGE <LL@li.org>",
        "language": "",
        "mime-version": "1.0",
        "content-type": "text/plain; charset=UTF-8",
        "content-transfer-encoding": "8bit",
    }


@dataclass(frozen=True)
class CallSite:
    """A matched translation call: resolved text, 1-based line and translator comments."""

    text: str
    line: int
    comments: tuple[str, ...] = ()


@dataclass
class CatalogEntry:
    """One distinct (context, msgid) pair and its metadata."""

    msgid: str
    msgctxt: str = ""
    msgstr: str = ""
    references: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    translator_comments: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    previous: list[str] = field(default_factory=list)

    @property
    def is_header(self) -> bool:
        """Whether this is the reserved header entry."""
        return self.msgctxt == "" and self.msgid == ""

    def add_reference(self, reference: str) -> bool:
        """Append a ``file:line`` reference unless already present."""
        if reference in self.references:
            return False
        self.references.append(reference)
        return True

    def add_extracted_comment(self, comment: str) -> bool:
        """Append a translator comment unless already present."""
        if comment in self.extracted_comments:
            return False
        self.extracted_comments.append(comment)
        return True


class Catalog:
    """Headers plus message entries, nested as context -> msgid -> entry."""

    def __init__(self, charset: str = DEFAULT_CHARSET) -> None:
        self.charset: str = charset
        self.headers: dict[str, str] = {}
        self.translations: dict[str, dict[str, CatalogEntry]] = {"": {}}

    @classmethod
    def new(cls) -> Catalog:
        """Create an empty catalog holding only the descriptive header entry."""
        catalog = cls()
        catalog.ensure_header_entry()
        return catalog

    @property
    def header_entry(self) -> CatalogEntry | None:
        """The reserved entry under the empty context and msgid, if any."""
        return self.translations.get("", {}).get("")

    def ensure_header_entry(self) -> CatalogEntry:
        """
        Return the header entry, creating it if needed.

        The descriptive comment block is attached only when the header entry
        carries no translator comments of its own.
        """
        entry = self.header_entry
        if entry is None:
            entry = CatalogEntry(msgid="")
            # Header entry goes first in discovery order
            self.translations[""] = {"": entry, **self.translations.get("", {})}
        if not entry.translator_comments:
            entry.translator_comments = list(HEADER_COMMENT_LINES)
        return entry

    def apply_headers(
        self, defaults: dict[str, str], overrides: dict[str, str] | None = None
    ) -> None:
        """
        Fill in header values.

        Existing (loaded) headers take precedence over defaults, and
        overrides take precedence over both.

        Args:
            defaults: Values for headers not already present
            overrides: Values that replace whatever is present
        """
        for key, value in defaults.items():
            _ = self.headers.setdefault(key.lower(), value)
        for key, value in (overrides or {}).items():
            self.headers[key.lower()] = value

    def get(self, msgid: str, context: str = "") -> CatalogEntry | None:
        """Look up an entry by key."""
        return self.translations.get(context, {}).get(msgid)

    def add_entry(self, entry: CatalogEntry) -> None:
        """Store an entry under its own key, replacing any previous one."""
        self.translations.setdefault(entry.msgctxt, {})[entry.msgid] = entry

    def add_call_site(
        self, site: CallSite, source_id: str, context: str = ""
    ) -> CatalogEntry | None:
        """
        Merge a call site into the catalog.

        An existing entry gains the reference and any new comment lines and
        keeps its translation and other metadata. Otherwise a new entry is
        created with an empty translation. Multi-line comments are stored
        line by line, the way they read back from a catalog.

        Args:
            site: The matched call
            source_id: Identifier of the source unit the call came from
            context: Message context (extraction always uses the empty one)

        Returns:
            The entry the call site was merged into, or None for an empty
            message in the default context
        """
        reference = f"{source_id}:{site.line}"
        if context == "" and site.text == "":
            # Reserved for the header
            logger.warning(f"Ignoring empty message at {reference}")
            return None

        entry = self.get(site.text, context)

        if entry is None:
            entry = CatalogEntry(
                msgid=site.text,
                msgctxt=context,
                references=[reference],
                extracted_comments=list(
                    dict.fromkeys(line for comment in site.comments for line in comment_lines(comment))
                ),
            )
            self.add_entry(entry)
            logger.debug(f"New message {site.text!r} at {reference}")
            return entry

        _ = entry.add_reference(reference)
        for comment in site.comments:
            for line in comment_lines(comment):
                _ = entry.add_extracted_comment(line)
        return entry

    def iter_entries(self, sort: bool = False) -> Iterator[CatalogEntry]:
        """
        Iterate over message entries, excluding the header entry.

        Args:
            sort: Order contexts, then msgids, lexicographically instead of by discovery
        """
        contexts = sorted(self.translations) if sort else list(self.translations)
        for context in contexts:
            messages = self.translations[context]
            msgids = sorted(messages) if sort else list(messages)
            for msgid in msgids:
                entry = messages[msgid]
                if entry.is_header:
                    continue
                yield entry

    def __len__(self) -> int:
        return sum(1 for _entry in self.iter_entries())

    def __contains__(self, msgid: object) -> bool:
        return isinstance(msgid, str) and msgid != "" and self.get(msgid) is not None
