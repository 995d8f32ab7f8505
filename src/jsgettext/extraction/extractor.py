"""
Extraction entry points.

Every call builds its own ExtractionRun holding the options and a fresh
catalog, so nothing carries over from one invocation to the next.

Usage Examples:
    Extract from JavaScript sources:
        >>> from jsgettext import extract
        >>> pot = extract({"app.js": 'alert(gettext("Hi"));'})

    Update an existing catalog with template sources:
        >>> pot = generate_from_ejs(
        ...     {"views/index.ejs": '<p><%= gettext("Welcome") %></p>'},
        ...     {"join-existing": True, "output": "locale/messages.pot"},
        ... )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum

from ..config.schema import ExtractOptions
from ..utils.core.exceptions import ConfigurationError
from .catalog import Catalog, default_headers
from .javascript import extract_call_sites
from .po_reader import load_catalog, resolve_catalog_path
from .po_writer import compile_catalog
from .templates import preprocess_ejs, preprocess_jade, preprocess_jinja

logger = logging.getLogger(__name__)

OptionsInput = ExtractOptions | Mapping[str, object] | None


class Dialect(Enum):
    """Source dialects accepted by the extractor."""

    SCRIPT = "script"
    EJS = "ejs"
    JADE = "jade"
    JINJA = "jinja"

    @classmethod
    def from_value(cls, value: Dialect | str) -> Dialect:
        """
        Resolve a dialect from an instance or a case-insensitive name.

        ``javascript`` and ``js`` name the script dialect and ``pug`` names
        the Jade dialect.

        Raises:
            ConfigurationError: If the name is not a supported dialect
        """
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        match name:
            case "javascript" | "js":
                return cls.SCRIPT
            case "pug":
                return cls.JADE
            case _:
                try:
                    return cls(name)
                except ValueError as e:
                    supported = ", ".join(dialect.value for dialect in cls)
                    raise ConfigurationError(
                        f"Unsupported dialect {value!r} (supported: {supported})"
                    ) from e


PREPROCESSORS: dict[Dialect, Callable[[str, str | None], str]] = {
    Dialect.EJS: preprocess_ejs,
    Dialect.JADE: preprocess_jade,
    Dialect.JINJA: preprocess_jinja,
}


class ExtractionRun:
    """State of a single extraction: its options and its catalog."""

    def __init__(self, options: OptionsInput = None) -> None:
        self.options: ExtractOptions = ExtractOptions.from_value(options)
        self.catalog: Catalog = self._create_catalog()

    def _create_catalog(self) -> Catalog:
        options = self.options
        if options.join_existing:
            path = resolve_catalog_path(options.output, options.output_dir)
            logger.info(f"Joining existing catalog: {path}")
            catalog = load_catalog(path)
            _ = catalog.ensure_header_entry()
        else:
            catalog = Catalog.new()

        catalog.apply_headers(default_headers(), options.headers)
        return catalog

    def scan(self, source_id: str, text: str, dialect: Dialect = Dialect.SCRIPT) -> int:
        """
        Extract the call sites of one source unit into the catalog.

        Args:
            source_id: Identifier used in reference comments
            text: Source text
            dialect: Dialect of ``text``

        Returns:
            Number of call sites found

        Raises:
            ParseError: If the source cannot be parsed
        """
        preprocess = PREPROCESSORS.get(dialect)
        script = text if preprocess is None else preprocess(text, source_id)

        sites = extract_call_sites(
            script,
            keyword=self.options.keyword,
            add_comments=self.options.add_comments,
            source_id=source_id,
            source_type=self.options.source_type,
        )
        for site in sites:
            _ = self.catalog.add_call_site(site, source_id)

        logger.info(f"Extracted {len(sites)} strings from {source_id}")
        return len(sites)

    def scan_all(self, sources: Mapping[str, str], dialect: Dialect = Dialect.SCRIPT) -> None:
        """Scan source units in the mapping's iteration order."""
        for source_id, text in sources.items():
            _ = self.scan(source_id, text, dialect)

        logger.info(f"Scanned {len(sources)} files, catalog holds {len(self.catalog)} messages")

    def render(self) -> str:
        """Render the catalog as gettext catalog text."""
        return compile_catalog(self.catalog, sort=self.options.sort_output)


def extract_with_dialect(
    sources: Mapping[str, str],
    dialect: Dialect | str = Dialect.SCRIPT,
    options: OptionsInput = None,
) -> str:
    """
    Extract messages from sources of one dialect and render the catalog.

    Args:
        sources: Source identifiers mapped to source text, in processing order
        dialect: Dialect shared by every source
        options: Extraction options, as ExtractOptions or a mapping of option names

    Returns:
        Catalog text

    Raises:
        ConfigurationError: If the dialect or the options are not supported
        CatalogLoadError: If join-existing is set and the catalog cannot be loaded
        ParseError: If any source cannot be parsed
    """
    resolved = Dialect.from_value(dialect)
    run = ExtractionRun(options)
    run.scan_all(sources, resolved)
    return run.render()


def extract(sources: Mapping[str, str], options: OptionsInput = None) -> str:
    """Extract messages from JavaScript sources."""
    return extract_with_dialect(sources, Dialect.SCRIPT, options)


def generate_from_ejs(sources: Mapping[str, str], options: OptionsInput = None) -> str:
    """Extract messages from EJS templates."""
    return extract_with_dialect(sources, Dialect.EJS, options)


def generate_from_jade(sources: Mapping[str, str], options: OptionsInput = None) -> str:
    """Extract messages from Jade/Pug templates."""
    return extract_with_dialect(sources, Dialect.JADE, options)


def generate_from_jinja(sources: Mapping[str, str], options: OptionsInput = None) -> str:
    """Extract messages from Jinja-style ``{{ }}`` templates."""
    return extract_with_dialect(sources, Dialect.JINJA, options)
