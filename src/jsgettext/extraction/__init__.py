"""
Message extraction and gettext catalog handling.

This package provides the JavaScript extraction engine, the template
preprocessors, the catalog model and the catalog reader and writer.
"""

from .catalog import Catalog, CatalogEntry, CallSite
from .extractor import (
    Dialect,
    ExtractionRun,
    extract,
    extract_with_dialect,
    generate_from_ejs,
    generate_from_jade,
    generate_from_jinja,
)
from .javascript import extract_call_sites
from .po_reader import load_catalog, parse_catalog
from .po_writer import compile_catalog

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CallSite",
    "Dialect",
    "ExtractionRun",
    "compile_catalog",
    "extract",
    "extract_call_sites",
    "extract_with_dialect",
    "generate_from_ejs",
    "generate_from_jade",
    "generate_from_jinja",
    "load_catalog",
    "parse_catalog",
]
