"""
jsgettext - extract gettext messages from JavaScript and template sources.
"""

from .config.schema import ExtractOptions
from .extraction.extractor import (
    Dialect,
    extract,
    extract_with_dialect,
    generate_from_ejs,
    generate_from_jade,
    generate_from_jinja,
)
from .utils.core.exceptions import (
    CatalogLoadError,
    ConfigurationError,
    JsGettextError,
    ParseError,
)

__all__ = [
    "CatalogLoadError",
    "ConfigurationError",
    "Dialect",
    "ExtractOptions",
    "JsGettextError",
    "ParseError",
    "extract",
    "extract_with_dialect",
    "generate_from_ejs",
    "generate_from_jade",
    "generate_from_jinja",
]
