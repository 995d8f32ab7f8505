"""
Configuration for jsgettext.

This package provides the typed extraction options and the loader for
YAML options files.
"""

from .manager import load_options_data, load_options_file
from .schema import ExtractOptions

__all__ = [
    "ExtractOptions",
    "load_options_data",
    "load_options_file",
]
