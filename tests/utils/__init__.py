"""
Test utilities for jsgettext.

This package provides helpers for inspecting generated catalog text in
tests.
"""

from .po_helpers import (
    catalog_body,
    header_block,
    header_value,
    message_ids,
    strip_creation_date,
)

__all__ = [
    "catalog_body",
    "header_block",
    "header_value",
    "message_ids",
    "strip_creation_date",
]
