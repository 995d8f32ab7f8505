"""
Basic exception classes for jsgettext.

This module contains the exception classes raised by the extraction core.
They live here, away from the extraction modules, so every layer can import
them without creating import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    PARSE = "parse"
    CATALOG = "catalog"
    CONFIGURATION = "configuration"


class JsGettextError(Exception):
    """Base exception class for jsgettext specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.context: object | None = context


class ParseError(JsGettextError):
    """Script or template text could not be parsed."""

    def __init__(
        self,
        message: str,
        source_id: str | None = None,
        line: int | None = None,
        context: object | None = None,
    ) -> None:
        if source_id is not None:
            location = source_id if line is None else f"{source_id}:{line}"
            message = f"{location}: {message}"
        super().__init__(message, category=ErrorCategory.PARSE, context=context)
        self.source_id: str | None = source_id
        self.line: int | None = line


class CatalogLoadError(JsGettextError):
    """An existing catalog is missing or is not valid catalog text."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        line: int | None = None,
    ) -> None:
        reason = message
        if line is not None:
            message = f"line {line}: {message}"
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message, category=ErrorCategory.CATALOG, context=path)
        self.path: str | None = path
        self.line: int | None = line
        self.reason: str = reason


class ConfigurationError(JsGettextError):
    """Unsupported dialect or invalid extraction options."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message, category=ErrorCategory.CONFIGURATION, context=context
        )
