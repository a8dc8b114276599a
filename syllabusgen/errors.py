"""
Error types raised by syllabusgen.

The formatter and the two advisory validators never raise for data content.
These exceptions belong to the layers around them: the edit reducer,
the year-filter parser, the working-copy store and the import/export surfaces.
"""

from __future__ import annotations


class SyllabusError(Exception):
    """Base exception for all syllabusgen errors."""


class InvalidYearFilter(SyllabusError):
    """
    Raised by parse_year_filter() when a bound of the expression is not a number.
    """

    def __init__(self, expression: str, reason: str = "bound is not a number") -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid year filter {expression!r}: {reason}")


class EditError(SyllabusError):
    """Raised when an edit cannot be applied (unknown field, bad index)."""


class SyllabusImportError(SyllabusError):
    """Raised when a JSON snapshot cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to import {path}: {reason}")


class ExportError(SyllabusError):
    """Raised when writing an export file fails."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export {path}: {reason}")


class StorageError(SyllabusError):
    """Raised when the working copy cannot be saved."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save {path}: {reason}")
