"""Exceptions raised when a merge cannot continue."""

from __future__ import annotations


class CatalogMergeError(ValueError):
    """Base class for fatal catalog problems."""


class EmptyCatalogError(CatalogMergeError):
    """The master source has no header row."""


class MissingColumnError(CatalogMergeError):
    """A column the merge depends on is absent."""

    def __init__(self, column: str, source: str, *, row_number: int | None = None) -> None:
        self.column = column
        self.source = source
        self.row_number = row_number
        where = f" (row {row_number})" if row_number is not None else ""
        super().__init__(f"{source} is missing required column '{column}'{where}")


class InputExhaustedError(CatalogMergeError, EOFError):
    """The operator input stream ended while a conflict was still open."""
