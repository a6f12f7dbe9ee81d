from __future__ import annotations

from typing import Optional


class TDNAError(RuntimeError):
    """Base exception for tdna-finder."""


class ParseError(TDNAError):
    """A table row (or a whole table) could not be parsed."""

    def __init__(self, message: str, row_number: Optional[int] = None) -> None:
        self.row_number = row_number
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)


class InvalidInput(TDNAError, ValueError):
    """A query was given something that is not an identifier."""


class GeneNotFound(TDNAError, LookupError):
    """Gene identifier is not present in the annotation table."""

    def __init__(self, gene_id: str) -> None:
        self.gene_id = gene_id
        super().__init__(f"Gene not found in annotation: {gene_id}")


class DataFileNotFound(TDNAError):
    """An input table is missing from the data directory."""
