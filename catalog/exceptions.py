"""
Error kinds raised by the catalog layer.
The API layer turns each of these into an HTTP status and an error message.
"""

from typing import List


class CatalogError(Exception):
    """Base class for all catalog errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedRequestError(CatalogError):
    """Request body could not be decoded into a book record."""

    def __init__(self):
        super().__init__("Invalid JSON")


class InvalidIdError(CatalogError):
    """Book ID path parameter is not well formed."""

    def __init__(self, book_id: str):
        super().__init__(f"Invalid ID: {book_id}")
        self.book_id = book_id


class InvalidDataError(CatalogError):
    """One or more validation rules failed for a book record."""

    def __init__(self, violations: List[str]):
        super().__init__("Invalid data: " + "; ".join(violations))
        self.violations = violations


class BookNotFoundError(CatalogError):
    """No stored book matches the requested ID."""

    def __init__(self, book_id: str):
        super().__init__(f"ID not found: {book_id}")
        self.book_id = book_id


class RepositoryError(CatalogError):
    """Unexpected failure reported by the document store driver."""
