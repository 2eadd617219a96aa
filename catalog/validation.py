"""
Validation rules for book records.

Rules run in a fixed order and every failing rule contributes one message,
so the same record always yields the same message list.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from .exceptions import InvalidDataError
from .models import Book, BookStatus

RATING_MIN = 1
RATING_MAX = 3
STATUS_VALUES = [status.value for status in BookStatus]


def check_required_string(attribute: str, value: str) -> Optional[str]:
    """Fail when the value is empty after trimming whitespace."""
    if not value.strip():
        return f"Value must be present and not empty: {attribute}"
    return None


def check_valid_date(attribute: str, value: datetime) -> Optional[str]:
    """Fail when the date falls on the Unix epoch zero second."""
    if int(value.timestamp() // 1) == 0:
        return f"Value must be a valid date (ISO 8601): {attribute}"
    return None


def check_ranged_int(attribute: str, value: int, lower: int, upper: int) -> Optional[str]:
    """Fail when the value lies outside [lower, upper]."""
    if value < lower or value > upper:
        return f"Value must be in specified range: {attribute} ({lower}-{upper})"
    return None


def check_enumerated_string(attribute: str, value: str, values: Sequence[str]) -> Optional[str]:
    """Fail when the value is not one of the allowed values."""
    if value not in values:
        return f"Value must be in specified set: {attribute} ({','.join(values)})"
    return None


def validate_book(book: Book) -> List[str]:
    """
    Check a book against all record rules.

    Args:
        book: Candidate book, left unmodified

    Returns:
        Violation messages in rule order, empty when the book is valid
    """
    checks = [
        check_required_string("Title", book.title),
        check_required_string("Author", book.author),
        check_required_string("Publisher", book.publisher),
        check_valid_date("Publish Date", book.publish_date),
        check_ranged_int("Rating", book.rating, RATING_MIN, RATING_MAX),
        check_enumerated_string("Status", book.status, STATUS_VALUES),
    ]
    return [message for message in checks if message is not None]


def ensure_valid_book(book: Book) -> Book:
    """
    Return the book if it passes every rule.

    Raises:
        InvalidDataError: with the violations joined by "; "
    """
    violations = validate_book(book)
    if violations:
        raise InvalidDataError(violations)
    return book
