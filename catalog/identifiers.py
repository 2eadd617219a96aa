"""
Mapping between external book IDs and MongoDB ObjectIds.

External IDs are the 24 character lowercase hex rendering of a 12 byte
ObjectId (timestamp, process-random value, counter).
"""

from bson import ObjectId

ID_LENGTH = 24


def is_well_formed(book_id: str) -> bool:
    """
    Check the shape of an external book ID.

    Only the length is checked. A 24 character string that is not hex is
    reported as not found by the repository instead.
    """
    return len(book_id) == ID_LENGTH


def is_object_id(book_id: str) -> bool:
    """Check that a string is a valid ObjectId hex rendering."""
    return isinstance(book_id, str) and ObjectId.is_valid(book_id)


def generate_id() -> str:
    """Generate a fresh, globally unique external book ID."""
    return str(ObjectId())


def to_object_id(book_id: str) -> ObjectId:
    """
    Convert an external book ID to a storage ObjectId.

    Raises:
        bson.errors.InvalidId: if the ID is not 24 hex characters
    """
    return ObjectId(book_id)
