"""
Pydantic models for book record decoding and serialization.
Implements the Book schema with its wire format and MongoDB document mapping.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_serializer,
    field_validator,
)

from .exceptions import MalformedRequestError
from .identifiers import is_object_id, to_object_id

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Range of a BSON int64
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# RFC 3339 date-time, offset required
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)


class BookStatus(str, Enum):
    """Enum for book circulation status."""
    CHECKED_IN = "CheckedIn"
    CHECKED_OUT = "CheckedOut"


class Book(BaseModel):
    """
    Book record as exchanged with clients and stored in MongoDB.

    Absent and null fields decode to empty values so that the validator,
    not the decoder, reports them.
    """
    id: Optional[str] = Field(None, description="24 character hex book identifier")
    title: StrictStr = Field("", description="Title of the book")
    author: StrictStr = Field("", description="Author of the book")
    publisher: StrictStr = Field("", description="Publisher of the book")
    publish_date: datetime = Field(EPOCH, description="Publication date (RFC 3339)")
    rating: StrictInt = Field(0, ge=INT64_MIN, le=INT64_MAX, description="Rating of the book (1-3)")
    status: StrictStr = Field("", description="Circulation status")

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "id": "5acb40295843ef00e69e28d2",
                "title": "A Wrinkle In Time",
                "author": "Madeleine L'Engle",
                "publisher": "Farrar, Straus & Giroux",
                "publish_date": "1962-01-01T00:00:00-07:00",
                "rating": 1,
                "status": "CheckedIn"
            }
        }
    }

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        """Accept only ObjectId hex strings; empty string means no ID."""
        if v is None or v == "":
            return None
        if not is_object_id(v):
            raise ValueError("id must be a 24 character hex ObjectId")
        return v.lower()

    @field_validator("title", "author", "publisher", "rating", "status", mode="before")
    @classmethod
    def null_as_default(cls, v, info: ValidationInfo):
        """Decode null as the field's empty value."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("publish_date", mode="before")
    @classmethod
    def validate_publish_date_format(cls, v):
        """Reject date strings that are not RFC 3339 timestamps. Null means the epoch."""
        if v is None:
            return EPOCH
        if isinstance(v, datetime):
            return v
        if not isinstance(v, str) or not RFC3339_PATTERN.match(v):
            raise ValueError("publish_date must be an RFC 3339 timestamp")
        return v

    @field_validator("publish_date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive datetimes as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_serializer("publish_date", when_used="json")
    def serialize_publish_date(self, value: datetime) -> str:
        return value.isoformat().replace("+00:00", "Z")

    @classmethod
    def from_json(cls, data: Union[str, bytes], require_id: bool = False) -> "Book":
        """
        Decode a request body into a book.

        Args:
            data: Raw JSON body
            require_id: Reject payloads without an id

        Returns:
            Decoded Book

        Raises:
            MalformedRequestError: on malformed JSON, wrong field types,
                unparsable dates or a missing required id
        """
        try:
            book = cls.model_validate_json(data)
        except ValidationError:
            raise MalformedRequestError()

        if require_id and book.id is None:
            raise MalformedRequestError()

        return book

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Book":
        """Build a book from a MongoDB document."""
        book_doc = dict(document)
        book_doc["id"] = str(book_doc.pop("_id"))

        publish_date = book_doc.get("publish_date")
        if isinstance(publish_date, datetime):
            if publish_date.tzinfo is None:
                publish_date = publish_date.replace(tzinfo=timezone.utc)
            book_doc["publish_date"] = publish_date.astimezone(timezone.utc)

        return cls(**book_doc)

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document keyed by ObjectId."""
        return {"_id": to_object_id(self.id), **self.model_dump(exclude={"id"})}

    def to_wire(self) -> Dict[str, Any]:
        """Convert to the JSON representation sent to clients."""
        return self.model_dump(mode="json")
