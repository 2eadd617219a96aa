"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List

import pytest
from bson import ObjectId
from bson.errors import InvalidId
from fastapi.testclient import TestClient

from api.main import create_app
from catalog.database import BookRepository
from catalog.exceptions import BookNotFoundError, RepositoryError
from catalog.identifiers import to_object_id
from catalog.models import Book


class InMemoryBookRepository(BookRepository):
    """Book repository keeping documents in a dict, in insertion order."""

    def __init__(self):
        super().__init__(connection_url="mongodb://localhost", database_name="books")
        self.documents: Dict[ObjectId, dict] = {}
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    def _object_id(self, book_id: str) -> ObjectId:
        try:
            return to_object_id(book_id)
        except InvalidId:
            raise BookNotFoundError(book_id)

    async def find_all(self) -> List[Book]:
        return [Book.from_document(document) for document in self.documents.values()]

    async def find_by_id(self, book_id: str) -> Book:
        document = self.documents.get(self._object_id(book_id))
        if document is None:
            raise BookNotFoundError(book_id)
        return Book.from_document(document)

    async def insert(self, book: Book) -> None:
        document = book.to_document()
        if document["_id"] in self.documents:
            raise RepositoryError(f"E11000 duplicate key error dup key: {{ _id: {book.id} }}")
        self.documents[document["_id"]] = document

    async def replace(self, book: Book) -> None:
        document = book.to_document()
        if document["_id"] not in self.documents:
            raise BookNotFoundError(book.id)
        self.documents[document["_id"]] = document

    async def delete_by_id(self, book_id: str) -> None:
        if self.documents.pop(self._object_id(book_id), None) is None:
            raise BookNotFoundError(book_id)

    async def clear(self) -> int:
        deleted = len(self.documents)
        self.documents.clear()
        return deleted

    async def count(self) -> int:
        return len(self.documents)


@pytest.fixture
def repository():
    """Create an empty in-memory book repository."""
    return InMemoryBookRepository()


@pytest.fixture
def client(repository):
    """Create test client bound to the in-memory repository."""
    return TestClient(create_app(repository=repository))


@pytest.fixture
def sample_book_payload():
    """Valid book payload as sent by a client."""
    return {
        "title": "A Wrinkle In Time",
        "author": "Madeleine L'Engle",
        "publisher": "Farrar, Straus & Giroux",
        "publish_date": "1962-01-01T00:00:00-07:00",
        "rating": 1,
        "status": "CheckedIn"
    }


@pytest.fixture
def sample_book(sample_book_payload):
    """Valid book with an assigned id."""
    return Book(id="5acb40295843ef00e69e28d2", **sample_book_payload)
