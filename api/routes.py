"""
Book endpoints.

The router is built around an explicit repository so that the same handlers
serve the MongoDB-backed application and test doubles.
"""

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from api.responses import json_response, success_response
from catalog.database import BookRepository
from catalog.exceptions import InvalidIdError
from catalog.identifiers import generate_id, is_well_formed
from catalog.models import Book
from catalog.validation import ensure_valid_book

logger = structlog.get_logger(__name__)


def check_book_id(book_id: str) -> str:
    """Raise InvalidIdError unless the path ID is well formed."""
    if not is_well_formed(book_id):
        raise InvalidIdError(book_id)
    return book_id


def build_router(repository: BookRepository) -> APIRouter:
    """
    Create the router for the five book endpoints.

    Args:
        repository: Repository shared by all requests

    Returns:
        APIRouter with the book routes registered
    """
    router = APIRouter(tags=["Books"])

    @router.get("/books")
    async def get_books() -> Response:
        """Get all books. An empty collection yields an empty body."""
        books = await repository.find_all()
        return json_response(status.HTTP_200_OK, [book.to_wire() for book in books] or None)

    @router.get("/books/{book_id}")
    async def get_book(book_id: str) -> Response:
        """Get a single book by ID."""
        book = await repository.find_by_id(check_book_id(book_id))
        return json_response(status.HTTP_200_OK, book.to_wire())

    @router.post("/books")
    async def create_book(request: Request) -> Response:
        """Create a book. The server assigns the id."""
        book = ensure_valid_book(Book.from_json(await request.body()))
        book = book.model_copy(update={"id": generate_id()})

        await repository.insert(book)
        logger.info("Book created", book_id=book.id, title=book.title)

        return json_response(status.HTTP_201_CREATED, book.to_wire())

    @router.put("/books")
    async def update_book(request: Request) -> Response:
        """Replace a stored book with the full record in the body."""
        book = Book.from_json(await request.body(), require_id=True)

        await repository.replace(book)
        logger.info("Book replaced", book_id=book.id)

        return success_response()

    @router.delete("/books/{book_id}")
    async def delete_book(book_id: str) -> Response:
        """Delete a book by ID."""
        await repository.delete_by_id(check_book_id(book_id))
        logger.info("Book deleted", book_id=book_id)

        return success_response()

    return router
