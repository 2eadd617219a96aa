"""
MongoDB repository for book records.
Handles connection and CRUD operations on the books collection.
"""

from typing import List, Optional

import structlog
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from .exceptions import BookNotFoundError, RepositoryError
from .identifiers import to_object_id
from .models import Book

logger = structlog.get_logger(__name__)

COLLECTION_NAME = "books"


class BookRepository:
    """
    Async repository over a MongoDB collection of books.

    One client is opened per process and shared by all requests.
    Driver failures are raised as RepositoryError carrying the driver message.
    """

    def __init__(
        self,
        connection_url: str,
        database_name: str,
        collection_name: str = COLLECTION_NAME,
        timeout_ms: Optional[int] = None
    ):
        """
        Initialize the repository without connecting.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
            collection_name: Name of the collection
            timeout_ms: Deadline applied to every driver operation
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB and verify it with a ping."""
        options = {"tz_aware": True}
        if self.timeout_ms:
            options["timeoutMS"] = self.timeout_ms
            options["serverSelectionTimeoutMS"] = self.timeout_ms

        try:
            self.client = AsyncIOMotorClient(self.connection_url, **options)
            self.database = self.client[self.database_name]
            self.collection = self.database[self.collection_name]

            await self.client.admin.command("ping")
            logger.info("Successfully connected to MongoDB",
                        database=self.database_name,
                        collection=self.collection_name)

        except PyMongoError as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise RepositoryError(str(e))

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def find_all(self) -> List[Book]:
        """Return every book in the collection's natural order."""
        try:
            documents = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list books", error=str(e))
            raise RepositoryError(str(e))

        return [Book.from_document(document) for document in documents]

    async def find_by_id(self, book_id: str) -> Book:
        """
        Get a single book by ID.

        Raises:
            BookNotFoundError: if no book matches, including non-hex IDs
            RepositoryError: on driver failure
        """
        try:
            object_id = to_object_id(book_id)
        except InvalidId:
            raise BookNotFoundError(book_id)

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Failed to get book by ID", book_id=book_id, error=str(e))
            raise RepositoryError(str(e))

        if document is None:
            raise BookNotFoundError(book_id)

        return Book.from_document(document)

    async def insert(self, book: Book) -> None:
        """
        Insert a book whose id is already assigned.

        Raises:
            RepositoryError: on driver failure, including duplicate keys
        """
        try:
            await self.collection.insert_one(book.to_document())
            logger.debug("Successfully inserted book", book_id=book.id, title=book.title)
        except PyMongoError as e:
            logger.error("Failed to insert book", book_id=book.id, error=str(e))
            raise RepositoryError(str(e))

    async def replace(self, book: Book) -> None:
        """
        Overwrite every field of the stored book with the same id.

        Raises:
            BookNotFoundError: if no stored book has this id
            RepositoryError: on driver failure
        """
        document = book.to_document()
        try:
            result = await self.collection.replace_one({"_id": document["_id"]}, document)
        except PyMongoError as e:
            logger.error("Failed to replace book", book_id=book.id, error=str(e))
            raise RepositoryError(str(e))

        if result.matched_count == 0:
            raise BookNotFoundError(book.id)

        logger.debug("Successfully replaced book", book_id=book.id)

    async def delete_by_id(self, book_id: str) -> None:
        """
        Delete a book by ID.

        Raises:
            BookNotFoundError: if no book matches, including non-hex IDs
            RepositoryError: on driver failure
        """
        try:
            object_id = to_object_id(book_id)
        except InvalidId:
            raise BookNotFoundError(book_id)

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise RepositoryError(str(e))

        if result.deleted_count == 0:
            raise BookNotFoundError(book_id)

        logger.debug("Successfully deleted book", book_id=book_id)

    async def clear(self) -> int:
        """Remove all books. Intended for test harnesses and maintenance."""
        try:
            result = await self.collection.delete_many({})
        except PyMongoError as e:
            logger.error("Failed to clear books", error=str(e))
            raise RepositoryError(str(e))

        logger.info("Cleared books collection", deleted=result.deleted_count)
        return result.deleted_count

    async def count(self) -> int:
        """Get total number of books."""
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            logger.error("Failed to count books", error=str(e))
            raise RepositoryError(str(e))
