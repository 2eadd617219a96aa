#!/usr/bin/env python3
"""
Catalog Management Utility

This script provides utilities to manage the books collection:
- List all books
- Count books
- Clear the collection
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from api.main import create_repository
from catalog.exceptions import CatalogError
from utilities.config import config
from utilities.logger import setup_logging


async def list_books(repository):
    """List all books in the collection."""
    books = await repository.find_all()

    if not books:
        print("No books found in database")
        return

    print(f"Found {len(books)} books:")
    for i, book in enumerate(books, 1):
        print(f"{i:3d}. {book.id}  {book.title} / {book.author} ({book.status}, rating {book.rating})")


async def count_books(repository):
    """Show the number of books in the collection."""
    print(f"Total books: {await repository.count()}")


async def clear_books(repository):
    """Remove every book from the collection."""
    deleted = await repository.clear()
    print(f"Removed {deleted} books from {config.mongodb_database}.{config.mongodb_collection}")


COMMANDS = {
    "list": list_books,
    "count": count_books,
    "clear": clear_books,
}


async def main():
    """Main function."""
    if len(sys.argv) < 2 or sys.argv[1].lower() not in COMMANDS:
        print("Usage: python manage_catalog.py [list|count|clear]")
        print()
        print("Commands:")
        print("  list   - List all books")
        print("  count  - Show number of books")
        print("  clear  - Remove all books")
        sys.exit(1)

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )

    repository = create_repository()
    try:
        await repository.connect()
        await COMMANDS[sys.argv[1].lower()](repository)
    except CatalogError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    finally:
        await repository.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
