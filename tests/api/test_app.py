"""
Tests for the FastAPI application factory and error handling.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.main import create_app, create_repository
from catalog.database import BookRepository
from catalog.exceptions import RepositoryError
from utilities.config import config


@pytest.fixture
def mock_repository():
    """Mock book repository."""
    return AsyncMock(spec=BookRepository)


@pytest.fixture
def client(mock_repository):
    """Create test client around the mock repository."""
    return TestClient(create_app(repository=mock_repository))


def test_create_repository_from_config():
    """Test that the default repository follows configuration."""
    repository = create_repository()

    assert repository.connection_url == config.get_mongodb_url()
    assert repository.database_name == config.mongodb_database
    assert repository.collection_name == config.mongodb_collection
    assert repository.timeout_ms == config.mongodb_timeout_ms
    assert repository.client is None


def test_app_holds_repository(mock_repository):
    """Test that the app keeps the repository it serves."""
    app = create_app(repository=mock_repository)
    assert app.state.repository is mock_repository


def test_list_failure(client, mock_repository):
    """Test that driver failures become 500 with the driver message."""
    mock_repository.find_all.side_effect = RepositoryError("localhost:27017: connection refused")

    response = client.get("/books")

    assert response.status_code == 500
    assert response.json() == {"error": "localhost:27017: connection refused"}


def test_insert_failure(client, mock_repository, sample_book_payload):
    """Test that insert failures become 500."""
    mock_repository.insert.side_effect = RepositoryError("E11000 duplicate key error")

    response = client.post("/books", json=sample_book_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "E11000 duplicate key error"}


def test_replace_failure(client, mock_repository, sample_book):
    """Test that replace failures become 500."""
    mock_repository.replace.side_effect = RepositoryError("timed out")

    response = client.put("/books", json=sample_book.to_wire())

    assert response.status_code == 500
    assert response.json() == {"error": "timed out"}


def test_invalid_id_skips_repository(client, mock_repository):
    """Test that malformed ids never reach the repository."""
    client.get("/books/asdf")
    client.delete("/books/asdf")

    mock_repository.find_by_id.assert_not_awaited()
    mock_repository.delete_by_id.assert_not_awaited()


def test_invalid_data_skips_repository(client, mock_repository):
    """Test that invalid records are not inserted."""
    response = client.post("/books", json={"title": "Only a title"})

    assert response.status_code == 400
    mock_repository.insert.assert_not_awaited()


def test_create_passes_assigned_id(client, mock_repository, sample_book_payload):
    """Test that the inserted record carries the returned id."""
    response = client.post("/books", json=sample_book_payload)

    inserted = mock_repository.insert.await_args.args[0]
    assert inserted.id == response.json()["id"]
    assert inserted.title == sample_book_payload["title"]


@pytest.mark.asyncio
async def test_lifespan_connects_and_disconnects(mock_repository):
    """Test that the repository lives as long as the application."""
    app = create_app(repository=mock_repository)

    async with app.router.lifespan_context(app):
        mock_repository.connect.assert_awaited_once()
        mock_repository.disconnect.assert_not_awaited()

    mock_repository.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_lifespan_fails_when_store_unreachable(mock_repository):
    """Test that startup fails if the store cannot be reached."""
    mock_repository.connect.side_effect = RepositoryError("localhost:27017: connection refused")
    app = create_app(repository=mock_repository)

    with pytest.raises(RepositoryError):
        async with app.router.lifespan_context(app):
            pass
