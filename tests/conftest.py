"""
pytest Fixtures for Catalog Tests

This file contains shared fixtures used across all test files.

FIXTURE LAYOUT:
===============
- store: a CatalogStore on a fresh SQLite file under tmp_path, opened
  for the test and closed afterwards. A file (not :memory:) because the
  store runs every operation on a worker thread with its own connection.
- client: a TestClient around create_app(store=store). Entering the client
  runs the lifespan, which opens the (already open) store and closes it on
  exit.
- sample_*: records inserted through the store itself.

Sample fixtures are synchronous, so they drive the async store with run(),
which uses a private event loop and never touches the loop pytest-asyncio
sets up for async tests.
"""

import asyncio
from collections.abc import Coroutine, Generator
from datetime import date
from typing import Any, TypeVar

import pytest
from fastapi.testclient import TestClient

from catalog.main import create_app
from catalog.models import BookStatus
from catalog.schemas import AuthorRecord, BookInstanceRecord, BookRecord, GenreRecord
from catalog.store import CatalogStore

T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a store coroutine to completion from synchronous test code."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.run_until_complete(loop.shutdown_default_executor())
        loop.close()


# =============================================================================
# STORE & CLIENT FIXTURES
# =============================================================================
@pytest.fixture
def store(tmp_path) -> Generator[CatalogStore, None, None]:
    """
    An open CatalogStore backed by a throwaway SQLite file.

    Scope: function. Every test starts with empty tables.
    """
    catalog_store = CatalogStore(f"sqlite:///{tmp_path / 'catalog.db'}")
    catalog_store.open()

    yield catalog_store

    catalog_store.close()


@pytest.fixture
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """
    A test client serving from the test store.

    Redirects are not followed, so tests can assert on the 302 and its
    Location header.
    """
    app = create_app(store=store)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_author(store: CatalogStore) -> AuthorRecord:
    """Create a sample author for testing."""
    return run(store.authors.insert({
        "first_name": "Isaac",
        "family_name": "Asimov",
        "date_of_birth": date(1920, 1, 2),
        "date_of_death": date(1992, 4, 6),
    }))


@pytest.fixture
def sample_genre(store: CatalogStore) -> GenreRecord:
    """Create a sample genre for testing."""
    return run(store.genres.insert({"name": "Science Fiction"}))


@pytest.fixture
def sample_book(
    store: CatalogStore,
    sample_author: AuthorRecord,
    sample_genre: GenreRecord,
) -> BookRecord:
    """
    Create a sample book referring to the sample author and genre.

    This fixture depends on sample_author and sample_genre fixtures.
    pytest automatically resolves these dependencies.
    """
    return run(store.books.insert({
        "title": "Foundation",
        "author": sample_author.id,
        "summary": "The Galactic Empire is dying.",
        "isbn": "9780553293357",
        "genre": [sample_genre.id],
    }))


@pytest.fixture
def sample_bookinstance(store: CatalogStore, sample_book: BookRecord) -> BookInstanceRecord:
    """Create an available copy of the sample book."""
    return run(store.bookinstances.insert({
        "book": sample_book.id,
        "imprint": "Bantam Spectra, 1991.",
        "status": BookStatus.AVAILABLE.value,
    }))
