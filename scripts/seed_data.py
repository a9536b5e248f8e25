#!/usr/bin/env python3
"""
Catalog Seed Script

Populates the catalog store with sample data for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Opens the store named by DATABASE_URL (creating tables if needed)
2. Clears existing records (optional)
3. Creates sample authors, genres, books and book copies
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from catalog.config import get_settings
from catalog.models import BookStatus
from catalog.schemas import AuthorRecord, BookRecord, GenreRecord
from catalog.store import CatalogStore


def clear_data(store: CatalogStore) -> None:
    """Clear all existing records from the store."""
    print("Clearing existing data...")
    store.reset()
    print("Data cleared.")


async def create_authors(store: CatalogStore) -> dict[str, AuthorRecord]:
    """Create sample authors, keyed by family name."""
    print("Creating authors...")
    authors_data = [
        {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": date(1973, 6, 6)},
        {"first_name": "Ben", "family_name": "Bova", "date_of_birth": date(1932, 11, 8)},
        {
            "first_name": "Isaac",
            "family_name": "Asimov",
            "date_of_birth": date(1920, 1, 2),
            "date_of_death": date(1992, 4, 6),
        },
        {"first_name": "Bob", "family_name": "Billings"},
        {"first_name": "Jim", "family_name": "Jones", "date_of_birth": date(1971, 12, 16)},
    ]

    authors = {}
    for data in authors_data:
        author = await store.authors.insert(data)
        authors[data["family_name"]] = author

    print(f"Created {len(authors)} authors.")
    return authors


async def create_genres(store: CatalogStore) -> dict[str, GenreRecord]:
    """Create sample genres."""
    print("Creating genres...")
    genres = {}
    for name in ("Fantasy", "Science Fiction", "French Poetry"):
        genres[name] = await store.genres.insert({"name": name})

    print(f"Created {len(genres)} genres.")
    return genres


async def create_books(
    store: CatalogStore,
    authors: dict[str, AuthorRecord],
    genres: dict[str, GenreRecord],
) -> list[BookRecord]:
    """Create sample books with author and genre references."""
    print("Creating books...")

    books_data = [
        {
            "title": "The Name of the Wind (The Kingkiller Chronicle, #1)",
            "summary": "I have stolen princesses back from sleeping barrow kings. "
                       "I burned down the town of Trebon.",
            "isbn": "9781473211896",
            "author": "Rothfuss",
            "genre": ["Fantasy"],
        },
        {
            "title": "The Wise Man's Fear (The Kingkiller Chronicle, #2)",
            "summary": "Picking up the tale of Kvothe Kingkiller once again, we follow him "
                       "into exile, into political intrigue, courtship, adventure, love and magic.",
            "isbn": "9788401352836",
            "author": "Rothfuss",
            "genre": ["Fantasy"],
        },
        {
            "title": "The Slow Regard of Silent Things (Kingkiller Chronicle)",
            "summary": "Deep below the University, there is a dark place. Few people know of it.",
            "isbn": "9780756411336",
            "author": "Rothfuss",
            "genre": ["Fantasy"],
        },
        {
            "title": "Apes and Angels",
            "summary": "Humankind headed out to the stars not for conquest, nor exploration, "
                       "nor even for curiosity. Humans went to the stars in a desperate crusade "
                       "to save intelligent life wherever they found it.",
            "isbn": "9780765379528",
            "author": "Bova",
            "genre": ["Science Fiction"],
        },
        {
            "title": "Death Wave",
            "summary": "In Ben Bova's previous novel New Earth, Jordan Kell led the first human "
                       "mission beyond the solar system.",
            "isbn": "9780765379504",
            "author": "Bova",
            "genre": ["Science Fiction"],
        },
        {
            "title": "Test Book 1",
            "summary": "Summary of test book 1",
            "isbn": "ISBN111111",
            "author": "Asimov",
            "genre": ["French Poetry", "Fantasy"],
        },
        {
            "title": "Test Book 2",
            "summary": "Summary of test book 2",
            "isbn": "ISBN222222",
            "author": "Asimov",
            "genre": [],
        },
    ]

    books = []
    for data in books_data:
        values = dict(data)
        values["author"] = authors[data["author"]].id
        values["genre"] = [genres[name].id for name in data["genre"]]
        books.append(await store.books.insert(values))

    print(f"Created {len(books)} books.")
    return books


async def create_bookinstances(store: CatalogStore, books: list[BookRecord]) -> int:
    """Create sample copies; returns how many were made."""
    print("Creating book copies...")
    copies_data = [
        (0, "London Gollancz, 2014.", BookStatus.AVAILABLE),
        (1, "Gollancz, 2011.", BookStatus.LOANED),
        (2, "Gollancz, 2015.", None),
        (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE),
        (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE),
        (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE),
        (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.AVAILABLE),
        (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.MAINTENANCE),
        (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.LOANED),
        (0, "Imprint XXX2", None),
        (1, "Imprint XXX3", None),
    ]

    for index, imprint, status in copies_data:
        values = {"book": books[index].id, "imprint": imprint}
        if status is not None:
            values["status"] = status.value
        await store.bookinstances.insert(values)

    print(f"Created {len(copies_data)} book copies.")
    return len(copies_data)


async def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the catalog.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting catalog seed...")
    print("=" * 60)

    settings = get_settings()
    store = CatalogStore(settings.database_url)
    store.open()

    try:
        if clear_existing:
            clear_data(store)

        authors = await create_authors(store)
        genres = await create_genres(store)
        books = await create_books(store, authors, genres)
        copies = await create_bookinstances(store, books)

        print("=" * 60)
        print("Catalog seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Genres: {len(genres)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Copies: {copies}")
        print(f"\nYou can now browse the catalog at http://localhost:{settings.port}/catalog")

    except Exception as e:
        print(f"Error seeding catalog: {e}")
        raise
    finally:
        store.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
