"""Catalog home page counts."""

import asyncio

from catalog.models import BookStatus
from catalog.services.outcomes import SummaryPage
from catalog.store import CatalogStore


async def catalog_summary(store: CatalogStore) -> SummaryPage:
    """Record counts for the home page, all fetched concurrently."""
    books, copies, available, authors, genres = await asyncio.gather(
        store.books.count(),
        store.bookinstances.count(),
        store.bookinstances.count({"status": BookStatus.AVAILABLE.value}),
        store.authors.count(),
        store.genres.count(),
    )
    return SummaryPage(
        title="Local Library Home",
        book_count=books,
        book_instance_count=copies,
        book_instance_available_count=available,
        author_count=authors,
        genre_count=genres,
    )
