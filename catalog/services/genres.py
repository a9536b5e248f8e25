"""
Genre Services

Follows the same pattern as the author services, plus the duplicate-name
guard on create: submitting a name that already exists (ignoring case)
redirects to the existing genre instead of adding a second one.

The guard is a lookup followed by an insert, not one atomic step. Two
submissions racing with the same new name can both insert.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from catalog.errors import NotFound
from catalog.forms import validate_genre
from catalog.services.outcomes import DeletePage, DetailPage, FormPage, ListPage, Redirect
from catalog.store import CatalogStore

logger = logging.getLogger(__name__)

GENRE_LIST_URL = "/catalog/genres"


def _books_in(store: CatalogStore, genre_id: str):
    return store.books.find({"genre": genre_id}, fields=("title", "summary"))


async def list_page(store: CatalogStore) -> ListPage:
    genres = await store.genres.find(order_by=("name",))
    return ListPage(title="Genre list", items=genres)


async def detail(store: CatalogStore, genre_id: str) -> DetailPage:
    genre, books = await asyncio.gather(
        store.genres.find_by_id(genre_id),
        _books_in(store, genre_id),
    )
    if genre is None:
        raise NotFound("Genre not found")
    return DetailPage(title="Genre detail", record=genre, related=books)


async def create_form(store: CatalogStore) -> FormPage:
    return FormPage(title="Create genre")


async def create_submit(store: CatalogStore, fields: Mapping[str, Any]) -> FormPage | Redirect:
    result = validate_genre(fields)
    if not result.is_valid:
        return FormPage(title="Create genre", draft=result.draft, errors=result.errors)

    existing = await store.genres.find_one({"name": result.draft.name}, ignore_case=("name",))
    if existing is not None:
        logger.info(f"Genre '{result.draft.name}' already exists as {existing.id}")
        return Redirect(existing.url)

    genre = await store.genres.insert(result.draft.to_values())
    logger.info(f"Created genre {genre.id} ({genre.name})")
    return Redirect(genre.url)


async def delete_form(store: CatalogStore, genre_id: str) -> DeletePage | Redirect:
    genre, books = await asyncio.gather(
        store.genres.find_by_id(genre_id),
        _books_in(store, genre_id),
    )
    if genre is None:
        return Redirect(GENRE_LIST_URL)
    return DeletePage(title="Delete genre", record=genre, dependents=books)


async def delete_submit(store: CatalogStore, genre_id: str) -> DeletePage | Redirect:
    genre, books = await asyncio.gather(
        store.genres.find_by_id(genre_id),
        _books_in(store, genre_id),
    )
    if books:
        logger.info(f"Refused to delete genre {genre_id}: {len(books)} book(s) refer to it")
        return DeletePage(title="Delete genre", record=genre, dependents=books)

    if await store.genres.delete_by_id(genre_id):
        logger.info(f"Deleted genre {genre_id}")
    return Redirect(GENRE_LIST_URL)


async def update_form(store: CatalogStore, genre_id: str) -> FormPage:
    genre = await store.genres.find_by_id(genre_id)
    if genre is None:
        raise NotFound("Genre not found")
    return FormPage(title="Update genre", draft=genre)


async def update_submit(
    store: CatalogStore,
    genre_id: str,
    fields: Mapping[str, Any],
) -> FormPage | Redirect:
    result = validate_genre(fields, genre_id=genre_id)
    if not result.is_valid:
        return FormPage(title="Update genre", draft=result.draft, errors=result.errors)

    genre = await store.genres.update_by_id(genre_id, result.draft.to_values())
    if genre is None:
        raise NotFound("Genre not found")
    logger.info(f"Updated genre {genre.id}")
    return Redirect(genre.url)
