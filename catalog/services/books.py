"""
Book Services

Book forms need the author and genre lists, so every form outcome (empty,
pre-filled or re-displayed after errors) fetches both concurrently and marks
the current selections.

A book can only be deleted once it has no copies (BookInstances).
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from catalog.errors import NotFound
from catalog.forms import validate_book
from catalog.services.outcomes import (
    DeletePage,
    DetailPage,
    FormPage,
    ListPage,
    Redirect,
    options_for,
)
from catalog.store import CatalogStore

logger = logging.getLogger(__name__)

BOOK_LIST_URL = "/catalog/books"


def _find_book(store: CatalogStore, book_id: str):
    return store.books.find_by_id(book_id, populate=("author", "genre"))


def _all_authors(store: CatalogStore):
    return store.authors.find(order_by=("family_name",))


def _all_genres(store: CatalogStore):
    return store.genres.find(order_by=("name",))


async def _form_page(store: CatalogStore, title: str, draft=None, errors=None) -> FormPage:
    authors, genres = await asyncio.gather(_all_authors(store), _all_genres(store))
    return _build_form_page(title, authors, genres, draft, errors)


def _build_form_page(title, authors, genres, draft=None, errors=None) -> FormPage:
    return FormPage(
        title=title,
        draft=draft,
        errors=errors or [],
        options={
            "authors": options_for(authors, draft.author_id if draft else None),
            "genres": options_for(genres, draft.genre_ids if draft else None),
        },
    )


async def list_page(store: CatalogStore) -> ListPage:
    books = await store.books.find(
        order_by=("title",),
        fields=("title", "author"),
        populate=("author",),
    )
    return ListPage(title="Book list", items=books)


async def detail(store: CatalogStore, book_id: str) -> DetailPage:
    """Book with author and genres populated, plus its copies."""
    book, copies = await asyncio.gather(
        _find_book(store, book_id),
        store.bookinstances.find({"book": book_id}),
    )
    if book is None:
        raise NotFound("Book not found")
    return DetailPage(title="Book detail", record=book, related=copies)


async def create_form(store: CatalogStore) -> FormPage:
    return await _form_page(store, "Create book")


async def create_submit(store: CatalogStore, fields: Mapping[str, Any]) -> FormPage | Redirect:
    result = validate_book(fields)
    if not result.is_valid:
        return await _form_page(store, "Create book", result.draft, result.errors)

    book = await store.books.insert(result.draft.to_values())
    logger.info(f"Created book {book.id} ({book.title})")
    return Redirect(book.url)


async def delete_form(store: CatalogStore, book_id: str) -> DeletePage | Redirect:
    book, copies = await asyncio.gather(
        _find_book(store, book_id),
        store.bookinstances.find({"book": book_id}),
    )
    if book is None:
        return Redirect(BOOK_LIST_URL)
    return DeletePage(title="Delete book", record=book, dependents=copies)


async def delete_submit(store: CatalogStore, book_id: str) -> DeletePage | Redirect:
    book, copies = await asyncio.gather(
        _find_book(store, book_id),
        store.bookinstances.find({"book": book_id}),
    )
    if copies:
        logger.info(f"Refused to delete book {book_id}: {len(copies)} copies refer to it")
        return DeletePage(title="Delete book", record=book, dependents=copies)

    if await store.books.delete_by_id(book_id):
        logger.info(f"Deleted book {book_id}")
    return Redirect(BOOK_LIST_URL)


async def update_form(store: CatalogStore, book_id: str) -> FormPage:
    book, authors, genres = await asyncio.gather(
        _find_book(store, book_id),
        _all_authors(store),
        _all_genres(store),
    )
    if book is None:
        raise NotFound("Book not found")
    return _build_form_page("Update book", authors, genres, draft=book)


async def update_submit(
    store: CatalogStore,
    book_id: str,
    fields: Mapping[str, Any],
) -> FormPage | Redirect:
    result = validate_book(fields, book_id=book_id)
    if not result.is_valid:
        return await _form_page(store, "Update book", result.draft, result.errors)

    # The genre list is always part of the values, so an empty selection
    # clears the book's genres rather than keeping the old ones.
    book = await store.books.update_by_id(book_id, result.draft.to_values())
    if book is None:
        raise NotFound("Book not found")
    logger.info(f"Updated book {book.id}")
    return Redirect(book.url)
