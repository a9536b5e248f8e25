"""
BookInstance Services

Copies have no dependents, so deletion is never refused.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from catalog.errors import NotFound
from catalog.forms import validate_bookinstance
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

BOOKINSTANCE_LIST_URL = "/catalog/bookinstances"


def _all_books(store: CatalogStore):
    return store.books.find(order_by=("title",), fields=("title",))


def _find_copy(store: CatalogStore, bookinstance_id: str):
    return store.bookinstances.find_by_id(bookinstance_id, populate=("book",))


def _build_form_page(title, books, draft=None, errors=None) -> FormPage:
    return FormPage(
        title=title,
        draft=draft,
        errors=errors or [],
        options={"books": options_for(books, draft.book_id if draft else None)},
    )


async def list_page(store: CatalogStore) -> ListPage:
    copies = await store.bookinstances.find(populate=("book",))
    return ListPage(title="Book-instance list", items=copies)


async def detail(store: CatalogStore, bookinstance_id: str) -> DetailPage:
    copy = await _find_copy(store, bookinstance_id)
    if copy is None:
        raise NotFound("Book copy not found")
    return DetailPage(title="Book-instance detail", record=copy)


async def create_form(store: CatalogStore) -> FormPage:
    books = await _all_books(store)
    return _build_form_page("Create book-instance", books)


async def create_submit(store: CatalogStore, fields: Mapping[str, Any]) -> FormPage | Redirect:
    result = validate_bookinstance(fields)
    if not result.is_valid:
        books = await _all_books(store)
        return _build_form_page("Create book-instance", books, result.draft, result.errors)

    copy = await store.bookinstances.insert(result.draft.to_values())
    logger.info(f"Created copy {copy.id} of book {copy.book_id} ({copy.status})")
    return Redirect(copy.url)


async def delete_form(store: CatalogStore, bookinstance_id: str) -> DeletePage | Redirect:
    copy = await _find_copy(store, bookinstance_id)
    if copy is None:
        return Redirect(BOOKINSTANCE_LIST_URL)
    return DeletePage(title="Delete book-instance", record=copy)


async def delete_submit(store: CatalogStore, bookinstance_id: str) -> Redirect:
    if await store.bookinstances.delete_by_id(bookinstance_id):
        logger.info(f"Deleted copy {bookinstance_id}")
    return Redirect(BOOKINSTANCE_LIST_URL)


async def update_form(store: CatalogStore, bookinstance_id: str) -> FormPage:
    copy, books = await asyncio.gather(
        _find_copy(store, bookinstance_id),
        _all_books(store),
    )
    if copy is None:
        raise NotFound("Book copy not found")
    return _build_form_page("Update book-instance", books, draft=copy)


async def update_submit(
    store: CatalogStore,
    bookinstance_id: str,
    fields: Mapping[str, Any],
) -> FormPage | Redirect:
    result = validate_bookinstance(fields, bookinstance_id=bookinstance_id)
    if not result.is_valid:
        books = await _all_books(store)
        return _build_form_page("Update book-instance", books, result.draft, result.errors)

    copy = await store.bookinstances.update_by_id(bookinstance_id, result.draft.to_values())
    if copy is None:
        raise NotFound("Book copy not found")
    logger.info(f"Updated copy {copy.id}")
    return Redirect(copy.url)
