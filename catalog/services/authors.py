"""
Author Services

The author workflow: list, detail, create, update and guarded delete.

An author can only be deleted once no book names them as its author. The
dependent check and the delete are two separate store operations, so a book
saved between them can end up pointing at a deleted author.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from catalog.errors import NotFound
from catalog.forms import validate_author
from catalog.services.outcomes import DeletePage, DetailPage, FormPage, ListPage, Redirect
from catalog.store import CatalogStore

logger = logging.getLogger(__name__)

AUTHOR_LIST_URL = "/catalog/authors"


def _books_by(store: CatalogStore, author_id: str):
    return store.books.find({"author": author_id}, fields=("title", "summary"))


async def list_page(store: CatalogStore) -> ListPage:
    authors = await store.authors.find(order_by=("family_name",))
    return ListPage(title="Author list", items=authors)


async def detail(store: CatalogStore, author_id: str) -> DetailPage:
    """Author plus their books. Raises NotFound for an unknown id."""
    author, books = await asyncio.gather(
        store.authors.find_by_id(author_id),
        _books_by(store, author_id),
    )
    if author is None:
        raise NotFound("Author not found")
    return DetailPage(title="Author detail", record=author, related=books)


async def create_form(store: CatalogStore) -> FormPage:
    return FormPage(title="Create author")


async def create_submit(store: CatalogStore, fields: Mapping[str, Any]) -> FormPage | Redirect:
    result = validate_author(fields)
    if not result.is_valid:
        return FormPage(title="Create author", draft=result.draft, errors=result.errors)

    author = await store.authors.insert(result.draft.to_values())
    logger.info(f"Created author {author.id} ({author.name})")
    return Redirect(author.url)


async def delete_form(store: CatalogStore, author_id: str) -> DeletePage | Redirect:
    author, books = await asyncio.gather(
        store.authors.find_by_id(author_id),
        _books_by(store, author_id),
    )
    if author is None:
        return Redirect(AUTHOR_LIST_URL)
    return DeletePage(title="Delete author", record=author, dependents=books)


async def delete_submit(store: CatalogStore, author_id: str) -> DeletePage | Redirect:
    author, books = await asyncio.gather(
        store.authors.find_by_id(author_id),
        _books_by(store, author_id),
    )
    if books:
        logger.info(f"Refused to delete author {author_id}: {len(books)} book(s) refer to it")
        return DeletePage(title="Delete author", record=author, dependents=books)

    if await store.authors.delete_by_id(author_id):
        logger.info(f"Deleted author {author_id}")
    return Redirect(AUTHOR_LIST_URL)


async def update_form(store: CatalogStore, author_id: str) -> FormPage:
    author = await store.authors.find_by_id(author_id)
    if author is None:
        raise NotFound("Author not found")
    return FormPage(title="Update author", draft=author)


async def update_submit(
    store: CatalogStore,
    author_id: str,
    fields: Mapping[str, Any],
) -> FormPage | Redirect:
    result = validate_author(fields, author_id=author_id)
    if not result.is_valid:
        return FormPage(title="Update author", draft=result.draft, errors=result.errors)

    author = await store.authors.update_by_id(author_id, result.draft.to_values())
    if author is None:
        raise NotFound("Author not found")
    logger.info(f"Updated author {author.id}")
    return Redirect(author.url)
