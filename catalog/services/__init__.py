"""
Catalog Services Package

The create/update/delete workflow for each entity. Every module exposes the
same async operations, each taking the CatalogStore as its first argument:

- list_page(store)
- detail(store, id)                   NotFound if absent
- create_form(store)
- create_submit(store, fields)        FormPage with errors, or Redirect
- delete_form(store, id)              DeletePage, or Redirect if absent
- delete_submit(store, id)            Redirect, or DeletePage if blocked
- update_form(store, id)              NotFound if absent
- update_submit(store, id, fields)    FormPage with errors, or Redirect

Usage:
    from catalog.services import books

    outcome = await books.create_submit(store, {"title": "Dune", ...})
"""

from catalog.services import authors, bookinstances, books, genres
from catalog.services.summary import catalog_summary

__all__ = [
    "authors",
    "bookinstances",
    "books",
    "genres",
    "catalog_summary",
]
