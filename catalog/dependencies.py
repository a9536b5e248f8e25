"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

The catalog has two:

- Store: the CatalogStore created by the application lifespan. Route
  handlers never build their own; tests swap it by handing create_app()
  a store of their own.
- FormFields: the submitted form as a plain dict. A field sent once maps
  to its string; a field sent several times (checkbox groups) maps to the
  list of its values. Fields that weren't sent are simply absent.
"""

from typing import Annotated, Any

from fastapi import Depends, Request

from catalog.store import CatalogStore


def get_store(request: Request) -> CatalogStore:
    """The store attached to the running application."""
    return request.app.state.store


Store = Annotated[CatalogStore, Depends(get_store)]


async def get_form_fields(request: Request) -> dict[str, Any]:
    """
    Read the urlencoded/multipart body into a dict.

    Example:
        title=Dune&genre=a1&genre=b2  ->  {"title": "Dune", "genre": ["a1", "b2"]}
    """
    form = await request.form()
    fields: dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        fields[key] = values if len(values) > 1 else values[0]
    return fields


FormFields = Annotated[dict[str, Any], Depends(get_form_fields)]
