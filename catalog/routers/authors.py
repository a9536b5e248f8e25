"""
Authors Router

HTML endpoints for authors under /catalog.

Route order matters: /author/create is declared before /author/{author_id}
so "create" is never taken for an id.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormFields, Store
from catalog.services import authors
from catalog.templating import render

router = APIRouter(
    prefix="/catalog",
    tags=["Authors"],
    default_response_class=HTMLResponse,
    responses={
        404: {"description": "Author not found"},
    },
)


@router.get("/authors", summary="List all authors")
async def author_list(request: Request, store: Store) -> Response:
    return render(request, await authors.list_page(store), "author_list.html")


@router.get("/author/create", summary="Show the create-author form")
async def author_create_get(request: Request, store: Store) -> Response:
    return render(request, await authors.create_form(store), "author_form.html")


@router.post("/author/create", summary="Create an author")
async def author_create_post(request: Request, store: Store, fields: FormFields) -> Response:
    return render(request, await authors.create_submit(store, fields), "author_form.html")


@router.get("/author/{author_id}", summary="Author detail with their books")
async def author_detail(request: Request, author_id: str, store: Store) -> Response:
    return render(request, await authors.detail(store, author_id), "author_detail.html")


@router.get("/author/{author_id}/delete", summary="Confirm author deletion")
async def author_delete_get(request: Request, author_id: str, store: Store) -> Response:
    return render(request, await authors.delete_form(store, author_id), "author_delete.html")


@router.post("/author/{author_id}/delete", summary="Delete an author")
async def author_delete_post(request: Request, author_id: str, store: Store) -> Response:
    return render(request, await authors.delete_submit(store, author_id), "author_delete.html")


@router.get("/author/{author_id}/update", summary="Show the update-author form")
async def author_update_get(request: Request, author_id: str, store: Store) -> Response:
    return render(request, await authors.update_form(store, author_id), "author_form.html")


@router.post("/author/{author_id}/update", summary="Update an author")
async def author_update_post(
    request: Request,
    author_id: str,
    store: Store,
    fields: FormFields,
) -> Response:
    outcome = await authors.update_submit(store, author_id, fields)
    return render(request, outcome, "author_form.html")
