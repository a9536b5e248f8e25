"""
Books Router

HTML endpoints for books under /catalog.

The book form posts `genre` once per checked box; FormFields hands it to the
service as a string for one box and a list for several, and the form
pipeline normalizes both (and its absence) to a list of ids.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormFields, Store
from catalog.services import books
from catalog.templating import render

router = APIRouter(
    prefix="/catalog",
    tags=["Books"],
    default_response_class=HTMLResponse,
    responses={
        404: {"description": "Book not found"},
    },
)


@router.get("/books", summary="List all books")
async def book_list(request: Request, store: Store) -> Response:
    return render(request, await books.list_page(store), "book_list.html")


@router.get("/book/create", summary="Show the create-book form")
async def book_create_get(request: Request, store: Store) -> Response:
    return render(request, await books.create_form(store), "book_form.html")


@router.post("/book/create", summary="Create a book")
async def book_create_post(request: Request, store: Store, fields: FormFields) -> Response:
    return render(request, await books.create_submit(store, fields), "book_form.html")


@router.get("/book/{book_id}", summary="Book detail with its copies")
async def book_detail(request: Request, book_id: str, store: Store) -> Response:
    return render(request, await books.detail(store, book_id), "book_detail.html")


@router.get("/book/{book_id}/delete", summary="Confirm book deletion")
async def book_delete_get(request: Request, book_id: str, store: Store) -> Response:
    return render(request, await books.delete_form(store, book_id), "book_delete.html")


@router.post("/book/{book_id}/delete", summary="Delete a book")
async def book_delete_post(request: Request, book_id: str, store: Store) -> Response:
    return render(request, await books.delete_submit(store, book_id), "book_delete.html")


@router.get("/book/{book_id}/update", summary="Show the update-book form")
async def book_update_get(request: Request, book_id: str, store: Store) -> Response:
    return render(request, await books.update_form(store, book_id), "book_form.html")


@router.post("/book/{book_id}/update", summary="Update a book")
async def book_update_post(
    request: Request,
    book_id: str,
    store: Store,
    fields: FormFields,
) -> Response:
    outcome = await books.update_submit(store, book_id, fields)
    return render(request, outcome, "book_form.html")
