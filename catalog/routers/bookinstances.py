"""
Book Instances Router

HTML endpoints for book copies under /catalog.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormFields, Store
from catalog.services import bookinstances
from catalog.templating import render

router = APIRouter(
    prefix="/catalog",
    tags=["Book Instances"],
    default_response_class=HTMLResponse,
    responses={
        404: {"description": "Book copy not found"},
    },
)


@router.get("/bookinstances", summary="List all book copies")
async def bookinstance_list(request: Request, store: Store) -> Response:
    return render(request, await bookinstances.list_page(store), "bookinstance_list.html")


@router.get("/bookinstance/create", summary="Show the create-copy form")
async def bookinstance_create_get(request: Request, store: Store) -> Response:
    return render(request, await bookinstances.create_form(store), "bookinstance_form.html")


@router.post("/bookinstance/create", summary="Create a book copy")
async def bookinstance_create_post(request: Request, store: Store, fields: FormFields) -> Response:
    outcome = await bookinstances.create_submit(store, fields)
    return render(request, outcome, "bookinstance_form.html")


@router.get("/bookinstance/{bookinstance_id}", summary="Book copy detail")
async def bookinstance_detail(request: Request, bookinstance_id: str, store: Store) -> Response:
    outcome = await bookinstances.detail(store, bookinstance_id)
    return render(request, outcome, "bookinstance_detail.html")


@router.get("/bookinstance/{bookinstance_id}/delete", summary="Confirm copy deletion")
async def bookinstance_delete_get(request: Request, bookinstance_id: str, store: Store) -> Response:
    outcome = await bookinstances.delete_form(store, bookinstance_id)
    return render(request, outcome, "bookinstance_delete.html")


@router.post("/bookinstance/{bookinstance_id}/delete", summary="Delete a book copy")
async def bookinstance_delete_post(request: Request, bookinstance_id: str, store: Store) -> Response:
    outcome = await bookinstances.delete_submit(store, bookinstance_id)
    return render(request, outcome, "bookinstance_delete.html")


@router.get("/bookinstance/{bookinstance_id}/update", summary="Show the update-copy form")
async def bookinstance_update_get(request: Request, bookinstance_id: str, store: Store) -> Response:
    outcome = await bookinstances.update_form(store, bookinstance_id)
    return render(request, outcome, "bookinstance_form.html")


@router.post("/bookinstance/{bookinstance_id}/update", summary="Update a book copy")
async def bookinstance_update_post(
    request: Request,
    bookinstance_id: str,
    store: Store,
    fields: FormFields,
) -> Response:
    outcome = await bookinstances.update_submit(store, bookinstance_id, fields)
    return render(request, outcome, "bookinstance_form.html")
