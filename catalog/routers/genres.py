"""
Genres Router

HTML endpoints for genres under /catalog.
Follows the same patterns as the authors router.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import FormFields, Store
from catalog.services import genres
from catalog.templating import render

router = APIRouter(
    prefix="/catalog",
    tags=["Genres"],
    default_response_class=HTMLResponse,
    responses={
        404: {"description": "Genre not found"},
    },
)


@router.get("/genres", summary="List all genres")
async def genre_list(request: Request, store: Store) -> Response:
    return render(request, await genres.list_page(store), "genre_list.html")


@router.get("/genre/create", summary="Show the create-genre form")
async def genre_create_get(request: Request, store: Store) -> Response:
    return render(request, await genres.create_form(store), "genre_form.html")


@router.post("/genre/create", summary="Create a genre")
async def genre_create_post(request: Request, store: Store, fields: FormFields) -> Response:
    return render(request, await genres.create_submit(store, fields), "genre_form.html")


@router.get("/genre/{genre_id}", summary="Genre detail with its books")
async def genre_detail(request: Request, genre_id: str, store: Store) -> Response:
    return render(request, await genres.detail(store, genre_id), "genre_detail.html")


@router.get("/genre/{genre_id}/delete", summary="Confirm genre deletion")
async def genre_delete_get(request: Request, genre_id: str, store: Store) -> Response:
    return render(request, await genres.delete_form(store, genre_id), "genre_delete.html")


@router.post("/genre/{genre_id}/delete", summary="Delete a genre")
async def genre_delete_post(request: Request, genre_id: str, store: Store) -> Response:
    return render(request, await genres.delete_submit(store, genre_id), "genre_delete.html")


@router.get("/genre/{genre_id}/update", summary="Show the update-genre form")
async def genre_update_get(request: Request, genre_id: str, store: Store) -> Response:
    return render(request, await genres.update_form(store, genre_id), "genre_form.html")


@router.post("/genre/{genre_id}/update", summary="Update a genre")
async def genre_update_post(
    request: Request,
    genre_id: str,
    store: Store,
    fields: FormFields,
) -> Response:
    outcome = await genres.update_submit(store, genre_id, fields)
    return render(request, outcome, "genre_form.html")
