"""Catalog home page."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog.dependencies import Store
from catalog.services import catalog_summary
from catalog.templating import render

router = APIRouter(tags=["Home"], default_response_class=HTMLResponse)


@router.get("/catalog", summary="Catalog home with record counts")
async def index(request: Request, store: Store) -> Response:
    return render(request, await catalog_summary(store), "index.html")
