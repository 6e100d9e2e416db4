"""
Route definitions for the catalog pages.

Authors:
- GET  /authors                 : list authors
- GET  /author/create           : empty create form
- POST /author/create           : create an author
- GET  /author/{id}             : author detail with their books
- GET  /author/{id}/delete      : delete confirmation
- POST /author/{id}/delete      : delete (id taken from the form body)
- GET  /author/{id}/update      : prefilled update form
- POST /author/{id}/update      : update an author

Genres have the same routes under /genres and /genre/...

Handlers only collect the form fields and hand them to ``workflow``;
the outcome it returns is rendered with Jinja2 or turned into a 303
redirect by ``_respond()``.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..storage import CatalogStore
from . import workflow
from .kinds import AUTHOR, GENRE
from .workflow import Outcome, RedirectTo

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["catalog"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def _respond(request: Request, outcome: Outcome) -> Response:
    if isinstance(outcome, RedirectTo):
        return RedirectResponse(url=outcome.path, status_code=303)
    return templates.TemplateResponse(request, outcome.template, outcome.context)


@router.get("/")
async def index(request: Request, store: CatalogStore = Depends(get_store)):
    context = {
        "title": "Local Library Home",
        "author_count": await store.count("authors"),
        "genre_count": await store.count("genres"),
        "book_count": await store.count("books"),
    }
    return templates.TemplateResponse(request, "index.html", context)


# ---------------------------------------------------------------------------
# Authors


@router.get("/authors")
async def author_list(request: Request, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.list_entities(AUTHOR, store))


@router.get("/author/create")
async def author_create_get(request: Request):
    return _respond(request, workflow.show_create_form(AUTHOR))


@router.post("/author/create")
async def author_create_post(
    request: Request,
    first_name: str = Form(""),
    family_name: str = Form(""),
    date_of_birth: str = Form(""),
    date_of_death: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    raw = {
        "first_name": first_name,
        "family_name": family_name,
        "date_of_birth": date_of_birth,
        "date_of_death": date_of_death,
    }
    return _respond(request, await workflow.create(AUTHOR, store, raw))


@router.get("/author/{author_id}")
async def author_detail(request: Request, author_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.show_detail(AUTHOR, store, author_id))


@router.get("/author/{author_id}/delete")
async def author_delete_get(request: Request, author_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.delete_confirm(AUTHOR, store, author_id))


@router.post("/author/{author_id}/delete")
async def author_delete_post(
    request: Request,
    author_id: str,
    authorid: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    return _respond(request, await workflow.delete_execute(AUTHOR, store, authorid))


@router.get("/author/{author_id}/update")
async def author_update_get(request: Request, author_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.show_update_form(AUTHOR, store, author_id))


@router.post("/author/{author_id}/update")
async def author_update_post(
    request: Request,
    author_id: str,
    first_name: str = Form(""),
    family_name: str = Form(""),
    date_of_birth: str = Form(""),
    date_of_death: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    raw = {
        "first_name": first_name,
        "family_name": family_name,
        "date_of_birth": date_of_birth,
        "date_of_death": date_of_death,
    }
    return _respond(request, await workflow.update(AUTHOR, store, author_id, raw))


# ---------------------------------------------------------------------------
# Genres


@router.get("/genres")
async def genre_list(request: Request, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.list_entities(GENRE, store))


@router.get("/genre/create")
async def genre_create_get(request: Request):
    return _respond(request, workflow.show_create_form(GENRE))


@router.post("/genre/create")
async def genre_create_post(
    request: Request,
    name: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    return _respond(request, await workflow.create(GENRE, store, {"name": name}))


@router.get("/genre/{genre_id}")
async def genre_detail(request: Request, genre_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.show_detail(GENRE, store, genre_id))


@router.get("/genre/{genre_id}/delete")
async def genre_delete_get(request: Request, genre_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.delete_confirm(GENRE, store, genre_id))


@router.post("/genre/{genre_id}/delete")
async def genre_delete_post(
    request: Request,
    genre_id: str,
    genreid: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    return _respond(request, await workflow.delete_execute(GENRE, store, genreid))


@router.get("/genre/{genre_id}/update")
async def genre_update_get(request: Request, genre_id: str, store: CatalogStore = Depends(get_store)):
    return _respond(request, await workflow.show_update_form(GENRE, store, genre_id))


@router.post("/genre/{genre_id}/update")
async def genre_update_post(
    request: Request,
    genre_id: str,
    name: str = Form(""),
    store: CatalogStore = Depends(get_store),
):
    return _respond(request, await workflow.update(GENRE, store, genre_id, {"name": name}))
