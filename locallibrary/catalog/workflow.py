"""
Create / update / delete workflow for catalog entities.

Every operation takes an ``EntityKind`` and a ``CatalogStore`` and
returns an outcome for the HTTP layer to turn into a response:

* ``RenderForm(template, context)`` - show a page (a list, a detail
  page, a form with errors, a delete confirmation);
* ``RedirectTo(path)`` - send the browser elsewhere.

``NotFound`` is raised when an id that must exist does not. Store
errors are not caught here; they end the request.

Submission flow (create and update)::

    validate -> Invalid  -> RenderForm(form, raw input + errors)
             -> Valid    -> same unique key on another record?
                            yes -> RedirectTo(existing record)
                            no  -> insert / update -> RedirectTo(record)

Delete flow::

    confirm: entity missing -> RedirectTo(list)
             otherwise      -> RenderForm(delete page, entity + books)
    execute: books found    -> RenderForm(delete page, entity + books)
             no books       -> delete -> RedirectTo(list)

The checks are not atomic with the writes that follow them: two
concurrent creates of the same genre name can both pass the duplicate
check, and a book can be added between the dependents check and the
delete. This is accepted; no locking is attempted.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field

from ..exceptions import NotFound
from ..models import Book
from ..storage import CatalogStore
from .kinds import EntityKind
from .validation import FieldError, Invalid, validate


logger = logging.getLogger(__name__)


class RenderForm(BaseModel):
    template: str
    context: Dict[str, Any] = Field(default_factory=dict)


class RedirectTo(BaseModel):
    path: str


Outcome = Union[RenderForm, RedirectTo]


async def _find_dependents(kind: EntityKind, store: CatalogStore, entity_id: str) -> List[Book]:
    docs = await store.find("books", {kind.dependent_field: entity_id}, sort_by="title")
    return [Book.model_validate(d) for d in docs]


async def _load_with_dependents(
    kind: EntityKind, store: CatalogStore, entity_id: str
) -> Tuple[Optional[BaseModel], List[Book]]:
    """Fetch an entity and the books referencing it concurrently."""
    doc, books = await asyncio.gather(
        store.find_by_id(kind.collection, entity_id),
        _find_dependents(kind, store, entity_id),
    )
    entity = kind.model.model_validate(doc) if doc is not None else None
    return entity, books


async def _find_conflict(
    kind: EntityKind, store: CatalogStore, draft: Mapping[str, Any]
) -> Optional[BaseModel]:
    if kind.unique_field is None:
        return None
    doc = await store.find_one(kind.collection, {kind.unique_field: draft[kind.unique_field]})
    return kind.model.model_validate(doc) if doc is not None else None


def _reject(
    kind: EntityKind,
    title: str,
    raw: Mapping[str, Any],
    errors: List[FieldError],
    entity_id: Optional[str] = None,
) -> RenderForm:
    logger.debug(
        "Rejected %s form: %s", kind.name, ", ".join(f"{e.field}: {e.message}" for e in errors)
    )
    return RenderForm(
        template=kind.form_template,
        context={
            "title": title,
            kind.name: dict(raw),
            "entity_id": entity_id,
            "errors": errors,
        },
    )


# ---------------------------------------------------------------------------
# Read-side pages


async def list_entities(kind: EntityKind, store: CatalogStore) -> RenderForm:
    docs = await store.find(kind.collection, sort_by=kind.sort_field)
    return RenderForm(
        template=kind.list_template,
        context={
            "title": f"{kind.label} List",
            f"{kind.name}_list": [kind.model.model_validate(d) for d in docs],
        },
    )


async def show_detail(kind: EntityKind, store: CatalogStore, entity_id: str) -> RenderForm:
    entity, books = await _load_with_dependents(kind, store, entity_id)
    if entity is None:
        raise NotFound(kind.name, entity_id)
    return RenderForm(
        template=kind.detail_template,
        context={"title": f"{kind.label} Detail", kind.name: entity, "books": books},
    )


def show_create_form(kind: EntityKind) -> RenderForm:
    return RenderForm(
        template=kind.form_template,
        context={"title": f"Create {kind.label}", kind.name: None, "entity_id": None},
    )


async def show_update_form(kind: EntityKind, store: CatalogStore, entity_id: str) -> RenderForm:
    doc = await store.find_by_id(kind.collection, entity_id)
    if doc is None:
        raise NotFound(kind.name, entity_id)
    return RenderForm(
        template=kind.form_template,
        context={
            "title": f"Update {kind.label}",
            kind.name: kind.model.model_validate(doc),
            "entity_id": entity_id,
        },
    )


# ---------------------------------------------------------------------------
# Submissions


async def create(kind: EntityKind, store: CatalogStore, raw: Mapping[str, Any]) -> Outcome:
    result = validate(kind.rules, raw)
    if isinstance(result, Invalid):
        return _reject(kind, f"Create {kind.label}", raw, result.errors)

    existing = await _find_conflict(kind, store, result.draft)
    if existing is not None:
        logger.info("%s %r already exists as %s", kind.label, result.draft[kind.unique_field], existing.id)
        return RedirectTo(path=kind.detail_path(existing.id))

    doc = await store.insert(kind.collection, result.draft)
    logger.info("Created %s %s", kind.name, doc["id"])
    return RedirectTo(path=kind.detail_path(doc["id"]))


async def update(
    kind: EntityKind, store: CatalogStore, entity_id: str, raw: Mapping[str, Any]
) -> Outcome:
    """Apply a submitted form to the record ``entity_id``.

    ``entity_id`` is always the record being edited; any ``id`` in
    ``raw`` is ignored so an update can never create a second record.

    Raises
    ------
    NotFound
        If no record has ``entity_id``.
    """
    result = validate(kind.rules, raw)
    if isinstance(result, Invalid):
        return _reject(kind, f"Update {kind.label}", raw, result.errors, entity_id=entity_id)

    if await store.find_by_id(kind.collection, entity_id) is None:
        raise NotFound(kind.name, entity_id)

    existing = await _find_conflict(kind, store, result.draft)
    if existing is not None and existing.id != entity_id:
        logger.info(
            "%s %r already exists as %s, leaving %s unchanged",
            kind.label, result.draft[kind.unique_field], existing.id, entity_id,
        )
        return RedirectTo(path=kind.detail_path(existing.id))

    doc = await store.update_by_id(kind.collection, entity_id, result.draft)
    if doc is None:
        raise NotFound(kind.name, entity_id)
    logger.info("Updated %s %s", kind.name, entity_id)
    return RedirectTo(path=kind.detail_path(entity_id))


def _delete_page(kind: EntityKind, entity: BaseModel, books: List[Book]) -> RenderForm:
    return RenderForm(
        template=kind.delete_template,
        context={"title": f"Delete {kind.label}", kind.name: entity, "books": books},
    )


async def delete_confirm(kind: EntityKind, store: CatalogStore, entity_id: str) -> Outcome:
    entity, books = await _load_with_dependents(kind, store, entity_id)
    if entity is None:
        return RedirectTo(path=kind.list_path)
    return _delete_page(kind, entity, books)


async def delete_execute(kind: EntityKind, store: CatalogStore, entity_id: str) -> Outcome:
    # Dependents are looked up again here; the confirmation page may be stale.
    entity, books = await _load_with_dependents(kind, store, entity_id)
    if entity is None:
        return RedirectTo(path=kind.list_path)
    if books:
        logger.info("Not deleting %s %s: referenced by %d book(s)", kind.name, entity_id, len(books))
        return _delete_page(kind, entity, books)

    await store.delete_by_id(kind.collection, entity_id)
    logger.info("Deleted %s %s", kind.name, entity_id)
    return RedirectTo(path=kind.list_path)
