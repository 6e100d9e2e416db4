# locallibrary/storage.py
"""
In-memory document store for the catalog.

Records live in named collections (``authors``, ``genres``, ``books``)
as plain dicts keyed by id. Every operation is a coroutine that
completes in one step, so callers can ``await`` them the same way they
would await a real database driver. Documents handed out are copies:
changing a returned dict never changes the store.

The store can be populated at startup from a JSON seed file shaped
like::

    {"authors": [...], "genres": [...], "books": [...]}
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError

from .exceptions import StoreFailure
from .models import Author, Book, Genre


logger = logging.getLogger(__name__)

COLLECTIONS = ("authors", "genres", "books")

# Seed entries are checked against these before they are stored.
SEED_MODELS: Dict[str, Type[BaseModel]] = {"authors": Author, "genres": Genre, "books": Book}

Document = Dict[str, Any]


def _new_id() -> str:
    return uuid.uuid4().hex


def _matches(document: Document, filters: Dict[str, Any]) -> bool:
    """Equality filter; a list field matches when it contains the value."""
    for field, expected in filters.items():
        actual = document.get(field)
        if isinstance(actual, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


class CatalogStore:
    def __init__(self, collections: Iterable[str] = COLLECTIONS) -> None:
        self._data: Dict[str, Dict[str, Document]] = {name: {} for name in collections}

    def _collection(self, name: str) -> Dict[str, Document]:
        try:
            return self._data[name]
        except KeyError:
            raise StoreFailure(f"Unknown collection: {name}") from None

    async def find_by_id(self, collection: str, entity_id: str) -> Optional[Document]:
        document = self._collection(collection).get(entity_id)
        return copy.deepcopy(document) if document is not None else None

    async def find(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
    ) -> List[Document]:
        items = [
            copy.deepcopy(d)
            for d in self._collection(collection).values()
            if _matches(d, filters or {})
        ]
        if sort_by:
            items.sort(key=lambda d: (d.get(sort_by) is None, d.get(sort_by) or ""))
        return items

    async def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Document]:
        for document in self._collection(collection).values():
            if _matches(document, filters):
                return copy.deepcopy(document)
        return None

    async def insert(self, collection: str, document: Document) -> Document:
        docs = self._collection(collection)
        stored = copy.deepcopy(document)
        stored["id"] = _new_id()
        docs[stored["id"]] = stored
        logger.debug("Inserted %s/%s", collection, stored["id"])
        return copy.deepcopy(stored)

    async def update_by_id(
        self, collection: str, entity_id: str, document: Document
    ) -> Optional[Document]:
        docs = self._collection(collection)
        if entity_id not in docs:
            return None
        stored = copy.deepcopy(document)
        # The id always comes from the caller's key, never from the payload.
        stored["id"] = entity_id
        docs[entity_id] = stored
        logger.debug("Updated %s/%s", collection, entity_id)
        return copy.deepcopy(stored)

    async def delete_by_id(self, collection: str, entity_id: str) -> Optional[Document]:
        removed = self._collection(collection).pop(entity_id, None)
        if removed is not None:
            logger.debug("Deleted %s/%s", collection, entity_id)
        return removed

    async def count(self, collection: str) -> int:
        return len(self._collection(collection))

    def load_seed(self, path: Path) -> None:
        """Populate the collections from a JSON seed file.

        Seed documents may carry their own ``id`` so that books can
        reference authors and genres; documents without one get a fresh id.

        Raises
        ------
        StoreFailure
            If the file cannot be read, is not shaped as expected, or an
            entry does not validate against its collection's model.
        """
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise StoreFailure(f"Cannot load seed file {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise StoreFailure(f"Seed file {path} must contain a JSON object")

        # Everything is checked before anything is stored.
        staged: Dict[str, Dict[str, Document]] = {}
        for name, entries in raw.items():
            self._collection(name)
            if not isinstance(entries, list):
                raise StoreFailure(f"Seed collection {name!r} must be a list")
            model = SEED_MODELS.get(name)
            staged[name] = {}
            for position, entry in enumerate(entries):
                if not isinstance(entry, dict):
                    raise StoreFailure(f"Seed entry {name}[{position}] must be a JSON object")
                doc = dict(entry)
                doc["id"] = str(doc.get("id") or _new_id())
                if model is not None:
                    try:
                        doc = model.model_validate(doc).model_dump()
                    except (ValidationError, TypeError) as exc:
                        raise StoreFailure(f"Invalid seed entry {name}[{position}]: {exc}") from exc
                staged[name][doc["id"]] = doc

        for name, docs in staged.items():
            self._data[name].update(docs)
        logger.info(
            "Loaded seed data from %s (%s)",
            path,
            ", ".join(f"{n}={len(d)}" for n, d in self._data.items()),
        )
