"""Helpers for driving the async store from synchronous tests."""

import asyncio

from locallibrary.storage import CatalogStore


def insert(store: CatalogStore, collection: str, **fields) -> dict:
    """Insert a document and return the stored copy (with its id)."""
    return asyncio.run(store.insert(collection, fields))


def find_all(store: CatalogStore, collection: str, **filters) -> list:
    return asyncio.run(store.find(collection, filters or None))


def remove(store: CatalogStore, collection: str, entity_id: str) -> None:
    asyncio.run(store.delete_by_id(collection, entity_id))
