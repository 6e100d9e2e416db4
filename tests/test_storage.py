# =============================================================================
# tests/test_storage.py - In-Memory Store Tests
# =============================================================================

import json
from datetime import date

import pytest

from locallibrary.exceptions import StoreFailure
from locallibrary.storage import CatalogStore


class TestCatalogStore:
    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, store):
        doc = await store.insert("genres", {"name": "Poetry"})

        assert doc["id"]
        assert await store.find_by_id("genres", doc["id"]) == doc

    @pytest.mark.asyncio
    async def test_results_are_copies(self, store):
        doc = await store.insert("genres", {"name": "Poetry"})
        doc["name"] = "Changed"

        stored = await store.find_by_id("genres", doc["id"])
        assert stored["name"] == "Poetry"

    @pytest.mark.asyncio
    async def test_find_matches_list_fields_by_membership(self, store):
        await store.insert("books", {"title": "A", "author": "a1", "genre": ["g1", "g2"]})
        await store.insert("books", {"title": "B", "author": "a2", "genre": ["g2"]})

        assert [b["title"] for b in await store.find("books", {"genre": "g1"})] == ["A"]
        assert len(await store.find("books", {"genre": "g2"})) == 2
        assert [b["title"] for b in await store.find("books", {"author": "a2"})] == ["B"]

    @pytest.mark.asyncio
    async def test_find_sorts_by_field(self, store):
        for name in ("Poetry", "Fantasy", "Horror"):
            await store.insert("genres", {"name": name})

        names = [g["name"] for g in await store.find("genres", sort_by="name")]
        assert names == ["Fantasy", "Horror", "Poetry"]

    @pytest.mark.asyncio
    async def test_find_one_is_exact_match(self, store):
        await store.insert("genres", {"name": "Fantasy"})

        assert await store.find_one("genres", {"name": "fantasy"}) is None
        assert (await store.find_one("genres", {"name": "Fantasy"}))["name"] == "Fantasy"

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, store):
        doc = await store.insert("genres", {"name": "Poetry"})

        updated = await store.update_by_id("genres", doc["id"], {"id": "other", "name": "Verse"})

        assert updated == {"id": doc["id"], "name": "Verse"}
        assert await store.find_by_id("genres", "other") is None

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store):
        assert await store.update_by_id("genres", "missing", {"name": "Verse"}) is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, store):
        doc = await store.insert("genres", {"name": "Poetry"})

        assert await store.delete_by_id("genres", doc["id"]) is not None
        assert await store.delete_by_id("genres", doc["id"]) is None
        assert await store.count("genres") == 0

    @pytest.mark.asyncio
    async def test_unknown_collection_fails(self, store):
        with pytest.raises(StoreFailure):
            await store.find("publishers")


class TestLoadSeed:
    def test_loads_documents_with_their_ids(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({
            "authors": [{"id": "a1", "first_name": "Isaac", "family_name": "Asimov"}],
            "genres": [{"name": "Science Fiction"}],
            "books": [{"title": "Foundation", "author": "a1", "genre": []}],
        }))
        store = CatalogStore()

        store.load_seed(seed)

        assert store._data["authors"]["a1"]["family_name"] == "Asimov"
        assert len(store._data["genres"]) == 1
        assert len(store._data["books"]) == 1

    def test_missing_file_fails(self, tmp_path):
        with pytest.raises(StoreFailure):
            CatalogStore().load_seed(tmp_path / "nope.json")

    def test_malformed_file_fails(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text('{"genres": {"name": "Poetry"}}')

        with pytest.raises(StoreFailure):
            CatalogStore().load_seed(seed)

    def test_book_without_author_fails(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"books": [{"id": "b1", "title": "T", "genre": ["g1"]}]}))
        store = CatalogStore()

        with pytest.raises(StoreFailure):
            store.load_seed(seed)

        assert store._data["books"] == {}

    def test_non_object_entry_fails(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"genres": ["Poetry"]}))

        with pytest.raises(StoreFailure):
            CatalogStore().load_seed(seed)

    def test_nothing_is_stored_when_a_later_entry_is_invalid(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({
            "genres": [{"id": "g1", "name": "Poetry"}],
            "authors": [{"id": "a1", "first_name": "Isaac"}],
        }))
        store = CatalogStore()

        with pytest.raises(StoreFailure):
            store.load_seed(seed)

        assert store._data["genres"] == {}

    def test_seeded_dates_are_parsed(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"authors": [
            {"id": "a1", "first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "1920-01-02"},
        ]}))
        store = CatalogStore()

        store.load_seed(seed)

        assert store._data["authors"]["a1"]["date_of_birth"] == date(1920, 1, 2)
