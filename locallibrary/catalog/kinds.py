"""
Per-kind descriptors for the catalog workflow.

Authors and genres go through exactly the same create / update / delete
flow. What differs between them (the collection they live in, their
form rules, whether a field must be unique, how books point at them,
which templates show them) is captured by an ``EntityKind`` so the
workflow itself never branches on the kind.
"""

from __future__ import annotations

from typing import List, Optional, Type

from pydantic import BaseModel, ConfigDict

from ..models import Author, Genre
from .validation import AUTHOR_RULES, GENRE_RULES, FieldRule


class EntityKind(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    collection: str
    model: Type[BaseModel]
    rules: List[FieldRule]
    sort_field: str
    # Field of a Book document that references this kind.
    dependent_field: str
    # Draft field that must be unique across the collection, if any.
    unique_field: Optional[str] = None

    @property
    def list_path(self) -> str:
        return f"/{self.name}s"

    def detail_path(self, entity_id: str) -> str:
        return f"/{self.name}/{entity_id}"

    @property
    def list_template(self) -> str:
        return f"{self.name}_list.html"

    @property
    def detail_template(self) -> str:
        return f"{self.name}_detail.html"

    @property
    def form_template(self) -> str:
        return f"{self.name}_form.html"

    @property
    def delete_template(self) -> str:
        return f"{self.name}_delete.html"


AUTHOR = EntityKind(
    name="author",
    label="Author",
    collection="authors",
    model=Author,
    rules=AUTHOR_RULES,
    sort_field="family_name",
    dependent_field="author",
)

GENRE = EntityKind(
    name="genre",
    label="Genre",
    collection="genres",
    model=Genre,
    rules=GENRE_RULES,
    sort_field="name",
    dependent_field="genre",
    unique_field="name",
)
