# locallibrary/models.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class Author(BaseModel):
    id: str
    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @property
    def name(self) -> str:
        # Both parts are needed for a sortable "Family, First" label.
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        birth = self.date_of_birth.isoformat() if self.date_of_birth else ""
        death = self.date_of_death.isoformat() if self.date_of_death else ""
        return f"{birth} - {death}"

    @property
    def url(self) -> str:
        return f"/author/{self.id}"


class Genre(BaseModel):
    id: str
    name: str

    @property
    def url(self) -> str:
        return f"/genre/{self.id}"


class Book(BaseModel):
    """A book as seen from the author/genre pages.

    Books are only read here: they are the dependents that block the
    deletion of the author or genres they point to.
    """

    id: str
    title: str
    summary: str = ""
    author: str
    genre: List[str] = Field(default_factory=list)
