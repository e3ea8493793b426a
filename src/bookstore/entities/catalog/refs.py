"""Lightweight references used to embed one catalog entity inside another."""

from pydantic import BaseModel, ConfigDict


class AuthorRef(BaseModel):
    """An author as seen from one of their books."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class BookRef(BaseModel):
    """A book as seen from its author."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int | None = None
    isbn: str
