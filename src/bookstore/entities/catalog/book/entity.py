"""Entity: Book."""

from typing import Any

from pydantic import Field

from src.bookstore.entities.catalog.refs import AuthorRef
from src.bookstore.entities.core._base import Entity


class Book(Entity):
    """Book entity representing a title in the catalog.

    This is the domain model that contains business logic and validation.
    ``author`` is populated when the book is read back from the store.
    """

    title: str = Field(description="Title")
    year: int | None = Field(default=None, description="Publication year")
    isbn: str = Field(description="ISBN")
    summary: str | None = Field(default=None, description="Short summary")
    image: str | None = Field(default=None, description="Cover image file name")
    price: float | None = Field(default=None, description="Price")
    author_id: int | None = Field(default=None, description="Owning author")
    author: AuthorRef | None = Field(default=None, description="Owning author, when loaded")

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring the loaded author."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.year == other.year
            and self.isbn == other.isbn
            and self.summary == other.summary
            and self.image == other.image
            and self.price == other.price
            and self.author_id == other.author_id
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.title,
            self.year,
            self.isbn,
            self.summary,
            self.image,
            self.price,
            self.author_id,
        ))
