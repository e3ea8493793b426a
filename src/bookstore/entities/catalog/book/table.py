"""Book database table model."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from src.bookstore.entities.core._base import EntityTable

if TYPE_CHECKING:
    from src.bookstore.entities.catalog.author.table import AuthorTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    ``image`` names a file in the image store; the bytes themselves are
    never stored in the database.
    """

    __tablename__ = "books"

    title: str = Field(max_length=150)
    year: int | None = None
    isbn: str = Field(max_length=50)
    summary: str | None = Field(default=None, max_length=500)
    image: str | None = None
    price: float | None = None
    author_id: int | None = Field(default=None, foreign_key="authors.id", index=True)

    author: Optional["AuthorTable"] = Relationship(back_populates="books")
