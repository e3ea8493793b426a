"""Author database table model."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from src.bookstore.entities.core._base import EntityTable

if TYPE_CHECKING:
    from src.bookstore.entities.catalog.book.table import BookTable


class AuthorTable(EntityTable, table=True):
    """Database persistence model for authors.

    This represents how the Author entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "authors"

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    bio: str | None = Field(default=None, max_length=250)

    books: list["BookTable"] = Relationship(back_populates="author")
