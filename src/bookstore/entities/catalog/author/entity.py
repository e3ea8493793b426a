"""Author domain entity."""

from typing import Any

from pydantic import Field

from src.bookstore.entities.catalog.refs import BookRef
from src.bookstore.entities.core._base import Entity


class Author(Entity):
    """Author entity representing a writer in the catalog.

    This is the domain model that contains business logic and validation.
    ``books`` is populated when the author is read back from the store.
    """

    first_name: str = Field(description="Author's first name")
    last_name: str = Field(description="Author's last name")
    bio: str | None = Field(default=None, description="Short biography")
    books: list[BookRef] = Field(default_factory=list, description="Books by this author")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __eq__(self, other: Any) -> bool:
        """Compare authors by business attributes, ignoring loaded books."""
        if not isinstance(other, Author):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.bio == other.bio
        )

    def __hash__(self) -> int:
        return hash((self.id, self.first_name, self.last_name, self.bio))
