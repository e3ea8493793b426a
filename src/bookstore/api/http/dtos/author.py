"""Author request/response bodies."""

from pydantic import Field

from src.bookstore.api.http.dtos._base import WireModel


class AuthorCreateDTO(WireModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    bio: str | None = Field(default=None, max_length=250)


class AuthorUpdateDTO(AuthorCreateDTO):
    id: int


class BookSummaryDTO(WireModel):
    id: int
    title: str
    year: int | None = None
    isbn: str


class AuthorDTO(WireModel):
    id: int
    first_name: str
    last_name: str
    bio: str | None = None
    books: list[BookSummaryDTO] = Field(default_factory=list)
