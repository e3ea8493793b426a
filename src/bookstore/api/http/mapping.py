"""Conversions between domain entities and wire DTOs.

One function per direction and pair, so every field that crosses the API
boundary is listed explicitly.
"""

from src.bookstore.api.http.dtos import (
    AuthorCreateDTO,
    AuthorDTO,
    AuthorSummaryDTO,
    AuthorUpdateDTO,
    BookCreateDTO,
    BookDTO,
    BookSummaryDTO,
    BookUpdateDTO,
)
from src.bookstore.entities.catalog import Author, Book


def author_from_create(dto: AuthorCreateDTO) -> Author:
    return Author(first_name=dto.first_name, last_name=dto.last_name, bio=dto.bio)


def author_from_update(dto: AuthorUpdateDTO) -> Author:
    return Author(
        id=dto.id, first_name=dto.first_name, last_name=dto.last_name, bio=dto.bio
    )


def author_to_dto(author: Author) -> AuthorDTO:
    if author.id is None:
        raise ValueError("Cannot map an author that has not been persisted")

    return AuthorDTO(
        id=author.id,
        first_name=author.first_name,
        last_name=author.last_name,
        bio=author.bio,
        books=[
            BookSummaryDTO(id=ref.id, title=ref.title, year=ref.year, isbn=ref.isbn)
            for ref in author.books
        ],
    )


def book_from_create(dto: BookCreateDTO) -> Book:
    return Book(
        title=dto.title,
        year=dto.year,
        isbn=dto.isbn,
        summary=dto.summary,
        image=dto.image,
        price=dto.price,
        author_id=dto.author_id,
    )


def book_from_update(dto: BookUpdateDTO) -> Book:
    book = book_from_create(dto)
    book.id = dto.id
    return book


def book_to_dto(book: Book, file: str | None = None) -> BookDTO:
    """Map a book; ``file`` is the base64 cover image, if one was loaded."""
    if book.id is None:
        raise ValueError("Cannot map a book that has not been persisted")

    author = None
    if book.author is not None:
        author = AuthorSummaryDTO(
            id=book.author.id,
            first_name=book.author.first_name,
            last_name=book.author.last_name,
        )

    return BookDTO(
        id=book.id,
        title=book.title,
        year=book.year,
        isbn=book.isbn,
        summary=book.summary,
        image=book.image,
        file=file,
        price=book.price,
        author_id=book.author_id,
        author=author,
    )
