"""Tests for wire DTO validation and entity/DTO mapping."""

import base64

import pytest
from pydantic import ValidationError

from src.bookstore.api.http.dtos import (
    AuthorCreateDTO,
    BookCreateDTO,
    BookUpdateDTO,
)
from src.bookstore.api.http.mapping import (
    author_from_create,
    author_to_dto,
    book_from_update,
    book_to_dto,
)
from src.bookstore.entities.catalog import Author, AuthorRef, Book, BookRef


class TestWireFormat:
    def test_accepts_camel_case_and_snake_case(self):
        camel = AuthorCreateDTO.model_validate({"firstName": "Ann", "lastName": "Leckie"})
        snake = AuthorCreateDTO.model_validate({"first_name": "Ann", "last_name": "Leckie"})
        assert camel == snake

    def test_serializes_camel_case(self):
        dto = book_to_dto(Book(id=1, title="Ancillary Justice", isbn="123", author_id=3))
        body = dto.model_dump(by_alias=True)
        assert body["authorId"] == 3
        assert "author_id" not in body

    def test_blank_names_are_rejected(self):
        with pytest.raises(ValidationError):
            AuthorCreateDTO(first_name="   ", last_name="Leckie")

    def test_bio_length_is_limited(self):
        with pytest.raises(ValidationError):
            AuthorCreateDTO(first_name="Ann", last_name="Leckie", bio="x" * 251)


class TestBookValidation:
    def test_file_must_be_base64(self):
        with pytest.raises(ValidationError):
            BookCreateDTO(title="T", isbn="1", image="a.png", file="%%%")

    def test_empty_file_is_treated_as_absent(self):
        dto = BookCreateDTO(title="T", isbn="1", file="")
        assert dto.file is None

    def test_file_requires_image_name(self):
        payload = base64.b64encode(b"img").decode()
        with pytest.raises(ValidationError):
            BookCreateDTO(title="T", isbn="1", file=payload)

    def test_image_must_be_plain_name(self):
        with pytest.raises(ValidationError):
            BookCreateDTO(title="T", isbn="1", image="../secret.png")

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            BookCreateDTO(title="T", isbn="1", price=-1)


class TestMapping:
    def test_author_from_create(self):
        author = author_from_create(
            AuthorCreateDTO(first_name="Ann", last_name="Leckie", bio="Radch")
        )
        assert author.id is None
        assert author.full_name == "Ann Leckie"
        assert author.bio == "Radch"

    def test_author_to_dto_lists_books(self):
        author = Author(
            id=4,
            first_name="Ann",
            last_name="Leckie",
            books=[BookRef(id=9, title="Ancillary Sword", year=2014, isbn="456")],
        )

        dto = author_to_dto(author)

        assert dto.id == 4
        assert [b.title for b in dto.books] == ["Ancillary Sword"]

    def test_unsaved_entities_cannot_be_mapped(self):
        with pytest.raises(ValueError):
            author_to_dto(Author(first_name="Ann", last_name="Leckie"))
        with pytest.raises(ValueError):
            book_to_dto(Book(title="T", isbn="1"))

    def test_book_from_update_keeps_id(self):
        dto = BookUpdateDTO(id=7, title="Provenance", isbn="789", price=9.99, author_id=4)

        book = book_from_update(dto)

        assert book.id == 7
        assert book.price == 9.99
        assert book.author_id == 4

    def test_book_to_dto_carries_file_and_author(self):
        book = Book(
            id=2,
            title="Provenance",
            isbn="789",
            image="p.png",
            author_id=4,
            author=AuthorRef(id=4, first_name="Ann", last_name="Leckie"),
        )

        dto = book_to_dto(book, file="aW1n")

        assert dto.file == "aW1n"
        assert dto.author.last_name == "Leckie"
