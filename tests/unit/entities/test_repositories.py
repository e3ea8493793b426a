"""Tests for the catalog data-access layer."""

from sqlmodel import Session

from src.bookstore.entities import (
    Author,
    AuthorRepository,
    Book,
    BookRepository,
    ErrorKind,
)


def _create_author(session: Session, **overrides) -> Author:
    data = {"first_name": "Ursula", "last_name": "Le Guin", "bio": "Earthsea"}
    data.update(overrides)
    result = AuthorRepository(session).create(Author(**data))
    assert result.ok
    session.commit()
    return result.value


def _create_book(session: Session, **overrides) -> Book:
    data = {"title": "A Wizard of Earthsea", "isbn": "978-0547773742", "year": 1968}
    data.update(overrides)
    result = BookRepository(session).create(Book(**data))
    assert result.ok
    session.commit()
    return result.value


class TestAuthorRepository:
    """Author persistence."""

    def test_create_then_find_round_trips_fields(self, session: Session):
        created = _create_author(session)

        found = AuthorRepository(session).find_by_id(created.id)

        assert found is not None
        assert found == created
        assert found.first_name == "Ursula"
        assert found.bio == "Earthsea"

    def test_find_by_id_returns_none_for_unknown(self, session: Session):
        assert AuthorRepository(session).find_by_id(999) is None

    def test_find_all_includes_books(self, session: Session):
        author = _create_author(session)
        _create_book(session, author_id=author.id)
        _create_author(session, first_name="Iain", last_name="Banks", bio=None)

        authors = AuthorRepository(session).find_all()

        assert len(authors) == 2
        with_books = next(a for a in authors if a.id == author.id)
        assert [b.title for b in with_books.books] == ["A Wizard of Earthsea"]

    def test_update_changes_fields(self, session: Session):
        created = _create_author(session)
        repository = AuthorRepository(session)

        result = repository.update(
            Author(id=created.id, first_name="U. K.", last_name="Le Guin", bio=None)
        )
        session.commit()

        assert result.ok
        assert repository.find_by_id(created.id).first_name == "U. K."
        assert repository.find_by_id(created.id).bio is None

    def test_update_unknown_author_is_not_found(self, session: Session):
        result = AuthorRepository(session).update(
            Author(id=42, first_name="No", last_name="One")
        )

        assert not result.ok
        assert result.error is ErrorKind.NOT_FOUND

    def test_update_without_id_is_invalid(self, session: Session):
        result = AuthorRepository(session).update(Author(first_name="No", last_name="Id"))

        assert result.error is ErrorKind.INVALID
        assert result.error.status_code == 400

    def test_delete_then_find_yields_nothing(self, session: Session):
        created = _create_author(session)
        repository = AuthorRepository(session)

        result = repository.delete(created.id)
        session.commit()

        assert result.ok
        assert repository.find_by_id(created.id) is None
        assert repository.exists(created.id) is False

    def test_delete_unknown_author_is_not_found(self, session: Session):
        result = AuthorRepository(session).delete(123)
        assert result.error is ErrorKind.NOT_FOUND

    def test_delete_author_keeps_books_without_author(self, session: Session):
        author = _create_author(session)
        book = _create_book(session, author_id=author.id)

        AuthorRepository(session).delete(author.id)
        session.commit()

        remaining = BookRepository(session).find_by_id(book.id)
        assert remaining is not None
        assert remaining.author_id is None


class TestBookRepository:
    """Book persistence."""

    def test_create_then_find_round_trips_fields(self, session: Session):
        author = _create_author(session)
        created = _create_book(
            session, author_id=author.id, image="cover.png", price=12.5, summary="Ged"
        )

        found = BookRepository(session).find_by_id(created.id)

        assert found == created
        assert found.price == 12.5
        assert found.image == "cover.png"
        assert found.author is not None
        assert found.author.last_name == "Le Guin"

    def test_create_with_unknown_author_is_invalid(self, session: Session):
        result = BookRepository(session).create(
            Book(title="Orphan", isbn="000", author_id=9999)
        )

        assert not result.ok
        assert result.error is ErrorKind.INVALID

    def test_exists(self, session: Session):
        created = _create_book(session)
        repository = BookRepository(session)

        assert repository.exists(created.id) is True
        assert repository.exists(created.id + 1) is False

    def test_get_image_file_name(self, session: Session):
        with_image = _create_book(session, image="a.png")
        without_image = _create_book(session, title="Tehanu", isbn="111")
        repository = BookRepository(session)

        assert repository.get_image_file_name(with_image.id) == "a.png"
        assert repository.get_image_file_name(without_image.id) is None
        assert repository.get_image_file_name(999) is None

    def test_update_replaces_fields(self, session: Session):
        created = _create_book(session, image="a.png")
        repository = BookRepository(session)

        updated = created.model_copy(update={"title": "The Tombs of Atuan", "image": "b.png"})
        result = repository.update(updated)
        session.commit()

        assert result.ok
        found = repository.find_by_id(created.id)
        assert found.title == "The Tombs of Atuan"
        assert found.image == "b.png"

    def test_update_unknown_book_is_not_found(self, session: Session):
        result = BookRepository(session).update(Book(id=77, title="Ghost", isbn="x"))
        assert result.error is ErrorKind.NOT_FOUND

    def test_delete_then_exists_is_false(self, session: Session):
        created = _create_book(session)
        repository = BookRepository(session)

        assert repository.delete(created.id).ok
        session.commit()

        assert repository.exists(created.id) is False
        assert repository.find_by_id(created.id) is None

    def test_find_all_lists_every_book(self, session: Session):
        _create_book(session)
        _create_book(session, title="The Farthest Shore", isbn="222")

        titles = sorted(book.title for book in BookRepository(session).find_all())

        assert titles == ["A Wizard of Earthsea", "The Farthest Shore"]
