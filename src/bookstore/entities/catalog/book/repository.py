from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from src.bookstore.entities.catalog.book.entity import Book
from src.bookstore.entities.catalog.book.table import BookTable
from src.bookstore.entities.core.result import ErrorKind, RepositoryResult

_MUTABLE_FIELDS = ("title", "year", "isbn", "summary", "image", "price", "author_id")


class BookRepository:
    """Data-access layer for books.

    Changes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_all(self) -> list[Book]:
        statement = (
            select(BookTable)
            .options(selectinload(BookTable.author))
            .execution_options(populate_existing=True)
        )
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def find_by_id(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id, populate_existing=True)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def exists(self, book_id: int) -> bool:
        statement = select(BookTable.id).where(BookTable.id == book_id)
        return self._session.exec(statement).first() is not None

    def get_image_file_name(self, book_id: int) -> str | None:
        statement = select(BookTable.image).where(BookTable.id == book_id)
        return self._session.exec(statement).first()

    def create(self, book: Book) -> RepositoryResult[Book]:
        row = BookTable(**book.model_dump(include=set(_MUTABLE_FIELDS)))
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            return RepositoryResult.failure(ErrorKind.INVALID, str(e.orig))
        self._session.refresh(row)
        return RepositoryResult.success(Book.model_validate(row, from_attributes=True))

    def update(self, book: Book) -> RepositoryResult[Book]:
        if book.id is None:
            return RepositoryResult.failure(ErrorKind.INVALID, "Book id is required")

        row = self._session.get(BookTable, book.id)
        if row is None:
            return RepositoryResult.failure(ErrorKind.NOT_FOUND, f"Book {book.id} not found")

        for field in _MUTABLE_FIELDS:
            setattr(row, field, getattr(book, field))
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            return RepositoryResult.failure(ErrorKind.INVALID, str(e.orig))
        self._session.refresh(row)
        return RepositoryResult.success(Book.model_validate(row, from_attributes=True))

    def delete(self, book_id: int) -> RepositoryResult[None]:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return RepositoryResult.failure(ErrorKind.NOT_FOUND, f"Book {book_id} not found")

        self._session.delete(row)
        self._session.flush()
        return RepositoryResult.success()
