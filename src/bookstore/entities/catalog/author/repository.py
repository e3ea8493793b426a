from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from src.bookstore.entities.catalog.author.entity import Author
from src.bookstore.entities.catalog.author.table import AuthorTable
from src.bookstore.entities.catalog.book.table import BookTable
from src.bookstore.entities.core.result import ErrorKind, RepositoryResult

_MUTABLE_FIELDS = ("first_name", "last_name", "bio")


class AuthorRepository:
    """Data-access layer for authors.

    Changes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_all(self) -> list[Author]:
        statement = (
            select(AuthorTable)
            .options(selectinload(AuthorTable.books))
            .execution_options(populate_existing=True)
        )
        rows = self._session.exec(statement).all()
        return [Author.model_validate(row, from_attributes=True) for row in rows]

    def find_by_id(self, author_id: int) -> Author | None:
        row = self._session.get(AuthorTable, author_id, populate_existing=True)
        if row is None:
            return None
        return Author.model_validate(row, from_attributes=True)

    def exists(self, author_id: int) -> bool:
        statement = select(AuthorTable.id).where(AuthorTable.id == author_id)
        return self._session.exec(statement).first() is not None

    def create(self, author: Author) -> RepositoryResult[Author]:
        row = AuthorTable(**author.model_dump(include=set(_MUTABLE_FIELDS)))
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            return RepositoryResult.failure(ErrorKind.INVALID, str(e.orig))
        self._session.refresh(row)
        return RepositoryResult.success(Author.model_validate(row, from_attributes=True))

    def update(self, author: Author) -> RepositoryResult[Author]:
        if author.id is None:
            return RepositoryResult.failure(ErrorKind.INVALID, "Author id is required")

        row = self._session.get(AuthorTable, author.id)
        if row is None:
            return RepositoryResult.failure(ErrorKind.NOT_FOUND, f"Author {author.id} not found")

        for field in _MUTABLE_FIELDS:
            setattr(row, field, getattr(author, field))
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            return RepositoryResult.failure(ErrorKind.INVALID, str(e.orig))
        self._session.refresh(row)
        return RepositoryResult.success(Author.model_validate(row, from_attributes=True))

    def delete(self, author_id: int) -> RepositoryResult[None]:
        row = self._session.get(AuthorTable, author_id)
        if row is None:
            return RepositoryResult.failure(ErrorKind.NOT_FOUND, f"Author {author_id} not found")

        # Books outlive their author
        self._session.exec(
            update(BookTable).where(BookTable.author_id == author_id).values(author_id=None)
        )
        self._session.delete(row)
        self._session.flush()
        return RepositoryResult.success()
