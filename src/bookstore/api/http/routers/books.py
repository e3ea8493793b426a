"""Book API router with CRUD operations and cover image handling.

Every route needs an authenticated caller; writes need the Administrator role.
The cover image bytes live in the image store, keyed by ``Book.image``, and
travel as base64 in ``BookDTO.file``. Database and file writes are not
coordinated: a file failure after commit leaves the row in place.
"""

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from loguru import logger
from sqlmodel import Session

from src.bookstore.api.http.deps import (
    ADMINISTRATOR_ROLE,
    RowId,
    get_current_principal,
    get_image_store,
    get_session,
    require_role,
)
from src.bookstore.api.http.dtos import BookCreateDTO, BookDTO, BookUpdateDTO
from src.bookstore.api.http.errors import (
    bad_request,
    from_result,
    not_found,
    server_error,
)
from src.bookstore.api.http.mapping import book_from_create, book_from_update, book_to_dto
from src.bookstore.core.storage import ImageStore, ImageStoreError
from src.bookstore.entities.catalog import Book, BookRepository

router = APIRouter(
    prefix="/api/Books",
    tags=["Books"],
    dependencies=[Depends(get_current_principal)],
)

_admin_only = [Depends(require_role(ADMINISTRATOR_ROLE))]


def _to_dto_with_file(book: Book, store: ImageStore) -> BookDTO:
    return book_to_dto(book, file=store.read_base64(book.image) if book.image else None)


def _write_image(location: str, store: ImageStore, image: str, payload: str) -> bool:
    try:
        store.write_base64(image, payload)
    except (ImageStoreError, OSError):
        logger.exception("{}: Could not write image {}", location, image)
        return False
    logger.info("{}: Stored image {}", location, image)
    return True


def _delete_image(location: str, store: ImageStore, image: str) -> None:
    try:
        removed = store.delete(image)
    except (ImageStoreError, OSError):
        logger.exception("{}: Could not remove replaced image {}", location, image)
        return
    if removed:
        logger.info("{}: Removed replaced image {}", location, image)


@router.get("", response_model=list[BookDTO])
def list_books(
    session: Session = Depends(get_session),
    store: ImageStore = Depends(get_image_store),
):
    """List all books with their cover images."""
    location = "Books / List"
    try:
        logger.info("{}: Attempted retrieval of all books", location)
        books = BookRepository(session).find_all()
        logger.info("{}: Retrieved {} book(s)", location, len(books))
        return [_to_dto_with_file(book, store) for book in books]
    except HTTPException:
        raise
    except Exception:
        return server_error(location)


@router.get("/{book_id}", response_model=BookDTO)
def get_book(
    book_id: RowId,
    session: Session = Depends(get_session),
    store: ImageStore = Depends(get_image_store),
):
    """Get a book by ID."""
    location = "Books / Get"
    try:
        logger.info("{}: Attempted retrieval of book {}", location, book_id)
        book = BookRepository(session).find_by_id(book_id)
        if book is None:
            raise not_found(location, f"Book {book_id} not found")

        logger.info("{}: Retrieved book {}", location, book_id)
        return _to_dto_with_file(book, store)
    except HTTPException:
        raise
    except Exception:
        return server_error(location)


@router.post("", response_model=BookDTO, status_code=201, dependencies=_admin_only)
def create_book(
    dto: BookCreateDTO | None = Body(default=None),
    session: Session = Depends(get_session),
    store: ImageStore = Depends(get_image_store),
):
    """Create a book and store its cover image, if one was sent."""
    location = "Books / Create"
    try:
        logger.info("{}: Attempted creation of book", location)
        if dto is None:
            raise bad_request(location, "Empty request was submitted")

        result = BookRepository(session).create(book_from_create(dto))
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        created = result.value
        logger.info("{}: Created book {}", location, created.id)

        stored = False
        if dto.file and created.image:
            stored = _write_image(location, store, created.image, dto.file)

        return book_to_dto(created, file=dto.file if stored else None)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)


@router.put("/{book_id}", status_code=204, dependencies=_admin_only)
def update_book(
    book_id: RowId,
    dto: BookUpdateDTO | None = Body(default=None),
    session: Session = Depends(get_session),
    store: ImageStore = Depends(get_image_store),
):
    """Replace a book's details, swapping its cover image when it changed."""
    location = "Books / Update"
    try:
        logger.info("{}: Attempted update of book {}", location, book_id)
        if book_id < 1:
            raise bad_request(location, f"Invalid book id {book_id}")
        if dto is None:
            raise bad_request(location, "Empty request was submitted")
        if book_id != dto.id:
            raise bad_request(
                location, f"Route id {book_id} does not match body id {dto.id}"
            )

        repository = BookRepository(session)
        if not repository.exists(book_id):
            raise not_found(location, f"Book {book_id} not found")

        old_image = repository.get_image_file_name(book_id)
        result = repository.update(book_from_update(dto))
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        logger.info("{}: Updated book {}", location, book_id)

        if old_image and old_image != dto.image:
            _delete_image(location, store, old_image)

        if dto.file and dto.image:
            _write_image(location, store, dto.image, dto.file)

        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)


@router.delete("/{book_id}", status_code=204, dependencies=_admin_only)
def delete_book(book_id: RowId, session: Session = Depends(get_session)):
    """Delete a book. Its image file is left in the store."""
    location = "Books / Delete"
    try:
        logger.info("{}: Attempted deletion of book {}", location, book_id)
        if book_id < 1:
            raise bad_request(location, f"Invalid book id {book_id}")

        repository = BookRepository(session)
        if not repository.exists(book_id):
            raise not_found(location, f"Book {book_id} not found")

        result = repository.delete(book_id)
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        logger.info("{}: Deleted book {}", location, book_id)
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)
