"""Author API router with CRUD operations."""

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from loguru import logger
from sqlmodel import Session

from src.bookstore.api.http.deps import RowId, get_session
from src.bookstore.api.http.dtos import AuthorCreateDTO, AuthorDTO, AuthorUpdateDTO
from src.bookstore.api.http.errors import (
    bad_request,
    from_result,
    not_found,
    server_error,
)
from src.bookstore.api.http.mapping import (
    author_from_create,
    author_from_update,
    author_to_dto,
)
from src.bookstore.entities.catalog import AuthorRepository

router = APIRouter(prefix="/api/Authors", tags=["Authors"])


@router.get("", response_model=list[AuthorDTO])
def list_authors(session: Session = Depends(get_session)):
    """List all authors with their books."""
    location = "Authors / List"
    try:
        logger.info("{}: Attempted retrieval of all authors", location)
        authors = AuthorRepository(session).find_all()
        logger.info("{}: Retrieved {} author(s)", location, len(authors))
        return [author_to_dto(author) for author in authors]
    except HTTPException:
        raise
    except Exception:
        return server_error(location)


@router.get("/{author_id}", response_model=AuthorDTO)
def get_author(author_id: RowId, session: Session = Depends(get_session)):
    """Get an author by ID."""
    location = "Authors / Get"
    try:
        logger.info("{}: Attempted retrieval of author {}", location, author_id)
        author = AuthorRepository(session).find_by_id(author_id)
        if author is None:
            raise not_found(location, f"Author {author_id} not found")

        logger.info("{}: Retrieved author {}", location, author_id)
        return author_to_dto(author)
    except HTTPException:
        raise
    except Exception:
        return server_error(location)


@router.post("", response_model=AuthorDTO, status_code=201)
def create_author(
    dto: AuthorCreateDTO | None = Body(default=None),
    session: Session = Depends(get_session),
):
    """Create a new author."""
    location = "Authors / Create"
    try:
        logger.info("{}: Attempted creation of author", location)
        if dto is None:
            raise bad_request(location, "Empty request was submitted")

        result = AuthorRepository(session).create(author_from_create(dto))
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        logger.info("{}: Created author {}", location, result.value.id)
        return author_to_dto(result.value)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)


@router.put("/{author_id}", status_code=204)
def update_author(
    author_id: RowId,
    dto: AuthorUpdateDTO | None = Body(default=None),
    session: Session = Depends(get_session),
):
    """Replace an author's details."""
    location = "Authors / Update"
    try:
        logger.info("{}: Attempted update of author {}", location, author_id)
        if author_id < 1:
            raise bad_request(location, f"Invalid author id {author_id}")
        if dto is None:
            raise bad_request(location, "Empty request was submitted")
        if author_id != dto.id:
            raise bad_request(
                location, f"Route id {author_id} does not match body id {dto.id}"
            )

        repository = AuthorRepository(session)
        if not repository.exists(author_id):
            raise not_found(location, f"Author {author_id} not found")

        result = repository.update(author_from_update(dto))
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        logger.info("{}: Updated author {}", location, author_id)
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)


@router.delete("/{author_id}", status_code=204)
def delete_author(author_id: RowId, session: Session = Depends(get_session)):
    """Delete an author. Their books are kept without an author."""
    location = "Authors / Delete"
    try:
        logger.info("{}: Attempted deletion of author {}", location, author_id)
        if author_id < 1:
            raise bad_request(location, f"Invalid author id {author_id}")

        repository = AuthorRepository(session)
        if not repository.exists(author_id):
            raise not_found(location, f"Author {author_id} not found")

        result = repository.delete(author_id)
        if not result.ok:
            session.rollback()
            raise from_result(location, result)

        session.commit()
        logger.info("{}: Deleted author {}", location, author_id)
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        session.rollback()
        return server_error(location)
