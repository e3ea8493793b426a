"""Error responses shared by the routers and the application middleware."""

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.bookstore.entities.core.result import RepositoryResult

GENERIC_ERROR_MESSAGE = "Something went wrong. Please contact the Administrator"


def server_error(location: str) -> JSONResponse:
    """Log the active exception and build the generic 500 response.

    Must be called from inside an ``except`` block.
    """
    logger.exception("{}: Unexpected failure", location)
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_MESSAGE})


def bad_request(location: str, message: str) -> HTTPException:
    logger.warning("{}: {}", location, message)
    return HTTPException(status_code=400, detail=message)


def not_found(location: str, message: str) -> HTTPException:
    logger.warning("{}: {}", location, message)
    return HTTPException(status_code=404, detail="Not Found")


def from_result(location: str, result: RepositoryResult) -> HTTPException:
    """Translate a failed repository result into an HTTP error."""
    if result.error.status_code == 404:
        return not_found(location, result.message or "Resource not found")
    return bad_request(location, result.message or "Invalid request")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request input as 400 instead of FastAPI's 422."""
    logger.warning(
        "Request validation failed for {} {}: {} error(s)",
        request.method,
        request.url.path,
        len(exc.errors()),
    )
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})
