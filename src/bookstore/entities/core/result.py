"""Explicit outcome values returned across the repository boundary."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why an operation did not succeed."""

    INVALID = "invalid"
    NOT_FOUND = "not_found"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.INVALID: 400,
    ErrorKind.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class RepositoryResult(Generic[T]):
    """Either a value or an error kind with an explanatory message."""

    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "RepositoryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str | None = None) -> "RepositoryResult[T]":
        return cls(error=error, message=message)
