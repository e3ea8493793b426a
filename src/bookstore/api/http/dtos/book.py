"""Book request/response bodies.

``file`` carries the cover image as base64. It only travels on the wire:
the database stores the file name in ``image`` and the bytes live in the
image store.
"""

import base64
import binascii

from pydantic import Field, field_validator, model_validator

from src.bookstore.api.http.dtos._base import WireModel


class BookCreateDTO(WireModel):
    title: str = Field(min_length=1, max_length=150)
    year: int | None = None
    isbn: str = Field(min_length=1, max_length=50)
    summary: str | None = Field(default=None, max_length=500)
    image: str | None = None
    file: str | None = None
    price: float | None = Field(default=None, ge=0)
    author_id: int | None = None

    @field_validator("file")
    @classmethod
    def _file_is_base64(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("file must be a base64 encoded payload") from e
        return value

    @field_validator("image")
    @classmethod
    def _image_is_plain_name(cls, value: str | None) -> str | None:
        if not value:
            return None
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("image must be a plain file name")
        return value

    @model_validator(mode="after")
    def _file_needs_image(self) -> "BookCreateDTO":
        if self.file and not self.image:
            raise ValueError("image is required when file is supplied")
        return self


class BookUpdateDTO(BookCreateDTO):
    id: int


class AuthorSummaryDTO(WireModel):
    id: int
    first_name: str
    last_name: str


class BookDTO(WireModel):
    id: int
    title: str
    year: int | None = None
    isbn: str
    summary: str | None = None
    image: str | None = None
    file: str | None = None
    price: float | None = None
    author_id: int | None = None
    author: AuthorSummaryDTO | None = None
