"""Data Transfer Objects for the HTTP API.

DTOs decouple the wire format from the domain entities so either can evolve
independently. Conversions live in ``src.bookstore.api.http.mapping``.
"""

from .author import AuthorCreateDTO, AuthorDTO, AuthorUpdateDTO, BookSummaryDTO
from .book import AuthorSummaryDTO, BookCreateDTO, BookDTO, BookUpdateDTO

__all__ = [
    "AuthorCreateDTO",
    "AuthorDTO",
    "AuthorSummaryDTO",
    "AuthorUpdateDTO",
    "BookCreateDTO",
    "BookDTO",
    "BookSummaryDTO",
    "BookUpdateDTO",
]
