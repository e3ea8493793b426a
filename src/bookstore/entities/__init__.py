"""Entities module with hybrid entity-centric structure.

This module organizes entities by business concept rather than technical layer.
Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .catalog import (
    Author,
    AuthorRepository,
    AuthorTable,
    Book,
    BookRepository,
    BookTable,
)
from .core import ErrorKind, RepositoryResult

__all__ = [
    "Author",
    "AuthorTable",
    "AuthorRepository",
    "Book",
    "BookTable",
    "BookRepository",
    "ErrorKind",
    "RepositoryResult",
]
