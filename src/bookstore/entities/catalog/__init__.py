"""Catalog entities: authors and the books they own.

Both table modules are imported here so the Author <-> Book relationship
can be resolved whichever package is imported first.
"""

from .author import Author, AuthorRepository, AuthorTable
from .book import Book, BookRepository, BookTable
from .refs import AuthorRef, BookRef

__all__ = [
    "Author",
    "AuthorRef",
    "AuthorRepository",
    "AuthorTable",
    "Book",
    "BookRef",
    "BookRepository",
    "BookTable",
]
