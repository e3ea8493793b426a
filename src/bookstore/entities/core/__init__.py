"""Shared building blocks for catalog entities."""

from ._base import Entity, EntityTable
from .result import ErrorKind, RepositoryResult

__all__ = ["Entity", "EntityTable", "ErrorKind", "RepositoryResult"]
