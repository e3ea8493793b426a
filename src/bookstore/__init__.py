"""Book Store catalog API.

Authors, books and their cover images behind a FastAPI HTTP layer, with
SQLModel persistence and bearer-token authorization for book management.
"""

__version__ = "0.1.0"
