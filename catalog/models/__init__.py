"""
SQLAlchemy Models Package

Database models for the catalog store.

Reference fields (all plain ids, no foreign keys):
- Book.author -> Author.id
- BookGenre (book_id, genre_id) -> Book.id, Genre.id
- BookInstance.book -> Book.id

Importing this package registers every table with Base.metadata, which
create_tables() and Alembic rely on.
"""

from catalog.models.author import Author
from catalog.models.genre import Genre
from catalog.models.book import Book, BookGenre
from catalog.models.bookinstance import (
    DEFAULT_STATUS,
    BookInstance,
    BookStatus,
    default_due_back,
)

__all__ = [
    "Author",
    "Genre",
    "Book",
    "BookGenre",
    "BookInstance",
    "BookStatus",
    "DEFAULT_STATUS",
    "default_due_back",
]
