"""
Pydantic Read Models Package

The shapes records take once they leave the store.

WHY separate read models from the SQLAlchemy models?
====================================================
1. Records are detached copies: no lazy loading, no session needed
2. Derived values (name, url, formatted dates) are computed on read
3. Populated references embed the referenced record in place of its id

Naming convention:
- XxxRecord: a stored record as read back from the store
"""

from catalog.schemas.author import AuthorRecord
from catalog.schemas.genre import GenreRecord
from catalog.schemas.book import BookRecord
from catalog.schemas.bookinstance import BookInstanceRecord

__all__ = [
    "AuthorRecord",
    "GenreRecord",
    "BookRecord",
    "BookInstanceRecord",
]
