"""
Book Form

The genre checkboxes arrive as nothing, one value or several values; they
are normalized to a list of ids before any rule runs. Author and genre ids
are not checked against the store.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from catalog.forms.base import ErrorList, FormResult, clean, escape, normalize_multi


class BookDraft(BaseModel):
    """Sanitized book form values. `id` is set on updates only."""

    id: str | None = Field(default=None)
    title: str = Field(default="")
    author: str = Field(default="")
    summary: str = Field(default="")
    isbn: str = Field(default="")
    genre: list[str] = Field(default_factory=list)

    @property
    def author_id(self) -> str:
        return self.author

    @property
    def genre_ids(self) -> list[str]:
        return self.genre

    def to_values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id"})


def validate_book(fields: Mapping[str, Any], book_id: str | None = None) -> FormResult[BookDraft]:
    errors = ErrorList()
    genre = [escape(g) for g in normalize_multi(fields.get("genre")) if g]

    title = clean(fields.get("title"))
    author = clean(fields.get("author"))
    summary = clean(fields.get("summary"))
    isbn = clean(fields.get("isbn"))

    errors.require("title", title, "Title must not be empty.")
    errors.require("author", author, "Author must not be empty.")
    errors.require("summary", summary, "Summary must not be empty.")
    errors.require("isbn", isbn, "ISBN must not be empty")

    draft = BookDraft(
        id=book_id,
        title=title,
        author=author,
        summary=summary,
        isbn=isbn,
        genre=genre,
    )
    return FormResult(draft=draft, errors=list(errors))
