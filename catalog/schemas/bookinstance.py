"""
BookInstance Read Model

`book` is the book id, or the book record when populated.
"""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from catalog.schemas.book import BookRecord
from catalog.schemas.formatting import format_date_med, format_iso_date


class BookInstanceRecord(BaseModel):
    """A stored copy of a book."""

    id: str = Field(..., description="Store-assigned identifier")
    book: BookRecord | str | None = Field(
        ...,
        description="Book id, or the book record when populated",
    )
    imprint: str = Field(..., description="Publisher and edition details")
    status: str = Field(..., description="Available, Maintenance, Loaned or Reserved")
    due_back: datetime = Field(..., description="When the copy is due back")

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"

    @computed_field
    @property
    def due_back_formatted(self) -> str:
        return format_date_med(self.due_back)

    @computed_field
    @property
    def due_back_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.due_back)

    @property
    def book_id(self) -> str | None:
        if isinstance(self.book, BookRecord):
            return self.book.id
        return self.book
