"""
BookInstance Form

`status` is only sanitized here. Whether it is one of the four lending states
is checked by the BookInstance model when the record is written.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from catalog.forms.base import ErrorList, FormResult, clean
from catalog.models.bookinstance import DEFAULT_STATUS, default_due_back
from catalog.schemas.formatting import format_iso_date


class BookInstanceDraft(BaseModel):
    """Sanitized copy form values. `id` is set on updates only."""

    id: str | None = Field(default=None)
    book: str = Field(default="")
    imprint: str = Field(default="")
    status: str = Field(default="")
    due_back: datetime | None = Field(default=None)

    @property
    def book_id(self) -> str:
        return self.book

    @property
    def due_back_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.due_back)

    def to_values(self) -> dict[str, Any]:
        """
        Store values with the schema defaults filled in.

        A blank status becomes Maintenance and a blank due date becomes now,
        on update as well as on create: the submitted form replaces the
        whole record. A due date with a UTC offset is stored as UTC; a
        naive one is taken as UTC already.
        """
        due_back = self.due_back or default_due_back()
        if due_back.tzinfo is not None:
            due_back = due_back.astimezone(timezone.utc)
        return {
            "book": self.book,
            "imprint": self.imprint,
            "status": self.status or DEFAULT_STATUS.value,
            "due_back": due_back,
        }


def validate_bookinstance(
    fields: Mapping[str, Any],
    bookinstance_id: str | None = None,
) -> FormResult[BookInstanceDraft]:
    errors = ErrorList()

    book = clean(fields.get("book"))
    imprint = clean(fields.get("imprint"))
    errors.require("book", book, "Book must be specified")
    errors.require("imprint", imprint, "Imprint must be specified")

    status = clean(fields.get("status"))
    due_back = errors.optional_date("due_back", fields.get("due_back"), "Invalid date")

    draft = BookInstanceDraft(
        id=bookinstance_id,
        book=book,
        imprint=imprint,
        status=status,
        due_back=due_back,
    )
    return FormResult(draft=draft, errors=list(errors))
