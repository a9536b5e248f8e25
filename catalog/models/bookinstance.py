"""
BookInstance Model

A physical copy of a book that can be borrowed.

`status` is restricted to the BookStatus values here, at persist time. The
form pipeline only sanitizes it, so an out-of-domain value submitted by a
client is rejected when the record is written.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from catalog.database import Base, new_record_id
from catalog.errors import SchemaViolation
from catalog.models.base import require_text


class BookStatus(str, Enum):
    """
    Lending state of a copy.

    - AVAILABLE: On the shelf
    - MAINTENANCE: Being repaired or processed (new copies start here)
    - LOANED: Checked out
    - RESERVED: Held for a borrower
    """
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


DEFAULT_STATUS = BookStatus.MAINTENANCE


def default_due_back() -> datetime:
    """Copies are due back at creation time unless a date is given."""
    return datetime.now(timezone.utc)


class BookInstance(Base):
    """
    BookInstance model.

    Table: book_instances

    Example:
        copy = BookInstance(
            book=book.id,
            imprint="Gollancz, 2011.",
            status=BookStatus.AVAILABLE.value,
        )
    """

    __tablename__ = "book_instances"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_record_id,
    )

    book: Mapped[str] = mapped_column(
        String(24),
        index=True,
        nullable=False,
        comment="Id of the book this is a copy of"
    )

    imprint: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Publisher and edition details"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_STATUS.value,
    )

    due_back: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=default_due_back,
    )

    @validates("book", "imprint")
    def _validate_required(self, key: str, value: str) -> str:
        return require_text(self.__tablename__, key, value)

    @validates("status")
    def _validate_status(self, key: str, value: str | BookStatus) -> str:
        try:
            return BookStatus(value).value
        except ValueError:
            allowed = ", ".join(s.value for s in BookStatus)
            raise SchemaViolation(
                f"'{value}' is not a valid status (expected one of: {allowed})"
            ) from None

    def __repr__(self) -> str:
        return f"BookInstance(id={self.id!r}, book={self.book!r}, status='{self.status}')"
