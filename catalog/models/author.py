"""
Author Model

An author of one or more books.

Books point at their author through `Book.author`; there is no relationship
attribute here because authors are never loaded together with their books in
one query. The author services fetch dependents separately.
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from catalog.database import Base, new_record_id
from catalog.models.base import require_text


class Author(Base):
    """
    Author model.

    Table: authors

    Example:
        author = Author(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth=date(1973, 6, 6),
        )
    """

    __tablename__ = "authors"

    # Store-assigned on first insert
    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_record_id,
    )

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's given name"
    )

    family_name: Mapped[str] = mapped_column(
        String(100),
        index=True,  # Author lists are sorted by family name
        nullable=False,
        comment="Author's family name"
    )

    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    date_of_death: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    @validates("first_name", "family_name")
    def _validate_required(self, key: str, value: str) -> str:
        return require_text(self.__tablename__, key, value)

    def __repr__(self) -> str:
        return f"Author(id={self.id!r}, family_name='{self.family_name}')"
