"""
Genre Model

A category books can be filed under.

Genre names are unique under case-insensitive comparison. That rule is
enforced by the genre services (look up, then insert) rather than by a
database constraint, so two concurrent submissions of the same new name can
both get through. See DESIGN.md.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates

from catalog.database import Base, new_record_id
from catalog.models.base import require_text


class Genre(Base):
    """
    Genre model.

    Table: genres

    Example:
        genre = Genre(name="Science Fiction")
    """

    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_record_id,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Science Fiction', 'Poetry')"
    )

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        return require_text(self.__tablename__, key, value)

    def __repr__(self) -> str:
        return f"Genre(id={self.id!r}, name='{self.name}')"
