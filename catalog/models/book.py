"""
Book Model

A catalogued title. Physical copies are BookInstance records.

This file also holds the book/genre association.

WHY no foreign keys?
====================
References between catalog records are plain identifier columns, the way a
document store keeps them. A book may name an author id that does not exist
(nothing checks on create), and deleting a genre never cascades: the genre
services refuse the delete while any book still lists it.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from catalog.database import Base, new_record_id
from catalog.models.base import require_text


class BookGenre(Base):
    """
    One (book, genre) pair of a book's genre set.

    Table: book_genres

    The pair is the primary key, so a genre appears at most once per book.
    """

    __tablename__ = "book_genres"

    book_id: Mapped[str] = mapped_column(String(24), primary_key=True)

    # Indexed for "books in this genre" lookups
    genre_id: Mapped[str] = mapped_column(String(24), primary_key=True, index=True)

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id!r}, genre_id={self.genre_id!r})"


class Book(Base):
    """
    Book model.

    Table: books

    Fields:
    - title, summary, isbn: required text
    - author: id of the book's single Author (required)

    The book's genre ids live in book_genres; the store reads and writes them
    as the book document's `genre` list.

    Example:
        book = Book(
            title="The Name of the Wind",
            author=author.id,
            summary="I have stolen princesses back from sleeping barrow kings.",
            isbn="9781473211896",
        )
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_record_id,
    )

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(24),
        index=True,
        nullable=False,
        comment="Id of the book's author"
    )

    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary"
    )

    isbn: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="International Standard Book Number"
    )

    @validates("title", "author", "summary", "isbn")
    def _validate_required(self, key: str, value: str) -> str:
        return require_text(self.__tablename__, key, value)

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title='{self.title}', isbn='{self.isbn}')"
