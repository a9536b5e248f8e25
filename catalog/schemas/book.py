"""
Book Read Model

Reference fields follow the document-store convention:

- Unpopulated, `author` is the author's id and `genre` is a list of ids.
- Populated, the store swaps each id for the referenced record. An id that
  no longer resolves becomes None (author) or is left out (genre).

`author_id` and `genre_ids` give the ids back whichever form the record is in.
"""

from pydantic import BaseModel, Field, computed_field

from catalog.schemas.author import AuthorRecord
from catalog.schemas.genre import GenreRecord


class BookRecord(BaseModel):
    """A stored book, possibly with its author and genres populated."""

    id: str = Field(..., description="Store-assigned identifier")
    title: str = Field(..., description="Book title")
    author: AuthorRecord | str | None = Field(
        ...,
        description="Author id, or the author record when populated",
    )
    summary: str = Field(..., description="Book summary")
    isbn: str = Field(..., description="ISBN")
    genre: list[GenreRecord | str] = Field(
        default_factory=list,
        description="Genre ids, or genre records when populated",
    )

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    @property
    def author_id(self) -> str | None:
        if isinstance(self.author, AuthorRecord):
            return self.author.id
        return self.author

    @property
    def genre_ids(self) -> list[str]:
        return [g.id if isinstance(g, GenreRecord) else g for g in self.genre]
