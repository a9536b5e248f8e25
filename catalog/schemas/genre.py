"""
Genre Read Model

Follows the same pattern as AuthorRecord.
"""

from pydantic import BaseModel, Field, computed_field


class GenreRecord(BaseModel):
    """A stored genre."""

    id: str = Field(..., description="Store-assigned identifier")
    name: str = Field(..., description="Genre name")

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"
