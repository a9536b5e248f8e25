"""
Author Read Model

What the store hands back for an author record.

Derived values (display name, URL, formatted dates) are pydantic computed
fields: they are worked out from the stored fields every time they're read
and are never written back to the store.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, computed_field

from catalog.schemas.formatting import format_date_med, format_iso_date


class AuthorRecord(BaseModel):
    """
    A stored author.

    Example:
        >>> author = AuthorRecord(id="65f0c0ffee0000000000000a",
        ...                       first_name="Isaac", family_name="Asimov")
        >>> author.name
        'Asimov, Isaac'
        >>> author.url
        '/catalog/author/65f0c0ffee0000000000000a'
    """

    id: str = Field(..., description="Store-assigned identifier")
    first_name: str = Field(..., description="Given name")
    family_name: str = Field(..., description="Family name")
    date_of_birth: date | None = Field(default=None)
    date_of_death: date | None = Field(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65f0c0ffee0000000000000a",
                "first_name": "Isaac",
                "family_name": "Asimov",
                "date_of_birth": "1920-01-02",
                "date_of_death": "1992-04-06",
            }
        },
    )

    @computed_field
    @property
    def name(self) -> str:
        """
        Canonical display name, 'family_name, first_name'.

        Empty when either part is missing, so a half-filled record never
        renders as ', Isaac'.
        """
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @computed_field
    @property
    def date_of_birth_formatted(self) -> str:
        return format_date_med(self.date_of_birth)

    @computed_field
    @property
    def date_of_death_formatted(self) -> str:
        return format_date_med(self.date_of_death)

    @computed_field
    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.date_of_birth)

    @computed_field
    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.date_of_death)

    @computed_field
    @property
    def lifespan(self) -> str:
        """'Jan 2, 1920 - Apr 6, 1992'; either side may be blank."""
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}".strip()
