"""
Author Form

Both name fields have two independent rules (specified, alphanumeric), and
both can fail for the same field: an empty first name is reported as missing
*and* as containing non-alphanumeric characters.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from catalog.forms.base import ErrorList, FormResult, clean, trim
from catalog.schemas.formatting import format_iso_date


class AuthorDraft(BaseModel):
    """Sanitized author form values. `id` is set on updates only."""

    id: str | None = Field(default=None)
    first_name: str = Field(default="")
    family_name: str = Field(default="")
    date_of_birth: date | None = Field(default=None)
    date_of_death: date | None = Field(default=None)

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.date_of_death)

    def to_values(self) -> dict[str, Any]:
        """The values written to the store (the id is never among them)."""
        return self.model_dump(exclude={"id"})


def validate_author(fields: Mapping[str, Any], author_id: str | None = None) -> FormResult[AuthorDraft]:
    errors = ErrorList()

    first_name = clean(fields.get("first_name"))
    errors.require("first_name", trim(fields.get("first_name")), "First name must be specified.")
    errors.alphanumeric("first_name", first_name, "First name has non-alphanumeric characters.")

    family_name = clean(fields.get("family_name"))
    errors.require("family_name", trim(fields.get("family_name")), "Family name must be specified.")
    errors.alphanumeric("family_name", family_name, "Family name has non-alphanumeric characters.")

    born = errors.optional_date("date_of_birth", fields.get("date_of_birth"), "Invalid date of birth")
    died = errors.optional_date("date_of_death", fields.get("date_of_death"), "Invalid date of death")

    draft = AuthorDraft(
        id=author_id,
        first_name=first_name,
        family_name=family_name,
        date_of_birth=born.date() if born else None,
        date_of_death=died.date() if died else None,
    )
    return FormResult(draft=draft, errors=list(errors))
