"""Genre Form"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from catalog.forms.base import ErrorList, FormResult, clean, trim

GENRE_NAME_MIN_LENGTH = 3


class GenreDraft(BaseModel):
    """Sanitized genre form values. `id` is set on updates only."""

    id: str | None = Field(default=None)
    name: str = Field(default="")

    def to_values(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id"})


def validate_genre(fields: Mapping[str, Any], genre_id: str | None = None) -> FormResult[GenreDraft]:
    errors = ErrorList()

    # Length is measured on the trimmed value, before escaping
    errors.min_length(
        "name",
        trim(fields.get("name")),
        GENRE_NAME_MIN_LENGTH,
        f"Genre name must contain at least {GENRE_NAME_MIN_LENGTH} characters",
    )

    draft = GenreDraft(id=genre_id, name=clean(fields.get("name")))
    return FormResult(draft=draft, errors=list(errors))
