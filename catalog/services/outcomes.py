"""
Service Outcomes

What a catalog service hands back to the web layer. Each outcome says what
to show; the routers only decide which template shows it.

- Redirect: go to another page (after a successful write, or soft-fail)
- ListPage / DetailPage: read-only pages
- FormPage: an empty, pre-filled or re-displayed form, with its errors
- DeletePage: the delete confirmation, listing records that block deletion
- SummaryPage: the catalog home page counts
"""

from dataclasses import dataclass, field
from typing import Any

from catalog.forms import FieldError


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass
class ListPage:
    title: str
    items: list[Any]


@dataclass
class DetailPage:
    title: str
    record: Any
    related: list[Any] = field(default_factory=list)


@dataclass
class Option:
    """A record offered in a select/checkbox list, and whether it's picked."""

    record: Any
    selected: bool = False


@dataclass
class FormPage:
    """
    A create/update form.

    `draft` is None for an empty create form, the stored record for an
    update form, or the sanitized draft when a submission failed validation.
    `options` holds the reference lists (authors, genres, books) the form
    needs, keyed by name.
    """

    title: str
    draft: Any = None
    errors: list[FieldError] = field(default_factory=list)
    options: dict[str, list[Option]] = field(default_factory=dict)


@dataclass
class DeletePage:
    """
    A delete confirmation.

    When `dependents` is non-empty the record can't be deleted yet and the
    page lists what still refers to it.
    """

    title: str
    record: Any
    dependents: list[Any] = field(default_factory=list)

    @property
    def is_blocked(self) -> bool:
        return bool(self.dependents)


@dataclass
class SummaryPage:
    title: str
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int


def options_for(records: list[Any], selected: set[str] | list[str] | str | None) -> list[Option]:
    """Wrap `records` as Options, marking those whose id is in `selected`."""
    if selected is None:
        picked: set[str] = set()
    elif isinstance(selected, str):
        picked = {selected}
    else:
        picked = set(selected)
    return [Option(record=r, selected=r.id in picked) for r in records]
