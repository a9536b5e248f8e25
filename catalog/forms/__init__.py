"""
Form Pipeline Package

Turns raw form submissions into sanitized drafts plus field errors.

Each validate_xxx(fields, xxx_id=None) takes the submitted fields (a mapping
of name to a string, a list of strings, or nothing) and returns a
FormResult. Pass the record's id when validating an update so the draft
keeps it.
"""

from catalog.forms.base import FieldError, FormResult, escape, normalize_multi
from catalog.forms.author import AuthorDraft, validate_author
from catalog.forms.genre import GenreDraft, validate_genre
from catalog.forms.book import BookDraft, validate_book
from catalog.forms.bookinstance import BookInstanceDraft, validate_bookinstance

__all__ = [
    "FieldError",
    "FormResult",
    "escape",
    "normalize_multi",
    "AuthorDraft",
    "validate_author",
    "GenreDraft",
    "validate_genre",
    "BookDraft",
    "validate_book",
    "BookInstanceDraft",
    "validate_bookinstance",
]
