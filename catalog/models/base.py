"""Shared persisted-value checks for the catalog models."""

from catalog.errors import SchemaViolation


def require_text(table: str, key: str, value: str | None) -> str:
    """
    Reject a missing or empty required string.

    Called from the models' @validates hooks, so it runs on both insert and
    update, whichever code path built the values.
    """
    if value is None or value == "":
        raise SchemaViolation(f"{table}.{key} is required")
    return value
