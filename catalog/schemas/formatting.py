"""Date rendering helpers shared by the read models."""

from datetime import date, datetime


def format_date_med(value: date | datetime | None) -> str:
    """
    Medium date, e.g. 'Oct 18, 2026'. Empty string for a missing date.
    """
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def format_iso_date(value: date | datetime | None) -> str:
    """
    'YYYY-MM-DD', the value an <input type="date"> expects.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
