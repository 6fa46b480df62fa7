"""Helpers for front matter date values."""

from datetime import date, datetime, time

from flatwiki.core.exceptions import MalformedContentError


def to_datetime(value: datetime | date | str) -> datetime:
    """Convert a front matter date value to a datetime.

    YAML yields ``date`` or ``datetime`` objects for unquoted ISO values
    and plain strings for anything else, so all three are accepted.

    Raises:
        MalformedContentError: If a string is not an ISO 8601 date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError as e:
        raise MalformedContentError(f"Invalid date value {value!r}") from e


def to_timestamp(value: datetime | date | str) -> float:
    """Return a POSIX timestamp; naive values are taken as local time."""
    return to_datetime(value).timestamp()


def format_date(value: datetime | date | str, fmt: str) -> str:
    """Format a front matter date value with ``strftime``."""
    return to_datetime(value).strftime(fmt)
