"""
Instant normalization for fareversion.

Every comparison in the resolver happens on epoch milliseconds. This module
turns the instant-like values callers hand in (raw numbers, ``datetime``,
``date``, ISO-8601 strings) into that single representation, and renders
milliseconds back into human-readable dates.

Naive ``datetime`` values and plain dates are interpreted as UTC so the same
input always yields the same instant, whatever the host timezone.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Union

from fareversion.constants import DEFAULT_DATE_FORMAT
from fareversion.exceptions import InvalidInstantError

Millis = Union[int, float]
InstantLike = Union[int, float, datetime, date, str]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def _datetime_to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _ONE_MS


def _parse_iso(value: str) -> datetime:
    text = value.strip()
    # fromisoformat() only learned the "Z" suffix in Python 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInstantError(
            f"Not an ISO-8601 date or datetime: {value!r}",
            value=value,
        ) from exc


def to_millis(value: InstantLike) -> Millis:
    """Normalize an instant-like value to epoch milliseconds.

    Args:
        value: Epoch milliseconds (``int``/``float``, returned unchanged),
            a ``datetime`` (naive means UTC), a ``date`` (UTC midnight), or
            an ISO-8601 string.

    Returns:
        Epoch milliseconds.

    Raises:
        InvalidInstantError: ``value`` is a ``bool``, an unparseable string,
            or any other type.

    Examples:
        >>> to_millis(1700000000000)
        1700000000000
        >>> to_millis(datetime(1970, 1, 1, 0, 0, 1))
        1000
        >>> to_millis("1970-01-02")
        86400000
    """
    if isinstance(value, bool):
        raise InvalidInstantError("Booleans are not instants", value=value)

    if isinstance(value, (int, float)):
        return value

    # datetime subclasses date, so test it first
    if isinstance(value, datetime):
        return _datetime_to_millis(value)

    if isinstance(value, date):
        return _datetime_to_millis(datetime(value.year, value.month, value.day))

    if isinstance(value, str):
        return _datetime_to_millis(_parse_iso(value))

    raise InvalidInstantError(
        f"Cannot convert {type(value).__name__} to an instant",
        value=value,
    )


def from_millis(ms: Millis) -> datetime:
    """Return the timezone-aware UTC ``datetime`` for ``ms``."""
    return EPOCH + timedelta(milliseconds=ms)


def format_millis(ms: Millis, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Render epoch milliseconds as a UTC date string."""
    return from_millis(ms).strftime(fmt)
