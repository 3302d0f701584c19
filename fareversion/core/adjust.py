"""
Moving a version's validity window.

A window may be moved to open earlier than the version was published. In
that case the publish date follows the new opening instant, so the version
is never valid before it exists.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import List, Sequence

from fareversion.exceptions import InvalidWindowError
from fareversion.models import VersionRecord
from fareversion.utils.timeconv import InstantLike, to_millis


@dataclass(frozen=True)
class MoveResult:
    """Outcome of :func:`move_window`.

    Attributes:
        original: The record before the move.
        record: The record after the move.
        publish_date_adjusted: ``True`` if the publish date was pulled back
            to the new ``open``.
    """

    original: VersionRecord
    record: VersionRecord
    publish_date_adjusted: bool

    @property
    def open_shift(self) -> float:
        """Milliseconds the window start moved (negative means earlier)."""
        return self.record.open - self.original.open

    @property
    def close_shift(self) -> float:
        return self.record.close - self.original.close

    @property
    def publish_shift(self) -> float:
        return self.record.publish_date - self.original.publish_date


def move_window(
    record: VersionRecord,
    open: InstantLike,
    close: InstantLike,
) -> MoveResult:
    """Return ``record`` with a new validity window.

    Args:
        record: Record to move; it is not modified.
        open: New window start.
        close: New window end.

    Raises:
        InvalidWindowError: ``close`` lies before ``open``.
        InvalidInstantError: An instant cannot be normalized.
    """
    open_ms = to_millis(open)
    close_ms = to_millis(close)

    if close_ms < open_ms:
        raise InvalidWindowError(
            f"Version {record.version} cannot close before it opens",
            version=record.version,
            open_ms=open_ms,
            close_ms=close_ms,
        )

    adjusted = open_ms < record.publish_date
    moved = dataclasses.replace(
        record,
        open=open_ms,
        close=close_ms,
        publish_date=open_ms if adjusted else record.publish_date,
    )
    return MoveResult(original=record, record=moved, publish_date_adjusted=adjusted)


def replace_record(
    records: Sequence[VersionRecord],
    original: VersionRecord,
    updated: VersionRecord,
) -> List[VersionRecord]:
    """Return a copy of ``records`` with ``original`` swapped for ``updated``.

    Matching is by identity, so other records sharing the version name stay
    untouched.
    """
    return [updated if r is original else r for r in records]
