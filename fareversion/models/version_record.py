"""
Version record data model for fareversion.

A version record is one published fare version: an identifier, the instant
it became selectable, and the validity window of travel dates it governs.
Any other fields a producer attaches travel along untouched in ``payload``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from fareversion.constants import RECORD_REQUIRED_KEYS
from fareversion.exceptions import DataFileError, InvalidInstantError
from fareversion.utils.timeconv import Millis, to_millis


@dataclass(frozen=True)
class VersionRecord:
    """A published version and its validity window.

    Instants are epoch milliseconds. ``open <= close`` is expected from
    producers but not enforced here.

    Attributes:
        version: Version identifier, e.g. ``"v1"``.
        publish_date: When the version became available for selection.
        open: First instant of the validity window.
        close: Last instant of the validity window (inclusive by default,
            see :class:`~fareversion.models.ResolutionOptions`).
        payload: Opaque extra fields from the source record.
    """

    version: str
    publish_date: Millis
    open: Millis
    close: Millis
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VersionRecord":
        """Build a record from a camelCase mapping.

        ``publishDate``, ``open`` and ``close`` may be epoch milliseconds or
        anything :func:`~fareversion.utils.timeconv.to_millis` accepts.
        Unknown keys are kept in ``payload``.

        Raises:
            DataFileError: A required key is missing or an instant is invalid.
        """
        missing = [key for key in RECORD_REQUIRED_KEYS if key not in data]
        if missing:
            raise DataFileError(
                f"Version record is missing {', '.join(missing)}",
                content=repr(dict(data)),
            )

        try:
            publish_date = to_millis(data["publishDate"])
            open_ms = to_millis(data["open"])
            close_ms = to_millis(data["close"])
        except InvalidInstantError as exc:
            raise DataFileError(
                f"Version record {data['version']!r} has an invalid instant: "
                f"{exc.message}",
                content=repr(dict(data)),
            ) from exc

        payload = {k: v for k, v in data.items() if k not in RECORD_REQUIRED_KEYS}
        return cls(
            version=str(data["version"]),
            publish_date=publish_date,
            open=open_ms,
            close=close_ms,
            payload=payload,
        )

    def covers(self, instant: Millis, inclusive_end: bool = True) -> bool:
        """Return True if ``instant`` falls inside the validity window."""
        if inclusive_end:
            return self.open <= instant <= self.close
        return self.open <= instant < self.close

    def is_available(self, instant: Millis) -> bool:
        """Return True if the version was published at or before ``instant``."""
        return self.publish_date <= instant

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable camelCase representation."""
        data: Dict[str, Any] = dict(self.payload)
        data.update(
            {
                "version": self.version,
                "publishDate": self.publish_date,
                "open": self.open,
                "close": self.close,
            }
        )
        return data

    def __str__(self) -> str:
        return self.version


def selection_key(record: VersionRecord) -> Tuple[Millis, Millis]:
    """Precedence between versions: newest publish date, then latest open."""
    return (record.publish_date, record.open)
