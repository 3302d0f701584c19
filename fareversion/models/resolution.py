"""
Resolution outcome models for fareversion.

A resolution is always a value, never an exception: :class:`ResolutionResult`
carries the matched record (if any) together with a :class:`Reason` code
that says why the outcome is what it is.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from fareversion.constants import DEFAULT_INCLUSIVE_END
from fareversion.models.version_record import VersionRecord
from fareversion.utils.timeconv import Millis


class Reason(str, Enum):
    """Outcome code of a resolution."""

    OK = "OK"
    NO_AVAILABLE_VERSIONS = "NO_AVAILABLE_VERSIONS"
    NO_VERSION_COVERS_TRAVEL_DATE = "NO_VERSION_COVERS_TRAVEL_DATE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResolutionOptions:
    """Options applied to a resolution.

    Attributes:
        inclusive_end: Treat ``close`` as part of the validity window.
    """

    inclusive_end: bool = DEFAULT_INCLUSIVE_END

    @classmethod
    def coerce(
        cls,
        value: Union["ResolutionOptions", Mapping[str, Any], None],
    ) -> "ResolutionOptions":
        """Normalize caller-supplied options.

        Accepts ``None``, a :class:`ResolutionOptions`, or a mapping using
        either ``inclusive_end`` or ``inclusiveEnd``. The end boundary is
        inclusive unless the supplied flag is exactly ``False``.
        """
        if isinstance(value, ResolutionOptions):
            flag: Any = value.inclusive_end
        elif isinstance(value, Mapping):
            flag = value.get("inclusive_end", value.get("inclusiveEnd"))
        else:
            flag = None
        return cls(inclusive_end=flag is not False)

    def to_json(self) -> Dict[str, bool]:
        return {"inclusiveEnd": self.inclusive_end}


Records = Tuple[VersionRecord, ...]


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving a travel date against a list of versions.

    Record sequences are ordered by publish date, ascending.

    Attributes:
        match: Selected version, or ``None``.
        reason: Why this outcome occurred.
        candidates: Versions both available and covering the travel date.
        available: Versions published at or before the purchase date.
        future_covering: Versions covering the travel date that were not yet
            published at the purchase date. Informational only.
        purchase_date: Normalized purchase instant (epoch ms).
        travel_date: Normalized travel instant (epoch ms).
        options: Options actually applied.
        explanation: Human-readable description of the outcome.
    """

    match: Optional[VersionRecord]
    reason: Reason
    candidates: Records
    available: Records
    future_covering: Records
    purchase_date: Millis
    travel_date: Millis
    options: ResolutionOptions
    explanation: str = ""

    @property
    def ok(self) -> bool:
        """True when a version was selected."""
        return self.reason is Reason.OK

    @property
    def match_version(self) -> Optional[str]:
        """Identifier of the matched version, or ``None``."""
        return self.match.version if self.match is not None else None

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable camelCase representation."""
        return {
            "match": self.match.to_json() if self.match is not None else None,
            "reason": self.reason.value,
            "candidates": [v.to_json() for v in self.candidates],
            "available": [v.to_json() for v in self.available],
            "futureCovering": [v.to_json() for v in self.future_covering],
            "purchaseDate": self.purchase_date,
            "travelDate": self.travel_date,
            "options": self.options.to_json(),
            "explanation": self.explanation,
        }
