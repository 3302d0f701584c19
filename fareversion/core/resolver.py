"""
Version resolution for fareversion.

Decides which published version governs a travel date when the ticket is
bought at a given purchase date:

1. A version is **available** if it was published at or before the
   purchase date.
2. A version **covers** the travel date if the travel date lies in its
   ``[open, close]`` window (``close`` exclusive with
   ``inclusive_end=False``).
3. Among available, covering versions (the **candidates**) the most
   recently published one wins; equal publish dates go to the later
   ``open``; anything still tied keeps the earlier record in publish-date
   order.

Versions that would cover the travel date but are published after the
purchase date are reported as ``future_covering``. They are never selected.

The functions here are pure: they never mutate their arguments, never log,
and report "no match" through :class:`~fareversion.models.Reason` rather than
by raising.

Typical usage::

    result = resolve_version(records, "2025-11-01", "2025-12-24")
    if result.ok:
        print(result.match.version)
    print(result.explanation)
"""

from __future__ import annotations

from collections import abc
from typing import Any, List, Mapping, Optional, Union

from fareversion.core.explanation import build_explanation
from fareversion.exceptions import DataFileError
from fareversion.models import (
    Reason,
    ResolutionOptions,
    ResolutionResult,
    VersionRecord,
    selection_key,
)
from fareversion.utils.timeconv import InstantLike, Millis, to_millis

OptionsLike = Union[ResolutionOptions, Mapping[str, Any], None]


def _is_proper_sequence(value: Any) -> bool:
    return isinstance(value, abc.Sequence) and not isinstance(value, (str, bytes))


def _as_records(versions: abc.Sequence) -> List[VersionRecord]:
    """Accept records or camelCase mappings; drop entries that are neither."""
    records = []
    for entry in versions:
        if isinstance(entry, VersionRecord):
            records.append(entry)
        elif isinstance(entry, abc.Mapping):
            try:
                records.append(VersionRecord.from_mapping(entry))
            except DataFileError:
                continue
    return records


def resolve_version(
    versions: Any,
    purchase_date: InstantLike,
    travel_date: InstantLike,
    options: OptionsLike = None,
) -> ResolutionResult:
    """Resolve the version governing ``travel_date`` at ``purchase_date``.

    Args:
        versions: Sequence of :class:`VersionRecord` or of camelCase mappings
            (``version``, ``publishDate``, ``open``, ``close``). Anything that
            is not a non-string sequence is treated like an empty list, and
            entries that cannot be read as a record are skipped.
        purchase_date: Purchase instant (epoch ms or instant-like).
        travel_date: Travel instant (epoch ms or instant-like).
        options: :class:`ResolutionOptions` or a mapping with
            ``inclusive_end`` / ``inclusiveEnd``. Defaults to an inclusive
            end boundary.

    Returns:
        A fresh :class:`ResolutionResult`.

    Raises:
        InvalidInstantError: A date argument cannot be normalized.
    """
    applied = ResolutionOptions.coerce(options)
    p = to_millis(purchase_date)
    t = to_millis(travel_date)

    if not _is_proper_sequence(versions) or len(versions) == 0:
        return _result(None, Reason.NO_AVAILABLE_VERSIONS, [], [], [], p, t, applied)

    # Stable: records sharing a publish date keep their input order
    ordered = sorted(_as_records(versions), key=lambda v: v.publish_date)

    def in_range(record: VersionRecord) -> bool:
        return record.covers(t, applied.inclusive_end)

    future_covering = [v for v in ordered if not v.is_available(p) and in_range(v)]

    available = [v for v in ordered if v.is_available(p)]
    if not available:
        return _result(
            None, Reason.NO_AVAILABLE_VERSIONS, [], [], future_covering, p, t, applied
        )

    candidates = [v for v in available if in_range(v)]
    if not candidates:
        return _result(
            None,
            Reason.NO_VERSION_COVERS_TRAVEL_DATE,
            [],
            available,
            future_covering,
            p,
            t,
            applied,
        )

    # max() keeps the first of several equal keys
    match = max(candidates, key=selection_key)
    return _result(
        match, Reason.OK, candidates, available, future_covering, p, t, applied
    )


def _result(
    match: Optional[VersionRecord],
    reason: Reason,
    candidates: List[VersionRecord],
    available: List[VersionRecord],
    future_covering: List[VersionRecord],
    purchase_date: Millis,
    travel_date: Millis,
    options: ResolutionOptions,
) -> ResolutionResult:
    explanation = build_explanation(
        match,
        candidates,
        available,
        future_covering,
        purchase_date,
        travel_date,
        reason,
        options.inclusive_end,
    )
    return ResolutionResult(
        match=match,
        reason=reason,
        candidates=tuple(candidates),
        available=tuple(available),
        future_covering=tuple(future_covering),
        purchase_date=purchase_date,
        travel_date=travel_date,
        options=options,
        explanation=explanation,
    )


def resolve_version_name(
    versions: Any,
    purchase_date: InstantLike,
    travel_date: InstantLike,
    options: OptionsLike = None,
) -> Optional[str]:
    """Return only the identifier of the resolved version, or ``None``."""
    return resolve_version(versions, purchase_date, travel_date, options).match_version
