"""
Natural-language explanation of a resolution outcome.

The text is derived from the resolution inputs and outputs only; building
it never influences which version is selected.
"""

from __future__ import annotations

from typing import Optional, Sequence

from fareversion.constants import DEFAULT_DATE_FORMAT
from fareversion.models import Reason, VersionRecord, selection_key
from fareversion.utils.timeconv import Millis, format_millis


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _future_aside(
    future_covering: Sequence[VersionRecord],
    date_format: str,
    *,
    also: bool,
) -> str:
    """Sentence naming the most recently published future-covering version."""
    if not future_covering:
        return ""
    best = max(future_covering, key=selection_key)
    verb = "also covers" if also else "would cover"
    return (
        f" Note: version {best.version} (published "
        f"{format_millis(best.publish_date, date_format)}) {verb} the travel date "
        f"but was not yet available at purchase."
    )


def build_explanation(
    match: Optional[VersionRecord],
    candidates: Sequence[VersionRecord],
    available: Sequence[VersionRecord],
    future_covering: Sequence[VersionRecord],
    purchase_date: Millis,
    travel_date: Millis,
    reason: Reason,
    inclusive_end: bool,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Describe why a resolution produced its outcome.

    Args:
        match: Selected version, if any.
        candidates: Available versions covering the travel date.
        available: Versions published by the purchase date.
        future_covering: Covering versions published after the purchase date.
        purchase_date: Purchase instant (epoch ms).
        travel_date: Travel instant (epoch ms).
        reason: Outcome code.
        inclusive_end: Whether ``close`` belongs to the validity window.
        date_format: ``strftime`` format for dates in the text.

    Returns:
        One or more sentences of plain text.

    Example::

        >>> build_explanation(v2, [v1, v2], [v1, v2], [], p, t, Reason.OK, True)
        'Version v2 applies: published 2025-10-01, valid 2025-10-05 to
        2026-01-02 (end date inclusive). It supersedes 1 older covering
        version.'
    """
    purchase = format_millis(purchase_date, date_format)
    travel = format_millis(travel_date, date_format)

    if reason is Reason.NO_AVAILABLE_VERSIONS:
        return f"No versions had been published by the purchase date ({purchase})."

    if reason is Reason.NO_VERSION_COVERS_TRAVEL_DATE:
        verb = "was" if len(available) == 1 else "were"
        text = (
            f"{_plural(len(available), 'version')} {verb} available on {purchase}, "
            f"but none covers the travel date ({travel})."
        )
        return text + _future_aside(future_covering, date_format, also=False)

    if match is None:
        raise ValueError(f"Reason {reason} requires a matched version")

    boundary = "end date inclusive" if inclusive_end else "end date exclusive"
    text = (
        f"Version {match.version} applies: published "
        f"{format_millis(match.publish_date, date_format)}, valid "
        f"{format_millis(match.open, date_format)} to "
        f"{format_millis(match.close, date_format)} ({boundary})."
    )
    superseded = len(candidates) - 1
    if superseded > 0:
        text += (
            f" It supersedes {_plural(superseded, 'older covering version')}."
        )
    return text + _future_aside(future_covering, date_format, also=True)
