"""
fareversion — resolve which published fare version governs a travel date.

Given a list of versions (each with a publish date and a validity window),
a purchase date and a travel date, fareversion picks the version that was
already published at purchase time and covers the travel date, preferring
the most recently published one.

Example:
    >>> from fareversion import VersionRecord, resolve_version
    >>> v1 = VersionRecord("v1", publish_date=100, open=100, close=200)
    >>> resolve_version([v1], 150, 150).match_version
    'v1'
"""

from __future__ import annotations

from fareversion.__version__ import __version__
from fareversion.core.resolver import resolve_version, resolve_version_name
from fareversion.core.explanation import build_explanation
from fareversion.models import (
    Reason,
    ResolutionOptions,
    ResolutionResult,
    VersionRecord,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "fareversion Contributors"
__license__ = "Apache-2.0"
__description__ = "Resolve the fare version that governs a travel date."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "resolve_version",
    "resolve_version_name",
    "build_explanation",
    "Reason",
    "ResolutionOptions",
    "ResolutionResult",
    "VersionRecord",
]
