"""
Unified data model exports for fareversion.

Example:
    >>> from fareversion.models import VersionRecord, ResolutionResult, Reason
"""

from __future__ import annotations

from fareversion.models.version_record import VersionRecord, selection_key
from fareversion.models.resolution import (
    Reason,
    ResolutionOptions,
    ResolutionResult,
)

__all__ = [
    "VersionRecord",
    "selection_key",
    "Reason",
    "ResolutionOptions",
    "ResolutionResult",
]
