"""
Core functionality exports for fareversion.

    from fareversion.core import resolve_version, load_versions
"""

from __future__ import annotations

from fareversion.core.resolver import resolve_version, resolve_version_name
from fareversion.core.explanation import build_explanation
from fareversion.core.adjust import MoveResult, move_window, replace_record
from fareversion.core.generator import SampleDataGenerator, generate_sample_versions
from fareversion.core.loader import (
    dump_versions,
    load_versions,
    parse_versions,
    save_versions,
)

__all__ = [
    "resolve_version",
    "resolve_version_name",
    "build_explanation",
    "MoveResult",
    "move_window",
    "replace_record",
    "SampleDataGenerator",
    "generate_sample_versions",
    "load_versions",
    "parse_versions",
    "dump_versions",
    "save_versions",
]
