"""
Reading and writing version data files.

A data file holds a list of version records using the camelCase field names
(``version``, ``publishDate``, ``open``, ``close``). Instants may be epoch
milliseconds or ISO-8601 strings. Extra fields are preserved.

JSON::

    [
      {"version": "v1", "publishDate": "2025-09-23", "open": "2025-10-01",
       "close": "2025-12-31", "category": "Version 1"}
    ]

or ``{"versions": [...]}``.

TOML::

    [[versions]]
    version = "v1"
    publishDate = 2025-09-23
    open = 2025-10-01
    close = 2025-12-31
"""

from __future__ import annotations

import json
from pathlib import Path
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

import tomli as tomllib
import tomli_w

from fareversion.constants import DATA_FILE_FORMATS
from fareversion.exceptions import DataFileError, FareVersionError
from fareversion.models import VersionRecord
from fareversion.utils.filesystem import safe_read_file, safe_write_file
from fareversion.utils.logger import get_logger

logger = get_logger("loader")


def detect_format(path: Union[str, Path]) -> str:
    """Return ``"json"`` or ``"toml"`` based on the file suffix.

    Raises:
        DataFileError: Unsupported suffix.
    """
    suffix = Path(path).suffix.lower()
    try:
        return DATA_FILE_FORMATS[suffix]
    except KeyError:
        supported = ", ".join(sorted(DATA_FILE_FORMATS))
        raise DataFileError(
            f"Unsupported data file type {suffix or '<none>'!r} "
            f"(expected one of {supported})",
            file_path=str(path),
        ) from None


def parse_versions(
    text: str,
    fmt: str = "json",
    *,
    source: Optional[str] = None,
) -> List[VersionRecord]:
    """Decode version records from ``text``.

    Args:
        text: File contents.
        fmt: ``"json"`` or ``"toml"``.
        source: Label used in error messages (usually the file path).

    Returns:
        Records in file order.

    Raises:
        DataFileError: Malformed content or records.
    """
    if fmt == "json":
        try:
            raw: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataFileError(
                f"Invalid JSON: {exc.msg} at line {exc.lineno}",
                file_path=source,
            ) from exc
    elif fmt == "toml":
        try:
            raw = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DataFileError(f"Invalid TOML: {exc}", file_path=source) from exc
    else:
        raise DataFileError(f"Unknown data format: {fmt!r}", file_path=source)

    if isinstance(raw, dict):
        raw = raw.get("versions")

    if not isinstance(raw, list):
        raise DataFileError(
            "Expected a list of version records or a 'versions' list",
            file_path=source,
        )

    records: List[VersionRecord] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise DataFileError(
                f"Version record must be a table/object, got {type(item).__name__}",
                file_path=source,
                record_index=index,
            )
        try:
            records.append(VersionRecord.from_mapping(item))
        except DataFileError as exc:
            raise DataFileError(
                exc.message,
                file_path=source,
                record_index=index,
                content=exc.content,
            ) from exc

    return records


def load_versions(path: Union[str, Path]) -> List[VersionRecord]:
    """Load version records from a JSON or TOML file.

    Raises:
        DataFileError: Unsupported or malformed file.
        FileOperationError: The file cannot be read.
    """
    fmt = detect_format(path)
    text = safe_read_file(path)
    records = parse_versions(text, fmt, source=str(path))

    logger.info("Loaded %d version(s) from %s", len(records), path)
    _warn_on_suspicious(records)
    return records


def _warn_on_suspicious(records: Iterable[VersionRecord]) -> None:
    """Log records that break producer invariants; resolution still proceeds."""
    seen = set()
    for record in records:
        if record.close < record.open:
            logger.warning(
                "Version %s closes before it opens (%s < %s)",
                record.version,
                record.close,
                record.open,
            )
        if record.version in seen:
            logger.warning("Duplicate version identifier %s", record.version)
        seen.add(record.version)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_versions(records: Iterable[VersionRecord], fmt: str = "json") -> str:
    """Encode records as JSON or TOML text."""
    items = [record.to_json() for record in records]

    if fmt == "json":
        return json.dumps(items, indent=2, default=_json_default) + "\n"

    if fmt == "toml":
        try:
            return tomli_w.dumps({"versions": items})
        except TypeError as exc:
            # TOML has no null; other unsupported payload types land here too
            raise DataFileError(f"Cannot write version data as TOML: {exc}") from exc

    raise DataFileError(f"Unknown data format: {fmt!r}")


def save_versions(
    path: Union[str, Path],
    records: Iterable[VersionRecord],
    *,
    create_backup: bool = True,
) -> Optional[Path]:
    """Write records to ``path`` atomically.

    Returns:
        Path of the backup of the previous file, if one was made.
    """
    records = list(records)
    content = dump_versions(records, detect_format(path))
    try:
        backup = safe_write_file(path, content, create_backup=create_backup)
    except FareVersionError:
        logger.error("Could not write %d version(s) to %s", len(records), path)
        raise

    logger.info("Wrote %d version(s) to %s", len(records), path)
    return backup
