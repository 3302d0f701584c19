"""
Filesystem utilities for fareversion.

Version data and configuration files are read with a size cap, and data
files are rewritten atomically: the new text goes to a hidden sibling file
which then replaces the target. An existing file can be kept as
``<name>.<timestamp>.backup`` first. Every ``OSError`` surfaces as
``FileOperationError``.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Type, Union

from fareversion.constants import MAX_FILE_SIZE
from fareversion.exceptions import FileOperationError
from fareversion.utils.logger import get_logger

logger = get_logger("filesystem")

PathLike = Union[str, Path]

BACKUP_SUFFIX = ".backup"


@contextmanager
def _translate_errors(
    path: Path,
    operation: str,
    summary: str,
    errors: Tuple[Type[BaseException], ...] = (OSError,),
) -> Iterator[None]:
    try:
        yield
    except errors as exc:
        raise FileOperationError(
            f"{summary}: {exc}",
            file_path=str(path),
            operation=operation,
            original_error=exc,
        ) from exc


def _existing_file(path: Path) -> Path:
    """Resolve ``path`` and make sure it names an existing regular file."""
    problem = None
    if not path.exists():
        problem = "File not found"
    elif not path.is_file():
        problem = "Not a file"

    if problem:
        raise FileOperationError(f"{problem}: {path}", file_path=str(path), operation="read")
    return path.resolve()


def _discard(temp_path: Path) -> None:
    try:
        temp_path.unlink()
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", temp_path, exc)
    else:
        logger.debug("Removed temporary file %s", temp_path)


def _atomic_write(target: Path, content: str) -> None:
    """Write text to ``target`` through a sibling temporary file."""
    with _translate_errors(target, "write", "Atomic write failed"):
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp"
        )
        temp_path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            temp_path.replace(target)
        except OSError:
            _discard(temp_path)
            raise


def backup_path_for(path: Path, when: Optional[datetime] = None) -> Path:
    """Return the backup location for ``path``: ``<name>.<timestamp>.backup``."""
    stamp = (when or datetime.now()).strftime("%Y%m%d_%H%M%S_%f")
    return path.with_name(f"{path.name}.{stamp}{BACKUP_SUFFIX}")


def _copy_to_backup(path: Path) -> Path:
    backup = backup_path_for(path)
    with _translate_errors(path, "backup", "Failed to create backup"):
        shutil.copy2(path, backup)
    logger.debug("Backed up %s to %s", path, backup.name)
    return backup


def create_backup(file_path: PathLike) -> Path:
    """Copy ``file_path`` next to itself under a timestamped backup name."""
    return _copy_to_backup(_existing_file(Path(file_path)))


def list_backups(file_path: PathLike) -> List[Path]:
    """List backups of ``file_path``, newest first."""
    path = Path(file_path)
    # Timestamps sort lexically, so name order is age order.
    found = path.parent.glob(f"{path.name}.*{BACKUP_SUFFIX}")
    return sorted(found, key=lambda p: p.name, reverse=True)


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Read a text file, refusing files larger than ``max_size`` bytes.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed size in bytes (``None`` disables the check).
        encoding: Text encoding.

    Returns:
        File contents.

    Raises:
        FileOperationError: Missing, oversized, or unreadable file.
    """
    path = _existing_file(Path(file_path))

    with _translate_errors(path, "read", "Failed to read file", (OSError, UnicodeDecodeError)):
        size = path.stat().st_size
        if max_size is None or size <= max_size:
            return path.read_text(encoding=encoding)

    raise FileOperationError(
        f"File too large: {size} bytes (max {max_size})",
        file_path=str(path),
        operation="read",
    )


def safe_write_file(
    file_path: PathLike,
    content: str,
    *,
    create_backup: bool = True,
) -> Optional[Path]:
    """Atomically replace ``file_path`` with ``content``.

    Returns the backup path, or ``None`` when no backup was made (the file
    did not exist yet, or ``create_backup`` is false).
    """
    path = Path(file_path)
    backup = _copy_to_backup(path) if create_backup and path.is_file() else None
    _atomic_write(path, content)
    return backup
