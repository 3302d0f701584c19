"""
Console output for fareversion, rendered with Rich.

Commands print results through the shared console returned by
:func:`get_raw_console` and the ``print_*`` helpers below. Diagnostics go
through :mod:`fareversion.utils.logger` instead, so stdout stays clean for
``--format json`` and ``generate`` output.

Resolution statuses and reason codes have their own theme styles
(``status.*`` and ``reason.*``) so commands can use markup such as
``[status.match]✓ MATCH[/status.match]`` without hard-coding colors.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from rich.console import Console
from rich.table import Column, Table
from rich.theme import Theme

FAREVERSION_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "version": "bold cyan",
        "status.match": "bold green",
        "status.superseded": "cyan",
        "status.pending": "yellow",
        "status.idle": "dim",
        "reason.ok": "green",
        "reason.unpublished": "red",
        "reason.uncovered": "yellow",
    }
)

_REASON_STYLES = {
    "OK": "reason.ok",
    "NO_AVAILABLE_VERSIONS": "reason.unpublished",
    "NO_VERSION_COVERS_TRAVEL_DATE": "reason.uncovered",
}

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Color only for an interactive stdout, unless NO_COLOR or CI is set."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError, ValueError):
        return False


def _build_console() -> Console:
    color = _should_use_color()
    return Console(theme=FAREVERSION_THEME, no_color=not color, highlight=color)


def _get_console() -> Console:
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = _build_console()
    return _console


def reconfigure_console() -> None:
    """Forget the shared console; the next use builds a new one.

    The CLI calls this after ``--color/--no-color`` changed ``NO_COLOR``.
    """
    global _console
    with _console_lock:
        _console = None


def get_raw_console() -> Console:
    """Return the shared Rich console."""
    return _get_console()


def _emit(style: str, prefix: str, message: str) -> None:
    _get_console().print(f"{prefix} {message}", style=style)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _emit("success", prefix, message)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _emit("error", prefix, message)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _emit("warning", prefix, message)


def print_table(
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[Union[str, Column]],
    *,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    row_style: Optional[Callable[[Mapping[str, Any]], Optional[str]]] = None,
) -> None:
    """Print ``rows`` as a table; nothing is printed for no rows.

    Args:
        rows: One mapping per row, keyed by column header. Missing keys
            render as empty cells.
        columns: Column headers, or :class:`rich.table.Column` objects
            carrying their own style, justification and wrapping.
        title: Table title.
        caption: Line printed under the table.
        row_style: Optional callback returning a style for a row.
    """
    if not rows:
        return

    table = Table(*columns, title=title, caption=caption, header_style="bold")
    headers = [str(column.header) for column in table.columns]

    for row in rows:
        table.add_row(
            *(str(row.get(header, "")) for header in headers),
            style=row_style(row) if row_style else None,
        )

    _get_console().print(table)


def colorize_reason(reason: str) -> str:
    """Wrap a reason code in the markup of its theme style."""
    style = _REASON_STYLES.get(str(reason).upper())
    return f"[{style}]{reason}[/{style}]" if style else str(reason)
