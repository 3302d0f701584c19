"""
Utility helpers for fareversion.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers
- Instant normalization and date formatting

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from fareversion.utils.filesystem import (
    create_backup,
    list_backups,
    safe_read_file,
    safe_write_file,
)
from fareversion.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)
from fareversion.utils.console import (
    colorize_reason,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)
from fareversion.utils.timeconv import format_millis, from_millis, to_millis

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_reason",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_for_verbosity",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "create_backup",
    "list_backups",
    # Time
    "to_millis",
    "from_millis",
    "format_millis",
]
