"""
Custom exception hierarchy for fareversion.

All exceptions inherit from :class:`FareVersionError` and carry optional
structured metadata via the ``details`` attribute for diagnostics and
logging.

Resolution outcomes (no published version, no covering version) are never
raised; they are reported through :class:`~fareversion.models.Reason`.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class FareVersionError(Exception):
    """Base exception for all fareversion errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(FareVersionError):
    """Raised when a configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class FileOperationError(FareVersionError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/backup).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class DataFileError(FareVersionError):
    """Raised when version data cannot be decoded into records.

    Args:
        message: Error description.
        file_path: Path to the data file, if the data came from disk.
        record_index: Position of the offending record in the file.
        content: Raw offending content, truncated for safety.
    """

    __slots__ = ("file_path", "record_index", "content")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        record_index: Optional[int] = None,
        content: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        _add_if(details, "record", record_index)

        if content is not None:
            details["content"] = _truncate(content)

        super().__init__(message, details)

        self.file_path = file_path
        self.record_index = record_index
        self.content = content


class InvalidInstantError(FareVersionError):
    """Raised when a value cannot be normalized to epoch milliseconds.

    Args:
        message: Error description.
        value: The rejected value.
    """

    __slots__ = ("value",)

    def __init__(self, message: str, *, value: Any = None) -> None:
        details: MutableMapping[str, Any] = {}
        if value is not None:
            details["value"] = _truncate(repr(value))
            details["type"] = type(value).__name__

        super().__init__(message, details)

        self.value = value


class InvalidWindowError(FareVersionError):
    """Raised when a validity window would end before it opens.

    Args:
        message: Error description.
        version: Identifier of the version being changed.
        open_ms: Requested window start.
        close_ms: Requested window end.
    """

    __slots__ = ("version", "open_ms", "close_ms")

    def __init__(
        self,
        message: str,
        *,
        version: Optional[str] = None,
        open_ms: Optional[float] = None,
        close_ms: Optional[float] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)
        _add_if(details, "open", open_ms)
        _add_if(details, "close", close_ms)

        super().__init__(message, details)

        self.version = version
        self.open_ms = open_ms
        self.close_ms = close_ms
