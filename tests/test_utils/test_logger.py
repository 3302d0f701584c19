from __future__ import annotations

import io
import sys
import logging
import threading
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

import fareversion.utils.logger as logger_module
from fareversion.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    _colors_allowed,
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Clear handlers, level and the configured flag around a test."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def _record(level: int = logging.INFO, msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="fareversion.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter ANSI color formatting."""

    def test_defaults(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        assert formatter.use_color is True
        assert formatter.datefmt is None

    def test_color_codes_defined(self) -> None:
        for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert ColoredFormatter.COLORS[level].startswith("\033[")
        assert ColoredFormatter.RESET == "\033[0m"

    def test_format_with_color(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)

        result = formatter.format(_record(logging.WARNING))

        assert result == "\033[33mWARNING\033[0m: Test message"

    def test_format_without_color(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "INFO: Test message"

    def test_format_restores_levelname(self) -> None:
        """Other handlers on the same logger must see the plain level name."""
        formatter = ColoredFormatter("%(levelname)s", use_color=True)
        record = _record(logging.ERROR)

        formatter.format(record)

        assert record.levelname == "ERROR"

    def test_unknown_level_uncolored(self) -> None:
        formatter = ColoredFormatter("%(levelname)s", use_color=True)
        record = _record(25)

        assert formatter.format(record) == "Level 25"


@pytest.mark.unit
class TestColorsAllowed:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _colors_allowed(stream) is False

    def test_ci_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CI", "1")
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _colors_allowed(stream) is False

    def test_tty_stream(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _colors_allowed(stream) is True

    def test_plain_stream(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        assert _colors_allowed(io.StringIO()) is False

    def test_isatty_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        stream = MagicMock()
        stream.isatty.side_effect = ValueError("closed")

        assert _colors_allowed(stream) is False


@pytest.mark.unit
class TestLevelForVerbosity:
    @pytest.mark.parametrize(
        "verbose, level",
        [(-1, logging.WARNING), (0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_mapping(self, verbose: int, level: int) -> None:
        assert level_for_verbosity(verbose) == level


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging configuration."""

    def test_default_config(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)

        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].stream is captured_stream
        assert package_logger.propagate is False

    def test_default_stream_is_stderr(self, clean_logger_state: None) -> None:
        setup_logging()

        assert logging.getLogger(ROOT_LOGGER_NAME).handlers[0].stream is sys.stderr

    def test_verbose_format(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("loader").debug("Loaded 4 version(s)")

        output = captured_stream.getvalue()
        assert "fareversion.loader" in output
        assert "Loaded 4 version(s)" in output

    def test_replaces_previous_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=captured_stream)

        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert len(handlers) == 1
        assert handlers[0].stream is captured_stream

    def test_filters_below_level(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.WARNING, stream=captured_stream)
        logger = get_logger("config")

        logger.info("hidden")
        logger.warning("shown")

        output = captured_stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_plain_stream_gets_no_ansi(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)

        get_logger().error("boom")

        assert "\033[" not in captured_stream.getvalue()

    def test_thread_safe(self, clean_logger_state: None) -> None:
        threads = [
            threading.Thread(target=setup_logging, kwargs={"stream": io.StringIO()})
            for _ in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1
        assert is_logging_configured() is True


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger namespacing."""

    @pytest.mark.parametrize("name", [None, "", "fareversion"])
    def test_package_logger(self, clean_logger_state: None, name) -> None:
        assert get_logger(name).name == ROOT_LOGGER_NAME

    def test_simple_name(self, clean_logger_state: None) -> None:
        assert get_logger("config").name == "fareversion.config"

    def test_qualified_name_not_doubled(self, clean_logger_state: None) -> None:
        assert get_logger("fareversion.config") is get_logger("config")

    def test_dotted_name(self, clean_logger_state: None) -> None:
        assert get_logger("commands.move").name == "fareversion.commands.move"

    def test_adds_null_handler_when_unconfigured(self, clean_logger_state: None) -> None:
        get_logger("loader")

        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_keeps_configured_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)

        get_logger("loader")

        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        assert not any(isinstance(h, logging.NullHandler) for h in handlers)


@pytest.mark.unit
class TestDisableLogging:
    def test_lifecycle(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        assert is_logging_configured() is False

        setup_logging(stream=captured_stream)
        assert is_logging_configured() is True

        disable_logging()
        get_logger("loader").error("silenced")

        assert is_logging_configured() is False
        assert captured_stream.getvalue() == ""
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert package_logger.level == logging.NOTSET
        assert all(isinstance(h, logging.NullHandler) for h in package_logger.handlers)

    def test_idempotent(self, clean_logger_state: None) -> None:
        disable_logging()
        disable_logging()

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_default_stream_untouched(self, clean_logger_state: None) -> None:
        with patch.object(sys, "stderr", io.StringIO()) as fake_stderr:
            setup_logging()
            disable_logging()
            get_logger().error("gone")

        assert fake_stderr.getvalue() == ""
