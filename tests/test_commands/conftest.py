from __future__ import annotations

import json
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

from fareversion.utils.console import reconfigure_console
from fareversion.utils.logger import disable_logging

# Four overlapping versions, dates as ISO strings
VERSIONS = [
    {
        "version": "v1",
        "publishDate": "2025-09-23",
        "open": "2025-10-01",
        "close": "2025-12-31",
        "category": "Version 1",
    },
    {
        "version": "v2",
        "publishDate": "2025-11-01",
        "open": "2025-11-05",
        "close": "2026-01-31",
        "category": "Version 2",
    },
    {
        "version": "v3",
        "publishDate": "2026-01-10",
        "open": "2025-12-01",
        "close": "2026-03-31",
        "category": "Version 3",
    },
    {
        "version": "v4",
        "publishDate": "2026-02-01",
        "open": "2025-12-01",
        "close": "2026-04-30",
        "category": "Version 4",
    },
]


@pytest.fixture(autouse=True)
def isolated_cli(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run every CLI test from an empty directory with a fresh console and logger."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FAREVERSION_CONFIG", raising=False)
    monkeypatch.delenv("FAREVERSION_COLOR", raising=False)
    # Recorded so the value the CLI sets or pops is restored afterwards
    monkeypatch.setenv("NO_COLOR", "1")
    reconfigure_console()

    yield

    disable_logging()
    reconfigure_console()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def versions_file(tmp_path: Path) -> Path:
    path = tmp_path / "versions.json"
    path.write_text(json.dumps(VERSIONS, indent=2), encoding="utf-8")
    return path
