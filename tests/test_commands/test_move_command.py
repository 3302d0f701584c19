"""Tests for the ``fareversion move`` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fareversion.cli import cli
from fareversion.core import load_versions
from fareversion.utils import list_backups, to_millis


def _by_name(path: Path) -> dict:
    return {r.version: r for r in load_versions(path)}


@pytest.mark.integration
class TestMove:
    def test_moves_window_in_place(self, runner: CliRunner, versions_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["move", str(versions_file), "v1", "--open", "2025-10-05", "--close", "2025-12-20"],
        )

        assert result.exit_code == 0
        assert "v1: valid 2025-10-05 → 2025-12-20, published 2025-09-23" in result.output
        assert "[NOTE]" not in result.output
        assert "[OK] Saved" in result.output

        moved = _by_name(versions_file)["v1"]
        assert moved.open == to_millis("2025-10-05")
        assert moved.close == to_millis("2025-12-20")
        assert moved.payload == {"category": "Version 1"}

    def test_keeps_other_records(self, runner: CliRunner, versions_file: Path) -> None:
        before = _by_name(versions_file)

        runner.invoke(
            cli,
            ["move", str(versions_file), "v1", "--open", "2025-10-05", "--close", "2025-12-20"],
        )

        after = _by_name(versions_file)
        assert list(after) == ["v1", "v2", "v3", "v4"]
        assert after["v3"] == before["v3"]

    def test_duplicate_version_moves_first_only(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        path = tmp_path / "dupes.json"
        data = [
            {"version": "v2", "publishDate": "2025-10-01", "open": "2025-10-01", "close": "2025-11-30"},
            {"version": "v2", "publishDate": "2026-01-01", "open": "2026-01-05", "close": "2026-03-31"},
        ]
        path.write_text(json.dumps(data), encoding="utf-8")

        result = runner.invoke(
            cli,
            ["move", str(path), "v2", "--open", "2025-10-05", "--close", "2025-12-20"],
        )

        assert result.exit_code == 0
        first, second = load_versions(path)
        assert first.open == to_millis("2025-10-05")
        assert first.close == to_millis("2025-12-20")
        assert second.publish_date == to_millis("2026-01-01")
        assert second.open == to_millis("2026-01-05")
        assert second.close == to_millis("2026-03-31")

    def test_open_before_publish_moves_publish_date(
        self, runner: CliRunner, versions_file: Path
    ) -> None:
        result = runner.invoke(
            cli,
            ["move", str(versions_file), "v2", "--open", "2025-10-15", "--close", "2026-02-15"],
        )

        assert result.exit_code == 0
        assert "published 2025-10-15" in result.output
        assert "[NOTE] Publish date moved back to the new opening date" in result.output
        assert _by_name(versions_file)["v2"].publish_date == to_millis("2025-10-15")

    def test_backup_created_by_default(self, runner: CliRunner, versions_file: Path) -> None:
        original = versions_file.read_text(encoding="utf-8")

        runner.invoke(
            cli,
            ["move", str(versions_file), "v1", "--open", "2025-10-05", "--close", "2025-12-20"],
        )

        backups = list_backups(versions_file)
        assert len(backups) == 1
        assert backups[0].read_text(encoding="utf-8") == original

    def test_no_backup(self, runner: CliRunner, versions_file: Path) -> None:
        runner.invoke(
            cli,
            [
                "move", str(versions_file), "v1",
                "--open", "2025-10-05", "--close", "2025-12-20", "--no-backup",
            ],
        )

        assert list_backups(versions_file) == []

    def test_output_file(self, runner: CliRunner, versions_file: Path, tmp_path: Path) -> None:
        original = versions_file.read_text(encoding="utf-8")

        result = runner.invoke(
            cli,
            [
                "move", str(versions_file), "v1",
                "--open", "2025-10-05", "--close", "2025-12-20", "-o", "moved.toml",
            ],
        )

        assert result.exit_code == 0
        assert versions_file.read_text(encoding="utf-8") == original
        assert _by_name(tmp_path / "moved.toml")["v1"].open == to_millis("2025-10-05")

    def test_written_json_uses_millis(self, runner: CliRunner, versions_file: Path) -> None:
        runner.invoke(
            cli,
            ["move", str(versions_file), "v4", "--open", "2026-01-01", "--close", "2026-05-31"],
        )

        data = json.loads(versions_file.read_text(encoding="utf-8"))
        assert data[3]["open"] == 1767225600000


@pytest.mark.integration
class TestMoveErrors:
    def test_unknown_version(self, runner: CliRunner, versions_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["move", str(versions_file), "v9", "--open", "2025-10-05", "--close", "2025-12-20"],
        )

        assert result.exit_code == 1
        assert "Version 'v9' not found" in result.output
        assert list_backups(versions_file) == []

    def test_close_before_open(self, runner: CliRunner, versions_file: Path) -> None:
        original = versions_file.read_text(encoding="utf-8")

        result = runner.invoke(
            cli,
            ["move", str(versions_file), "v1", "--open", "2025-12-20", "--close", "2025-10-05"],
        )

        assert result.exit_code == 1
        assert "cannot close before it opens" in result.output
        assert versions_file.read_text(encoding="utf-8") == original

    def test_requires_both_bounds(self, runner: CliRunner, versions_file: Path) -> None:
        result = runner.invoke(cli, ["move", str(versions_file), "v1", "--open", "2025-12-20"])

        assert result.exit_code == 2
