"""Tests for the mediascan scan command."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mediascan.cli.commands import app
from mediascan.utils import config as cfg


@pytest.fixture
def runner() -> CliRunner:
    """Get a Typer CLI runner."""
    return CliRunner()


@pytest.fixture
def library(tmp_path: Path, make_file) -> Path:
    """Two audio files, one video, one unmatched file, one nested picture."""
    root = tmp_path / "library"
    make_file(root / "song.mp3", 1536)
    make_file(root / "tune.ogg", 100)
    make_file(root / "clip.mp4", 2048)
    make_file(root / "notes.txt", 5)
    make_file(root / "Photos" / "cat.jpg", 300)
    return root


def _scan(runner: CliRunner, *args: str):
    return runner.invoke(app, ["--no-rich", "scan", *args])


def test_scan_reports_summary(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library))
    assert result.exit_code == 0, result.output
    assert "Total files: 4" in result.output
    assert "Audio: 2" in result.output
    assert "Video: 1" in result.output
    assert "Picture: 1" in result.output
    assert "[Audio] song.mp3 (1.50 KB)" in result.output
    assert "notes.txt" not in result.output


def test_defaults_to_current_directory(
    runner: CliRunner, library: Path, monkeypatch
) -> None:
    monkeypatch.chdir(library)
    result = _scan(runner)
    assert result.exit_code == 0, result.output
    assert "Total files: 4" in result.output


def test_media_type_is_case_insensitive(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library), "--media-type", "audio")
    assert result.exit_code == 0, result.output
    assert "Total files: 2" in result.output
    assert "Video:" not in result.output


def test_invalid_media_type_is_usage_error(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library), "--media-type", "Documents")
    assert result.exit_code == 2


@pytest.mark.parametrize("value", ["false", "no", "0", "False"])
def test_non_recursive(runner: CliRunner, library: Path, value: str) -> None:
    result = _scan(runner, "--path", str(library), "--recursive", value)
    assert result.exit_code == 0, result.output
    assert "Total files: 3" in result.output
    assert "cat.jpg" not in result.output
    assert "Recursive: no" in result.output


def test_invalid_recursive_value(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library), "--recursive", "maybe")
    assert result.exit_code == 2


def test_missing_path_exits_with_error_only(runner: CliRunner, tmp_path: Path) -> None:
    csv_path = tmp_path / "out.csv"
    result = _scan(
        runner, "--path", str(tmp_path / "missing"), "--export-csv", str(csv_path)
    )
    assert result.exit_code == 1
    assert "Directory does not exist" in result.output
    assert "Total files" not in result.output
    assert "Traceback" not in result.output
    assert not csv_path.exists()


def test_show_details(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library), "--show-details")
    assert result.exit_code == 0, result.output
    assert "song.mp3 (Audio)" in result.output
    assert "Modified:" in result.output


def test_no_list(runner: CliRunner, library: Path) -> None:
    result = _scan(runner, "--path", str(library), "--no-list")
    assert result.exit_code == 0, result.output
    assert "[Audio] song.mp3" not in result.output
    assert "Total files: 4" in result.output


def test_exports_written(runner: CliRunner, library: Path, tmp_path: Path) -> None:
    csv_path = tmp_path / "out" / "report.csv"
    json_path = tmp_path / "out" / "report.json"
    result = _scan(
        runner,
        "--path",
        str(library),
        "--media-type",
        "Audio",
        "--export-csv",
        str(csv_path),
        "--export-json",
        str(json_path),
    )
    assert result.exit_code == 0, result.output
    assert "Exported CSV" in result.output
    assert "Exported JSON" in result.output

    assert len(csv_path.read_text(encoding="utf-8").strip().splitlines()) == 3
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert sorted(item["Name"] for item in data) == ["song.mp3", "tune.ogg"]


def test_failed_export_is_a_warning(
    runner: CliRunner, library: Path, tmp_path: Path
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not directory")
    json_path = tmp_path / "report.json"
    result = _scan(
        runner,
        "--path",
        str(library),
        "--export-csv",
        str(blocker / "report.csv"),
        "--export-json",
        str(json_path),
    )
    assert result.exit_code == 0, result.output
    assert "Warning:" in result.output
    assert "Total files: 4" in result.output
    assert json_path.exists()


def test_include_hidden(runner: CliRunner, library: Path, make_file) -> None:
    make_file(library / ".secret.mp3")
    assert "Audio: 2" in _scan(runner, "--path", str(library)).output
    result = _scan(runner, "--path", str(library), "--include-hidden")
    assert "Audio: 3" in result.output


def test_undecodable_name_is_reported_and_exported(
    runner: CliRunner, library: Path, tmp_path: Path, make_undecodable_file
) -> None:
    make_undecodable_file(library)
    csv_path = tmp_path / "report.csv"
    json_path = tmp_path / "report.json"
    result = _scan(
        runner,
        "--path",
        str(library),
        "--export-csv",
        str(csv_path),
        "--export-json",
        str(json_path),
    )
    assert result.exit_code == 0, result.output
    assert "Traceback" not in result.output
    assert "Audio: 3" in result.output
    assert "[Audio] bad\ufffd.mp3" in result.output
    assert "Warning:" not in result.output
    assert len(csv_path.read_text(encoding="utf-8").strip().splitlines()) == 6
    assert len(json.loads(json_path.read_text(encoding="utf-8"))) == 5


class TestConfiguredDefaults:
    def test_env_var_sets_media_type(
        self, runner: CliRunner, library: Path, monkeypatch
    ) -> None:
        monkeypatch.setenv("MEDIASCAN_SCAN_MEDIA_TYPE", "video")
        result = _scan(runner, "--path", str(library))
        assert result.exit_code == 0, result.output
        assert "Total files: 1" in result.output

    def test_cli_overrides_env(
        self, runner: CliRunner, library: Path, monkeypatch
    ) -> None:
        monkeypatch.setenv("MEDIASCAN_SCAN_MEDIA_TYPE", "video")
        result = _scan(runner, "--path", str(library), "--media-type", "Picture")
        assert "Total files: 1" in result.output
        assert "Picture: 1" in result.output

    def test_config_file_recursive(self, runner: CliRunner, library: Path) -> None:
        cfg.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        cfg.CONFIG_FILE.write_text("[scan]\nrecursive = false\n")
        result = _scan(runner, "--path", str(library))
        assert "Total files: 3" in result.output

    def test_category_overrides(
        self, runner: CliRunner, library: Path, make_file
    ) -> None:
        make_file(library / "take.mka", 10)
        cfg.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        cfg.CONFIG_FILE.write_text('[categories]\naudio = [".mka"]\n')
        result = _scan(runner, "--path", str(library), "--media-type", "Audio")
        assert result.exit_code == 0, result.output
        assert "Audio: 3" in result.output

    def test_invalid_configured_media_type(
        self, runner: CliRunner, library: Path, monkeypatch
    ) -> None:
        monkeypatch.setenv("MEDIASCAN_SCAN_MEDIA_TYPE", "Documents")
        result = _scan(runner, "--path", str(library))
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_conflicting_category_override(
        self, runner: CliRunner, library: Path
    ) -> None:
        cfg.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        cfg.CONFIG_FILE.write_text('[categories]\nvideo = [".mp3"]\n')
        result = _scan(runner, "--path", str(library))
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    @pytest.mark.parametrize("value", ["maybe", "2"])
    def test_invalid_configured_recursive(
        self, runner: CliRunner, library: Path, monkeypatch, value: str
    ) -> None:
        monkeypatch.setenv("MEDIASCAN_SCAN_RECURSIVE", value)
        result = _scan(runner, "--path", str(library))
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "Total files" not in result.output
