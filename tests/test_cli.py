"""Tests for the command-line front end."""

import json
from pathlib import Path

import pytest

from loadorder_settings import __version__
from loadorder_settings.main import apply_setting, parse_arguments, parse_bool, run
from loadorder_settings.services import SettingsStore


class TestArguments:
    """Test cases for argument parsing."""

    def test_settings_defaults_to_data_dir(self, tmp_path: Path) -> None:
        args = parse_arguments(["--data-dir", str(tmp_path), "show"])

        assert args.command == "show"
        assert args.data_dir == tmp_path
        assert args.settings == tmp_path / "settings.json"
        assert args.verbose is False

    def test_set_command(self, tmp_path: Path) -> None:
        args = parse_arguments(["--settings", str(tmp_path / "s.json"), "set", "theme", "dark"])

        assert args.command == "set"
        assert args.settings == tmp_path / "s.json"
        assert args.key == "theme"
        assert args.value == "dark"

    def test_unknown_setting_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_arguments(["set", "languages", "xx"])


@pytest.mark.parametrize("value, expected", [
    ("true", True), ("Yes", True), ("on", True), ("1", True),
    ("false", False), ("NO", False), ("off", False), ("0", False),
])
def test_parse_bool(value: str, expected: bool) -> None:
    assert parse_bool(value) is expected


def test_parse_bool_rejects_other_values() -> None:
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_apply_setting() -> None:
    store = SettingsStore()

    apply_setting(store, "auto_sort", "true")
    apply_setting(store, "language", "de")
    apply_setting(store, "game", "Skyrim")

    assert store.should_auto_sort() is True
    assert store.get_language() == "de"
    assert store.get_game() == "Skyrim"


class TestRun:
    """Test cases for running commands."""

    def test_show_defaults(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "show"]))

        assert exit_code == 0
        document = json.loads(capsys.readouterr().out)
        assert document["theme"] == "default"
        assert len(document["games"]) == 12
        assert not (data_dir / "settings.json").exists()

    def test_set_saves(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "set", "update_masterlist", "off"]))

        assert exit_code == 0
        assert "update_masterlist = off" in capsys.readouterr().out
        saved = json.loads((data_dir / "settings.json").read_text(encoding="utf-8"))
        assert saved["update_masterlist"] is False
        assert saved["last_version"] == __version__

    def test_check(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (data_dir / "Daggerfall").mkdir()

        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "check"]))

        assert exit_code == 0
        assert "Daggerfall" in capsys.readouterr().out

    def test_check_clean(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "check"]))

        assert exit_code == 0
        assert "No problems found." in capsys.readouterr().out

    def test_malformed_settings(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (data_dir / "settings.json").write_text("{oops", encoding="utf-8")

        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "show"]))

        assert exit_code == 1
        err = capsys.readouterr().err
        assert "not valid JSON" in err
        assert "Suggested actions:" in err

    def test_invalid_bool_value(self, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "set", "auto_sort", "maybe"]))

        assert exit_code == 1
        assert "Expected true or false" in capsys.readouterr().err
        assert not (data_dir / "settings.json").exists()

    def test_log_dir(self, data_dir: Path, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"

        exit_code = run(parse_arguments(["--data-dir", str(data_dir), "--log-dir", str(log_dir), "show"]))

        assert exit_code == 0
        assert (log_dir / "debug.log").exists()
