"""Tests for the data directory checks."""

from pathlib import Path
from unittest.mock import patch

from loadorder_settings.models import DEFAULT_GAMES, GameConfig, GameType
from loadorder_settings.services import check_settings_file


def test_missing_data_directory(tmp_path: Path) -> None:
    assert check_settings_file(tmp_path / "missing", DEFAULT_GAMES) == []


def test_clean_data_directory(data_dir: Path) -> None:
    for name in ("Skyrim", "Fallout4", "logs", "themes"):
        (data_dir / name).mkdir()
    (data_dir / "settings.json").write_text("{}", encoding="utf-8")

    assert check_settings_file(data_dir, DEFAULT_GAMES) == []


def test_orphaned_game_folders(data_dir: Path) -> None:
    (data_dir / "Skyrim").mkdir()
    (data_dir / "Daggerfall").mkdir()
    (data_dir / "Arena").mkdir()

    warnings = check_settings_file(data_dir, DEFAULT_GAMES)

    assert len(warnings) == 2
    assert "Arena" in warnings[0]
    assert "Daggerfall" in warnings[1]
    assert all("does not belong to any configured game" in warning for warning in warnings)


def test_custom_game_folder_is_not_orphaned(data_dir: Path) -> None:
    (data_dir / "Skyrim Together").mkdir()
    games = (*DEFAULT_GAMES, GameConfig.for_game_type(GameType.TES5SE, "Skyrim Together"))

    assert check_settings_file(data_dir, games) == []


def test_stale_masterlist_repository(data_dir: Path) -> None:
    (data_dir / "Oblivion" / ".git").mkdir(parents=True)

    warnings = check_settings_file(data_dir, DEFAULT_GAMES)

    assert len(warnings) == 1
    assert "older version" in warnings[0]


def test_data_path_is_a_file(tmp_path: Path) -> None:
    path = tmp_path / "data"
    path.write_text("", encoding="utf-8")

    warnings = check_settings_file(path, DEFAULT_GAMES)

    assert warnings == [f"The data path \"{path}\" is not a folder."]


def test_shared_local_folder(tmp_path: Path) -> None:
    games = (
        *DEFAULT_GAMES,
        GameConfig.for_game_type(GameType.TES5, "Enderal Copy").with_overrides(local_folder="Enderal"),
    )

    warnings = check_settings_file(tmp_path / "missing", games)

    assert len(warnings) == 1
    assert "\"Enderal\" and \"Enderal Copy\"" in warnings[0]


def test_unusable_data_path_is_a_warning(tmp_path: Path) -> None:
    path = tmp_path / ("x" * 300)

    warnings = check_settings_file(path, DEFAULT_GAMES)

    assert all(isinstance(warning, str) for warning in warnings)


def test_unreadable_data_directory_is_a_warning(data_dir: Path) -> None:
    with patch.object(Path, "is_dir", side_effect=PermissionError(13, "Permission denied")):
        warnings = check_settings_file(data_dir, DEFAULT_GAMES)

    assert len(warnings) == 1
    assert warnings[0].startswith(f"The data folder \"{data_dir}\" could not be read")
    assert "Permission denied" in warnings[0]


def test_unreadable_game_folder_is_a_warning(data_dir: Path) -> None:
    (data_dir / "Oblivion").mkdir()
    real_is_dir = Path.is_dir

    def is_dir(path: Path) -> bool:
        if path.name == ".git":
            raise PermissionError(13, "Permission denied")
        return real_is_dir(path)

    with patch.object(Path, "is_dir", autospec=True, side_effect=is_dir):
        warnings = check_settings_file(data_dir, DEFAULT_GAMES)

    assert len(warnings) == 1
    assert "could not be read" in warnings[0]
