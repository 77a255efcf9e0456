"""Advisory checks of the application data directory."""

from collections.abc import Iterable
from pathlib import Path

import structlog

from ..models import GameConfig

log = structlog.stdlib.get_logger()


# Entries in the data directory that are not per-game folders
NON_GAME_ENTRIES = frozenset({"logs", "themes", "resources", "prelude"})


def check_settings_file(data_path: Path, game_configs: Iterable[GameConfig]) -> list[str]:
    """Look for leftover or conflicting per-game state in the data directory.

    Nothing here stops the application from working, so problems are
    reported as human-readable warnings rather than raised.

    Args:
        data_path: The application data directory holding one folder per game
        game_configs: Games the settings currently define

    Returns:
        Warning messages in a stable order, empty if nothing was found
    """
    games = tuple(game_configs)
    warnings: list[str] = []

    local_folders: dict[str, str] = {}
    for game in games:
        if game.local_folder is None:
            continue
        other = local_folders.setdefault(game.local_folder.casefold(), game.identifier)
        if other != game.identifier:
            warnings.append(
                f"The games \"{other}\" and \"{game.identifier}\" share the local folder "
                f"\"{game.local_folder}\"; their load orders will overwrite each other."
            )

    identifiers = {game.identifier for game in games}
    try:
        warnings.extend(_check_data_folder(data_path, identifiers))
    except OSError as e:
        log.debug("Could not inspect data directory", data_path=str(data_path), error=str(e))
        warnings.append(f"The data folder \"{data_path}\" could not be read: {e}")

    log.debug("Data directory checked", data_path=str(data_path), warnings=len(warnings))
    return warnings


def _check_data_folder(data_path: Path, identifiers: set[str]) -> list[str]:
    if not data_path.exists():
        log.debug("Data directory does not exist yet", data_path=str(data_path))
        return []

    if not data_path.is_dir():
        return [f"The data path \"{data_path}\" is not a folder."]

    warnings: list[str] = []
    children = sorted((child for child in data_path.iterdir() if child.is_dir()), key=lambda p: p.name)
    for child in children:
        if child.name in NON_GAME_ENTRIES or child.name.startswith("."):
            continue

        if child.name not in identifiers:
            warnings.append(
                f"The folder \"{child}\" does not belong to any configured game and can be deleted."
            )
            continue

        if (child / ".git").is_dir():
            warnings.append(
                f"The folder \"{child / '.git'}\" is a masterlist repository left by an older "
                "version and is no longer used. It can be deleted."
            )

    return warnings
