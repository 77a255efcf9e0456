"""Conversion between settings documents and SettingsState values.

Loading is a merge: every key present in the document replaces the matching
value in the starting state, and every absent key leaves it alone. Game
entries are matched by identifier (the ``folder`` key), so a document can
override part of a built-in game without being able to remove it.

Documents written by older versions used camelCase keys. Those are still
read when the current key is missing, and masterlist/prelude URLs that point
at an older default branch are moved to the current one.
"""

import re
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from ..models import (
    DEFAULT_GAMES,
    Filters,
    GameConfig,
    GameType,
    SettingsState,
    WindowPosition,
    default_identifier,
)
from ..models.game import MASTERLIST_BRANCH
from ..models.settings import DEFAULT_PRELUDE_SOURCE
from .errors import DocumentParseError

log = structlog.stdlib.get_logger()


# Current key -> key used by older versions
_LEGACY_KEYS: dict[str, str] = {
    "auto_sort": "autoSort",
    "enable_debug_logging": "enableDebugLogging",
    "update_masterlist": "updateMasterlist",
    "enable_update_check": "enableLootUpdateCheck",
    "last_game": "lastGame",
    "last_version": "lastVersion",
    "prelude_source": "preludeSource",
    "hide_version_numbers": "hideVersionNumbers",
    "hide_crcs": "hideCRCs",
    "hide_bash_tags": "hideBashTags",
    "hide_notes": "hideNotes",
    "hide_all_plugin_messages": "hideAllPluginMessages",
    "hide_inactive_plugins": "hideInactivePlugins",
    "hide_messageless_plugins": "hideMessagelessPlugins",
    "local_folder": "localFolder",
    "masterlist_source": "masterlistSource",
}

_KNOWN_KEYS = frozenset({
    "auto_sort", "enable_debug_logging", "update_masterlist", "enable_update_check",
    "game", "last_game", "last_version", "language", "prelude_source", "theme",
    "window", "filters", "games",
}) | frozenset(_LEGACY_KEYS[key] for key in (
    "auto_sort", "enable_debug_logging", "update_masterlist", "enable_update_check",
    "last_game", "last_version", "prelude_source",
))

_FILTER_KEYS = (
    "hide_version_numbers",
    "hide_crcs",
    "hide_bash_tags",
    "hide_notes",
    "hide_all_plugin_messages",
    "hide_inactive_plugins",
    "hide_messageless_plugins",
)

_WINDOW_INT_KEYS = ("top", "bottom", "left", "right")

_OLD_MASTERLIST_URL = re.compile(
    r"^https://raw\.githubusercontent\.com/loot/(?P<repo>[^/]+)/v0\.(?P<minor>\d+)/masterlist\.yaml$"
)
_OLD_PRELUDE_URL = re.compile(
    r"^https://raw\.githubusercontent\.com/loot/prelude/v0\.(?P<minor>\d+)/prelude\.yaml$"
)
_CURRENT_MINOR = int(MASTERLIST_BRANCH.split(".")[1])

_MISSING = object()


def _lookup(data: dict[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    legacy = _LEGACY_KEYS.get(key)
    if legacy is not None and legacy in data:
        return data[legacy]
    return _MISSING


def _bool(data: dict[str, Any], key: str, current: bool) -> bool:
    value = _lookup(data, key)
    if value is _MISSING:
        return current
    if not isinstance(value, bool):
        raise DocumentParseError(
            f"Setting '{key}' must be true or false",
            setting=key, current_value=value, expected="a boolean",
        )
    return value


def _str(data: dict[str, Any], key: str, current: str) -> str:
    value = _lookup(data, key)
    if value is _MISSING:
        return current
    if not isinstance(value, str):
        raise DocumentParseError(
            f"Setting '{key}' must be a string",
            setting=key, current_value=value, expected="a string",
        )
    return value


def _optional_str(data: dict[str, Any], key: str, current: str | None) -> str | None:
    value = _lookup(data, key)
    if value is _MISSING:
        return current
    if value is None:
        return None
    return _str(data, key, "")


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DocumentParseError(
            f"Setting '{key}' must be an object",
            setting=key, current_value=value, expected="a JSON object",
        )
    return value


def migrate_masterlist_source(source: str) -> str:
    """Move a default masterlist URL from an older branch to the current one."""
    match = _OLD_MASTERLIST_URL.match(source)
    if match and int(match.group("minor")) < _CURRENT_MINOR:
        migrated = f"https://raw.githubusercontent.com/loot/{match.group('repo')}/{MASTERLIST_BRANCH}/masterlist.yaml"
        log.info("Migrating masterlist source", old=source, new=migrated)
        return migrated
    return source


def migrate_prelude_source(source: str) -> str:
    """Move the default prelude URL from an older branch to the current one."""
    match = _OLD_PRELUDE_URL.match(source)
    if match and int(match.group("minor")) < _CURRENT_MINOR:
        log.info("Migrating prelude source", old=source, new=DEFAULT_PRELUDE_SOURCE)
        return DEFAULT_PRELUDE_SOURCE
    return source


def parse_game_type(value: Any) -> GameType:
    """Parse a game type by its document name ("Skyrim") or enum name ("tes5")."""
    if isinstance(value, str):
        for game_type in GameType:
            if value == game_type.value or value.upper() == game_type.name:
                return game_type
    raise DocumentParseError(
        f"Unrecognised game type: {value!r}",
        setting="games.type",
        current_value=value,
        expected=", ".join(game_type.value for game_type in GameType),
    )


def _registry_keys(entry: dict[str, Any], current: tuple[str, ...]) -> tuple[str, ...]:
    value = entry.get("registry", _MISSING)
    if value is _MISSING:
        return current
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(key, str) for key in value):
        return tuple(value)
    raise DocumentParseError(
        "Game setting 'registry' must be a string or a list of strings",
        setting="games.registry", current_value=value, expected="a list of strings",
    )


def _merge_game(base: GameConfig, entry: dict[str, Any]) -> GameConfig:
    return base.with_overrides(
        name=_str(entry, "name", base.name),
        master=_str(entry, "master", base.master),
        registry_keys=_registry_keys(entry, base.registry_keys),
        local_folder=_optional_str(entry, "local_folder", base.local_folder),
        masterlist_source=migrate_masterlist_source(
            _str(entry, "masterlist_source", base.masterlist_source)
        ),
        game_path=_optional_str(entry, "path", base.game_path),
    )


def with_default_games(games: tuple[GameConfig, ...]) -> tuple[GameConfig, ...]:
    """Append any built-in game whose identifier is missing from the list."""
    present = {game.identifier for game in games}
    missing = tuple(game for game in DEFAULT_GAMES if game.identifier not in present)
    return games + missing


def merge_games(
    current: tuple[GameConfig, ...],
    entries: Any,
) -> tuple[tuple[GameConfig, ...], list[str]]:
    """Merge a document's game entries into the current game list.

    Args:
        current: Game list to merge into; its order is preserved
        entries: The document's ``games`` value

    Returns:
        The merged game list and any advisory warnings

    Raises:
        DocumentParseError: If an entry is not an object or has an invalid value
    """
    if not isinstance(entries, list):
        raise DocumentParseError(
            "Setting 'games' must be a list of game tables",
            setting="games", current_value=entries, expected="a JSON array",
        )

    warnings: list[str] = []
    merged = list(current)
    positions = {game.identifier: index for index, game in enumerate(merged)}
    seen: set[str] = set()

    for entry in entries:
        entry = _mapping(entry, "games")
        if "type" not in entry:
            raise DocumentParseError(
                "Every game entry needs a 'type'",
                setting="games.type", current_value=entry, expected="a game type",
            )
        game_type = parse_game_type(entry["type"])
        identifier = _str(entry, "folder", default_identifier(game_type))
        if not identifier:
            raise DocumentParseError(
                "Game setting 'folder' cannot be empty",
                setting="games.folder", current_value=identifier, expected="a folder name",
            )

        if identifier in seen:
            warnings.append(
                f"The game \"{identifier}\" appears more than once in the settings file; "
                "only its first entry was used."
            )
            continue
        seen.add(identifier)

        if identifier in positions:
            index = positions[identifier]
            existing = merged[index]
            if existing.game_type != game_type:
                warnings.append(
                    f"The game \"{identifier}\" is a {existing.game_type.value} game but the settings "
                    f"file gives its type as {game_type.value}; the type was not changed."
                )
            merged[index] = _merge_game(existing, entry)
        else:
            positions[identifier] = len(merged)
            merged.append(_merge_game(GameConfig.for_game_type(game_type, identifier), entry))

    return tuple(merged), warnings


def _merge_window(current: WindowPosition | None, value: Any) -> WindowPosition | None:
    if value is None:
        return None
    window = _mapping(value, "window")
    base = current or WindowPosition()
    changes: dict[str, Any] = {}
    for key in _WINDOW_INT_KEYS:
        if key in window:
            item = window[key]
            if not isinstance(item, int) or isinstance(item, bool):
                raise DocumentParseError(
                    f"Window setting '{key}' must be a whole number",
                    setting=f"window.{key}", current_value=item, expected="an integer",
                )
            changes[key] = item
    changes["maximised"] = _bool(window, "maximised", base.maximised)
    return replace(base, **changes)


def _merge_filters(current: Filters, value: Any) -> Filters:
    filters = _mapping(value, "filters")
    return replace(current, **{key: _bool(filters, key, getattr(current, key)) for key in _FILTER_KEYS})


def merge_document(
    state: SettingsState,
    data: dict[str, Any],
    path: Path | None = None,
) -> tuple[SettingsState, list[str]]:
    """Merge a parsed settings document on top of a settings state.

    Args:
        state: Starting state; not modified
        data: The document's root object
        path: Where the document was read from, named in parse errors

    Returns:
        The merged state and advisory warnings about the document

    Raises:
        DocumentParseError: If a known key holds a value of the wrong shape
    """
    try:
        return _merge_document(state, data)
    except DocumentParseError as e:
        if path is None or e.path is not None:
            raise
        raise e.at_path(path) from e


def _merge_document(state: SettingsState, data: dict[str, Any]) -> tuple[SettingsState, list[str]]:
    for key in data:
        if key not in _KNOWN_KEYS:
            log.debug("Ignoring unrecognised settings key", key=key)

    warnings: list[str] = []
    game_configs = with_default_games(state.game_configs)
    if "games" in data:
        game_configs, warnings = merge_games(game_configs, data["games"])

    window_position = state.window_position
    if "window" in data:
        window_position = _merge_window(state.window_position, data["window"])

    filters = state.filters
    if "filters" in data:
        filters = _merge_filters(state.filters, data["filters"])

    merged = replace(
        state,
        auto_sort=_bool(data, "auto_sort", state.auto_sort),
        debug_logging_enabled=_bool(data, "enable_debug_logging", state.debug_logging_enabled),
        masterlist_update_enabled=_bool(data, "update_masterlist", state.masterlist_update_enabled),
        update_check_enabled=_bool(data, "enable_update_check", state.update_check_enabled),
        current_game=_str(data, "game", state.current_game),
        last_game=_str(data, "last_game", state.last_game),
        last_known_version=_str(data, "last_version", state.last_known_version),
        language=_str(data, "language", state.language),
        prelude_source=migrate_prelude_source(_str(data, "prelude_source", state.prelude_source)),
        theme=_str(data, "theme", state.theme),
        window_position=window_position,
        game_configs=game_configs,
        filters=filters,
    )
    return merged, warnings


def _game_to_document(game: GameConfig) -> dict[str, Any]:
    return {
        "type": game.game_type.value,
        "folder": game.identifier,
        "name": game.name,
        "master": game.master,
        "registry": list(game.registry_keys),
        "local_folder": game.local_folder,
        "masterlist_source": game.masterlist_source,
        "path": game.game_path,
    }


def state_to_document(state: SettingsState) -> dict[str, Any]:
    """Convert a settings state to a document tree. Languages are not included."""
    window = None
    if state.window_position is not None:
        window = {
            "top": state.window_position.top,
            "bottom": state.window_position.bottom,
            "left": state.window_position.left,
            "right": state.window_position.right,
            "maximised": state.window_position.maximised,
        }

    return {
        "auto_sort": state.auto_sort,
        "enable_debug_logging": state.debug_logging_enabled,
        "update_masterlist": state.masterlist_update_enabled,
        "enable_update_check": state.update_check_enabled,
        "game": state.current_game,
        "last_game": state.last_game,
        "last_version": state.last_known_version,
        "language": state.language,
        "prelude_source": state.prelude_source,
        "theme": state.theme,
        "window": window,
        "filters": {key: getattr(state.filters, key) for key in _FILTER_KEYS},
        "games": [_game_to_document(game) for game in state.game_configs],
    }
