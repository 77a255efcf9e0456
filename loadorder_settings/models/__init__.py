"""Data models for the load order settings store."""

from .game import DEFAULT_GAMES, GameConfig, GameType, default_identifier, derive_game_config
from .settings import (
    AUTO_GAME,
    LANGUAGES,
    Filters,
    Language,
    SettingsState,
    WindowPosition,
)

__all__ = [
    "AUTO_GAME",
    "DEFAULT_GAMES",
    "Filters",
    "GameConfig",
    "GameType",
    "LANGUAGES",
    "Language",
    "SettingsState",
    "WindowPosition",
    "default_identifier",
    "derive_game_config",
]
