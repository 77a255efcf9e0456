"""Settings data models."""

from dataclasses import dataclass, field

from .game import DEFAULT_GAMES, GameConfig


AUTO_GAME = "auto"  # Use the last game, or auto-detect one
DEFAULT_LANGUAGE = "en"
DEFAULT_THEME = "default"
DEFAULT_PRELUDE_SOURCE = "https://raw.githubusercontent.com/loot/prelude/v0.17/prelude.yaml"


@dataclass(frozen=True)
class WindowPosition:
    """Saved main window geometry."""
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0
    maximised: bool = False


@dataclass(frozen=True)
class Filters:
    """Visibility toggles for the plugin list view."""
    hide_version_numbers: bool = False
    hide_crcs: bool = False
    hide_bash_tags: bool = True
    hide_notes: bool = False
    hide_all_plugin_messages: bool = False
    hide_inactive_plugins: bool = False
    hide_messageless_plugins: bool = False


@dataclass(frozen=True)
class Language:
    """A user interface translation."""
    locale: str
    name: str
    font_family: str | None = None  # Font to use instead of the theme's


LANGUAGES: tuple[Language, ...] = (
    Language("en", "English"),
    Language("bg", "Български"),
    Language("cs", "Čeština"),
    Language("da", "Dansk"),
    Language("de", "Deutsch"),
    Language("es", "Español"),
    Language("fi", "Suomi"),
    Language("fr", "Français"),
    Language("it", "Italiano"),
    Language("ja", "日本語", "Meiryo"),
    Language("ko", "한국어", "Malgun Gothic"),
    Language("pl", "Polski"),
    Language("pt_BR", "Português do Brasil"),
    Language("pt_PT", "Português de Portugal"),
    Language("ru", "Русский"),
    Language("sv", "Svenska"),
    Language("uk_UA", "Українська"),
    Language("zh_CN", "简体中文", "Microsoft Yahei"),
)


@dataclass(frozen=True)
class SettingsState:
    """Complete application settings. Immutable; changes produce a new value."""
    auto_sort: bool = False
    debug_logging_enabled: bool = False
    masterlist_update_enabled: bool = True
    update_check_enabled: bool = True
    current_game: str = AUTO_GAME
    last_game: str = AUTO_GAME
    last_known_version: str = ""
    language: str = DEFAULT_LANGUAGE
    prelude_source: str = DEFAULT_PRELUDE_SOURCE
    theme: str = DEFAULT_THEME
    window_position: WindowPosition | None = None
    game_configs: tuple[GameConfig, ...] = DEFAULT_GAMES
    filters: Filters = field(default_factory=Filters)
    languages: tuple[Language, ...] = LANGUAGES  # Never loaded or saved
