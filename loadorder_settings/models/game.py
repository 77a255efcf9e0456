"""Game-related data models."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


MASTERLIST_BRANCH = "v0.17"
MASTERLIST_URL_TEMPLATE = "https://raw.githubusercontent.com/loot/{repo}/{branch}/masterlist.yaml"

NEHRIM_STEAM_REGISTRY_KEY = (
    "Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\Steam App 1014940\\InstallLocation"
)


class GameType(Enum):
    """Base games supported by the application."""
    TES3 = "Morrowind"
    TES4 = "Oblivion"
    TES5 = "Skyrim"
    TES5SE = "Skyrim Special Edition"
    TES5VR = "Skyrim VR"
    FO3 = "Fallout3"
    FONV = "FalloutNV"
    FO4 = "Fallout4"
    FO4VR = "Fallout4VR"


@dataclass(frozen=True)
class _BaseGameDefaults:
    identifier: str
    name: str
    master: str
    registry_key: str
    masterlist_repo: str


_BASE_GAME_DEFAULTS: dict[GameType, _BaseGameDefaults] = {
    GameType.TES3: _BaseGameDefaults(
        "Morrowind", "TES III: Morrowind", "Morrowind.esm",
        "Software\\Bethesda Softworks\\Morrowind\\Installed Path", "morrowind",
    ),
    GameType.TES4: _BaseGameDefaults(
        "Oblivion", "TES IV: Oblivion", "Oblivion.esm",
        "Software\\Bethesda Softworks\\Oblivion\\Installed Path", "oblivion",
    ),
    GameType.TES5: _BaseGameDefaults(
        "Skyrim", "TES V: Skyrim", "Skyrim.esm",
        "Software\\Bethesda Softworks\\Skyrim\\Installed Path", "skyrim",
    ),
    GameType.TES5SE: _BaseGameDefaults(
        "Skyrim Special Edition", "TES V: Skyrim Special Edition", "Skyrim.esm",
        "Software\\Bethesda Softworks\\Skyrim Special Edition\\Installed Path", "skyrimse",
    ),
    GameType.TES5VR: _BaseGameDefaults(
        "Skyrim VR", "TES V: Skyrim VR", "Skyrim.esm",
        "Software\\Bethesda Softworks\\Skyrim VR\\Installed Path", "skyrimvr",
    ),
    GameType.FO3: _BaseGameDefaults(
        "Fallout3", "Fallout 3", "Fallout3.esm",
        "Software\\Bethesda Softworks\\Fallout3\\Installed Path", "fallout3",
    ),
    GameType.FONV: _BaseGameDefaults(
        "FalloutNV", "Fallout: New Vegas", "FalloutNV.esm",
        "Software\\Bethesda Softworks\\FalloutNV\\Installed Path", "falloutnv",
    ),
    GameType.FO4: _BaseGameDefaults(
        "Fallout4", "Fallout 4", "Fallout4.esm",
        "Software\\Bethesda Softworks\\Fallout4\\Installed Path", "fallout4",
    ),
    GameType.FO4VR: _BaseGameDefaults(
        "Fallout4VR", "Fallout 4 VR", "Fallout4.esm",
        "Software\\Bethesda Softworks\\Fallout 4 VR\\Installed Path", "fallout4vr",
    ),
}


def default_masterlist_source(repo: str) -> str:
    """Get the masterlist URL for a repository on the current default branch."""
    return MASTERLIST_URL_TEMPLATE.format(repo=repo, branch=MASTERLIST_BRANCH)


@dataclass(frozen=True)
class GameConfig:
    """Configuration entry for one supported game or game variant."""
    identifier: str  # Also the name of the game's folder in the data directory
    game_type: GameType
    name: str
    master: str
    registry_keys: tuple[str, ...]
    masterlist_source: str
    local_folder: str | None = None  # None = use the base game's local folder
    game_path: str | None = None  # None = detect via registry keys

    @classmethod
    def for_game_type(cls, game_type: GameType, identifier: str | None = None) -> "GameConfig":
        """Build a fully defaulted entry for a base game.

        Args:
            game_type: The base game to build the entry for
            identifier: Identifier to use instead of the base game's default

        Returns:
            GameConfig populated with the base game's defaults
        """
        defaults = _BASE_GAME_DEFAULTS[game_type]
        return cls(
            identifier=identifier or defaults.identifier,
            game_type=game_type,
            name=defaults.name,
            master=defaults.master,
            registry_keys=(defaults.registry_key,),
            masterlist_source=default_masterlist_source(defaults.masterlist_repo),
        )

    def with_overrides(self, **fields: Any) -> "GameConfig":
        """Return a copy of this entry with the given fields replaced."""
        if "registry_keys" in fields:
            fields["registry_keys"] = tuple(fields["registry_keys"])
        return replace(self, **fields)


def default_identifier(game_type: GameType) -> str:
    """Get the identifier a base game's default entry uses."""
    return _BASE_GAME_DEFAULTS[game_type].identifier


def derive_game_config(game_type: GameType, identifier: str, **overrides: Any) -> GameConfig:
    """Build a variant entry from a base game with some fields overridden.

    Args:
        game_type: Base game the variant runs on
        identifier: Identifier of the variant entry
        **overrides: GameConfig fields to replace (name, master, registry_keys, ...)

    Returns:
        The derived GameConfig
    """
    return GameConfig.for_game_type(game_type, identifier).with_overrides(**overrides)


def _build_default_games() -> tuple[GameConfig, ...]:
    base_games = tuple(GameConfig.for_game_type(game_type) for game_type in GameType)
    enderal_masterlist = MASTERLIST_URL_TEMPLATE.format(repo="enderal", branch=MASTERLIST_BRANCH)

    variants = (
        derive_game_config(
            GameType.TES4,
            "Nehrim",
            name="Nehrim - At Fate's Edge",
            master="Nehrim.esm",
            registry_keys=(
                "Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\"
                "Nehrim - At Fate's Edge_is1\\InstallLocation",
                NEHRIM_STEAM_REGISTRY_KEY,
            ),
        ),
        derive_game_config(
            GameType.TES5,
            "Enderal",
            name="Enderal: Forgotten Stories",
            registry_keys=(
                "HKEY_CURRENT_USER\\SOFTWARE\\SureAI\\Enderal\\Install_Path",
                "Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\Steam App 933480\\InstallLocation",
            ),
            local_folder="enderal",
            masterlist_source=enderal_masterlist,
        ),
        derive_game_config(
            GameType.TES5SE,
            "Enderal Special Edition",
            name="Enderal: Forgotten Stories (Special Edition)",
            registry_keys=(
                "HKEY_CURRENT_USER\\SOFTWARE\\SureAI\\EnderalSE\\Install_Path",
                "Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\Steam App 976620\\InstallLocation",
            ),
            local_folder="Enderal Special Edition",
            masterlist_source=enderal_masterlist,
        ),
    )
    return base_games + variants


# Built once at import; entries are frozen so the tuple can be shared between stores
DEFAULT_GAMES: tuple[GameConfig, ...] = _build_default_games()
