"""Detected game model and the closed set of supported sources."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class SupportedSource(Enum):
    """Launchers and stores games can be detected from.

    The value is the key used in configuration, the hints database and
    reports.
    """
    STEAM = "steam"
    STEAM_SHORTCUTS = "steam_shortcuts"
    HEROIC_EPIC = "heroic_epic"
    HEROIC_GOG = "heroic_gog"
    HEROIC_AMAZON = "heroic_amazon"
    HEROIC_SIDELOAD = "heroic_sideload"
    LUTRIS = "lutris"
    BOTTLES = "bottles"
    ITCH = "itch"
    MINECRAFT_PRISM = "minecraft_prism"
    MINECRAFT_ATLAUNCHER = "minecraft_atlauncher"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_key(cls, key: str) -> "SupportedSource":
        """Look up a source by key, case-insensitively.

        Raises:
            ValueError: If no source has that key
        """
        try:
            return cls(key.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown source {key!r} (expected one of: {valid})") from None

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES = {
    SupportedSource.STEAM: "Steam",
    SupportedSource.STEAM_SHORTCUTS: "Steam Shortcuts",
    SupportedSource.HEROIC_EPIC: "Heroic Games Launcher - Epic Games",
    SupportedSource.HEROIC_GOG: "Heroic Games Launcher - GOG",
    SupportedSource.HEROIC_AMAZON: "Heroic Games Launcher - Amazon Prime Gaming",
    SupportedSource.HEROIC_SIDELOAD: "Heroic Games Launcher - Sideloaded",
    SupportedSource.LUTRIS: "Lutris",
    SupportedSource.BOTTLES: "Bottles",
    SupportedSource.ITCH: "itch",
    SupportedSource.MINECRAFT_PRISM: "Minecraft - Prism Launcher",
    SupportedSource.MINECRAFT_ATLAUNCHER: "Minecraft - ATLauncher",
}


def _path_or_none(path: Optional[Path]) -> Optional[str]:
    return str(path) if path is not None else None


@dataclass
class Game:
    """A game found in one source's catalogues.

    Only the inputs needed to launch the game are kept: an identifier and
    whether the launcher runs sandboxed. Building the command line is left
    to the caller.

    Attributes:
        title: Display title
        source: Source the game was detected from
        launch_id: Identifier handed to the launcher (URI, id or path)
        is_sandboxed: Launcher runs inside Flatpak
        launch_options: Extra launcher inputs (runner, bottle, interpreter)
        path_game_dir: Install directory, if it exists
        path_box_art: Portrait box art image, if found
        path_icon: Icon image, if found
    """
    title: str
    source: SupportedSource
    launch_id: str
    is_sandboxed: bool = False
    launch_options: dict[str, str] = field(default_factory=dict)
    path_game_dir: Optional[Path] = None
    path_box_art: Optional[Path] = None
    path_icon: Optional[Path] = None

    def has_box_art(self) -> bool:
        return self.path_box_art is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'title': self.title,
            'source': self.source.value,
            'launch_id': self.launch_id,
            'is_sandboxed': self.is_sandboxed,
            'launch_options': dict(self.launch_options),
            'path_game_dir': _path_or_none(self.path_game_dir),
            'path_box_art': _path_or_none(self.path_box_art),
            'path_icon': _path_or_none(self.path_icon),
        }
