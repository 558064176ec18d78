"""Steam shortcuts (non-Steam games) scanner.

A shortcut's data is split over two files in ``userdata/<user>``:
    - config/shortcuts.vdf (binary KeyValues): title, grid artwork id,
      executable
    - 760/screenshots.vdf (text): the "shortcutnames" block mapping the
      id Steam launches the shortcut with to its title

The two are joined on the title. screenshots.vdf is only ever appended to,
so the last entry for a title is the current one and each entry is used
at most once.
"""

import logging
import struct
from pathlib import Path
from typing import Any, Optional

import vdf

from ..discovery.reconcile import ReconciledRecord, field_key, reconcile
from ..errors import SourceReadError, StructuralParseError
from ..models import Game, SupportedSource
from ..parsers import vdf_like
from ..parsers.records import PartialRecord, read_source
from ..utils.paths import existing_image, some_if_dir, some_if_file
from ..utils.strings import clean_title
from .base import SourceAdapter
from .steam import LAUNCH_URI

logger = logging.getLogger(__name__)

SHORTCUT_NAMES_BLOCK = "shortcutnames"


def _get(entry: dict[str, Any], key: str) -> Any:
    """Case-insensitive lookup; Steam changed the key casing over time."""
    for name, value in entry.items():
        if name.lower() == key.lower():
            return value
    return None


def parse_screenshot_names(content: str) -> list[PartialRecord]:
    """Launch id and title pairs from screenshots.vdf, in file order.

    Raises:
        StructuralParseError: If the "shortcutnames" block is missing
    """
    block = vdf_like.extract_block(content, SHORTCUT_NAMES_BLOCK)
    if block is None:
        raise StructuralParseError(f'No "{SHORTCUT_NAMES_BLOCK}" block')
    body, _ = block
    return [
        {"launch_id": pair.key, "title": pair.raw_value}
        for pair in vdf_like.iter_pairs(body)
    ]


def parse_shortcuts(data: bytes) -> list[PartialRecord]:
    """Shortcut entries from the binary shortcuts.vdf.

    Raises:
        StructuralParseError: If the file is not valid binary VDF
    """
    try:
        parsed = vdf.binary_loads(data)
    except (SyntaxError, ValueError, struct.error) as e:
        raise StructuralParseError(f"Invalid binary VDF: {e}") from e

    shortcuts = _get(parsed, "shortcuts") or {}
    records = []
    for entry in shortcuts.values():
        if not isinstance(entry, dict):
            continue
        appid = _get(entry, "appid")
        records.append({
            "title": str(_get(entry, "AppName") or ""),
            # Stored signed; artwork file names use the unsigned value
            "box_art_id": str(appid & 0xFFFFFFFF) if isinstance(appid, int) else "",
            "start_dir": str(_get(entry, "StartDir") or "").strip('"'),
            "icon": str(_get(entry, "icon") or "").strip('"'),
        })
    return records


def join_shortcuts(
    shortcuts: list[PartialRecord],
    screenshot_names: list[PartialRecord],
) -> list[ReconciledRecord]:
    """Attach a launch id to each shortcut; the newest name entry wins."""
    return reconcile(
        shortcuts,
        screenshot_names,
        field_key("title"),
        reverse_secondary=True,
        exclusive=True,
    )


class SteamShortcuts(SourceAdapter):
    """Non-Steam games added to the Steam library."""

    source = SupportedSource.STEAM_SHORTCUTS
    hints_key = "steam"

    def find_user_dir(self) -> Optional[Path]:
        """First userdata directory holding all shortcut files."""
        userdata = self.path("userdata")
        try:
            users = sorted(p for p in userdata.iterdir() if p.is_dir())
        except OSError:
            return None
        for user_dir in users:
            if (
                self.path("screenshots", user_dir).is_file()
                and self.path("shortcuts", user_dir).is_file()
                and self.path("grid", user_dir).is_dir()
            ):
                return user_dir
            logger.debug("%s - incomplete user directory %s", self.source, user_dir)
        return None

    def is_detected(self) -> bool:
        return self.find_user_dir() is not None

    def box_art(self, grid: Path, box_art_id: str) -> Optional[Path]:
        if not box_art_id:
            return None
        # Native clients add a "p" suffix for portrait art, Flatpak ones don't
        return existing_image(grid, f"{box_art_id}p") or existing_image(grid, box_art_id)

    def parse_user_files(self, user_dir: Path) -> list[ReconciledRecord]:
        path_screenshots = self.path("screenshots", user_dir)
        path_shortcuts = self.path("shortcuts", user_dir)

        try:
            names = parse_screenshot_names(read_source(path_screenshots, self.source.value))
        except StructuralParseError as e:
            raise StructuralParseError(str(e), self.source.value, path_screenshots) from e

        try:
            data = path_shortcuts.read_bytes()
        except OSError as e:
            raise SourceReadError(
                f"Cannot read file: {e.strerror or e}", self.source.value, path_shortcuts
            ) from e
        try:
            shortcuts = parse_shortcuts(data)
        except StructuralParseError as e:
            raise StructuralParseError(str(e), self.source.value, path_shortcuts) from e

        return join_shortcuts(shortcuts, names)

    def get_detected_games(self) -> list[Game]:
        # TODO: pick the logged-in user from config/loginusers.vdf instead of the first one
        user_dir = self.find_user_dir()
        if user_dir is None:
            raise SourceReadError(
                "No user directory with shortcut files", self.source.value, self.path("userdata")
            )

        grid = self.path("grid", user_dir)
        games = []
        for record in self.parse_user_files(user_dir):
            launch_id = record["launch_id"]
            games.append(Game(
                title=clean_title(record["title"]),
                source=self.source,
                launch_id=LAUNCH_URI.format(app_id=launch_id),
                is_sandboxed=self.is_sandboxed,
                launch_options={"app_id": launch_id},
                path_game_dir=some_if_dir(record["start_dir"]) if record["start_dir"] else None,
                path_box_art=self.box_art(grid, record["box_art_id"]),
                path_icon=some_if_file(record["icon"]) if record["icon"] else None,
            ))
        return self.warn_if_empty(games)
