"""Heroic Games Launcher scanner.

Heroic keeps one JSON catalogue per store below its config directory:
    - Epic (Legendary): store_cache/legendary_library.json
    - Amazon (Nile): store_cache/nile_library.json
    - GOG: gog_store/installed.json
    - Sideloaded apps: sideload_apps/library.json

The store caches list every owned game; entries with
``"is_installed": false`` are dropped while scanning. GOG's installed.json
has no title, so it is derived from the install directory name.
"""

import logging
from pathlib import Path
from typing import ClassVar, Optional

from ..discovery.reconcile import Derivation, ReconciledRecord, apply_derivations
from ..models import Game, SupportedSource
from ..parsers import json_like
from ..parsers.records import RecordScanner, scan_file
from ..utils.paths import some_if_dir, some_if_file
from ..utils.strings import clean_title, name_from_path
from .base import SourceAdapter

logger = logging.getLogger(__name__)

LAUNCH_URI = "heroic://launch/{runner}/{app_id}"

_STORE_CACHE_SCANNER = json_like.record_scanner(
    [
        json_like.field("app_name", name="app_id"),
        json_like.bare_field("is_installed", required=False),
        json_like.field("install_path"),
        json_like.field("title", required=False),
    ],
    accept=json_like.is_not_false("is_installed"),
)

_SIDELOAD_SCANNER = json_like.record_scanner(
    [
        json_like.field("app_name", name="app_id"),
        json_like.bare_field("is_installed", required=False),
        json_like.field("title", required=False),
        json_like.field("folder_name", name="install_path"),
    ],
    accept=json_like.is_not_false("is_installed"),
)

_GOG_INSTALLED_SCANNER = json_like.record_scanner(
    [
        json_like.field("install_path"),
        json_like.field("appName", name="app_id"),
    ],
)

_TITLE_FROM_INSTALL_PATH = Derivation("title", "install_path", name_from_path)


class HeroicAdapter(SourceAdapter):
    """Shared reading logic for the four Heroic catalogues."""

    hints_key = "heroic"
    catalogue: ClassVar[str]
    runner: ClassVar[str]
    scanner: ClassVar[RecordScanner]

    @property
    def path_catalogue(self) -> Path:
        return self.path(self.catalogue)

    @property
    def path_icons(self) -> Path:
        return self.path("icons")

    def is_detected(self) -> bool:
        return self.path_catalogue.is_file()

    def parse_catalogue(self) -> list[ReconciledRecord]:
        records = scan_file(self.path_catalogue, self.scanner, self.source.value)
        return [apply_derivations(r, [_TITLE_FROM_INSTALL_PATH]) for r in records]

    def artwork(self, app_id: str) -> tuple[Optional[Path], Optional[Path]]:
        """(box art, icon) for an app id."""
        return some_if_file(self.path_icons / f"{app_id}.jpg"), None

    def build_game(self, record: ReconciledRecord) -> Optional[Game]:
        title = clean_title(record.get("title", ""))
        if not title:
            logger.debug("%s - skipping %r: no title", self.source, record.get("app_id"))
            return None

        app_id = record["app_id"]
        path_box_art, path_icon = self.artwork(app_id)
        return Game(
            title=title,
            source=self.source,
            launch_id=LAUNCH_URI.format(runner=self.runner, app_id=app_id),
            is_sandboxed=self.is_sandboxed,
            launch_options={"runner": self.runner, "app_id": app_id},
            path_game_dir=some_if_dir(record["install_path"]),
            path_box_art=path_box_art,
            path_icon=path_icon,
        )

    def get_detected_games(self) -> list[Game]:
        games = [game for game in map(self.build_game, self.parse_catalogue()) if game]
        return self.warn_if_empty(games)


class HeroicEpic(HeroicAdapter):
    source = SupportedSource.HEROIC_EPIC
    catalogue = "legendary_library"
    runner = "legendary"
    scanner = _STORE_CACHE_SCANNER


class HeroicAmazon(HeroicAdapter):
    source = SupportedSource.HEROIC_AMAZON
    catalogue = "nile_library"
    runner = "nile"
    scanner = _STORE_CACHE_SCANNER


class HeroicGOG(HeroicAdapter):
    source = SupportedSource.HEROIC_GOG
    catalogue = "gog_installed"
    runner = "gog"
    scanner = _GOG_INSTALLED_SCANNER

    def artwork(self, app_id: str) -> tuple[Optional[Path], Optional[Path]]:
        # Heroic only caches a square icon for GOG titles
        return None, some_if_file(self.path_icons / f"{app_id}.png")


class HeroicSideload(HeroicAdapter):
    source = SupportedSource.HEROIC_SIDELOAD
    catalogue = "sideload_library"
    runner = "sideload"
    scanner = _SIDELOAD_SCANNER
