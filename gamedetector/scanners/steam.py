"""Steam library scanner.

Steam lists its library folders in ``steamapps/libraryfolders.vdf``; each
library's ``steamapps`` directory holds one ``appmanifest_<appid>.acf``
per installed app. Artwork comes from the client's library cache:
    - appcache/librarycache/<appid>_library_600x900.jpg (older clients)
    - appcache/librarycache/<appid>/**/library_600x900.jpg (newer clients)

Apps without box art (Proton, runtimes, tools) are not games and are
skipped.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterator, Optional

from ..errors import SourceReadError
from ..models import Game, SupportedSource
from ..parsers import vdf_like
from ..parsers.records import PartialRecord, read_source, scan_file, scan_records
from ..utils.constants import (
    STEAM_BOX_ART_NAMES,
    STEAM_BOX_ART_SUFFIX,
    STEAM_ICON_NAME_LENGTH,
    STEAM_ICON_SUFFIX,
    STEAM_LIBRARY_CACHE_DEPTH,
)
from ..utils.paths import PathKind, some_if_dir, some_if_file
from ..utils.strings import clean_title
from .base import SourceAdapter

logger = logging.getLogger(__name__)

LAUNCH_URI = "steam://rungameid/{app_id}"

MANIFEST_NAME = re.compile(r"appmanifest_[A-Za-z0-9]+\.acf")

_LIBRARY_FOLDERS_SCANNER = vdf_like.record_scanner([vdf_like.field("path")])

_MANIFEST_SCANNER = vdf_like.record_scanner(
    [
        vdf_like.field("appid", name="app_id"),
        vdf_like.field("name", name="title"),
        vdf_like.field("installdir"),
    ],
    ordered=True,
)


def is_manifest_name(name: str) -> bool:
    return MANIFEST_NAME.fullmatch(name) is not None


def parse_manifest(content: str) -> Optional[PartialRecord]:
    """First complete app record in an appmanifest, if any."""
    records = scan_records(content, _MANIFEST_SCANNER)
    return records[0] if records else None


def _walk_files(directory: Path, depth: int) -> Iterator[Path]:
    """Files below ``directory`` down to ``depth`` levels, shallowest first."""
    level = [directory]
    for _ in range(depth):
        subdirs = []
        for current in level:
            try:
                entries = sorted(current.iterdir())
            except OSError:
                continue
            for entry in entries:
                if entry.is_dir():
                    subdirs.append(entry)
                elif entry.is_file():
                    yield entry
        level = subdirs


def _find_in_cache(directory: Path, predicate: Callable[[Path], bool]) -> Optional[Path]:
    for path in _walk_files(directory, STEAM_LIBRARY_CACHE_DEPTH):
        if predicate(path):
            return path
    return None


def _is_hashed_icon(path: Path) -> bool:
    return path.suffix == ".jpg" and len(path.name) == STEAM_ICON_NAME_LENGTH


class Steam(SourceAdapter):
    """Games installed in any Steam library folder."""

    source = SupportedSource.STEAM
    hints_key = "steam"

    @property
    def path_steamapps(self) -> Optional[Path]:
        return self.find("steamapps", PathKind.DIR)

    @property
    def path_library_cache(self) -> Path:
        return self.path("library_cache")

    def is_detected(self) -> bool:
        steamapps = self.path_steamapps
        return steamapps is not None and self.path("library_folders", steamapps).is_file()

    def library_paths(self) -> list[Path]:
        """Library folders from libraryfolders.vdf, main library first.

        Raises:
            SourceReadError: If the Steam directory or library list is missing
        """
        steamapps = self.path_steamapps
        if steamapps is None:
            raise SourceReadError("No steamapps directory", self.source.value, self.root_dir)

        records = scan_file(
            self.path("library_folders", steamapps),
            _LIBRARY_FOLDERS_SCANNER,
            self.source.value,
        )
        paths = [self.root_dir]
        for record in records:
            path = Path(record["path"])
            if path not in paths:
                paths.append(path)
        return paths

    def manifests(self, library: Path) -> list[Path]:
        """appmanifest files of one library, sorted by name."""
        steamapps = self.find("steamapps", PathKind.DIR, base=library)
        if steamapps is None:
            logger.warning("%s - library %s has no steamapps directory", self.source, library)
            return []
        try:
            entries = sorted(steamapps.iterdir())
        except OSError as e:
            logger.warning("%s - cannot list library %s: %s", self.source, library, e)
            return []
        return [p for p in entries if is_manifest_name(p.name) and p.is_file()]

    def box_art(self, app_id: str) -> Optional[Path]:
        cache = self.path_library_cache
        found = some_if_file(cache / f"{app_id}{STEAM_BOX_ART_SUFFIX}")
        if found:
            return found
        for name in STEAM_BOX_ART_NAMES:
            found = _find_in_cache(cache / app_id, lambda p, name=name: p.name == name)
            if found:
                return found
        return None

    def icon(self, app_id: str) -> Optional[Path]:
        cache = self.path_library_cache
        return (
            some_if_file(cache / f"{app_id}{STEAM_ICON_SUFFIX}")
            or _find_in_cache(cache / app_id, _is_hashed_icon)
        )

    def build_game(self, record: PartialRecord, steamapps: Path) -> Optional[Game]:
        app_id = record["app_id"]
        title = clean_title(record["title"])

        path_box_art = self.box_art(app_id)
        if path_box_art is None:
            logger.debug("%s - skipping %r (%s): no box art", self.source, title, app_id)
            return None

        common = self.path("common", steamapps)
        return Game(
            title=title,
            source=self.source,
            launch_id=LAUNCH_URI.format(app_id=app_id),
            is_sandboxed=self.is_sandboxed,
            launch_options={"app_id": app_id},
            path_game_dir=some_if_dir(common / record["installdir"]),
            path_box_art=path_box_art,
            path_icon=self.icon(app_id),
        )

    def get_detected_games(self) -> list[Game]:
        games = []
        for library in self.library_paths():
            for manifest in self.manifests(library):
                try:
                    record = parse_manifest(read_source(manifest, self.source.value))
                except SourceReadError as e:
                    logger.warning("%s", e)
                    continue
                if record is None:
                    logger.debug("%s - no app record in %s", self.source, manifest)
                    continue
                game = self.build_game(record, manifest.parent)
                if game:
                    games.append(game)
        return self.warn_if_empty(games)
