"""Bottles scanner.

Bottles describes a program in two places:
    - library.yml: programs pinned to the library, with their bottle,
      title, icon and grid thumbnail
    - bottles/<bottle>/bottle.yml: every program of that bottle with its
      install folder

Programs are joined on their id. Only library programs are reported, and
the library's title wins over the bottle's program name.
"""

import logging
from pathlib import Path
from typing import Optional

from ..discovery.reconcile import Derivation, ReconciledRecord, field_key, reconcile
from ..errors import SourceReadError
from ..models import Game, SupportedSource
from ..parsers import yaml_like
from ..parsers.records import PartialRecord, scan_file
from ..utils.paths import some_if_dir, some_if_file
from ..utils.strings import clean_title, name_from_path
from .base import SourceAdapter

logger = logging.getLogger(__name__)

THUMBNAIL_PREFIX = "grid:"

_LIBRARY_SCANNER = yaml_like.record_scanner(
    [
        yaml_like.field("bottle"),
        yaml_like.field("name", name="bottle_name"),
        yaml_like.field("path", name="bottle_subdir"),
        yaml_like.continued_field("icon", required=False),
        yaml_like.field("id"),
        yaml_like.field("name", name="title"),
        yaml_like.field("thumbnail", required=False),
    ],
    ordered=True,
)

_BOTTLE_PROGRAM_SCANNER = yaml_like.record_scanner(
    [
        yaml_like.continued_field("folder", name="game_dir"),
        yaml_like.field("id"),
        yaml_like.field("name", name="title", required=False),
    ],
    ordered=True,
)

_DERIVATIONS = [Derivation("title", "game_dir", name_from_path)]


def join_programs(
    library: list[PartialRecord],
    programs: list[PartialRecord],
) -> list[ReconciledRecord]:
    """Join library entries with bottle programs; first program per id wins."""
    return reconcile(
        library,
        programs,
        field_key("id"),
        prefer={"title": "primary"},
        derivations=_DERIVATIONS,
    )


def thumbnail_name(value: str) -> Optional[str]:
    """File name of a ``grid:`` thumbnail, None for other kinds."""
    if not value.startswith(THUMBNAIL_PREFIX):
        return None
    return value[len(THUMBNAIL_PREFIX):].strip() or None


class Bottles(SourceAdapter):
    """Programs pinned to the Bottles library."""

    source = SupportedSource.BOTTLES
    hints_key = "bottles"

    @property
    def path_library(self) -> Path:
        return self.path("library")

    @property
    def path_bottles(self) -> Path:
        return self.path("bottles")

    def is_detected(self) -> bool:
        return self.path_library.is_file()

    def parse_library(self) -> list[PartialRecord]:
        return scan_file(self.path_library, _LIBRARY_SCANNER, self.source.value)

    def parse_bottles(self) -> list[PartialRecord]:
        """Programs of every bottle; unreadable bottle files are skipped.

        Raises:
            SourceReadError: If the bottles directory cannot be listed
        """
        try:
            bottle_dirs = sorted(p for p in self.path_bottles.iterdir() if p.is_dir())
        except OSError as e:
            raise SourceReadError(
                f"Cannot list bottles: {e.strerror or e}", self.source.value, self.path_bottles
            ) from e

        programs: list[PartialRecord] = []
        for bottle_dir in bottle_dirs:
            path_config = self.path("bottle_config", bottle_dir)
            if not path_config.is_file():
                continue
            try:
                programs.extend(scan_file(path_config, _BOTTLE_PROGRAM_SCANNER, self.source.value))
            except SourceReadError as e:
                logger.warning("%s", e)
        return programs

    def box_art(self, record: ReconciledRecord) -> Optional[Path]:
        name = thumbnail_name(record.get("thumbnail", ""))
        if name is None:
            return None
        grids = self.path("grids", self.path_bottles / record["bottle_subdir"])
        return some_if_file(grids / name)

    def get_detected_games(self) -> list[Game]:
        games = []
        for record in join_programs(self.parse_library(), self.parse_bottles()):
            title = clean_title(record.get("title", ""))
            if not title:
                continue
            icon = record.get("icon")
            games.append(Game(
                title=title,
                source=self.source,
                launch_id=record["title"],
                is_sandboxed=self.is_sandboxed,
                launch_options={"bottle": record["bottle_name"]},
                path_game_dir=some_if_dir(record["game_dir"]) if record.get("game_dir") else None,
                path_box_art=self.box_art(record),
                path_icon=some_if_file(icon) if icon else None,
            ))
        return self.warn_if_empty(games)
