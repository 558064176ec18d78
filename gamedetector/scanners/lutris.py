"""Lutris scanner.

Lutris stores its games in the SQLite database ``pga.db``. Cover art is
looked up by installer slug, then by game slug, in the first existing
coverart directory (data, config, cache, then Flatpak).
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

from ..discovery.reconcile import Derivation, apply_derivations
from ..errors import SourceReadError
from ..models import Game, SupportedSource
from ..utils.paths import existing_image, some_if_dir
from ..utils.strings import clean_title, title_from_slug
from .base import SourceAdapter

logger = logging.getLogger(__name__)

GAMES_QUERY = "SELECT id, name, slug, installer_slug, directory FROM games"

LAUNCH_URI = "lutris:rungameid/{game_id}"

_DERIVATIONS = [Derivation("title", "slug", title_from_slug)]


def query_games(path_db: Path) -> list[dict[str, str]]:
    """Rows of the games table as string records.

    Raises:
        SourceReadError: If the database cannot be opened or queried
    """
    try:
        conn = sqlite3.connect(f"{path_db.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise SourceReadError(f"Cannot open database: {e}", SupportedSource.LUTRIS.value, path_db) from e

    try:
        rows = conn.execute(GAMES_QUERY).fetchall()
    except sqlite3.Error as e:
        raise SourceReadError(f"Query failed: {e}", SupportedSource.LUTRIS.value, path_db) from e
    finally:
        conn.close()

    def text(value: Any) -> str:
        return "" if value is None else str(value)

    return [
        {
            "game_id": text(game_id),
            "title": text(name),
            "slug": text(slug),
            "installer_slug": text(installer_slug),
            "game_dir": text(directory),
        }
        for game_id, name, slug, installer_slug, directory in rows
    ]


class Lutris(SourceAdapter):
    """Games in the Lutris library database."""

    source = SupportedSource.LUTRIS
    hints_key = "lutris"

    @property
    def path_db(self) -> Path:
        return self.path("database")

    def is_detected(self) -> bool:
        return self.path_db.is_file()

    def artwork(self, slugs: list[str]) -> tuple[Optional[Path], Optional[Path]]:
        """(box art, icon) for the first slug with an image."""
        coverart = self.resolve_dir("coverart")
        icons = self.resolve_dir("icons")
        box_art = icon = None
        for slug in slugs:
            if box_art is None and coverart is not None:
                box_art = existing_image(coverart, slug)
            if icon is None and icons is not None:
                icon = existing_image(icons, f"lutris_{slug}")
        return box_art, icon

    def get_detected_games(self) -> list[Game]:
        games = []
        for row in query_games(self.path_db):
            record = apply_derivations(row, _DERIVATIONS)
            title = clean_title(record["title"])
            if not title:
                logger.debug("%s - skipping game %s: no title", self.source, record["game_id"])
                continue

            slugs = [s for s in (record["installer_slug"], record["slug"]) if s]
            path_box_art, path_icon = self.artwork(slugs)
            games.append(Game(
                title=title,
                source=self.source,
                launch_id=LAUNCH_URI.format(game_id=record["game_id"]),
                is_sandboxed=self.is_sandboxed,
                launch_options={"game_id": record["game_id"]},
                path_game_dir=some_if_dir(record["game_dir"]) if record["game_dir"] else None,
                path_box_art=path_box_art,
                path_icon=path_icon,
            ))
        return self.warn_if_empty(games)
