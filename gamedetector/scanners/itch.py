"""itch scanner.

The itch app keeps installs ("caves") in its butler SQLite database. The
install directory and executable are not columns: they live in the cave's
``verdict``, a JSON document that is scanned for the few keys needed.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from ..errors import SourceReadError
from ..models import Game, SupportedSource
from ..parsers import json_like
from ..parsers.records import PartialRecord, scan_records
from ..utils.paths import some_if_dir
from ..utils.strings import clean_title
from .base import SourceAdapter

logger = logging.getLogger(__name__)

CAVES_QUERY = """
    SELECT g.title, il.path AS base_path, c.id AS cave_id, c.verdict
    FROM caves c, games g, install_locations il
    WHERE g.id = c.game_id AND il.id = c.install_location_id
"""

_VERDICT_SCANNER = json_like.record_scanner(
    [
        json_like.field("basePath", name="game_dir"),
        json_like.field("path", name="executable"),
        json_like.field("interpreter", required=False),
    ],
    ordered=True,
)


def parse_verdict(verdict: str) -> Optional[PartialRecord]:
    """Install directory, executable and interpreter from a verdict."""
    records = scan_records(verdict, _VERDICT_SCANNER)
    return records[0] if records else None


def query_caves(path_db: Path) -> list[tuple[str, str, str, str]]:
    """(title, base path, cave id, verdict) rows.

    Raises:
        SourceReadError: If the database cannot be opened or queried
    """
    try:
        conn = sqlite3.connect(f"{path_db.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise SourceReadError(f"Cannot open database: {e}", SupportedSource.ITCH.value, path_db) from e

    try:
        return conn.execute(CAVES_QUERY).fetchall()
    except sqlite3.Error as e:
        raise SourceReadError(f"Query failed: {e}", SupportedSource.ITCH.value, path_db) from e
    finally:
        conn.close()


class Itch(SourceAdapter):
    """Games installed through the itch app."""

    source = SupportedSource.ITCH
    hints_key = "itch"

    @property
    def path_db(self) -> Path:
        return self.path("database")

    def is_detected(self) -> bool:
        return self.path_db.is_file()

    def get_detected_games(self) -> list[Game]:
        games = []
        for title, base_path, cave_id, verdict in query_caves(self.path_db):
            title = clean_title(title or "")
            verdict_record = parse_verdict(verdict or "")
            if verdict_record is None:
                logger.error("%s - cannot read verdict for %r", self.source, title)
                logger.debug("%s - verdict for %r: %s", self.source, title, verdict)
                continue

            game_dir = verdict_record["game_dir"] or base_path or ""
            executable = verdict_record["executable"]
            options = {"executable": str(Path(game_dir) / executable) if game_dir else executable}
            if verdict_record.get("interpreter"):
                options["interpreter"] = verdict_record["interpreter"]

            games.append(Game(
                title=title,
                source=self.source,
                launch_id=str(cave_id),
                is_sandboxed=self.is_sandboxed,
                launch_options=options,
                path_game_dir=some_if_dir(game_dir) if game_dir else None,
            ))
        return self.warn_if_empty(games)
