"""Aggregation of detected games across all supported sources.

GamesDetector runs every enabled source adapter and collects their games.
Detection is best-effort: a source whose catalogues are unreadable or
broken is logged and reported in ``DetectionResult.errors`` while the
other sources proceed. Only when no source at all can be read does the
run count as failed.

Example:
    >>> from gamedetector import DetectorConfig, GamesDetector
    >>> detector = GamesDetector(DetectorConfig.from_environment())
    >>> for game in detector.games_with_box_art():
    ...     print(f"{game.source}: {game.title}")
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Optional

from .config import DetectorConfig
from .discovery.hints import SourceHints
from .errors import GamesParsingError, NoSourcesError
from .models import Game, SupportedSource
from .scanners import SourceAdapter, build_adapters

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Outcome of one detection run.

    Attributes:
        games_per_source: Games of every detected source that could be read
        errors: Error message per detected source that failed
    """
    games_per_source: dict[SupportedSource, list[Game]] = field(default_factory=dict)
    errors: dict[SupportedSource, str] = field(default_factory=dict)

    @property
    def games(self) -> list[Game]:
        return [game for games in self.games_per_source.values() for game in games]

    @property
    def readable_sources(self) -> list[SupportedSource]:
        return list(self.games_per_source)

    @property
    def status(self) -> str:
        """'success', 'partial' (some sources failed) or 'error' (none readable)."""
        if not self.games_per_source:
            return "error"
        if self.errors:
            return "partial"
        return "success"

    def get_statistics(self) -> dict[str, Any]:
        """Counts per source, for reports."""
        return {
            "total_games": len(self.games),
            "with_box_art": sum(1 for game in self.games if game.has_box_art()),
            "by_source": {
                source.value: len(games) for source, games in self.games_per_source.items()
            },
            "failed_sources": [source.value for source in self.errors],
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "games": [game.to_dict() for game in self.games],
            "errors": {source.value: message for source, message in self.errors.items()},
            "statistics": self.get_statistics(),
        }


class GamesDetector:
    """Query surface over every supported source.

    Args:
        config: Directories and options for the run
        hints: Source hints database (loaded from config.hints_path or the
            bundled file if None)
    """

    def __init__(self, config: DetectorConfig, hints: Optional[SourceHints] = None):
        self.config = config
        self.hints = hints or SourceHints(config.hints_path)

        sources = None
        if config.sources:
            sources = [SupportedSource.from_key(key) for key in config.sources]
        self.adapters: list[SourceAdapter] = build_adapters(config, self.hints, sources)

    def _adapter(self, source: SupportedSource) -> Optional[SourceAdapter]:
        for adapter in self.adapters:
            if adapter.source is source:
                return adapter
        return None

    def detected_adapters(self) -> list[SourceAdapter]:
        detected = [adapter for adapter in self.adapters if adapter.is_detected()]
        logger.info("Detected sources: %s", ", ".join(str(a.source) for a in detected) or "none")
        return detected

    def detected_sources(self) -> list[SupportedSource]:
        return [adapter.source for adapter in self.detected_adapters()]

    def _run_adapter(
        self,
        adapter: SourceAdapter,
    ) -> tuple[SupportedSource, Optional[list[Game]], Optional[str]]:
        try:
            games = adapter.get_detected_games()
        except (GamesParsingError, OSError) as e:
            logger.warning("%s - skipped: %s", adapter.source, e)
            return adapter.source, None, str(e)
        logger.info("%s - %d game(s)", adapter.source, len(games))
        return adapter.source, games, None

    def detect(self, strict: bool = False) -> DetectionResult:
        """Run every detected source and collect games and errors.

        Args:
            strict: Raise instead of returning an 'error' result when no
                source could be read

        Raises:
            NoSourcesError: With ``strict`` when no source is readable
        """
        adapters = self.detected_adapters()

        if self.config.max_workers > 1 and len(adapters) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                outcomes = list(executor.map(self._run_adapter, adapters))
        else:
            outcomes = [self._run_adapter(adapter) for adapter in adapters]

        result = DetectionResult()
        for source, games, error in outcomes:
            if error is not None:
                result.errors[source] = error
            else:
                result.games_per_source[source] = games

        if strict and result.status == "error":
            raise NoSourcesError("No game source could be read")
        return result

    def games_per_source(self) -> dict[SupportedSource, list[Game]]:
        return self.detect().games_per_source

    def all_games(self) -> list[Game]:
        return self.detect().games

    def games_with_box_art(self) -> list[Game]:
        return [game for game in self.all_games() if game.has_box_art()]

    def games_from_source(self, source: SupportedSource) -> list[Game]:
        """Games of one source; empty when it is disabled, absent or unreadable."""
        adapter = self._adapter(source)
        if adapter is None or not adapter.is_detected():
            return []
        _, games, _ = self._run_adapter(adapter)
        return games or []
