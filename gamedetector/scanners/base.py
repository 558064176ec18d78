"""Source adapter interface.

Each supported launcher is read by one SourceAdapter subclass. An adapter:
    1. Resolves its root from the candidate roots in the hints database
       (native first, then the Flatpak sandbox)
    2. Scans its catalogue files with the record scanners
    3. Reconciles records from different files where needed
    4. Checks artwork and install directories, producing Game objects

Adapters raise GamesParsingError subclasses when a catalogue cannot be read
or is structurally broken. Whether that aborts anything is the caller's
decision; the aggregator logs it and moves on to the next source.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Optional

from ..config import DetectorConfig
from ..discovery.hints import SourceHints
from ..models import Game, SupportedSource
from ..utils.paths import CandidateRoot, PathKind, resolve, resolve_root

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """Base class for the readers of one launcher's catalogues.

    Subclasses set ``source`` and ``hints_key`` and implement
    ``is_detected`` and ``get_detected_games``.
    """

    source: ClassVar[SupportedSource]
    hints_key: ClassVar[str]

    def __init__(self, config: DetectorConfig, hints: SourceHints):
        self.config = config
        self.hints = hints

        candidates = self.candidates("root")
        root = resolve_root(candidates, kind=PathKind.DIR)
        if root is None:
            # Not installed; keep the native location for messages
            root = candidates[0]
        elif root.sandboxed:
            logger.debug("%s - using sandboxed root %s", self.source, root.path)
        self._root = root

    @property
    def root_dir(self) -> Path:
        return self._root.path

    @property
    def is_sandboxed(self) -> bool:
        return self._root.sandboxed

    def candidates(self, root_name: str) -> list[CandidateRoot]:
        return self.hints.candidates(self.hints_key, root_name, self.config)

    def path(self, file_key: str, base: Optional[Path] = None) -> Path:
        """Path of a catalogue file below ``base`` (the root by default)."""
        return (base or self.root_dir) / self.hints.file_name(self.hints_key, file_key)

    def find(
        self,
        file_key: str,
        kind: PathKind = PathKind.ANY,
        base: Optional[Path] = None,
    ) -> Optional[Path]:
        """First existing alternative of a catalogue file entry."""
        names = self.hints.file_names(self.hints_key, file_key)
        return resolve([(base or self.root_dir) / name for name in names], kind=kind)

    def resolve_dir(self, root_name: str) -> Optional[Path]:
        """First existing directory among a named root's candidates."""
        return resolve(self.candidates(root_name), kind=PathKind.DIR)

    def warn_if_empty(self, games: list[Game]) -> list[Game]:
        if not games:
            logger.warning("%s - no games were detected", self.source)
        return games

    @abstractmethod
    def is_detected(self) -> bool:
        """Whether the launcher's catalogues exist on this machine."""

    @abstractmethod
    def get_detected_games(self) -> list[Game]:
        """Games found in the launcher's catalogues.

        Raises:
            SourceReadError: If a catalogue cannot be read
            StructuralParseError: If a catalogue lacks a required block or field
        """

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(root={str(self.root_dir)!r}, "
            f"sandboxed={self.is_sandboxed})"
        )
