"""Error taxonomy for game detection.

Two failure kinds reach a source adapter's caller:
    - SourceReadError: a catalogue file or database could not be read
    - StructuralParseError: a block or field the format always carries is missing

Both derive from GamesParsingError so the aggregator can suppress a single
failing source with one except clause. "No match" while scanning records or
resolving paths is not an error and is never raised.
"""

from pathlib import Path
from typing import Optional, Union


class GamesParsingError(Exception):
    """Base class for failures while reading one source's catalogues."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.source = source
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.source:
            message = f"{self.source}: {message}"
        if self.path is not None:
            message = f"{message} ({self.path})"
        return message


class SourceReadError(GamesParsingError):
    """Raised when a catalogue file or database cannot be read."""
    pass


class StructuralParseError(GamesParsingError):
    """Raised when a field or block the file always contains is absent."""
    pass


class NoSourcesError(GamesParsingError):
    """Raised when not a single source could be read."""
    pass


class ConfigError(ValueError):
    """Raised for invalid detector configuration."""
    pass


class HintsError(ValueError):
    """Raised when the source hints database is malformed."""
    pass


class PathSecurityError(HintsError):
    """Raised when a hints path violates security constraints."""
    pass
