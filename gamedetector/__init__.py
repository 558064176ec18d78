"""gamedetector: find games installed through Linux launchers.

Reads the catalogues that Steam, Heroic, Lutris, Bottles, itch and the
Minecraft launchers keep on disk and reports one Game per installed title,
with its install directory, artwork and the identifier to launch it with.

Subpackages:
    parsers: Lenient scanners for pseudo-JSON/YAML/CFG/VDF catalogues
    discovery: Source hints database and record reconciliation
    scanners: One adapter per supported launcher
    output: YAML reports
    utils: Path resolution, title helpers, logging setup
"""

from .config import DetectorConfig
from .detector import DetectionResult, GamesDetector
from .errors import (
    GamesParsingError,
    NoSourcesError,
    SourceReadError,
    StructuralParseError,
)
from .models import Game, SupportedSource

__version__ = "1.0.0"

__all__ = [
    # Detection
    'GamesDetector',
    'DetectionResult',
    'DetectorConfig',
    # Model
    'Game',
    'SupportedSource',
    # Errors
    'GamesParsingError',
    'SourceReadError',
    'StructuralParseError',
    'NoSourcesError',
]
