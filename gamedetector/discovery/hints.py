"""Source hints database loader.

Where each launcher keeps its catalogues is data, not code: the bundled
``data/source-hints.yaml`` lists, per source, the candidate roots (native
and Flatpak) and the catalogue files below them. Adapters ask this module
for candidate lists and file names, and the path resolution chain picks
whichever candidate exists.

Security constraints:
    - All paths must be relative to a base directory (no absolute paths)
    - No directory traversal allowed (..)
    - Bases are limited to home, config, cache and data
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..config import DetectorConfig
from ..errors import HintsError, PathSecurityError
from ..utils.constants import BASE_DIR_NAMES
from ..utils.paths import CandidateRoot

logger = logging.getLogger(__name__)


def validate_path_security(path: str, context: str = "source hints") -> None:
    """Validate that a path meets security constraints.

    Raises PathSecurityError if:
    - Path is absolute (starts with /)
    - Path attempts directory traversal (contains ..)

    Args:
        path: The path string to validate
        context: Description for error messages (e.g., "steam files.userdata")

    Raises:
        PathSecurityError: If path violates security constraints
    """
    if path.startswith("/"):
        raise PathSecurityError(
            f"Absolute paths not allowed in {context}: {path}"
        )

    if ".." in Path(path).parts:
        raise PathSecurityError(
            f"Directory traversal not allowed in {context}: {path}"
        )


def _validate_root(entry: Any, context: str) -> None:
    if not isinstance(entry, dict):
        raise HintsError(f"{context} must be a mapping with 'base' and 'path'")
    base = entry.get("base")
    if base not in BASE_DIR_NAMES:
        raise HintsError(f"{context} has invalid base {base!r}")
    path = entry.get("path")
    if not isinstance(path, str) or not path:
        raise HintsError(f"{context} is missing 'path'")
    validate_path_security(path, context)


def _validate_source(source_key: str, config: Any) -> None:
    if not isinstance(config, dict):
        raise HintsError(f"{source_key} must be a mapping")

    roots = config.get("roots")
    if not isinstance(roots, dict) or not roots:
        raise HintsError(f"{source_key} has no roots")
    for root_name, candidates in roots.items():
        if not isinstance(candidates, list) or not candidates:
            raise HintsError(f"{source_key} roots.{root_name} must be a non-empty list")
        for position, entry in enumerate(candidates):
            _validate_root(entry, f"{source_key} roots.{root_name}[{position}]")

    for name, value in (config.get("files") or {}).items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if not isinstance(item, str):
                raise HintsError(f"{source_key} files.{name} must be a string or list of strings")
            validate_path_security(item, f"{source_key} files.{name}")


def load_source_hints(hints_path: Path) -> dict[str, Any]:
    """Load and validate a source hints YAML file.

    Args:
        hints_path: Path to the hints file

    Returns:
        Dictionary mapping source keys to their roots and files

    Raises:
        FileNotFoundError: If hints file doesn't exist
        HintsError: If an entry is malformed
        PathSecurityError: If any path violates security constraints
        yaml.YAMLError: If YAML is malformed
    """
    with open(hints_path, encoding="utf-8") as f:
        hints = yaml.safe_load(f)

    if hints is None:
        return {}
    if not isinstance(hints, dict):
        raise HintsError(f"Hints file must contain a mapping: {hints_path}")

    for source_key, config in hints.items():
        _validate_source(source_key, config)

    logger.debug("Loaded hints for %d source(s) from %s", len(hints), hints_path)
    return hints


def get_default_hints_path() -> Path:
    """Get the path to the bundled source-hints.yaml."""
    return Path(__file__).parent.parent / "data" / "source-hints.yaml"


class SourceHints:
    """Lazy, cached access to the source hints database.

    Example:
        >>> hints = SourceHints()
        >>> config = DetectorConfig.from_environment()
        >>> [c.path for c in hints.candidates("steam", "root", config)]
        [PosixPath('/home/me/.local/share/Steam'),
         PosixPath('/home/me/.var/app/com.valvesoftware.Steam/data/Steam')]
        >>> hints.file_name("steam", "library_folders")
        'libraryfolders.vdf'
    """

    def __init__(self, hints_path: Optional[Path] = None):
        """Initialize the hints database.

        Args:
            hints_path: Path to a hints YAML (uses the bundled file if not specified)
        """
        self.hints_path = hints_path or get_default_hints_path()
        self._database: Optional[dict[str, Any]] = None

    @property
    def database(self) -> dict[str, Any]:
        """Lazy-load and cache the database."""
        if self._database is None:
            self._database = load_source_hints(self.hints_path)
        return self._database

    def reload(self) -> None:
        """Force reload of the database from disk."""
        self._database = None

    def lookup(self, source_key: str) -> Optional[dict[str, Any]]:
        return self.database.get(source_key)

    def _require(self, source_key: str) -> dict[str, Any]:
        config = self.lookup(source_key)
        if config is None:
            raise HintsError(f"No hints for source {source_key!r}")
        return config

    def candidates(
        self,
        source_key: str,
        root_name: str,
        config: DetectorConfig,
    ) -> list[CandidateRoot]:
        """Candidate roots for one named root of a source, in order.

        Raises:
            HintsError: If the source or root is not in the database
        """
        roots = self._require(source_key)["roots"]
        if root_name not in roots:
            raise HintsError(f"No root {root_name!r} for source {source_key!r}")
        return [
            CandidateRoot(
                config.base_dir(entry["base"]) / entry["path"],
                sandboxed=bool(entry.get("sandboxed", False)),
            )
            for entry in roots[root_name]
        ]

    def file_names(self, source_key: str, name: str) -> list[str]:
        """All alternatives listed for a file entry."""
        files = self._require(source_key).get("files") or {}
        if name not in files:
            raise HintsError(f"No file {name!r} for source {source_key!r}")
        value = files[name]
        return list(value) if isinstance(value, list) else [value]

    def file_name(self, source_key: str, name: str) -> str:
        """First (or only) relative path listed for a file entry."""
        return self.file_names(source_key, name)[0]
