"""Path resolution chain.

A logical resource (a launcher's data directory, a library cache, an icon)
can live in several places: the native XDG location, a sandboxed Flatpak
location, a capitalisation variant. Callers build an ordered list of
candidates and ask for the first one that exists as the right kind.

Absence is the common case on any given machine, so nothing here raises
when a path is missing. Only the caller decides whether "not found" is
fatal for its source.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from .constants import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PathKind(Enum):
    """Kind of filesystem entry a resolution requires."""
    FILE = "file"
    DIR = "dir"
    ANY = "any"

    def matches(self, path: Path) -> bool:
        try:
            if self is PathKind.FILE:
                return path.is_file()
            if self is PathKind.DIR:
                return path.is_dir()
            return path.exists()
        except OSError:
            # e.g. permission denied on a parent directory
            return False


@dataclass(frozen=True)
class CandidateRoot:
    """One possible location of a resource.

    Attributes:
        path: Absolute path prefix
        sandboxed: True when the location belongs to a Flatpak sandbox
    """
    path: Path
    sandboxed: bool = False

    def joinpath(self, suffix: PathLike) -> Path:
        return self.path / suffix if suffix else self.path


def _as_candidate(candidate: Union[CandidateRoot, PathLike]) -> CandidateRoot:
    if isinstance(candidate, CandidateRoot):
        return candidate
    return CandidateRoot(Path(candidate))


def resolve_root(
    candidates: Iterable[Union[CandidateRoot, PathLike]],
    suffix: PathLike = "",
    kind: PathKind = PathKind.ANY,
) -> Optional[CandidateRoot]:
    """Return the first candidate whose joined path exists as ``kind``.

    Args:
        candidates: Ordered candidate roots (plain paths are accepted)
        suffix: Relative path joined to each candidate before checking
        kind: Required kind of the joined path

    Returns:
        The matching candidate root (not the joined path), or None
    """
    for candidate in candidates:
        root = _as_candidate(candidate)
        path = root.joinpath(suffix)
        if kind.matches(path):
            logger.debug("Resolved %s at %s", suffix or kind.value, path)
            return root
    return None


def resolve(
    candidates: Iterable[Union[CandidateRoot, PathLike]],
    suffix: PathLike = "",
    kind: PathKind = PathKind.ANY,
) -> Optional[Path]:
    """Return the first ``candidate / suffix`` that exists as ``kind``.

    Example:
        >>> resolve(["/does/not/exist", "/tmp"], kind=PathKind.DIR)
        PosixPath('/tmp')
    """
    root = resolve_root(candidates, suffix, kind)
    if root is None:
        return None
    return root.joinpath(suffix)


def some_if_file(path: PathLike) -> Optional[Path]:
    path = Path(path)
    return path if PathKind.FILE.matches(path) else None


def some_if_dir(path: PathLike) -> Optional[Path]:
    path = Path(path)
    return path if PathKind.DIR.matches(path) else None


def existing_image(directory: PathLike, stem: str) -> Optional[Path]:
    """Find ``stem`` with the first image extension that exists.

    Extensions are tried in IMAGE_EXTENSIONS order (.png, .jpg, .jpeg).
    """
    candidates = [Path(directory) / f"{stem}{ext}" for ext in IMAGE_EXTENSIONS]
    return resolve(candidates, kind=PathKind.FILE)
