"""Utility modules for gamedetector."""

from .paths import (
    CandidateRoot,
    PathKind,
    existing_image,
    resolve,
    resolve_root,
    some_if_dir,
    some_if_file,
)
from .strings import clean_title, minecraft_title, name_from_path, title_from_slug

__all__ = [
    # Path resolution
    'CandidateRoot',
    'PathKind',
    'resolve',
    'resolve_root',
    'some_if_file',
    'some_if_dir',
    'existing_image',
    # Titles
    'clean_title',
    'title_from_slug',
    'name_from_path',
    'minecraft_title',
]
