"""Pure title helpers.

These derive a display title when a catalogue does not carry one, and tidy
the titles that it does carry. None of them touch the filesystem.
"""

from typing import Optional

from .constants import MINECRAFT_TITLE_PREFIX, SLUG_SEPARATORS, TITLE_NOISE


def clean_title(title: str) -> str:
    """Remove trademark symbols and surrounding whitespace from a title."""
    for symbol in TITLE_NOISE:
        title = title.replace(symbol, "")
    return title.strip()


def title_from_slug(slug: str) -> str:
    """Derive a readable title from a slug.

    Separators become spaces and only the first character is upper-cased;
    the rest of the slug is left as is.

    Args:
        slug: Identifier such as "sky-factory"

    Returns:
        Derived title, e.g. "Sky factory". Empty for an empty slug.

    Example:
        >>> title_from_slug("sky-factory")
        'Sky factory'
    """
    for separator in SLUG_SEPARATORS:
        slug = slug.replace(separator, " ")
    slug = " ".join(slug.split())
    return slug[:1].upper() + slug[1:]


def name_from_path(path: str) -> Optional[str]:
    """Return the last segment of a slash-separated path.

    A trailing slash is ignored. Returns None when the path has no
    separator or the last segment is empty.
    """
    path = path.rstrip("/")
    if "/" not in path:
        return None
    name = path.rsplit("/", 1)[1]
    return name or None


def minecraft_title(name: str) -> str:
    return f"{MINECRAFT_TITLE_PREFIX}{name}"
