"""Pseudo-JSON scanner.

Handles catalogues whose keys and values are double-quoted, such as the
Heroic store caches, the itch verdict column and Steam's text manifests
(which use the same quoting without the colon). Only named fields are
extracted; the rest of the document is never parsed or validated.
"""

from typing import Optional, Sequence

from .cursor import (
    QUOTE, Step, enclosing_block, is_alphanumeric, quoted_span, run_of, skip_until, tag,
)
from .records import Field, PartialRecord, RawField, RecordScanner

# Characters allowed between a key and its value
_SEPARATOR_CHARS = " \t\r\n:"


def _is_separator(char: str) -> bool:
    return char in _SEPARATOR_CHARS


def key_token(key: str) -> str:
    return f"{QUOTE}{key}{QUOTE}"


def find_key(text: str, key: str) -> Step:
    """Skip to the next ``"key"`` token."""
    return skip_until(text, key_token(key))


def _after_key(text: str, key: str) -> Optional[str]:
    located = find_key(text, key)
    if located is None:
        return None
    _, at_key = located
    consumed = tag(at_key, key_token(key))
    if consumed is None:
        return None
    _, rest = run_of(consumed[1], _is_separator)
    return rest


def extract_value(text: str, key: str) -> Optional[tuple[RawField, str]]:
    """Extract the double-quoted value of the next ``"key"``.

    The value is captured verbatim, newlines included.

    Example:
        >>> extract_value('{"title": "Fall Guys", "x": 1}', "title")
        (RawField(key='title', raw_value='Fall Guys'), ', "x": 1}')
    """
    rest = _after_key(text, key)
    if rest is None:
        return None
    span = quoted_span(rest)
    if span is None:
        return None
    value, remaining = span
    return RawField(key, value), remaining


def extract_bare_value(text: str, key: str) -> Optional[tuple[RawField, str]]:
    """Extract a scalar such as ``true`` or ``42``.

    One opening quote is stepped over, so ``"false"`` reads as ``false``.
    Stops at the first non-alphanumeric character.
    """
    rest = _after_key(text, key)
    if rest is None:
        return None
    opening = tag(rest, QUOTE)
    if opening is not None:
        rest = opening[1]
    run = run_of(rest, is_alphanumeric, minimum=1)
    if run is None:
        return None
    value, remaining = run
    if opening is not None:
        closing = tag(remaining, QUOTE)
        if closing is not None:
            remaining = closing[1]
    return RawField(key, value), remaining


def field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, extract_value, required, name)


def bare_field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, extract_bare_value, required, name)


def record_scanner(fields: Sequence[Field], accept=None, ordered: bool = False) -> RecordScanner:
    """Build a RecordScanner for a pseudo-JSON entry shape.

    Each entry is the innermost object holding the anchor, so the anchor
    need not be the first key of its object.
    """
    return RecordScanner(
        find_key, fields, accept=accept, ordered=ordered, entry_bounds=enclosing_block,
    )


def is_not_false(key: str):
    """Accept predicate dropping entries whose ``key`` is literally false."""
    def accept(record: PartialRecord) -> bool:
        return record.get(key, "").lower() != "false"
    return accept
