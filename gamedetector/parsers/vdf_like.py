"""Pseudo-VDF/ACF scanner.

Valve's text KeyValues format: double-quoted keys and values, nested in
unlabelled brace blocks::

    "Screenshots"
    {
        "shortcutnames"
        {
            "2931025216"    "Brave"
        }
    }

A named block is found by its quoted tag, then its direct children are
iterated. Scalar lookups by key reuse the pseudo-JSON extractor, since the
quoting is identical and only the separator differs.
"""

from typing import Iterator, Optional, Sequence

from . import json_like
from .cursor import OPEN_BRACE, Step, enclosing_block, match_brace, quoted_span, skip_whitespace, tag
from .records import Field, RawField, RecordScanner


def find_key(text: str, key: str) -> Step:
    return json_like.find_key(text, key)


def _take_block(text: str) -> Optional[tuple[str, str]]:
    if not text.startswith(OPEN_BRACE):
        return None
    end = match_brace(text)
    if end is None:
        return None
    return text[1:end], text[end + 1:]


def extract_block(text: str, block_tag: str) -> Optional[tuple[str, str]]:
    """Return the body of the block named ``block_tag``.

    Args:
        text: Remaining text
        block_tag: Key preceding the block, without quotes

    Returns:
        (body without the outer braces, text after the closing brace), or
        None if the tag is absent or its block is unterminated
    """
    located = find_key(text, block_tag)
    if located is None:
        return None
    consumed = tag(located[1], json_like.key_token(block_tag))
    if consumed is None:
        return None
    return _take_block(skip_whitespace(consumed[1]))


def extract_pair(text: str) -> Optional[tuple[RawField, str]]:
    """Extract the pair at the cursor if the next token is a quoted key.

    Returns None when the next non-whitespace character is not a quote or
    the key is followed by a block instead of a value.
    """
    key_span = quoted_span(skip_whitespace(text))
    if key_span is None:
        return None
    key, rest = key_span
    value_span = quoted_span(skip_whitespace(rest))
    if value_span is None:
        return None
    value, remaining = value_span
    return RawField(key, value), remaining


def iter_pairs(block: str) -> Iterator[RawField]:
    """Yield the scalar children of a block body in order.

    Nested child blocks are stepped over. Iteration stops at the first
    token that is not a quoted key.
    """
    remaining = block
    while True:
        pair = extract_pair(remaining)
        if pair is not None:
            field, remaining = pair
            yield field
            continue

        key_span = quoted_span(skip_whitespace(remaining))
        if key_span is None:
            return
        nested = _take_block(skip_whitespace(key_span[1]))
        if nested is None:
            return
        remaining = nested[1]


def field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, json_like.extract_value, required, name)


def record_scanner(fields: Sequence[Field], accept=None, ordered: bool = False) -> RecordScanner:
    """Build a RecordScanner for quoted VDF/ACF scalars."""
    return RecordScanner(
        find_key, fields, accept=accept, ordered=ordered, entry_bounds=enclosing_block,
    )
