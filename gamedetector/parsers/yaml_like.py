"""Pseudo-YAML scanner.

Handles ``key: value`` catalogues such as the Bottles library and bottle
configs. A value runs to the end of its line; long values may be wrapped
onto indented follow-up lines, which are re-joined with a single space.

A follow-up line containing a colon is read as the next key. This is an
approximation, not a YAML subset: a wrapped Windows path such as
``C:/Games`` ends the value early.
"""

from typing import Optional, Sequence

from .cursor import Step, skip_until, skip_whitespace, tag, to_end_of_line
from .records import Field, RawField, RecordScanner

_QUOTES = ("'", '"')


def key_token(key: str) -> str:
    return f"{key}:"


def find_key(text: str, key: str) -> Step:
    """Skip to the next ``key:`` not preceded by an identifier character."""
    return skip_until(text, key_token(key), word_boundary=True)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _first_line(text: str, key: str) -> Optional[tuple[str, str]]:
    located = find_key(text, key)
    if located is None:
        return None
    consumed = tag(located[1], key_token(key))
    if consumed is None:
        return None
    line, remaining = to_end_of_line(skip_whitespace(consumed[1], newlines=False))
    return line.strip(), remaining


def extract_value(text: str, key: str) -> Optional[tuple[RawField, str]]:
    """Extract the single-line value of the next ``key:``.

    Surrounding quotes are removed. A key with nothing after the colon
    yields an empty value.
    """
    found = _first_line(text, key)
    if found is None:
        return None
    value, remaining = found
    return RawField(key, _unquote(value)), remaining


def _is_continuation(line: str) -> bool:
    return line[:1] in (" ", "\t") and line.strip() != "" and ":" not in line


def extract_continued_value(text: str, key: str) -> Optional[tuple[RawField, str]]:
    """Extract the value of the next ``key:``, following wrapped lines.

    Example:
        >>> text = "folder: /home/me/Program Files\\n  (x86)/Game\\nid: 1\\n"
        >>> extract_continued_value(text, "folder")[0].raw_value
        '/home/me/Program Files (x86)/Game'
    """
    found = _first_line(text, key)
    if found is None:
        return None
    first, remaining = found
    parts = [first] if first else []

    while remaining.startswith("\n"):
        line, rest = to_end_of_line(remaining[1:])
        if not _is_continuation(line):
            break
        parts.append(line.strip())
        remaining = rest

    return RawField(key, _unquote(" ".join(parts))), remaining


def field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, extract_value, required, name)


def continued_field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, extract_continued_value, required, name)


def record_scanner(fields: Sequence[Field], accept=None, ordered: bool = False) -> RecordScanner:
    """Build a RecordScanner for a pseudo-YAML entry shape."""
    return RecordScanner(find_key, fields, accept=accept, ordered=ordered)
