"""Pseudo-CFG scanner.

``key=value`` lines as written by Qt settings files (Prism Launcher's
``prismlauncher.cfg`` and ``instance.cfg``). The value is everything up to
the end of the line, without quoting rules.
"""

from typing import Optional, Sequence

from .cursor import Step, skip_until, tag, to_end_of_line
from .records import Field, RawField, RecordScanner


def key_token(key: str) -> str:
    return f"{key}="


def _ends_in_indent(skipped: str) -> bool:
    """Only spaces or tabs follow the last newline of ``skipped``."""
    return not skipped[skipped.rfind("\n") + 1:].strip(" \t")


def find_key(text: str, key: str) -> Step:
    """Skip to the next ``key=`` at the start of a line, indentation allowed."""
    skipped = ""
    remaining = text
    while True:
        located = skip_until(remaining, key_token(key))
        if located is None:
            return None
        before, at_key = located
        skipped += before
        if _ends_in_indent(skipped):
            return skipped, at_key
        skipped += at_key[0]
        remaining = at_key[1:]


def extract_value(text: str, key: str) -> Optional[tuple[RawField, str]]:
    located = find_key(text, key)
    if located is None:
        return None
    consumed = tag(located[1], key_token(key))
    if consumed is None:
        return None
    value, remaining = to_end_of_line(consumed[1])
    return RawField(key, value.rstrip("\r")), remaining


def field(key: str, name: Optional[str] = None, required: bool = True) -> Field:
    return Field(key, extract_value, required, name)


def record_scanner(fields: Sequence[Field], accept=None, ordered: bool = False) -> RecordScanner:
    """Build a RecordScanner for a pseudo-CFG entry shape."""
    return RecordScanner(find_key, fields, accept=accept, ordered=ordered)
