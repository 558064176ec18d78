"""Cursor primitives.

Every primitive takes the remaining text and returns either
``(consumed, remaining)`` or None when it does not match. They never
raise on malformed or truncated input and never consume more than asked,
so the scanners built on top of them can be tested with literal strings.
"""

from typing import Callable, Optional

Step = Optional[tuple[str, str]]

QUOTE = '"'
OPEN_BRACE = "{"
CLOSE_BRACE = "}"


def is_alphanumeric(char: str) -> bool:
    """ASCII letters and digits only."""
    return char.isascii() and char.isalnum()


def is_identifier_char(char: str) -> bool:
    return is_alphanumeric(char) or char == "_"


def skip_until(text: str, literal: str, word_boundary: bool = False) -> Step:
    """Skip to the next occurrence of ``literal``.

    The consumed part is everything before the literal; the remaining text
    starts at the literal itself.

    Args:
        text: Remaining text
        literal: Non-empty literal to look for
        word_boundary: Ignore occurrences directly preceded by an identifier
            character, so "name:" does not match inside "filename:"

    Returns:
        (skipped, remaining) or None if the literal is absent
    """
    if not literal:
        return None
    start = 0
    while True:
        index = text.find(literal, start)
        if index < 0:
            return None
        if not word_boundary or index == 0 or not is_identifier_char(text[index - 1]):
            return text[:index], text[index:]
        start = index + 1


def tag(text: str, literal: str) -> Step:
    """Consume ``literal`` if the text starts with it."""
    if literal and text.startswith(literal):
        return literal, text[len(literal):]
    return None


def quoted_span(text: str) -> Step:
    """Consume a double-quoted span and return its contents.

    The span may be empty and may contain newlines. Backslashes are kept
    as they are; a backslash does not escape the closing quote.
    """
    if not text.startswith(QUOTE):
        return None
    end = text.find(QUOTE, 1)
    if end < 0:
        return None
    return text[1:end], text[end + 1:]


def to_end_of_line(text: str) -> tuple[str, str]:
    """Consume up to (not including) the next newline. Always matches."""
    end = text.find("\n")
    if end < 0:
        return text, ""
    return text[:end], text[end:]


def run_of(text: str, predicate: Callable[[str], bool], minimum: int = 0) -> Step:
    """Consume the leading run of characters matching ``predicate``."""
    end = 0
    while end < len(text) and predicate(text[end]):
        end += 1
    if end < minimum:
        return None
    return text[:end], text[end:]


def skip_whitespace(text: str, newlines: bool = True) -> str:
    if newlines:
        return text.lstrip()
    return text.lstrip(" \t")


def match_brace(text: str, start: int = 0) -> Optional[int]:
    """Index of the brace closing the one at ``text[start]``.

    Braces inside quoted strings are ignored. None when unbalanced.
    """
    depth = 0
    in_quote = False
    for index in range(start, len(text)):
        char = text[index]
        if char == QUOTE:
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char == OPEN_BRACE:
            depth += 1
        elif char == CLOSE_BRACE:
            depth -= 1
            if depth == 0:
                return index
    return None


def enclosing_block(text: str, index: int) -> Step:
    """Body of the innermost brace block still open at ``text[index]``.

    Returns:
        (body without the braces, text after the closing brace), or None
        when no block is open there or it is never closed
    """
    opened: list[int] = []
    in_quote = False
    for position in range(index):
        char = text[position]
        if char == QUOTE:
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char == OPEN_BRACE:
            opened.append(position)
        elif char == CLOSE_BRACE and opened:
            opened.pop()
    if not opened:
        return None
    end = match_brace(text, opened[-1])
    if end is None:
        return None
    return text[opened[-1] + 1:end], text[end + 1:]
