"""Record scanning over a whole catalogue file.

A catalogue holds zero or more logical entries (one game, one program, one
library folder). A RecordScanner describes the fields wanted from one entry
and produces one PartialRecord per call; scan_records drives it until no
further entry can be matched.

Windowing:
    The first field of a RecordScanner is its anchor. In brace formats an
    entry's window is the innermost ``{...}`` block holding the anchor, so
    fields may come before or after it. Elsewhere the window runs from one
    occurrence of the anchor key to the next one (or the end of the text).
    Every other field is looked up inside that window only, so a malformed
    entry can be dropped on its own while the rest of the file is still
    returned.
"""

import logging
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Sequence, Union

from ..errors import SourceReadError
from .cursor import Step

logger = logging.getLogger(__name__)


class RawField(NamedTuple):
    """A key and its untyped value as found in the text."""
    key: str
    raw_value: str


# Ordered field name -> value, one logical entry of one file
PartialRecord = dict[str, str]

# Key lookup: returns (skipped, remaining starting at the key) or None
FindKey = Callable[[str, str], Optional[tuple[str, str]]]

# Value lookup: returns (field, remaining-after-value) or None
FieldExtractor = Callable[[str, str], Optional[tuple[RawField, str]]]

# None = no more records; (None, rest) = fragment discarded
ScanStep = Optional[tuple[Optional[PartialRecord], str]]

RecordExtractor = Callable[[str], ScanStep]

# Entry bound: (text, anchor offset) -> (entry body, text after entry) or None
EntryBounds = Callable[[str, int], Step]


class Field(NamedTuple):
    """One field wanted from an entry.

    Attributes:
        key: Key as written in the file
        extract: Format-specific value extractor
        required: Discard the entry when the field is missing
        name: Name in the produced record (defaults to key)
    """
    key: str
    extract: FieldExtractor
    required: bool = True
    name: Optional[str] = None

    @property
    def record_name(self) -> str:
        return self.name or self.key


class RecordScanner:
    """Extract one entry of a known shape per call.

    Args:
        find_key: Locates a key token of the file's format
        fields: Wanted fields; the first one is the anchor
        accept: Optional predicate; rejected entries are discarded
        ordered: Look each field up after the previous one instead of from
            the start of the window. Needed when a key occurs twice in one
            entry (e.g. a nested "name" before the entry's own "name").
        entry_bounds: Optional structural bound of an entry, given the text
            and the anchor's offset in it. Returns (entry body, text after
            the entry) or None, in which case the anchor-to-anchor window
            is used.
    """

    def __init__(
        self,
        find_key: FindKey,
        fields: Sequence[Field],
        accept: Optional[Callable[[PartialRecord], bool]] = None,
        ordered: bool = False,
        entry_bounds: Optional[EntryBounds] = None,
    ):
        if not fields:
            raise ValueError("RecordScanner needs at least an anchor field")
        self.find_key = find_key
        self.fields = tuple(fields)
        self.accept = accept
        self.ordered = ordered
        self.entry_bounds = entry_bounds

    @property
    def anchor(self) -> Field:
        return self.fields[0]

    def __call__(self, text: str) -> ScanStep:
        return self.extract_next(text)

    def _bounds(self, text: str, anchor_at: int) -> Step:
        if self.entry_bounds is None:
            return None
        return self.entry_bounds(text, anchor_at)

    def extract_next(self, text: str) -> ScanStep:
        located = self.find_key(text, self.anchor.key)
        if located is None:
            return None
        skipped, at_anchor = located
        bounds = self._bounds(text, len(skipped))

        extracted = self.anchor.extract(at_anchor, self.anchor.key)
        if extracted is None:
            # Key token without a usable value: step over its entry
            if bounds is not None:
                return None, bounds[1]
            return None, at_anchor[1:]
        anchor_field, after_anchor = extracted

        if bounds is not None:
            window, remaining = bounds
            # Ordered lookups continue after the anchor, inside the entry
            tail = after_anchor[:max(len(after_anchor) - len(remaining) - 1, 0)]
        else:
            following = self.find_key(after_anchor, self.anchor.key)
            if following is None:
                window, remaining = after_anchor, ""
            else:
                window, remaining = following
            tail = window

        record: PartialRecord = {self.anchor.record_name: anchor_field.raw_value}
        cursor = tail
        for wanted in self.fields[1:]:
            found = wanted.extract(cursor if self.ordered else window, wanted.key)
            if found is None:
                if wanted.required:
                    logger.debug(
                        "Discarding entry %r: missing %r",
                        anchor_field.raw_value, wanted.key,
                    )
                    return None, remaining
                continue
            raw, rest = found
            record[wanted.record_name] = raw.raw_value
            if self.ordered:
                cursor = rest

        if self.accept is not None and not self.accept(record):
            logger.debug("Discarding entry %r: rejected", anchor_field.raw_value)
            return None, remaining

        return record, remaining


def scan_records(text: str, extract_next: RecordExtractor) -> list[PartialRecord]:
    """Collect every record ``extract_next`` can find in ``text``.

    Scanning resumes where the previous call stopped and ends, without
    error, at the first call that matches nothing. Discarded fragments are
    skipped. A step that does not consume anything also ends the loop.

    Args:
        text: Full file content
        extract_next: Scanner returning ScanStep values

    Returns:
        Records in file order, possibly empty
    """
    records: list[PartialRecord] = []
    remaining = text
    while True:
        step = extract_next(remaining)
        if step is None:
            break
        record, rest = step
        if record is not None:
            records.append(record)
        if len(rest) >= len(remaining):
            logger.debug("Record scanner made no progress, stopping")
            break
        remaining = rest
    return records


def read_source(path: Union[str, Path], source: Optional[str] = None) -> str:
    """Read a catalogue file as text.

    Undecodable bytes are replaced rather than failing the whole file.

    Raises:
        SourceReadError: If the file cannot be read
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(f"Cannot read file: {e.strerror or e}", source, path) from e


def scan_file(
    path: Union[str, Path],
    extract_next: RecordExtractor,
    source: Optional[str] = None,
) -> list[PartialRecord]:
    """Read ``path`` and collect its records.

    Raises:
        SourceReadError: If the file cannot be read
    """
    records = scan_records(read_source(path, source), extract_next)
    logger.debug("Scanned %d record(s) from %s", len(records), path)
    return records
