"""Joining partial records from independent files.

Several launchers describe one game across two files: Bottles keeps titles
and artwork in ``library.yml`` but the program folder in each
``bottle.yml``; Steam keeps non-Steam shortcut titles in the binary
``shortcuts.vdf`` but their launch ids in ``screenshots.vdf``. Each file
yields PartialRecords; ``reconcile`` joins them on a shared key.

Join semantics:
    - Inner join. Unmatched records on either side are dropped.
    - The first matching secondary record wins. Callers whose files append
      newer entries without removing old ones pass ``reverse_secondary``.
    - Fields present on both sides come from the preferred side, which is
      a per-field parameter (default: primary).
    - Empty display fields are filled afterwards by Derivations.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Optional, Sequence

from ..parsers.records import PartialRecord

logger = logging.getLogger(__name__)

Side = Literal["primary", "secondary"]
KeyOf = Callable[[PartialRecord], Optional[str]]

# Terminal artifact of the join; a plain dict like its inputs
ReconciledRecord = dict[str, str]


@dataclass(frozen=True)
class Derivation:
    """Fill ``field`` from ``source_field`` when ``field`` is empty.

    Attributes:
        field: Field to fill, e.g. "title"
        source_field: Field the value is derived from, e.g. "slug"
        derive: Pure function; returning None or "" leaves the field empty
    """
    field: str
    source_field: str
    derive: Callable[[str], Optional[str]]


def field_key(name: str) -> KeyOf:
    """Key function reading one field, for the common case."""
    def key_of(record: PartialRecord) -> Optional[str]:
        return record.get(name)
    return key_of


def apply_derivations(
    record: PartialRecord,
    derivations: Sequence[Derivation],
) -> ReconciledRecord:
    """Return a copy of ``record`` with empty fields derived.

    Derivations run in order, so a later one may use a field filled by an
    earlier one.
    """
    derived = dict(record)
    for derivation in derivations:
        if derived.get(derivation.field):
            continue
        source_value = derived.get(derivation.source_field)
        if not source_value:
            continue
        value = derivation.derive(source_value)
        if value:
            derived[derivation.field] = value
    return derived


def merge_records(
    primary: PartialRecord,
    secondary: PartialRecord,
    prefer: Optional[Mapping[str, Side]] = None,
) -> ReconciledRecord:
    """Merge two records describing the same entity.

    Fields unique to either side are kept. For a field on both sides the
    preferred side's value is used unless it is empty, in which case the
    other side's value is kept.
    """
    prefer = prefer or {}
    merged: ReconciledRecord = dict(primary)
    for name, value in secondary.items():
        if name not in merged:
            merged[name] = value
            continue
        if prefer.get(name, "primary") == "secondary":
            if value:
                merged[name] = value
        elif not merged[name]:
            merged[name] = value
    return merged


def reconcile(
    primary: Sequence[PartialRecord],
    secondary: Sequence[PartialRecord],
    key_of: KeyOf,
    secondary_key_of: Optional[KeyOf] = None,
    prefer: Optional[Mapping[str, Side]] = None,
    derivations: Sequence[Derivation] = (),
    reverse_secondary: bool = False,
    exclusive: bool = False,
) -> list[ReconciledRecord]:
    """Inner-join two record sequences on a key.

    Args:
        primary: Records driving the output order
        secondary: Records scanned for a match
        key_of: Extracts the join key from a primary record
        secondary_key_of: Extracts the join key from a secondary record
            (defaults to ``key_of``)
        prefer: Field name -> side whose value wins on conflict
        derivations: Fallbacks applied to each joined record
        reverse_secondary: Scan secondary records last-to-first, so the
            lexically last duplicate wins
        exclusive: A secondary record can match only one primary record

    Returns:
        One ReconciledRecord per primary record that found a match, in
        primary order. Records whose key is None or empty never match.

    Example:
        >>> reconcile(
        ...     [{"id": "1", "title": "Game A"}],
        ...     [{"id": "1", "path": "/games/a"}, {"id": "2", "path": "/b"}],
        ...     field_key("id"),
        ... )
        [{'id': '1', 'title': 'Game A', 'path': '/games/a'}]
    """
    secondary_key_of = secondary_key_of or key_of
    candidates = list(reversed(secondary)) if reverse_secondary else list(secondary)

    index: dict[str, list[int]] = {}
    for position, record in enumerate(candidates):
        key = secondary_key_of(record)
        if key:
            index.setdefault(key, []).append(position)

    used: set[int] = set()
    joined: list[ReconciledRecord] = []
    for record in primary:
        key = key_of(record)
        if not key:
            continue

        match = None
        for position in index.get(key, ()):
            if exclusive and position in used:
                continue
            match = position
            break

        if match is None:
            logger.debug("No match for key %r", key)
            continue
        if exclusive:
            used.add(match)

        merged = merge_records(record, candidates[match], prefer)
        joined.append(apply_derivations(merged, derivations))

    return joined
