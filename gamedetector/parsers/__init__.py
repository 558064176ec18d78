"""Lenient scanners for the catalogue formats launchers write.

Modules:
    cursor: Primitive matchers over the remaining text
    json_like: Double-quoted keys and values
    yaml_like: ``key: value`` lines with wrapped continuations
    cfg_like: ``key=value`` lines
    vdf_like: Valve brace-delimited blocks
    records: Record windows and the loop collecting them from a file
"""

from . import cfg_like, cursor, json_like, vdf_like, yaml_like
from .records import (
    Field,
    PartialRecord,
    RawField,
    RecordScanner,
    read_source,
    scan_file,
    scan_records,
)

__all__ = [
    # Format modules
    'cursor',
    'json_like',
    'yaml_like',
    'cfg_like',
    'vdf_like',
    # Records
    'RawField',
    'PartialRecord',
    'Field',
    'RecordScanner',
    'scan_records',
    'scan_file',
    'read_source',
]
