"""Discovery helpers shared by the source adapters.

Modules:
    hints: Source hints database (candidate roots and catalogue files)
    reconcile: Joining partial records from independent files
"""

from .hints import (
    SourceHints,
    get_default_hints_path,
    load_source_hints,
    validate_path_security,
)
from .reconcile import (
    Derivation,
    ReconciledRecord,
    apply_derivations,
    field_key,
    merge_records,
    reconcile,
)

__all__ = [
    # Hints database
    'SourceHints',
    'load_source_hints',
    'get_default_hints_path',
    'validate_path_security',
    # Reconciliation
    'Derivation',
    'ReconciledRecord',
    'reconcile',
    'merge_records',
    'apply_derivations',
    'field_key',
]
