"""Output generation for detection results.

Modules:
    report: YAML report of a detection run
"""

from .report import (
    build_report,
    compare_reports,
    load_report,
    write_report,
)

__all__ = [
    "build_report",
    "write_report",
    "load_report",
    "compare_reports",
]
