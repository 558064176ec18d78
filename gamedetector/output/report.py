"""YAML report of a detection run.

The report is a machine-readable record of what was found:
    - Run metadata (version, timestamp, directories scanned)
    - Summary counts per source
    - Every game, grouped by source
    - Sources that failed, with their error

Two reports can be compared to see which games were installed or removed
between runs.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from ..config import DetectorConfig
from ..detector import DetectionResult
from ..utils.constants import REPORT_VERSION


def build_games_section(result: DetectionResult) -> dict[str, list[dict[str, Any]]]:
    """Games grouped by source key, in detection order."""
    return {
        source.value: [game.to_dict() for game in games]
        for source, games in result.games_per_source.items()
    }


def build_report(
    result: DetectionResult,
    config: Optional[DetectorConfig] = None,
) -> dict[str, Any]:
    """Build the report dictionary for a detection result.

    Args:
        result: Detection result
        config: Configuration the run used (recorded when given)

    Returns:
        Report dictionary, ready for yaml.dump
    """
    report: dict[str, Any] = {
        "gamedetector": {
            "version": REPORT_VERSION,
            "timestamp": datetime.now().isoformat(),
            "status": result.status,
        },
        "summary": result.get_statistics(),
        "games": build_games_section(result),
        "errors": {source.value: message for source, message in result.errors.items()},
    }
    if config is not None:
        report["gamedetector"]["directories"] = {
            "home": str(config.home_dir),
            "config": str(config.config_dir),
            "cache": str(config.cache_dir),
            "data": str(config.data_dir),
        }
    return report


def write_report(report: dict[str, Any], report_path: Path) -> Path:
    """Write a report as YAML, creating parent directories.

    Returns:
        The path written
    """
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "w", encoding="utf-8") as f:
        yaml.dump(report, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return report_path


def load_report(report_path: Path) -> dict[str, Any]:
    """Load a report written by write_report.

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If file is invalid YAML
    """
    with open(report_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _titles(report: dict[str, Any], source: str) -> set[str]:
    return {game["title"] for game in report.get("games", {}).get(source, []) or []}


def compare_reports(
    report1: dict[str, Any],
    report2: dict[str, Any],
) -> dict[str, Any]:
    """Compare two reports to find installed and removed games.

    Args:
        report1: First report (typically older)
        report2: Second report (typically newer)

    Returns:
        Dictionary with per-source count changes and added/removed titles
    """
    comparison: dict[str, Any] = {
        "timestamp1": report1.get("gamedetector", {}).get("timestamp"),
        "timestamp2": report2.get("gamedetector", {}).get("timestamp"),
        "count_diff": {},
        "added": {},
        "removed": {},
    }

    sources = list(report1.get("games", {}) or {})
    sources += [s for s in report2.get("games", {}) or {} if s not in sources]

    for source in sources:
        before = _titles(report1, source)
        after = _titles(report2, source)
        if len(before) != len(after):
            comparison["count_diff"][source] = {
                "before": len(before),
                "after": len(after),
                "change": len(after) - len(before),
            }
        if after - before:
            comparison["added"][source] = sorted(after - before)
        if before - after:
            comparison["removed"][source] = sorted(before - after)

    return comparison
