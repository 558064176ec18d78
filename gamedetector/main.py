#!/usr/bin/env python3
"""gamedetector main entry point.

Usage:
    gamedetector                      # detect with XDG defaults
    gamedetector /path/to/config.json

The optional config.json overlays DetectorConfig fields:
    {
        "home_dir": "~",
        "sources": ["steam", "lutris"],   // optional, all sources if omitted
        "max_workers": 4,
        "log_level": "INFO",
        "output_file": "~/games.yaml"     // optional YAML report
    }

This script:
    1. Reads configuration from the environment and the optional JSON file
    2. Sets up logging (stderr, optional log file)
    3. Runs every detected source
    4. Writes the YAML report if requested
    5. Prints the results as JSON on stdout
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from .config import DetectorConfig
from .detector import GamesDetector
from .errors import ConfigError, HintsError
from .output.report import build_report, write_report
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> DetectorConfig:
    """Read a JSON config file into a DetectorConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        ConfigError: If the JSON is not an object or has invalid values
    """
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")
    return DetectorConfig.from_dict(data)


def run_detection(config: DetectorConfig) -> dict[str, Any]:
    """Run detection and build the results dictionary.

    Args:
        config: Detector configuration

    Returns:
        Results with status ('success', 'partial' or 'error'), games,
        statistics, errors and warnings
    """
    results: dict[str, Any] = {
        "status": "success",
        "games": [],
        "errors": [],
        "warnings": [],
    }

    try:
        detector = GamesDetector(config)
        detection = detector.detect()
    except (ConfigError, HintsError, ValueError, OSError, yaml.YAMLError) as e:
        results["status"] = "error"
        results["errors"].append(f"Detection setup failed: {e}")
        return results

    results["status"] = detection.status
    results["games"] = [game.to_dict() for game in detection.games]
    results["statistics"] = detection.get_statistics()
    results["errors"] = [
        f"{source.display_name}: {message}" for source, message in detection.errors.items()
    ]
    if detection.status == "error" and not detection.errors:
        results["errors"].append("No game source was found")

    if config.output_file:
        try:
            report_path = write_report(build_report(detection, config), config.output_file)
            results["report"] = str(report_path)
        except OSError as e:
            results["warnings"].append(f"Could not write report: {e}")

    return results


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for gamedetector."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        if argv:
            config = load_config(Path(argv[0]).expanduser())
        else:
            config = DetectorConfig.from_environment()
    except FileNotFoundError:
        print(json.dumps({
            "status": "error",
            "error": f"Config file not found: {argv[0]}"
        }))
        return 1
    except json.JSONDecodeError as e:
        print(json.dumps({
            "status": "error",
            "error": f"Invalid JSON in config file: {e}"
        }))
        return 1
    except ConfigError as e:
        print(json.dumps({
            "status": "error",
            "error": f"Invalid configuration: {e}"
        }))
        return 1

    setup_logging(config.log_level, config.log_file)
    logger.debug("Configuration: %s", config.to_dict())

    results = run_detection(config)
    print(json.dumps(results, indent=2, default=str))
    return 1 if results["status"] == "error" else 0


if __name__ == "__main__":
    sys.exit(main())
