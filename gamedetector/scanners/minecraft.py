"""Minecraft launcher scanners.

Each launcher instance is reported as one game titled
"Minecraft: <instance name>".
    - Prism Launcher: instances live in the directory named by
      ``InstanceDir`` in prismlauncher.cfg; each has an instance.cfg
    - ATLauncher: instances/<name>/instance.json
"""

import logging
from pathlib import Path

from ..discovery.reconcile import Derivation, apply_derivations
from ..errors import SourceReadError, StructuralParseError
from ..models import Game, SupportedSource
from ..parsers import cfg_like, json_like
from ..parsers.records import PartialRecord, read_source
from ..utils.paths import PathKind, existing_image, resolve, some_if_dir
from ..utils.strings import minecraft_title, name_from_path, title_from_slug
from .base import SourceAdapter

logger = logging.getLogger(__name__)

ICON_NAME = "icon.png"
ICON_SUBDIRS = ("", "minecraft", ".minecraft")


def _instance_dirs(path: Path, config_name: str, source: SupportedSource) -> list[Path]:
    """Subdirectories of ``path`` holding ``config_name``, sorted.

    Raises:
        SourceReadError: If the directory cannot be listed
    """
    try:
        entries = sorted(path.iterdir())
    except OSError as e:
        raise SourceReadError(
            f"Cannot list instances: {e.strerror or e}", source.value, path
        ) from e
    return [p for p in entries if p.is_dir() and (p / config_name).is_file()]


def _read_name(path: Path, extract, source: SupportedSource) -> str:
    """Instance name from its config, empty when absent or unreadable."""
    try:
        content = read_source(path, source.value)
    except SourceReadError as e:
        logger.warning("%s", e)
        return ""
    found = extract(content, "name")
    return found[0].raw_value.strip() if found else ""


class MinecraftPrism(SourceAdapter):
    """Prism Launcher instances."""

    source = SupportedSource.MINECRAFT_PRISM
    hints_key = "minecraft_prism"

    _derivations = [Derivation("title", "instance_dir", name_from_path)]

    @property
    def path_config(self) -> Path:
        return self.path("config")

    def is_detected(self) -> bool:
        return self.path_config.is_file()

    def instances_dir(self) -> Path:
        """Instances directory from prismlauncher.cfg.

        Raises:
            SourceReadError: If the config cannot be read
            StructuralParseError: If the config has no InstanceDir
        """
        content = read_source(self.path_config, self.source.value)
        found = cfg_like.extract_value(content, "InstanceDir")
        if found is None or not found[0].raw_value.strip():
            raise StructuralParseError("No InstanceDir setting", self.source.value, self.path_config)
        path = Path(found[0].raw_value.strip())
        if not path.is_absolute():
            path = self.root_dir / path
        return path

    def read_instance(self, instance_dir: Path) -> PartialRecord:
        record = {
            "instance_dir": str(instance_dir),
            "title": _read_name(
                self.path("instance_config", instance_dir), cfg_like.extract_value, self.source
            ),
        }
        return apply_derivations(record, self._derivations)

    def get_detected_games(self) -> list[Game]:
        path_instances = self.instances_dir()
        games = []
        config_name = self.hints.file_name(self.hints_key, "instance_config")
        for instance_dir in _instance_dirs(path_instances, config_name, self.source):
            record = self.read_instance(instance_dir)
            games.append(Game(
                title=minecraft_title(record["title"]),
                source=self.source,
                launch_id=instance_dir.name,
                is_sandboxed=self.is_sandboxed,
                path_game_dir=some_if_dir(instance_dir),
                path_icon=resolve(
                    [instance_dir / subdir for subdir in ICON_SUBDIRS], ICON_NAME, PathKind.FILE
                ),
            ))
        return self.warn_if_empty(games)


class MinecraftATLauncher(SourceAdapter):
    """ATLauncher instances."""

    source = SupportedSource.MINECRAFT_ATLAUNCHER
    hints_key = "minecraft_atlauncher"

    _derivations = [Derivation("title", "instance", title_from_slug)]

    @property
    def path_instances(self) -> Path:
        return self.path("instances")

    def is_detected(self) -> bool:
        return self.path_instances.is_dir()

    def read_instance(self, instance_dir: Path) -> PartialRecord:
        record = {
            "instance": instance_dir.name,
            "title": _read_name(
                self.path("instance_config", instance_dir), json_like.extract_value, self.source
            ),
        }
        return apply_derivations(record, self._derivations)

    def get_detected_games(self) -> list[Game]:
        games = []
        config_name = self.hints.file_name(self.hints_key, "instance_config")
        for instance_dir in _instance_dirs(self.path_instances, config_name, self.source):
            record = self.read_instance(instance_dir)
            games.append(Game(
                title=minecraft_title(record["title"]),
                source=self.source,
                launch_id=record["title"],
                is_sandboxed=self.is_sandboxed,
                path_game_dir=some_if_dir(instance_dir),
                path_icon=existing_image(instance_dir, "instance"),
            ))
        return self.warn_if_empty(games)
