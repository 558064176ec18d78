"""Tests for the Prism Launcher and ATLauncher adapters."""

import pytest

from gamedetector.errors import SourceReadError, StructuralParseError
from gamedetector.scanners.minecraft import MinecraftATLauncher, MinecraftPrism


# ── Prism Launcher ──────────────────────────────────────────────


@pytest.fixture
def prism_root(home):
    return home / ".local" / "share" / "PrismLauncher"


@pytest.fixture
def prism(prism_root, write, touch):
    write(prism_root / "prismlauncher.cfg", """\
        [General]
        ApplicationTheme=system
        InstanceDir=instances
        LastHostname=desktop
    """)
    instances = prism_root / "instances"
    write(instances / "atf10" / "instance.cfg", """\
        [General]
        ConfigVersion=1.2
        ManagedPackName=all-the-mods-10
        iconKey=default
        name=All the Mods 10
    """)
    touch(instances / "atf10" / "minecraft" / "icon.png")
    write(instances / "pixelmon" / "instance.cfg", "[General]\nInstanceType=OneSix\n")
    (instances / "_LAUNCHER_TEMP").mkdir()
    return prism_root


class TestMinecraftPrism:
    def test_not_detected(self, config, hints):
        adapter = MinecraftPrism(config, hints)
        assert not adapter.is_detected()
        with pytest.raises(SourceReadError):
            adapter.get_detected_games()

    def test_instances(self, config, hints, prism):
        adapter = MinecraftPrism(config, hints)
        assert adapter.is_detected()
        assert adapter.instances_dir() == prism / "instances"

        games = adapter.get_detected_games()
        assert [g.title for g in games] == [
            "Minecraft: All the Mods 10",
            "Minecraft: pixelmon",
        ]
        atm, pixelmon = games
        assert atm.launch_id == "atf10"
        assert atm.path_game_dir == prism / "instances" / "atf10"
        assert atm.path_icon == prism / "instances" / "atf10" / "minecraft" / "icon.png"
        assert pixelmon.launch_id == "pixelmon"
        assert pixelmon.path_icon is None

    def test_absolute_instance_dir(self, config, hints, prism_root, tmp_path, write):
        elsewhere = tmp_path / "mc-instances"
        write(prism_root / "prismlauncher.cfg", f"InstanceDir={elsewhere}\n")
        write(elsewhere / "vanilla" / "instance.cfg", "name=Vanilla\n")
        games = MinecraftPrism(config, hints).get_detected_games()
        assert [(g.title, g.launch_id) for g in games] == [("Minecraft: Vanilla", "vanilla")]

    def test_missing_instance_dir_setting(self, config, hints, prism_root, write):
        write(prism_root / "prismlauncher.cfg", "[General]\nLastInstanceDir=x\n")
        with pytest.raises(StructuralParseError, match="InstanceDir"):
            MinecraftPrism(config, hints).get_detected_games()

    def test_instances_dir_not_found(self, config, hints, prism_root, write):
        write(prism_root / "prismlauncher.cfg", "InstanceDir=gone\n")
        with pytest.raises(SourceReadError, match="Cannot list instances"):
            MinecraftPrism(config, hints).get_detected_games()


# ── ATLauncher ──────────────────────────────────────────────────


@pytest.fixture
def atlauncher(home, write, touch):
    instances = home / ".local" / "share" / "atlauncher" / "instances"
    write(instances / "SkyFactory" / "instance.json", """\
        {
          "launcher": {
            "name": "SkyFactory 4",
            "pack": "SkyFactory 4",
            "version": "4.2.4"
          }
        }
    """)
    touch(instances / "SkyFactory" / "instance.png")
    write(instances / "sky-factory" / "instance.json", '{"launcher": {"pack": "SkyFactory"}}')
    (instances / "downloads").mkdir()
    return instances


class TestMinecraftATLauncher:
    def test_not_detected(self, config, hints):
        assert not MinecraftATLauncher(config, hints).is_detected()

    def test_instances(self, config, hints, atlauncher):
        adapter = MinecraftATLauncher(config, hints)
        assert adapter.is_detected()

        games = adapter.get_detected_games()
        assert [(g.title, g.launch_id) for g in games] == [
            ("Minecraft: SkyFactory 4", "SkyFactory 4"),
            ("Minecraft: Sky factory", "Sky factory"),
        ]
        assert games[0].path_icon == atlauncher / "SkyFactory" / "instance.png"
        assert games[1].path_icon is None
        assert games[1].path_game_dir == atlauncher / "sky-factory"
