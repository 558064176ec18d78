"""Tests for the Heroic Games Launcher adapters."""

import json

import pytest

from gamedetector.errors import SourceReadError
from gamedetector.models import SupportedSource
from gamedetector.scanners.heroic import HeroicAmazon, HeroicEpic, HeroicGOG, HeroicSideload

FLATPAK_ROOT = ".var/app/com.heroicgameslauncher.hgl/config/heroic"


@pytest.fixture
def heroic_root(home):
    return home / ".config" / "heroic"


@pytest.fixture
def legendary(heroic_root, home, write, touch):
    (home / "Games" / "Salt").mkdir(parents=True)
    touch(heroic_root / "icons" / "Fortnite.jpg")
    library = {"library": [
        {
            "app_name": "Fortnite",
            "title": "Fortnite™",
            "is_installed": True,
            "install_path": "/nonexistent/Fortnite",
        },
        {
            "app_name": "Sugar",
            "title": "Sugar",
            "is_installed": False,
            "install_path": "",
        },
        {
            "app_name": "Salt",
            "title": "Salt",
            "is_installed": True,
            "install_path": str(home / "Games" / "Salt"),
        },
    ]}
    return write(
        heroic_root / "store_cache" / "legendary_library.json",
        json.dumps(library, indent=2, ensure_ascii=False),
        dedent=False,
    )


class TestHeroicEpic:
    def test_not_detected(self, config, hints):
        adapter = HeroicEpic(config, hints)
        assert not adapter.is_detected()
        with pytest.raises(SourceReadError):
            adapter.get_detected_games()

    def test_installed_games(self, config, hints, legendary, heroic_root, home):
        adapter = HeroicEpic(config, hints)
        assert adapter.is_detected()
        assert not adapter.is_sandboxed

        games = adapter.get_detected_games()
        assert [g.title for g in games] == ["Fortnite", "Salt"]

        fortnite, salt = games
        assert fortnite.source is SupportedSource.HEROIC_EPIC
        assert fortnite.launch_id == "heroic://launch/legendary/Fortnite"
        assert fortnite.launch_options == {"runner": "legendary", "app_id": "Fortnite"}
        assert fortnite.path_box_art == heroic_root / "icons" / "Fortnite.jpg"
        assert fortnite.path_game_dir is None
        assert salt.path_box_art is None
        assert salt.path_game_dir == home / "Games" / "Salt"

    def test_flatpak_fallback(self, config, hints, home, write):
        write(
            home / FLATPAK_ROOT / "store_cache" / "legendary_library.json",
            '{"library": [{"app_name": "A", "title": "A", "install_path": "/games/a"}]}',
        )
        adapter = HeroicEpic(config, hints)
        assert adapter.is_sandboxed
        assert adapter.root_dir == home / FLATPAK_ROOT
        games = adapter.get_detected_games()
        assert [g.is_sandboxed for g in games] == [True]

    def test_native_preferred_over_flatpak(self, config, hints, home, legendary):
        (home / FLATPAK_ROOT).mkdir(parents=True)
        assert not HeroicEpic(config, hints).is_sandboxed

    def test_unreadable_catalogue(self, config, hints, heroic_root):
        (heroic_root / "store_cache" / "legendary_library.json").mkdir(parents=True)
        adapter = HeroicEpic(config, hints)
        assert not adapter.is_detected()
        with pytest.raises(SourceReadError) as exc_info:
            adapter.get_detected_games()
        assert exc_info.value.source == "heroic_epic"

    def test_empty_catalogue(self, config, hints, heroic_root, write):
        write(heroic_root / "store_cache" / "legendary_library.json", '{"library": []}')
        assert HeroicEpic(config, hints).get_detected_games() == []


class TestHeroicAmazon:
    def test_reads_nile_cache(self, config, hints, heroic_root, write):
        write(heroic_root / "store_cache" / "nile_library.json", """\
            {"library": [
              {"app_name": "amzn1.adg", "title": "Tomb", "is_installed": true,
               "install_path": "/games/tomb"}
            ]}
        """)
        games = HeroicAmazon(config, hints).get_detected_games()
        assert [(g.title, g.launch_id) for g in games] == [
            ("Tomb", "heroic://launch/nile/amzn1.adg"),
        ]


class TestHeroicGOG:
    def test_title_from_install_dir(self, config, hints, heroic_root, write, touch):
        touch(heroic_root / "icons" / "1207664663.png")
        write(heroic_root / "gog_store" / "installed.json", """\
            {"installed": [
              {"platform": "linux", "install_path": "/home/me/Games/Heroic/Stardew Valley",
               "appName": "1207664663", "version": "1.5"},
              {"platform": "windows", "install_path": "nodirectory", "appName": "2"}
            ]}
        """)
        games = HeroicGOG(config, hints).get_detected_games()
        assert len(games) == 1
        game = games[0]
        assert game.title == "Stardew Valley"
        assert game.launch_options["runner"] == "gog"
        assert game.path_box_art is None
        assert game.path_icon == heroic_root / "icons" / "1207664663.png"


class TestHeroicSideload:
    def test_sideloaded_apps(self, config, hints, heroic_root, write):
        write(heroic_root / "sideload_apps" / "library.json", """\
            {"games": [
              {"runner": "sideload", "app_name": "x1", "title": "Itch Thing",
               "is_installed": true, "folder_name": "/games/thing"},
              {"runner": "sideload", "app_name": "x2", "title": "Gone",
               "is_installed": false, "folder_name": "/games/gone"}
            ]}
        """)
        games = HeroicSideload(config, hints).get_detected_games()
        assert [g.title for g in games] == ["Itch Thing"]
        assert games[0].launch_id == "heroic://launch/sideload/x1"
