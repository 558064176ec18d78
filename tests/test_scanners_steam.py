"""Tests for the Steam and Steam shortcuts adapters."""

import pytest
import vdf

from gamedetector.errors import SourceReadError, StructuralParseError
from gamedetector.scanners.steam import Steam, is_manifest_name, parse_manifest
from gamedetector.scanners.steam_shortcuts import (
    SteamShortcuts,
    join_shortcuts,
    parse_screenshot_names,
    parse_shortcuts,
)

HASHED_ICON = "0123456789abcdef0123456789abcdef01234567.jpg"


def manifest(app_id, name, installdir):
    return (
        '"AppState"\n{\n'
        f'\t"appid"\t\t"{app_id}"\n'
        '\t"universe"\t\t"1"\n'
        f'\t"name"\t\t"{name}"\n'
        f'\t"installdir"\t\t"{installdir}"\n'
        '\t"UserConfig"\n\t{\n\t\t"name"\t\t"ignored"\n\t}\n'
        '}\n'
    )


@pytest.fixture
def steam_root(home):
    return home / ".local" / "share" / "Steam"


@pytest.fixture
def second_library(tmp_path):
    return tmp_path / "games-ssd" / "SteamLibrary"


@pytest.fixture
def steam(steam_root, second_library, write, touch):
    steamapps = steam_root / "steamapps"
    write(steamapps / "libraryfolders.vdf", (
        '"libraryfolders"\n{\n'
        f'\t"0"\n\t{{\n\t\t"path"\t\t"{steam_root}"\n'
        '\t\t"apps"\n\t\t{\n\t\t\t"620"\t\t"12345"\n\t\t}\n\t}\n'
        f'\t"1"\n\t{{\n\t\t"path"\t\t"{second_library}"\n\t}}\n'
        '}\n'
    ), dedent=False)

    write(steamapps / "appmanifest_620.acf", manifest("620", "Portal 2", "Portal 2"), dedent=False)
    write(steamapps / "appmanifest_1493710.acf",
          manifest("1493710", "Proton Experimental", "Proton - Experimental"), dedent=False)
    write(steamapps / "appmanifest_999.acf.tmp", manifest("999", "Partial", "p"), dedent=False)
    (steamapps / "common" / "Portal 2").mkdir(parents=True)

    # Second library uses the capitalised directory name
    write(second_library / "Steamapps" / "appmanifest_1091500.acf",
          manifest("1091500", "Cyberpunk 2077®", "Cyberpunk 2077"), dedent=False)

    cache = steam_root / "appcache" / "librarycache"
    touch(cache / "620_library_600x900.jpg")
    touch(cache / "620_icon.jpg")
    touch(cache / "1091500" / "a1b2c3" / "library_600x900.jpg")
    touch(cache / "1091500" / HASHED_ICON)
    return steam_root


# ── Steam ───────────────────────────────────────────────────────


class TestManifests:
    @pytest.mark.parametrize("name, expected", [
        ("appmanifest_620.acf", True),
        ("appmanifest_abc123.acf", True),
        ("appmanifest_620.acf.tmp", False),
        ("appmanifest_.acf", False),
        ("libraryfolders.vdf", False),
    ])
    def test_is_manifest_name(self, name, expected):
        assert is_manifest_name(name) is expected

    def test_app_record(self):
        assert parse_manifest(manifest("620", "Portal 2", "Portal 2")) == {
            "app_id": "620",
            "title": "Portal 2",
            "installdir": "Portal 2",
        }

    def test_incomplete_manifest(self):
        assert parse_manifest('"AppState"\n{\n\t"appid"\t\t"620"\n}\n') is None


class TestSteam:
    def test_not_detected(self, config, hints):
        adapter = Steam(config, hints)
        assert not adapter.is_detected()
        with pytest.raises(SourceReadError):
            adapter.library_paths()

    def test_library_paths(self, config, hints, steam, second_library):
        adapter = Steam(config, hints)
        assert adapter.is_detected()
        assert adapter.library_paths() == [steam, second_library]

    def test_games(self, config, hints, steam):
        games = Steam(config, hints).get_detected_games()
        assert [g.title for g in games] == ["Portal 2", "Cyberpunk 2077"]

        portal, cyberpunk = games
        cache = steam / "appcache" / "librarycache"
        assert portal.launch_id == "steam://rungameid/620"
        assert portal.path_box_art == cache / "620_library_600x900.jpg"
        assert portal.path_icon == cache / "620_icon.jpg"
        assert portal.path_game_dir == steam / "steamapps" / "common" / "Portal 2"

        assert cyberpunk.path_box_art == cache / "1091500" / "a1b2c3" / "library_600x900.jpg"
        assert cyberpunk.path_icon == cache / "1091500" / HASHED_ICON
        assert cyberpunk.path_game_dir is None

    def test_missing_library_is_skipped(self, config, hints, steam, second_library):
        (second_library / "Steamapps" / "appmanifest_1091500.acf").unlink()
        (second_library / "Steamapps").rmdir()
        games = Steam(config, hints).get_detected_games()
        assert [g.title for g in games] == ["Portal 2"]

    def test_manifest_directory_is_ignored(self, config, hints, steam):
        (steam / "steamapps" / "appmanifest_621.acf").mkdir()
        games = Steam(config, hints).get_detected_games()
        assert len(games) == 2


# ── Steam shortcuts ─────────────────────────────────────────────


SCREENSHOTS = (
    '"Screenshots"\n{\n'
    '\t"620"\n\t{\n\t\t"0"\t\t"620/screenshots/a.jpg"\n\t}\n'
    '\t"shortcutnames"\n\t{\n'
    '\t\t"111"\t\t"Brave"\n'
    '\t\t"2931025216"\t\t"Brave"\n'
    '\t\t"3428471010"\t\t"Heroic"\n'
    '\t}\n'
    '}\n'
)


def shortcuts_vdf(*entries):
    return vdf.binary_dumps({
        "shortcuts": {str(i): entry for i, entry in enumerate(entries)},
    })


@pytest.fixture
def user_dir(steam_root):
    return steam_root / "userdata" / "12345678"


@pytest.fixture
def shortcuts(user_dir, tmp_path, write, touch):
    (tmp_path / "opt" / "brave").mkdir(parents=True)
    icon = touch(tmp_path / "icons" / "brave.png")
    write(user_dir / "760" / "screenshots.vdf", SCREENSHOTS, dedent=False)
    write(user_dir / "config" / "shortcuts.vdf", shortcuts_vdf(
        {
            "appid": -1363942080,
            "AppName": "Brave",
            "Exe": '"/usr/bin/brave"',
            "StartDir": f'"{tmp_path / "opt" / "brave"}"',
            "icon": str(icon),
        },
        {"appid": -866496286, "appname": "Heroic", "Exe": "heroic", "StartDir": "", "icon": ""},
        {"appid": 5, "AppName": "Never Launched", "StartDir": "", "icon": ""},
    ))
    touch(user_dir / "config" / "grid" / "2931025216p.png")
    touch(user_dir / "config" / "grid" / "3428471010.jpg")
    return user_dir


class TestShortcutParsing:
    def test_screenshot_names(self):
        assert parse_screenshot_names(SCREENSHOTS) == [
            {"launch_id": "111", "title": "Brave"},
            {"launch_id": "2931025216", "title": "Brave"},
            {"launch_id": "3428471010", "title": "Heroic"},
        ]

    def test_missing_names_block(self):
        with pytest.raises(StructuralParseError):
            parse_screenshot_names('"Screenshots"\n{\n}\n')

    def test_unsigned_artwork_id(self):
        records = parse_shortcuts(shortcuts_vdf({"appid": -1363942080, "AppName": "Brave"}))
        assert records == [
            {"title": "Brave", "box_art_id": "2931025216", "start_dir": "", "icon": ""},
        ]

    def test_invalid_binary(self):
        with pytest.raises(StructuralParseError):
            parse_shortcuts(b"\x09key\x00")

    def test_newest_duplicate_used_once(self):
        shortcuts = [{"title": "Dup", "n": "first"}, {"title": "Dup", "n": "second"}]
        names = [
            {"launch_id": "1", "title": "Dup"},
            {"launch_id": "2", "title": "Dup"},
        ]
        joined = join_shortcuts(shortcuts, names)
        assert [(r["n"], r["launch_id"]) for r in joined] == [("first", "2"), ("second", "1")]


class TestSteamShortcuts:
    def test_not_detected(self, config, hints):
        adapter = SteamShortcuts(config, hints)
        assert not adapter.is_detected()
        with pytest.raises(SourceReadError):
            adapter.get_detected_games()

    def test_incomplete_user_dir_not_detected(self, config, hints, user_dir, write):
        write(user_dir / "760" / "screenshots.vdf", SCREENSHOTS, dedent=False)
        assert not SteamShortcuts(config, hints).is_detected()

    def test_games(self, config, hints, shortcuts, tmp_path):
        adapter = SteamShortcuts(config, hints)
        assert adapter.is_detected()
        games = adapter.get_detected_games()
        assert [g.title for g in games] == ["Brave", "Heroic"]

        brave, heroic = games
        assert brave.launch_id == "steam://rungameid/2931025216"
        assert brave.path_box_art == shortcuts / "config" / "grid" / "2931025216p.png"
        assert brave.path_game_dir == tmp_path / "opt" / "brave"
        assert brave.path_icon == tmp_path / "icons" / "brave.png"

        assert heroic.launch_id == "steam://rungameid/3428471010"
        assert heroic.path_box_art == shortcuts / "config" / "grid" / "3428471010.jpg"
        assert heroic.path_game_dir is None

    def test_broken_screenshots_file(self, config, hints, shortcuts, write):
        path = write(shortcuts / "760" / "screenshots.vdf", '"Screenshots"\n{\n}\n')
        with pytest.raises(StructuralParseError) as exc_info:
            SteamShortcuts(config, hints).get_detected_games()
        assert exc_info.value.path == path
