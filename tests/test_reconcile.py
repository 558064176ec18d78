"""Tests for joining partial records."""

import pytest

from gamedetector.discovery.reconcile import (
    Derivation,
    apply_derivations,
    field_key,
    merge_records,
    reconcile,
)
from gamedetector.parsers import cfg_like, json_like
from gamedetector.parsers.records import scan_records
from gamedetector.utils.strings import name_from_path, title_from_slug


# ── End to end ──────────────────────────────────────────────────


CATALOGUE = (
    '[{"id": "1", "title": "Game A"},'
    ' {"id": "2", "title": "Game B", "installed": "false"}]'
)


def catalogue_scanner(accept=None):
    return json_like.record_scanner(
        [
            json_like.field("id"),
            json_like.field("title"),
            json_like.bare_field("installed", required=False),
        ],
        accept=accept,
    )


def paths_scanner():
    return cfg_like.record_scanner([cfg_like.field("id"), cfg_like.field("path")])


class TestEndToEnd:
    def test_catalogue_joined_with_paths(self):
        primary = scan_records(CATALOGUE, catalogue_scanner())
        secondary = scan_records("id=1\npath=/games/a\n", paths_scanner())
        assert reconcile(primary, secondary, field_key("id")) == [
            {"id": "1", "title": "Game A", "path": "/games/a"},
        ]

    @pytest.mark.parametrize("catalogue", [CATALOGUE, CATALOGUE.replace('"false"', "false")])
    def test_not_installed_entry_never_reaches_join(self, catalogue):
        primary = scan_records(catalogue, catalogue_scanner(json_like.is_not_false("installed")))
        secondary = scan_records(
            "id=1\npath=/games/a\nid=2\npath=/games/b\n", paths_scanner(),
        )
        joined = reconcile(primary, secondary, field_key("id"))
        assert [r["id"] for r in joined] == ["1"]


# ── Join semantics ──────────────────────────────────────────────


class TestReconcile:
    def test_unmatched_records_dropped_both_ways(self):
        primary = [{"id": "1"}, {"id": "2"}]
        secondary = [{"id": "2", "x": "b"}, {"id": "3", "x": "c"}]
        assert reconcile(primary, secondary, field_key("id")) == [{"id": "2", "x": "b"}]

    def test_output_follows_primary_order(self):
        primary = [{"id": "2"}, {"id": "1"}]
        secondary = [{"id": "1"}, {"id": "2"}]
        assert [r["id"] for r in reconcile(primary, secondary, field_key("id"))] == ["2", "1"]

    def test_empty_or_missing_key_never_matches(self):
        primary = [{"id": ""}, {"title": "no id"}]
        secondary = [{"id": ""}, {"title": "no id"}]
        assert reconcile(primary, secondary, field_key("id")) == []

    def test_separate_key_functions(self):
        primary = [{"title": "Brave", "icon": "x"}]
        secondary = [{"name": "Brave", "launch_id": "29"}]
        joined = reconcile(primary, secondary, field_key("title"), field_key("name"))
        assert joined == [{"title": "Brave", "icon": "x", "name": "Brave", "launch_id": "29"}]

    def test_first_duplicate_wins(self):
        secondary = [{"id": "1", "v": "old"}, {"id": "1", "v": "new"}]
        assert reconcile([{"id": "1"}], secondary, field_key("id"))[0]["v"] == "old"

    def test_reversed_secondary_last_duplicate_wins(self):
        secondary = [{"id": "1", "v": "old"}, {"id": "1", "v": "new"}]
        joined = reconcile([{"id": "1"}], secondary, field_key("id"), reverse_secondary=True)
        assert joined[0]["v"] == "new"

    def test_exclusive_match_used_once(self):
        primary = [{"id": "1", "n": "a"}, {"id": "1", "n": "b"}, {"id": "1", "n": "c"}]
        secondary = [{"id": "1", "v": "x"}, {"id": "1", "v": "y"}]
        joined = reconcile(primary, secondary, field_key("id"), exclusive=True)
        assert [(r["n"], r["v"]) for r in joined] == [("a", "x"), ("b", "y")]

    def test_shared_match_without_exclusive(self):
        primary = [{"id": "1", "n": "a"}, {"id": "1", "n": "b"}]
        joined = reconcile(primary, [{"id": "1", "v": "x"}], field_key("id"))
        assert [r["v"] for r in joined] == ["x", "x"]

    def test_inputs_not_mutated(self):
        primary = [{"id": "1", "title": ""}]
        secondary = [{"id": "1", "dir": "/games/Thing"}]
        reconcile(
            primary, secondary, field_key("id"),
            derivations=[Derivation("title", "dir", name_from_path)],
        )
        assert primary == [{"id": "1", "title": ""}]
        assert secondary == [{"id": "1", "dir": "/games/Thing"}]

    def test_joined_key_set_independent_of_side_order(self):
        a = [{"id": "1", "p": "a"}, {"id": "2", "p": "b"}, {"id": "4"}]
        b = [{"id": "2", "q": "c"}, {"id": "3"}, {"id": "1", "q": "d"}]
        forward = {r["id"] for r in reconcile(a, b, field_key("id"))}
        backward = {r["id"] for r in reconcile(b, a, field_key("id"))}
        assert forward == backward == {"1", "2"}


# ── Field authority ─────────────────────────────────────────────


class TestMergeRecords:
    def test_primary_wins_by_default(self):
        merged = merge_records({"title": "Lib"}, {"title": "Cfg"})
        assert merged == {"title": "Lib"}

    def test_secondary_authority(self):
        merged = merge_records({"title": "Lib"}, {"title": "Cfg"}, {"title": "secondary"})
        assert merged == {"title": "Cfg"}

    def test_empty_authoritative_value_falls_back(self):
        assert merge_records({"title": ""}, {"title": "Cfg"}) == {"title": "Cfg"}
        assert merge_records({"title": "Lib"}, {"title": ""}, {"title": "secondary"}) == {"title": "Lib"}

    def test_unique_fields_kept(self):
        assert merge_records({"a": "1"}, {"b": "2"}) == {"a": "1", "b": "2"}


# ── Derivations ─────────────────────────────────────────────────


class TestDerivations:
    def test_title_from_slug(self):
        derivations = [Derivation("title", "slug", title_from_slug)]
        assert apply_derivations({"slug": "sky-factory"}, derivations)["title"] == "Sky factory"

    def test_existing_value_kept(self):
        derivations = [Derivation("title", "slug", title_from_slug)]
        record = {"title": "SkyFactory 4", "slug": "sky-factory"}
        assert apply_derivations(record, derivations)["title"] == "SkyFactory 4"

    def test_underivable_value_left_unset(self):
        derivations = [Derivation("title", "dir", name_from_path)]
        assert "title" not in apply_derivations({"dir": "nodir"}, derivations)

    def test_applied_after_join(self):
        joined = reconcile(
            [{"id": "p", "title": ""}],
            [{"id": "p", "game_dir": "/home/me/Games/Thing"}],
            field_key("id"),
            derivations=[Derivation("title", "game_dir", name_from_path)],
        )
        assert joined[0]["title"] == "Thing"
