"""Tests for consolidating raw installations into plugin entities."""

from __future__ import annotations

from datetime import timedelta

from audioshelf.inventory.consolidator import consolidate, consolidation_key, plugin_id
from audioshelf.inventory.models import WireFormat
from audioshelf.inventory.normalizer import normalize
from tests.helpers import BASE_TIME, raw_installation


class TestSerumScenario:
    """VST2 and VST3 builds of one product become one entity."""

    def test_two_formats_one_plugin(self) -> None:
        raws = [
            raw_installation("Serum_x64", WireFormat.VST, path="/p/Serum.dll"),
            raw_installation("Serum (VST3)", WireFormat.VST3, path="/p/Serum.vst3"),
        ]
        plugins = consolidate(raws)
        assert len(plugins) == 1
        plugin = plugins[0]
        assert normalize(plugin.display_name) == "serum"
        assert len(plugin.formats) == 2
        assert plugin.wire_formats == [WireFormat.VST, WireFormat.VST3]

    def test_formats_keep_input_order(self) -> None:
        raws = [
            raw_installation("Serum (VST3)", WireFormat.VST3, path="/p/Serum.vst3"),
            raw_installation("Serum_x64", WireFormat.VST, path="/p/Serum.dll"),
        ]
        plugin = consolidate(raws)[0]
        assert [str(f.path) for f in plugin.formats] == ["/p/Serum.vst3", "/p/Serum.dll"]


class TestTieBreak:
    """The first-seen installation seeds the entity."""

    def test_first_seen_vendor_wins(self) -> None:
        raws = [
            raw_installation("Diva", WireFormat.VST3, vendor="u-he"),
            raw_installation("Diva", WireFormat.AU, vendor="Components"),
        ]
        assert consolidate(raws)[0].vendor == "u-he"

    def test_id_from_first_seen_path(self) -> None:
        raws = [
            raw_installation("Diva", WireFormat.VST3, path="/a/Diva.vst3"),
            raw_installation("Diva", WireFormat.AU, path="/a/Diva.component"),
        ]
        plugin = consolidate(raws)[0]
        assert plugin.id == plugin_id("/a/Diva.vst3")
        assert len(plugin.id) == 16

    def test_modified_at_advances_to_latest(self) -> None:
        later = BASE_TIME + timedelta(days=3)
        raws = [
            raw_installation("Diva", WireFormat.VST3, modified_at=BASE_TIME),
            raw_installation("Diva", WireFormat.AU, modified_at=later),
        ]
        assert consolidate(raws)[0].modified_at == later

    def test_modified_at_never_moves_back(self) -> None:
        earlier = BASE_TIME - timedelta(days=3)
        raws = [
            raw_installation("Diva", WireFormat.VST3, modified_at=BASE_TIME),
            raw_installation("Diva", WireFormat.AU, modified_at=earlier),
        ]
        assert consolidate(raws)[0].modified_at == BASE_TIME


class TestGrouping:
    """Keys decide grouping; nothing is rejected."""

    def test_distinct_products_stay_separate(self) -> None:
        raws = [raw_installation("Serum"), raw_installation("Diva"), raw_installation("Pro-Q 3")]
        assert len(consolidate(raws)) == 3

    def test_repeated_path_is_not_duplicated(self) -> None:
        raw = raw_installation("Serum", path="/p/Serum.vst3")
        plugin = consolidate([raw, raw])[0]
        assert len(plugin.formats) == 1

    def test_vendor_prefixed_name_merges(self) -> None:
        raws = [
            raw_installation("FabFilter Pro-Q 3", WireFormat.VST3),
            raw_installation("Pro-Q 3", WireFormat.AU),
        ]
        plugins = consolidate(raws)
        assert len(plugins) == 1
        assert plugins[0].key == "pro-q 3"

    def test_underscore_and_space_variants_merge(self) -> None:
        raws = [
            raw_installation("Kick_2", WireFormat.VST, path="/p/Kick_2.dll"),
            raw_installation("Kick 2", WireFormat.VST3, path="/p/Kick 2.vst3"),
        ]
        plugins = consolidate(raws)
        assert [(p.key, p.display_name) for p in plugins] == [("kick 2", "Kick 2")]
        assert plugins[0].wire_formats == [WireFormat.VST, WireFormat.VST3]

    def test_normalized_display_names_unique(self) -> None:
        raws = [
            raw_installation("Pro-Q_3_x64", path="/p/a"),
            raw_installation("FabFilter Pro-Q 3", path="/p/b"),
            raw_installation("Valhalla_Room", path="/p/c"),
            raw_installation("Room", path="/p/d"),
        ]
        plugins = consolidate(raws)
        assert len({normalize(p.display_name) for p in plugins}) == len(plugins) == 2

    def test_output_sorted_by_display_name(self) -> None:
        raws = [raw_installation("Zebra2"), raw_installation("Arturia Pigments"), raw_installation("Massive")]
        names = [p.display_name for p in consolidate(raws)]
        assert names == sorted(names)

    def test_punctuation_only_names_do_not_merge(self) -> None:
        assert consolidation_key(raw_installation("!!!")) == "!!!"
        assert len(consolidate([raw_installation("!!!"), raw_installation("???")])) == 2

    def test_empty_input(self) -> None:
        assert consolidate([]) == []

    def test_formats_never_empty(self) -> None:
        raws = [raw_installation(n) for n in ("Serum", "Serum_x64", "Diva", "Vital")]
        assert all(p.formats for p in consolidate(raws))


class TestSeededClassification:
    """New entities get a heuristic category from their display name."""

    def test_eq_plugin_seeded_as_effect(self) -> None:
        plugin = consolidate([raw_installation("Pro-Q 3", vendor="FabFilter")])[0]
        assert plugin.category == "Effect"
        assert plugin.subcategory == "EQ"

    def test_unknown_vendor_defaults(self) -> None:
        plugin = consolidate([raw_installation("Thing", vendor="")])[0]
        assert plugin.vendor == "Unknown"
        assert plugin.category == "Other"
