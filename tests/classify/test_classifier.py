"""Tests for the heuristic category cascade, descriptions and tags."""

from __future__ import annotations

import pytest

from audioshelf.classify.classifier import Classification, classify, describe, first_matching_rule, tag
from audioshelf.classify.rules import CATEGORY_RULES


class TestClassify:
    """First matching rule wins, top to bottom."""

    def test_pro_q_is_an_eq(self) -> None:
        assert classify("Pro-Q 3", "FabFilter") == Classification("Effect", "EQ", "effect-eq")

    @pytest.mark.parametrize(
        ("name", "category", "subcategory"),
        [
            ("Serum", "Synthesizer", "Wavetable"),
            ("DX7 V", "Synthesizer", "FM"),
            ("Diva", "Synthesizer", "Analog"),
            ("ValhallaVintageVerb", "Effect", "Reverb/Delay"),
            ("Decapitator", "Effect", "Distortion/Saturation"),
            ("Helix Native", "Effect", "Guitar/Bass"),
            ("Kontakt 7", "Sampler", "Advanced Sampler"),
            ("Battery 4", "Sampler", "Advanced Sampler"),
            ("Kick 2", "Drums", "Drum Machine"),
            ("Ozone 11", "Effect", "Mastering Suite"),
            ("Youlean Loudness Meter", "Utility", "Analysis"),
        ],
    )
    def test_known_products(self, name: str, category: str, subcategory: str) -> None:
        result = classify(name)
        assert (result.category, result.subcategory) == (category, subcategory)

    def test_synth_rules_outrank_effects(self) -> None:
        """A name matching both families lands in the synth family."""
        assert classify("Serum Reverb").category == "Synthesizer"

    def test_no_match_is_other(self) -> None:
        assert classify("Thing") == Classification("Other", None)

    def test_vendor_does_not_change_result(self) -> None:
        assert classify("Serum", "Xfer Records") == classify("Serum", None)

    def test_rule_names_are_unique(self) -> None:
        names = [rule.name for rule in CATEGORY_RULES]
        assert len(names) == len(set(names))

    def test_first_matching_rule_exposes_priority(self) -> None:
        rule = first_matching_rule("Serum Reverb")
        assert rule is not None and rule.name == "synth-wavetable"
        assert first_matching_rule("Thing") is None


class TestDescribe:
    """Template descriptions with vendor attribution."""

    def test_subcategory_template_with_vendor(self) -> None:
        text = describe("Pro-Q 3", "FabFilter", "Effect", "EQ")
        assert text.startswith("Professional equalizer plugin")
        assert text.endswith(" By FabFilter.")

    def test_unknown_vendor_omits_attribution(self) -> None:
        text = describe("Pro-Q 3", "Unknown", "Effect", "EQ")
        assert "By" not in text

    def test_category_template_fallback(self) -> None:
        text = describe("Odd", "Acme", "Effect", "Granular")
        assert text.startswith("Audio effect processor")

    def test_generic_fallback(self) -> None:
        assert describe("Thing", "Acme", "Other", None) == "Other by Acme."
        assert describe("Thing", None, None, None) == "Audio plugin by Unknown."


class TestTag:
    """Category-derived and content tags."""

    def test_wavetable_synth_tags(self) -> None:
        assert tag("Serum", "Synthesizer", "Wavetable") == {
            "synthesizer", "synth", "wavetable", "electronic",
        }

    def test_content_tags_from_name(self) -> None:
        tags = tag("Sub Bass Lite", "Synthesizer", "Analog")
        assert {"bass", "electronic", "free", "analog", "vintage"} <= tags

    def test_demo_tags(self) -> None:
        assert {"demo", "trial"} <= tag("Thing", "Other", None, is_demo=True)
        assert "demo" not in tag("Thing", "Other", None)

    def test_other_has_no_category_tags(self) -> None:
        assert tag("Thing", "Other", None) == set()
