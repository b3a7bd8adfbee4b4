"""Ordered keyword rule tables for the heuristic classifier.

Each table is a tuple of ``Rule`` entries evaluated top to bottom against
the lower-cased display name; the first rule whose pattern matches wins.
Keeping the tables separate from the classifier functions means the
priority order is visible in one place and each rule can be tested on
its own.

Priority order for categories:
    1. Synthesizer family (Wavetable, FM, Analog, Keys/Piano, Drum,
       then a generic Subtractive bucket).
    2. Effect families (EQ, Reverb/Delay, Dynamics,
       Distortion/Saturation, Modulation, Guitar/Bass).
    3. Sampler, Drum Machine, Mastering Suite, Utility.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    """A predicate (regex search) paired with a classification result.

    Attributes:
        name: Short identifier used in logs and tests.
        pattern: Compiled regex searched in the lower-cased display name.
        category: Category assigned when the rule fires.
        subcategory: Subcategory assigned when the rule fires.
    """

    name: str
    pattern: re.Pattern[str]
    category: str
    subcategory: str | None

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(name: str, pattern: str, category: str, subcategory: str | None) -> Rule:
    return Rule(name, re.compile(pattern), category, subcategory)


OTHER_CATEGORY = "Other"

# ---------------------------------------------------------------------------
# Category cascade
# ---------------------------------------------------------------------------

CATEGORY_RULES: tuple[Rule, ...] = (
    # -- Synthesizer family --
    _rule(
        "synth-wavetable",
        r"wavetable|serum|massive|vital|pigments|\bwave(?!s)",
        "Synthesizer", "Wavetable",
    ),
    _rule("synth-fm", r"\bfm\d*\b|operator|\bdx\d*\b|dexed", "Synthesizer", "FM"),
    _rule(
        "synth-analog",
        r"analog|\bsub\b|\bacid|diva|moog|prophet|jupiter|juno|monark|repro|tal-u-no",
        "Synthesizer", "Analog",
    ),
    _rule(
        "synth-keys",
        r"piano|\bkeys\b|wurli|rhodes|organ|mellotron|\bep\b",
        "Synthesizer", "Keys/Piano",
    ),
    _rule("synth-drum", r"(?:drum|perc\w*) ?synth", "Synthesizer", "Drum"),
    _rule(
        "synth-generic",
        r"synth|\blead\b|\bpad\b|\bosc",
        "Synthesizer", "Subtractive",
    ),
    # -- Effect families --
    _rule("effect-eq", r"\beq(?:\d|\b)|equali[sz]|pro-q|pultec", "Effect", "EQ"),
    _rule(
        "effect-reverb-delay",
        r"reverb|verb\b|delay|echo|\bspace|\bhall\b|\broom\b|plate|spring|valhalla",
        "Effect", "Reverb/Delay",
    ),
    _rule(
        "effect-dynamics",
        r"compress|limit|\bgate\b|expander|dynamics|pro-[cl]\b|la-?2a|1176|de-?ess",
        "Effect", "Dynamics",
    ),
    _rule(
        "effect-distortion",
        r"distort|overdrive|saturat|\btube|warmth|drive|decapitator|trash|crush",
        "Effect", "Distortion/Saturation",
    ),
    _rule(
        "effect-modulation",
        r"chorus|flanger|phaser|tremolo|vibrato|modulat|ensemble",
        "Effect", "Modulation",
    ),
    _rule(
        "effect-guitar-bass",
        r"guitar|\bbass\b|\bamp\b|\bcab\b|\brig\b|amplitube|helix|neural",
        "Effect", "Guitar/Bass",
    ),
    # -- Instruments and tools --
    _rule(
        "sampler",
        r"kontakt|sampler|\bplayer\b|battery|maschine|\bsampl",
        "Sampler", "Advanced Sampler",
    ),
    _rule(
        "drum-machine",
        r"drum|beat|rhythm|kick|snare|\bhats?\b|percussion",
        "Drums", "Drum Machine",
    ),
    _rule(
        "mastering-suite",
        r"ozone|master|mixing|suite|\bbundle\b",
        "Effect", "Mastering Suite",
    ),
    _rule(
        "utility",
        r"analy[sz]|meter|spectrum|tuner|utility|\btool|scope|correlat",
        "Utility", "Analysis",
    ),
)

# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

# Subcategory -> sentence; the vendor sentence is appended by the classifier.
DESCRIPTION_TEMPLATES: dict[str, str] = {
    "Wavetable": "Wavetable synthesizer with advanced modulation capabilities.",
    "FM": "FM synthesizer for metallic, bell-like and evolving tones.",
    "Analog": "Analog-modeled synthesizer with warm, classic character.",
    "Keys/Piano": "Authentic piano and keyboard emulation with vintage character.",
    "Drum": "Drum synthesizer for designing kicks, snares and percussion.",
    "Subtractive": "Subtractive synthesizer for leads, pads and basses.",
    "EQ": "Professional equalizer plugin for precise frequency shaping and mixing.",
    "Reverb/Delay": "High-quality reverb and delay effects for spatial audio processing.",
    "Dynamics": "Dynamics processor for compression, limiting and gating.",
    "Distortion/Saturation": "Distortion and saturation processor for harmonic color.",
    "Modulation": "Modulation effect for movement, width and texture.",
    "Guitar/Bass": "Guitar and bass amplifier/effects simulation for realistic tones.",
    "Advanced Sampler": "Professional sampling instrument and library host.",
    "Drum Machine": "Drum machine and rhythm instrument for beat production.",
    "Mastering Suite": "Mixing and mastering suite for finishing full productions.",
    "Analysis": "Metering and analysis tool for monitoring audio.",
}

# Category-level fallback used when the subcategory has no template.
CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "Effect": "Audio effect processor for creative and corrective audio processing.",
}

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

CATEGORY_TAGS: dict[str, tuple[str, ...]] = {
    "synthesizer": ("synthesizer", "synth"),
    "effect": ("effect", "processing"),
    "sampler": ("sampler",),
    "drums": ("drums", "rhythm"),
    "utility": ("utility",),
}

SUBCATEGORY_TAGS: dict[str, tuple[str, ...]] = {
    "wavetable": ("wavetable", "electronic"),
    "analog": ("analog", "vintage"),
    "fm": ("fm",),
    "keys/piano": ("keys", "piano"),
    "eq": ("equalizer", "mixing"),
    "reverb/delay": ("reverb", "delay", "spatial"),
    "dynamics": ("dynamics", "mixing"),
    "distortion/saturation": ("distortion", "saturation"),
    "modulation": ("modulation",),
    "guitar/bass": ("guitar", "amp"),
    "mastering suite": ("mastering", "mixing"),
    "analysis": ("analysis", "metering"),
}

# Content tags detected from the name itself, in order.
CONTENT_TAG_RULES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (re.compile(r"bass|\bsub\b|dubstep"), ("bass", "electronic")),
    (re.compile(r"vintage|retro|analog"), ("vintage", "retro")),
    (re.compile(r"free|lite"), ("free",)),
)

DEMO_TAGS: tuple[str, ...] = ("demo", "trial")
