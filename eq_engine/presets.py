"""Built-in, mode-specific preset catalog.

Each resolution has its own presets tuned for its ladder. The catalog is
static; custom presets come from the host's storage and are never written
back by the engine.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from .types import ALL_MODES, EQMode, Preset, PresetCategory

_S5 = EQMode.SIMPLE_5
_S10 = EQMode.STANDARD_10
_A20 = EQMode.ADVANCED_20
_P32 = EQMode.PRO_32

# ================================
# 5-band (31 Hz, 125 Hz, 500 Hz, 2 kHz, 8 kHz)
# ================================

SIMPLE_5_BAND_PRESETS: List[Preset] = [
    Preset("Flat", "Neutral reference sound", (0, 0, 0, 0, 0), _S5, PresetCategory.REFERENCE),
    Preset(
        "Bass Boost",
        "Enhanced low-end for hip-hop and EDM",
        (6, 3, 0, 0, 0),
        _S5,
        PresetCategory.ELECTRONIC,
        tags=("bass", "edm", "hip-hop"),
    ),
    Preset(
        "Vocal",
        "Clear vocals and speech",
        (0, -1, 4, 3, 1),
        _S5,
        PresetCategory.VOCAL,
        tags=("vocal", "speech", "podcast"),
    ),
    Preset(
        "Rock",
        "Punchy rock and metal sound",
        (3, 0, -2, 2, 4),
        _S5,
        PresetCategory.ROCK,
        tags=("rock", "metal", "guitar"),
    ),
    Preset(
        "Pop",
        "Bright and engaging pop music",
        (2, 1, 1, 2, 3),
        _S5,
        PresetCategory.FUN,
        tags=("pop", "mainstream", "radio"),
    ),
    Preset(
        "Classical",
        "Natural orchestral balance",
        (0, 1, 0, 1, 2),
        _S5,
        PresetCategory.CLASSICAL,
        tags=("classical", "orchestral", "acoustic"),
    ),
    Preset(
        "Treble Boost",
        "Enhanced clarity and sparkle",
        (0, 0, 1, 3, 5),
        _S5,
        PresetCategory.AUDIOPHILE,
        tags=("treble", "clarity", "detail"),
    ),
]

# ================================
# 10-band (octave spacing)
# ================================

STANDARD_10_BAND_PRESETS: List[Preset] = [
    Preset("Flat", "Industry standard flat response", (0,) * 10, _S10, PresetCategory.REFERENCE),
    Preset(
        "V-Shaped",
        "Enhanced bass and treble, scooped mids",
        (4, 3, 1, -1, -2, -2, 0, 2, 4, 5),
        _S10,
        PresetCategory.FUN,
        tags=("v-shape", "fun", "consumer"),
    ),
    Preset(
        "Vocal Clarity",
        "Professional vocal enhancement",
        (0, -1, 0, 2, 4, 3, 1, 0, 1, 0),
        _S10,
        PresetCategory.VOCAL,
        tags=("vocal", "speech", "broadcast"),
    ),
    Preset(
        "Bass Heavy",
        "Extended low-frequency response",
        (6, 5, 4, 2, 0, -1, -1, 0, 1, 2),
        _S10,
        PresetCategory.ELECTRONIC,
        tags=("bass", "sub-bass", "electronic"),
    ),
    Preset(
        "Acoustic",
        "Natural acoustic instrument reproduction",
        (0, 0, 1, 1, 0, 0, 1, 2, 1, 1),
        _S10,
        PresetCategory.CLASSICAL,
        tags=("acoustic", "natural", "folk"),
    ),
    Preset(
        "Live Concert",
        "Simulates live venue acoustics",
        (1, 2, 1, 0, -1, 0, 1, 2, 2, 1),
        _S10,
        PresetCategory.ROCK,
        tags=("live", "concert", "venue"),
    ),
    Preset(
        "Dance",
        "Club and dance music optimization",
        (5, 4, 2, 0, -1, 0, 1, 2, 3, 4),
        _S10,
        PresetCategory.ELECTRONIC,
        tags=("dance", "club", "electronic"),
    ),
]

# ================================
# 20-band (professional mixing)
# ================================

ADVANCED_20_BAND_PRESETS: List[Preset] = [
    Preset(
        "Reference Flat",
        "Precision reference monitoring",
        (0,) * 20,
        _A20,
        PresetCategory.REFERENCE,
        tags=("reference", "monitoring", "flat"),
    ),
    Preset(
        "Mastering",
        "Professional mastering curve",
        (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 1, 1, 1, 0),
        _A20,
        PresetCategory.AUDIOPHILE,
        tags=("mastering", "professional", "studio"),
    ),
    Preset(
        "Vocal Production",
        "Professional vocal recording EQ",
        (-2, -1, 0, 0, 0, 0, 1, 2, 3, 4, 3, 2, 1, 0, 0, 1, 2, 1, 0, -1),
        _A20,
        PresetCategory.VOCAL,
        tags=("vocal", "recording", "production"),
    ),
    Preset(
        "Orchestral",
        "Symphonic orchestra optimization",
        (0, 0, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1, 2, 2, 1, 1, 1, 1),
        _A20,
        PresetCategory.CLASSICAL,
        tags=("orchestral", "symphony", "classical"),
    ),
    Preset(
        "Electronic Master",
        "Advanced electronic music processing",
        (4, 3, 2, 1, 0, 0, -1, -1, 0, 0, 0, 1, 1, 2, 2, 3, 3, 2, 1, 0),
        _A20,
        PresetCategory.ELECTRONIC,
        tags=("electronic", "synthesis", "digital"),
    ),
]

# ================================
# 32-band (audiophile precision)
# ================================

PRO_32_BAND_PRESETS: List[Preset] = [
    Preset(
        "Audiophile Reference",
        "Ultimate reference standard",
        (0,) * 32,
        _P32,
        PresetCategory.REFERENCE,
        tags=("reference", "audiophile", "neutral"),
    ),
    Preset(
        "Hi-Res Optimized",
        "Optimized for high-resolution audio formats",
        (0,) * 22 + (1, 1, 1, 2, 2, 2, 1, 1, 1, 1),
        _P32,
        PresetCategory.AUDIOPHILE,
        tags=("hi-res", "dsd", "flac", "audiophile"),
    ),
    Preset(
        "Studio Monitor",
        "Professional studio monitoring curve",
        (0,) * 11 + (1, 1) + (0,) * 7 + (1,) * 7 + (0,) * 5,
        _P32,
        PresetCategory.AUDIOPHILE,
        tags=("studio", "monitor", "professional"),
    ),
    Preset(
        "Headphone Correction",
        "Compensates for typical headphone colorations",
        (0, 0, 1, 1, 1, 0, 0, 0, -1, -1, -1, 0, 1, 2, 1, 0,
         0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, -1, -1),
        _P32,
        PresetCategory.AUDIOPHILE,
        tags=("headphone", "correction", "compensation"),
    ),
]

_CATALOG: Dict[EQMode, List[Preset]] = {
    _S5: SIMPLE_5_BAND_PRESETS,
    _S10: STANDARD_10_BAND_PRESETS,
    _A20: ADVANCED_20_BAND_PRESETS,
    _P32: PRO_32_BAND_PRESETS,
}

_RECOMMENDED: Dict[EQMode, Sequence[str]] = {
    _S5: ("Flat", "Bass Boost", "Pop"),
    _S10: ("Flat", "V-Shaped", "Vocal Clarity"),
    _A20: ("Reference Flat", "Mastering", "Vocal Production"),
    _P32: ("Audiophile Reference", "Hi-Res Optimized", "Studio Monitor"),
}


def get_presets_for_mode(mode: EQMode) -> List[Preset]:
    return list(_CATALOG[mode])


def all_presets() -> List[Preset]:
    return [p for mode in ALL_MODES for p in _CATALOG[mode]]


def get_presets_by_category(mode: EQMode) -> Dict[PresetCategory, List[Preset]]:
    """Group a mode's presets by category, keeping catalog order."""
    grouped: Dict[PresetCategory, List[Preset]] = {}
    for preset in _CATALOG[mode]:
        grouped.setdefault(preset.category, []).append(preset)
    return grouped


def find_presets_by_tag(mode: EQMode, tag: str) -> List[Preset]:
    """Presets whose tags, name or description contain ``tag`` (case-insensitive)."""
    needle = tag.lower()
    return [
        p
        for p in _CATALOG[mode]
        if any(needle in t.lower() for t in p.tags)
        or needle in p.name.lower()
        or needle in p.description.lower()
    ]


def get_recommended_presets(mode: EQMode) -> List[Preset]:
    names = _RECOMMENDED[mode]
    return [p for p in _CATALOG[mode] if p.name in names]


def get_preset(mode: EQMode, name: str) -> Preset:
    for preset in _CATALOG[mode]:
        if preset.name.lower() == name.lower():
            return preset
    raise KeyError(f"No built-in {mode.display_name} preset named '{name}'")


def create_custom_preset(name: str, gains: Sequence[float], mode: EQMode) -> Preset:
    """Wrap the user's current gains as a custom preset for ``mode``."""
    return Preset(
        name=name,
        description="Custom user preset",
        bands=tuple(gains),
        target_mode=mode,
        category=PresetCategory.CUSTOM,
        is_custom=True,
        author="User",
    )
