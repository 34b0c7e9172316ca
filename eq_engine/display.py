"""Presentation lookups for modes and bands.

Kept apart from conversion and mapping: nothing in the engine core reads
these tables.
"""
from __future__ import annotations

from typing import Dict

from .types import EQMode

MODE_COLORS: Dict[EQMode, str] = {
    EQMode.SIMPLE_5: "dark_orange",
    EQMode.STANDARD_10: "cyan",
    EQMode.ADVANCED_20: "green1",
    EQMode.PRO_32: "dodger_blue1",
}

MODE_ICONS: Dict[EQMode, str] = {
    EQMode.SIMPLE_5: "▌" * 5,
    EQMode.STANDARD_10: "▌" * 10,
    EQMode.ADVANCED_20: "█" * 20,
    EQMode.PRO_32: "■" * 32,
}

MODE_SPACING: Dict[EQMode, str] = {
    EQMode.SIMPLE_5: "Wide spacing for basic control",
    EQMode.STANDARD_10: "Octave spacing",
    EQMode.ADVANCED_20: "Half-octave professional spacing",
    EQMode.PRO_32: "Maximum precision logarithmic spacing",
}

MODE_RECOMMENDED_USE: Dict[EQMode, str] = {
    EQMode.SIMPLE_5: "Quick adjustments, casual listening",
    EQMode.STANDARD_10: "Music mixing, live sound",
    EQMode.ADVANCED_20: "Studio mixing, mastering",
    EQMode.PRO_32: "Audiophile tuning, room correction",
}

# (upper bound in Hz, label, color); the last entry catches everything above.
FREQUENCY_CATEGORIES = (
    (60, "Sub Bass", "medium_purple"),
    (250, "Bass", "slate_blue1"),
    (2000, "Mid", "cyan"),
    (6000, "High Mid", "green"),
    (12000, "Treble", "orange1"),
    (float("inf"), "High", "red"),
)


def format_frequency(freq: int) -> str:
    """Compact label: 500Hz, 1.2kHz, 16kHz."""
    if freq < 1000:
        return f"{freq}Hz"
    if freq < 10000:
        return f"{freq // 1000}.{(freq % 1000) // 100}kHz"
    return f"{freq // 1000}kHz"


def frequency_category(freq: int) -> str:
    for upper, label, _ in FREQUENCY_CATEGORIES:
        if freq < upper:
            return label
    return FREQUENCY_CATEGORIES[-1][1]


def frequency_color(freq: int) -> str:
    for upper, _, color in FREQUENCY_CATEGORIES:
        if freq < upper:
            return color
    return FREQUENCY_CATEGORIES[-1][2]


def gain_bar(gain: float, width: int = 15) -> str:
    """Text bar centred on 0 dB, one cell per dB up to ``width``."""
    cells = min(width, int(round(abs(gain))))
    if gain >= 0:
        return " " * width + "|" + "#" * cells
    return " " * (width - cells) + "#" * cells + "|"
