"""Shared datatypes for the equalizer engine.

These dataclasses and enums keep interfaces clear between modules. All
values are immutable: every edit produces a new object, so a reader never
sees a half-updated configuration.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import GainOutOfRange, InvalidBandId
from .ladder import generate_ladder

MIN_GAIN_DB = -15.0
MAX_GAIN_DB = 15.0
DEFAULT_GAIN_DB = 0.0


def clamp_gain(gain: float) -> float:
    """Clamp a gain to the engine range, rejecting NaN and infinities."""
    value = float(gain)
    if not math.isfinite(value):
        raise GainOutOfRange(gain)
    return min(MAX_GAIN_DB, max(MIN_GAIN_DB, value))


class EQMode(Enum):
    """The four fixed EQ resolutions.

    Attributes:
        band_count: Number of bands in this resolution.
        display_name: Short upper-case label.
        description: Human-readable summary.
    """

    SIMPLE_5 = (5, "SIMPLE", "Basic 5-Band EQ")
    STANDARD_10 = (10, "STANDARD", "10-Band Graphic EQ")
    ADVANCED_20 = (20, "ADVANCED", "20-Band Professional EQ")
    PRO_32 = (32, "PRO", "32-Band Audiophile EQ")

    def __init__(self, band_count: int, display_name: str, description: str) -> None:
        self.band_count = band_count
        self.display_name = display_name
        self.description = description

    @property
    def frequencies(self) -> Tuple[int, ...]:
        return generate_ladder(self.band_count)

    @classmethod
    def from_band_count(cls, count: int) -> "EQMode":
        for mode in cls:
            if mode.band_count == count:
                return mode
        raise ValueError(f"No EQ mode with {count} bands")


ALL_MODES: List[EQMode] = list(EQMode)


class PresetCategory(Enum):
    REFERENCE = "Reference"
    CLASSICAL = "Classical"
    JAZZ = "Jazz"
    ROCK = "Rock"
    ELECTRONIC = "Electronic"
    VOCAL = "Vocal"
    AUDIOPHILE = "Hi-Res"
    FUN = "Fun"
    CUSTOM = "Custom"
    GENERAL = "General"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class Band:
    """A single equalizer band.

    Attributes:
        id: Zero-based position in the configuration's ladder.
        frequency: Centre frequency in Hz.
        gain: Gain in dB, clamped to [-15, 15] on construction.
        enabled: Whether the band participates in processing.
    """

    id: int
    frequency: int
    gain: float = DEFAULT_GAIN_DB
    enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "gain", clamp_gain(self.gain))

    def with_gain(self, gain: float) -> "Band":
        return replace(self, gain=gain)


@dataclass(frozen=True)
class Configuration:
    """A mode's ladder plus its per-band state.

    Attributes:
        mode: The resolution this configuration belongs to.
        frequencies: Ladder for ``mode``; ``bands[i].frequency == frequencies[i]``.
        bands: One `Band` per ladder entry, ordered by id (= ascending frequency).
        is_active: Whether the equalizer is switched on.
    """

    mode: EQMode
    frequencies: Tuple[int, ...]
    bands: Tuple[Band, ...]
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequencies", tuple(self.frequencies))
        object.__setattr__(self, "bands", tuple(self.bands))
        if len(self.bands) != self.mode.band_count:
            raise ValueError(
                f"{self.mode.name} needs {self.mode.band_count} bands, got {len(self.bands)}"
            )
        if len(self.frequencies) != len(self.bands):
            raise ValueError("Frequency ladder and band list differ in length")
        for index, (band, freq) in enumerate(zip(self.bands, self.frequencies)):
            if band.id != index or band.frequency != freq:
                raise ValueError(f"Band {index} does not match ladder position ({band})")

    @classmethod
    def create(cls, mode: EQMode, gains: Optional[Sequence[float]] = None) -> "Configuration":
        """Build a configuration for ``mode``, flat unless ``gains`` is given."""
        frequencies = generate_ladder(mode.band_count)
        if gains is None:
            gains = [DEFAULT_GAIN_DB] * len(frequencies)
        if len(gains) != len(frequencies):
            raise ValueError(f"{mode.name} needs {len(frequencies)} gains, got {len(gains)}")
        bands = tuple(
            Band(id=i, frequency=f, gain=g) for i, (f, g) in enumerate(zip(frequencies, gains))
        )
        return cls(mode=mode, frequencies=frequencies, bands=bands)

    @property
    def gains(self) -> List[float]:
        return [b.gain for b in self.bands]

    def _check_band_id(self, band_id: int) -> None:
        if not 0 <= band_id < len(self.bands):
            raise InvalidBandId(band_id, len(self.bands))

    def with_band_gain(self, band_id: int, gain: float) -> "Configuration":
        self._check_band_id(band_id)
        bands = list(self.bands)
        bands[band_id] = bands[band_id].with_gain(gain)
        return replace(self, bands=tuple(bands))

    def with_band_enabled(self, band_id: int, enabled: bool) -> "Configuration":
        self._check_band_id(band_id)
        bands = list(self.bands)
        bands[band_id] = replace(bands[band_id], enabled=bool(enabled))
        return replace(self, bands=tuple(bands))

    def with_gains(self, gains: Sequence[float]) -> "Configuration":
        if len(gains) != len(self.bands):
            raise ValueError(f"Expected {len(self.bands)} gains, got {len(gains)}")
        # Validate everything before building, so a bad value changes nothing.
        clamped = [clamp_gain(g) for g in gains]
        return replace(self, bands=tuple(b.with_gain(g) for b, g in zip(self.bands, clamped)))

    def with_active(self, is_active: bool) -> "Configuration":
        return replace(self, is_active=bool(is_active))

    def flattened(self) -> "Configuration":
        return self.with_gains([DEFAULT_GAIN_DB] * len(self.bands))


@dataclass(frozen=True)
class Preset:
    """A named gain curve authored for one specific mode.

    The gain list only has meaning against ``target_mode``'s ladder; use the
    converter to move it to another resolution.
    """

    name: str
    description: str
    bands: Tuple[float, ...]
    target_mode: EQMode
    category: PresetCategory = PresetCategory.GENERAL
    is_custom: bool = False
    author: str = "Adaptive EQ"
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        bands = tuple(float(g) for g in self.bands)
        for g in bands:
            if not math.isfinite(g):
                raise GainOutOfRange(g)
        if len(bands) != self.target_mode.band_count:
            raise ValueError(
                f"Preset '{self.name}' has {len(bands)} gains but "
                f"{self.target_mode.name} needs {self.target_mode.band_count}"
            )
        object.__setattr__(self, "bands", bands)
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def id(self) -> str:
        return f"{self.target_mode.band_count}_{self.name.lower().replace(' ', '_')}"


@dataclass(frozen=True)
class HardwareBandDescriptor:
    """What the underlying equalizer reports at session start.

    Attributes:
        count: Number of native bands.
        frequencies: Native centre frequencies in Hz, ``len == count``.
        gain_range_db: ``(min_db, max_db)`` accepted by the hardware.
        step_db: Native gain resolution; hardware gains are rounded to it.
        session_id: Audio session the descriptor was read from, if known.
    """

    count: int
    frequencies: Tuple[int, ...]
    gain_range_db: Tuple[float, float]
    step_db: float = 1.0
    session_id: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequencies", tuple(int(f) for f in self.frequencies))
        lo, hi = (float(v) for v in self.gain_range_db)
        object.__setattr__(self, "gain_range_db", (lo, hi))
        if len(self.frequencies) != self.count:
            raise ValueError(
                f"Descriptor lists {len(self.frequencies)} frequencies for {self.count} bands"
            )
        if not lo < hi:
            raise ValueError(f"Invalid hardware gain range {self.gain_range_db}")
        if not self.step_db > 0:
            raise ValueError(f"Hardware step must be positive, got {self.step_db}")

    @classmethod
    def from_config(cls, cfg: dict) -> "HardwareBandDescriptor":
        frequencies = list(cfg.get("frequencies", []))
        return cls(
            count=int(cfg.get("count", len(frequencies))),
            frequencies=tuple(frequencies),
            gain_range_db=tuple(cfg.get("gain_range_db", (MIN_GAIN_DB, MAX_GAIN_DB))),
            step_db=float(cfg.get("step_db", 1.0)),
            session_id=cfg.get("session_id"),
        )


@dataclass(frozen=True)
class PresetCharacteristics:
    """Summary of a gain curve's shape, used for display and diagnostics."""

    bass_level: float
    mid_level: float
    treble_level: float
    is_bass_heavy: bool
    is_mid_scooped: bool
    has_treble_boost: bool
    is_flat: bool
    dynamic_range: float

    @property
    def shape(self) -> str:
        if self.is_flat:
            return "Flat"
        if self.is_bass_heavy and self.has_treble_boost and self.is_mid_scooped:
            return "V-Shaped"
        if self.is_bass_heavy:
            return "Bass-Heavy"
        if self.has_treble_boost:
            return "Bright"
        if self.is_mid_scooped:
            return "Scooped"
        if self.mid_level > 1.0:
            return "Mid-Forward"
        return "Balanced"

    def to_dict(self) -> dict:
        return {
            "bass_level": round(self.bass_level, 3),
            "mid_level": round(self.mid_level, 3),
            "treble_level": round(self.treble_level, 3),
            "dynamic_range": round(self.dynamic_range, 3),
            "shape": self.shape,
        }
