"""Preset conversion between EQ resolutions.

All conversions work in log10(Hz) so that equal distances correspond to
equal musical intervals.

- Upscale (more target bands): linear interpolation between the two
  bracketing source bands, holding the end gains flat beyond the source
  range (no extrapolation).
- Downscale (fewer target bands): distance-weighted average of the source
  bands inside an influence radius around each target band, with weight
  exp(-2 * distance). The radius narrows as the target resolution grows.
- Remap (same band count, different ladder): same as upscale.

A flat curve is a fixed point of every path.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np
from scipy.interpolate import interp1d

from . import presets as catalog
from .types import (
    MAX_GAIN_DB,
    MIN_GAIN_DB,
    EQMode,
    Preset,
    PresetCategory,
    PresetCharacteristics,
)

logger = logging.getLogger(__name__)

# Influence radius in decades, keyed by target band count. Empirical values,
# kept for compatibility with existing converted presets.
DEFAULT_INFLUENCE_RADII: Dict[int, float] = {5: 0.8, 10: 0.4, 20: 0.2, 32: 0.1}
DISTANCE_DECAY = 2.0
CONVERTER_AUTHOR = "Preset Converter"


# ================================
# Curve resampling
# ================================

def interpolate_gains(
    source_freqs: Sequence[float],
    source_gains: Sequence[float],
    target_freqs: Sequence[float],
) -> np.ndarray:
    """Linear interpolation in log10(Hz), clamped to the end gains."""
    x = np.log10(np.asarray(source_freqs, dtype=np.float64))
    y = np.asarray(source_gains, dtype=np.float64)
    if len(x) == 1:
        return np.clip(np.full(len(target_freqs), y[0]), MIN_GAIN_DB, MAX_GAIN_DB)
    curve = interp1d(
        x,
        y,
        kind="linear",
        bounds_error=False,
        fill_value=(y[0], y[-1]),
        assume_sorted=True,
    )
    out = curve(np.log10(np.asarray(target_freqs, dtype=np.float64)))
    return np.clip(out, MIN_GAIN_DB, MAX_GAIN_DB)


def decimate_gains(
    source_freqs: Sequence[float],
    source_gains: Sequence[float],
    target_freqs: Sequence[float],
    radius: float,
) -> np.ndarray:
    """Weighted average of source bands within ``radius`` decades of each target."""
    x = np.log10(np.asarray(source_freqs, dtype=np.float64))
    y = np.asarray(source_gains, dtype=np.float64)
    out = np.zeros(len(target_freqs), dtype=np.float64)
    for i, freq in enumerate(target_freqs):
        distance = np.abs(np.log10(float(freq)) - x)
        inside = distance <= radius
        if not np.any(inside):
            # Nothing close enough: flat response.
            continue
        weights = np.exp(-DISTANCE_DECAY * distance[inside])
        out[i] = float(np.sum(weights * y[inside]) / np.sum(weights))
    return np.clip(out, MIN_GAIN_DB, MAX_GAIN_DB)


def influence_radius(mode: EQMode, radii: Optional[Mapping[int, float]] = None) -> float:
    table = dict(DEFAULT_INFLUENCE_RADII)
    if radii:
        table.update(radii)
    return float(table[mode.band_count])


# ================================
# Preset conversion
# ================================

def convert_gains(
    gains: Sequence[float],
    source_mode: EQMode,
    target_mode: EQMode,
    influence_radii: Optional[Mapping[int, float]] = None,
) -> List[float]:
    """Convert a raw gain list from ``source_mode``'s ladder to ``target_mode``'s."""
    source_freqs = source_mode.frequencies
    target_freqs = target_mode.frequencies
    if target_mode.band_count < source_mode.band_count:
        logger.debug("Downscaling %d -> %d bands", source_mode.band_count, target_mode.band_count)
        radius = influence_radius(target_mode, influence_radii)
        out = decimate_gains(source_freqs, gains, target_freqs, radius)
    else:
        if target_mode.band_count > source_mode.band_count:
            logger.debug("Upscaling %d -> %d bands", source_mode.band_count, target_mode.band_count)
        else:
            logger.debug("Remapping %s -> %s", source_mode.display_name, target_mode.display_name)
        out = interpolate_gains(source_freqs, gains, target_freqs)
    return [float(g) for g in out]


def convert_preset(
    source: Preset,
    target_mode: EQMode,
    influence_radii: Optional[Mapping[int, float]] = None,
) -> Preset:
    """Return a copy of ``source`` valid for ``target_mode``.

    Always succeeds. A preset already in ``target_mode`` is returned as is.
    """
    if source.target_mode == target_mode:
        return source
    gains = convert_gains(source.bands, source.target_mode, target_mode, influence_radii)
    tags = source.tags if "converted" in source.tags else source.tags + ("converted",)
    return Preset(
        name=f"{source.name} (Converted)",
        description=(
            f"Converted from {source.target_mode.display_name} to {target_mode.display_name}"
        ),
        bands=tuple(gains),
        target_mode=target_mode,
        category=source.category,
        is_custom=True,
        author=CONVERTER_AUTHOR,
        tags=tags,
    )


def batch_convert_presets(
    sources: Sequence[Preset],
    target_mode: EQMode,
    influence_radii: Optional[Mapping[int, float]] = None,
) -> List[Preset]:
    return [convert_preset(p, target_mode, influence_radii) for p in sources]


# ================================
# Preset matching
# ================================

def levenshtein(a: str, b: str) -> int:
    """Classic edit distance between the lower-cased strings."""
    s1, s2 = a.lower(), b.lower()
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def _match_score(candidate: Preset, source: Preset) -> int:
    shared = len(set(candidate.tags) & set(source.tags))
    return shared * 10 - levenshtein(candidate.name, source.name)


def find_best_matching_preset(
    source: Preset,
    target_mode: EQMode,
    available: Optional[Sequence[Preset]] = None,
) -> Optional[Preset]:
    """Pick a native preset in ``target_mode`` that best stands in for ``source``.

    Order of preference: same name (case-insensitive), best-scoring preset
    of the same category, the mode's reference/flat preset, the first
    preset. Returns None only when there is nothing to choose from.
    """
    candidates = list(available) if available is not None else catalog.get_presets_for_mode(target_mode)
    if not candidates:
        return None

    wanted = source.name.lower()
    for preset in candidates:
        if preset.name.lower() == wanted:
            return preset

    same_category = [p for p in candidates if p.category == source.category]
    if same_category:
        # max() keeps the first of equally scored candidates.
        return max(same_category, key=lambda p: _match_score(p, source))

    for preset in candidates:
        if preset.category == PresetCategory.REFERENCE or "flat" in preset.name.lower():
            return preset
    return candidates[0]


# ================================
# Characteristics
# ================================

def analyze_preset_characteristics(preset: Preset) -> PresetCharacteristics:
    """Describe a curve's shape: bass/mid/treble means plus derived flags.

    Bass is the first quarter of the bands, mid the middle half, treble the
    last quarter.
    """
    return analyze_gains(preset.bands)


def analyze_gains(gains: Sequence[float]) -> PresetCharacteristics:
    bands = np.asarray(gains, dtype=np.float64)
    n = len(bands)
    quarter = n // 4

    def _mean(values: np.ndarray) -> float:
        return float(np.mean(values)) if values.size else 0.0

    bass = _mean(bands[:quarter])
    mid = _mean(bands[quarter : quarter + n // 2])
    treble = _mean(bands[n - quarter :]) if quarter else 0.0
    return PresetCharacteristics(
        bass_level=bass,
        mid_level=mid,
        treble_level=treble,
        is_bass_heavy=bass > 2.0,
        is_mid_scooped=mid < -1.0,
        has_treble_boost=treble > 2.0,
        is_flat=bool(np.all(np.abs(bands) < 0.5)),
        dynamic_range=float(np.max(bands) - np.min(bands)) if n else 0.0,
    )
