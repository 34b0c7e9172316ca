"""Frequency ladder generation.

A ladder is the ordered list of centre frequencies for one resolution.
5 and 10 band ladders are curated; 20 and 32 band ladders are spaced
log-uniformly between 20 Hz and 20 kHz and snapped to the standard
1/3-octave frequency series.
"""
from __future__ import annotations

import math
from functools import lru_cache
from typing import Dict, Optional, Tuple

import numpy as np

from .errors import FrequencyLadderOverflow

MIN_FREQ_HZ = 20.0
MAX_FREQ_HZ = 20000.0

STANDARD_FREQUENCIES: Tuple[int, ...] = (
    20, 25, 31, 40, 50, 63, 80, 100, 125, 160,
    200, 250, 315, 400, 500, 630, 800, 1000, 1250, 1600,
    2000, 2500, 3150, 4000, 5000, 6300, 8000, 10000, 12500, 16000, 20000,
)

CURATED_LADDERS: Dict[int, Tuple[int, ...]] = {
    # sub-bass, bass, mid, high-mid, treble
    5: (31, 125, 500, 2000, 8000),
    # octave-spaced graphic EQ, sub-bass up to air
    10: (31, 63, 125, 250, 500, 1000, 2000, 4000, 8000, 16000),
}
SNAPPED_BAND_COUNTS = (20, 32)


def log_spaced(count: int, min_hz: float = MIN_FREQ_HZ, max_hz: float = MAX_FREQ_HZ) -> np.ndarray:
    """Return ``count`` points spaced uniformly in ln(Hz), endpoints included."""
    if count == 1:
        return np.array([min_hz])
    steps = np.arange(count, dtype=np.float64)
    log_min, log_max = math.log(min_hz), math.log(max_hz)
    return np.exp(log_min + steps * (log_max - log_min) / (count - 1))


def snap_to_standard(freq: float) -> int:
    """Nearest standard frequency; an exact tie goes to the lower value."""
    best = STANDARD_FREQUENCIES[0]
    best_dist = abs(best - freq)
    for candidate in STANDARD_FREQUENCIES[1:]:
        dist = abs(candidate - freq)
        if dist < best_dist:
            best, best_dist = candidate, dist
    return best


def _next_standard_above(freq: int) -> Optional[int]:
    for candidate in STANDARD_FREQUENCIES:
        if candidate > freq:
            return candidate
    return None


def _snapped_ladder(count: int) -> Tuple[int, ...]:
    raw = log_spaced(count)
    targets = [snap_to_standard(f) for f in raw]
    ladder = []
    for i, target in enumerate(targets):
        prev = ladder[-1] if ladder else None
        if prev is None or target > prev:
            ladder.append(target)
            continue
        # Collision: the next band's own target bounds how far we may move up.
        ceiling = targets[i + 1] if i + 1 < count else math.inf
        nudged = _next_standard_above(prev)
        if nudged is not None and nudged < ceiling:
            ladder.append(nudged)
            continue
        exact = int(round(float(raw[i])))
        if prev < exact < ceiling:
            ladder.append(exact)
            continue
        raise FrequencyLadderOverflow(
            f"No free frequency for band {i} of {count} (raw {raw[i]:.1f} Hz, previous {prev} Hz)"
        )
    return tuple(ladder)


@lru_cache(maxsize=None)
def generate_ladder(band_count: int) -> Tuple[int, ...]:
    """Ordered centre frequencies (Hz) for a resolution of ``band_count`` bands.

    Deterministic and side-effect free. Counts other than 5/10/20/32 fall
    back to plain log-uniform spacing without snapping, rounded to whole Hz.

    Raises:
        ValueError: ``band_count`` is below 1.
        FrequencyLadderOverflow: rounding would repeat a frequency, i.e. the
            lowest bands lie less than 1 Hz apart.
    """
    if band_count < 1:
        raise ValueError(f"band_count must be positive, got {band_count}")
    if band_count in CURATED_LADDERS:
        return CURATED_LADDERS[band_count]
    if band_count in SNAPPED_BAND_COUNTS:
        return _snapped_ladder(band_count)
    ladder = tuple(int(round(f)) for f in log_spaced(band_count))
    for i, (prev, freq) in enumerate(zip(ladder, ladder[1:]), 1):
        if freq <= prev:
            raise FrequencyLadderOverflow(
                f"{band_count} bands do not fit between {MIN_FREQ_HZ:.0f} and "
                f"{MAX_FREQ_HZ:.0f} Hz in whole Hz (band {i} repeats {prev} Hz)"
            )
    return ladder


def frequency_range(ladder: Tuple[int, ...]) -> Tuple[int, int]:
    if not ladder:
        return int(MIN_FREQ_HZ), int(MAX_FREQ_HZ)
    return min(ladder), max(ladder)
