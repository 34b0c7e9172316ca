"""Reduce a fine-grained UI curve to the bands the hardware exposes.

The UI bands are split into contiguous groups, one per hardware band. Group
sizes come from integer division with the remainder handed to the earliest
groups, so 32 UI bands on a 5-band equalizer group as [7, 7, 6, 6, 6].
Each group's mean gain is then rescaled from the engine's [-15, 15] dB
range into the hardware range, clamped, and rounded to the hardware step.

The mapper is pure: pushing the values to a real equalizer is the caller's job.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .errors import UnsupportedHardwareBandCount
from .types import MAX_GAIN_DB, MIN_GAIN_DB, Band, HardwareBandDescriptor

logger = logging.getLogger(__name__)


def group_sizes(ui_count: int, hardware_count: int) -> List[int]:
    """Sizes of the contiguous UI groups, extra bands going to the earliest groups."""
    if hardware_count <= 0 or hardware_count > ui_count:
        raise UnsupportedHardwareBandCount(hardware_count, ui_count)
    base, remainder = divmod(ui_count, hardware_count)
    return [base + 1 if i < remainder else base for i in range(hardware_count)]


def group_boundaries(ui_count: int, hardware_count: int) -> List[Tuple[int, int]]:
    """Half-open ``(start, end)`` UI index ranges, one per hardware band."""
    bounds = []
    start = 0
    for size in group_sizes(ui_count, hardware_count):
        bounds.append((start, start + size))
        start += size
    return bounds


def average_groups(bands: Sequence[Band], hardware_count: int) -> List[float]:
    """Mean gain (dB) of each UI group, before any hardware rescaling."""
    gains = np.asarray([b.gain for b in bands], dtype=np.float64)
    averages = []
    for start, end in group_boundaries(len(gains), hardware_count):
        group = gains[start:end]
        averages.append(float(np.mean(group)) if group.size else 0.0)
    return averages


def rescale_gain(avg_db: float, descriptor: HardwareBandDescriptor) -> float:
    """Map an engine-range gain into the hardware range and quantise it."""
    min_db, max_db = descriptor.gain_range_db
    normalized = (avg_db - MIN_GAIN_DB) / (MAX_GAIN_DB - MIN_GAIN_DB)
    hw = min_db + normalized * (max_db - min_db)
    hw = float(np.clip(hw, min_db, max_db))
    step = descriptor.step_db
    hw = float(np.round(hw / step) * step)
    # Range ends need not be multiples of the step.
    return float(np.clip(hw, min_db, max_db))


def map_to_hardware(ui_bands: Sequence[Band], descriptor: HardwareBandDescriptor) -> List[float]:
    """Compute one hardware gain per native band from the UI band curve.

    Raises:
        UnsupportedHardwareBandCount: the hardware reports no bands, or more
            bands than the UI curve provides.
    """
    if descriptor.count <= 0 or descriptor.count > len(ui_bands):
        raise UnsupportedHardwareBandCount(descriptor.count, len(ui_bands))

    averages = average_groups(ui_bands, descriptor.count)
    bounds = group_boundaries(len(ui_bands), descriptor.count)
    hardware_gains = []
    for index, (avg, (start, end)) in enumerate(zip(averages, bounds)):
        hw = rescale_gain(avg, descriptor)
        hardware_gains.append(hw)
        logger.debug(
            "Hardware band %d (%d Hz): UI bands %d-%d -> %.2f dB -> %.2f",
            index,
            descriptor.frequencies[index],
            start,
            end - 1,
            avg,
            hw,
        )
    return hardware_gains
