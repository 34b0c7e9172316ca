"""Ownership of the current EQ configuration.

`EQModeManager` holds exactly one `Configuration` and replaces it wholesale
on every change. All writers take the same lock, so concurrent readers see
either the old or the new configuration, never a mix.

Switching modes carries gains over by nearest frequency. This is lossy:
going 32 -> 5 -> 32 bands does not bring back the original 32-band detail.
"""
from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional, Sequence, Tuple

from .converter import convert_preset
from .errors import PresetModeMismatch
from .ladder import frequency_range, generate_ladder
from .types import (
    DEFAULT_GAIN_DB,
    MAX_GAIN_DB,
    MIN_GAIN_DB,
    Band,
    Configuration,
    EQMode,
    Preset,
)

logger = logging.getLogger(__name__)


def nearest_band(bands: Sequence[Band], frequency: float) -> Optional[Band]:
    """Band closest to ``frequency`` in Hz; ties go to the lower index."""
    best = None
    best_dist = float("inf")
    for band in bands:
        dist = abs(band.frequency - frequency)
        if dist < best_dist:
            best, best_dist = band, dist
    return best


def carry_over(config: Configuration, new_mode: EQMode) -> Configuration:
    """Build ``new_mode``'s configuration, taking each gain from the nearest old band."""
    frequencies = generate_ladder(new_mode.band_count)
    bands = []
    for index, freq in enumerate(frequencies):
        source = nearest_band(config.bands, freq)
        bands.append(
            Band(
                id=index,
                frequency=freq,
                gain=source.gain if source is not None else DEFAULT_GAIN_DB,
                enabled=source.enabled if source is not None else True,
            )
        )
    return Configuration(
        mode=new_mode,
        frequencies=frequencies,
        bands=tuple(bands),
        is_active=config.is_active,
    )


class EQModeManager:
    """Owns the current configuration and the active-preset marker."""

    def __init__(
        self,
        initial_mode: EQMode = EQMode.PRO_32,
        influence_radii: Optional[Mapping[int, float]] = None,
    ) -> None:
        self._lock = threading.RLock()
        # (configuration, active preset), replaced as one object so readers
        # never pair a curve with another curve's preset.
        self._state: Tuple[Configuration, Optional[Preset]] = (Configuration.create(initial_mode), None)
        self._influence_radii = dict(influence_radii) if influence_radii else None

    # ---- reads -------------------------------------------------------

    @property
    def _config(self) -> Configuration:
        return self._state[0]

    def snapshot(self) -> Tuple[Configuration, Optional[Preset]]:
        """The configuration and the preset it came from, read together."""
        return self._state

    @property
    def current_configuration(self) -> Configuration:
        return self._state[0]

    def get_current_configuration(self) -> Configuration:
        return self._state[0]

    @property
    def current_mode(self) -> EQMode:
        return self._state[0].mode

    @property
    def active_preset(self) -> Optional[Preset]:
        return self._state[1]

    def get_frequency_range(self) -> Tuple[int, int]:
        return frequency_range(self._config.frequencies)

    @staticmethod
    def get_gain_range() -> Tuple[float, float]:
        return MIN_GAIN_DB, MAX_GAIN_DB

    # ---- writes ------------------------------------------------------

    def _publish(self, config: Configuration, preset: Optional[Preset]) -> Configuration:
        self._state = (config, preset)
        return config

    def switch_mode(self, new_mode: EQMode) -> Configuration:
        """Move to ``new_mode``, carrying gains over by nearest frequency."""
        with self._lock:
            if new_mode == self._config.mode:
                return self._config
            old_mode = self._config.mode
            config = carry_over(self._config, new_mode)
            # A preset belongs to one mode, so it no longer describes the curve.
            self._publish(config, None)
        logger.info(
            "Switched EQ mode %s -> %s (%d bands)",
            old_mode.display_name,
            new_mode.display_name,
            new_mode.band_count,
        )
        return config

    def update_band_gain(self, band_id: int, gain: float) -> Configuration:
        """Set one band's gain (clamped) and clear the active preset.

        Raises:
            InvalidBandId: ``band_id`` is outside the current mode.
            GainOutOfRange: ``gain`` is NaN or infinite.
        """
        with self._lock:
            config = self._config.with_band_gain(band_id, gain)
            return self._publish(config, None)

    def set_band_enabled(self, band_id: int, enabled: bool) -> Configuration:
        with self._lock:
            config = self._config.with_band_enabled(band_id, enabled)
            return self._publish(config, None)

    def apply_preset(self, preset: Preset) -> Configuration:
        """Adopt ``preset``'s gains; the preset must target the current mode."""
        with self._lock:
            if preset.target_mode != self._config.mode:
                raise PresetModeMismatch(
                    preset.name, preset.target_mode.band_count, self._config.mode.band_count
                )
            config = self._config.with_gains(preset.bands)
            self._publish(config, preset)
        logger.info("Applied preset '%s' (%s)", preset.name, preset.target_mode.display_name)
        return config

    def convert_and_apply(self, preset: Preset) -> Configuration:
        """Apply ``preset``, converting it to the current mode first if needed."""
        with self._lock:
            converted = convert_preset(preset, self._config.mode, self._influence_radii)
            return self.apply_preset(converted)

    def reset_to_flat(self) -> Configuration:
        with self._lock:
            return self._publish(self._config.flattened(), None)

    def set_active(self, is_active: bool) -> Configuration:
        with self._lock:
            config, preset = self._state
            return self._publish(config.with_active(is_active), preset)
