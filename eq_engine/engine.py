"""Host-facing equalizer session.

`AdaptiveEqualizer` ties the mode manager to one hardware equalizer for the
lifetime of an audio session. After every change it maps the UI curve to
the hardware bands and hands each value to the applier callable supplied by
the host (``applier(band_index, gain_db)``).

If the hardware cannot take the current mode, the session logs a warning,
pushes a flat response and keeps the UI curve; playback is never
interrupted. EQ comes back on by itself at the next mode the hardware
can take.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .config import EngineConfig
from .errors import UnsupportedHardwareBandCount
from .hardware import map_to_hardware
from .ladder import frequency_range
from .manager import EQModeManager
from .types import ALL_MODES, Configuration, EQMode, HardwareBandDescriptor, Preset

logger = logging.getLogger(__name__)

Applier = Callable[[int, float], None]


class AdaptiveEqualizer:
    """One equalizer session: current curve, hardware descriptor, applier."""

    def __init__(self, config: Optional[EngineConfig] = None, applier: Optional[Applier] = None) -> None:
        self.config = config or EngineConfig()
        self.manager = EQModeManager(self.config.initial_mode, self.config.influence_radii)
        self.applier = applier
        self.descriptor: Optional[HardwareBandDescriptor] = None
        self.last_error = ""
        self._hardware_gains: List[float] = []
        # Whether the current mode maps onto the attached hardware.
        self._supported = True

    # ---- session lifecycle ------------------------------------------

    def attach_hardware(self, descriptor: HardwareBandDescriptor) -> bool:
        """Bind the session to ``descriptor`` and push the current curve.

        Call again whenever the audio session changes; the engine does not
        detect a stale descriptor itself. Returns whether the hardware took
        the curve.
        """
        self.descriptor = descriptor
        self._supported = True
        self.last_error = ""
        logger.info(
            "Hardware EQ: %d bands %s, range %s dB (session %s)",
            descriptor.count,
            list(descriptor.frequencies),
            descriptor.gain_range_db,
            descriptor.session_id,
        )
        return self._apply()

    def detach_hardware(self) -> None:
        self.descriptor = None
        self._hardware_gains = []
        logger.info("Hardware EQ released")

    @property
    def is_ready(self) -> bool:
        return self.descriptor is not None and self._supported

    @property
    def is_enabled(self) -> bool:
        return self._supported and self.manager.current_configuration.is_active

    def set_enabled(self, enabled: bool) -> None:
        """Switch EQ on or off; off pushes a flat response but keeps the curve."""
        self.manager.set_active(enabled)
        self._apply()

    # ---- curve edits -------------------------------------------------

    @property
    def configuration(self) -> Configuration:
        return self.manager.current_configuration

    @property
    def available_modes(self) -> List[EQMode]:
        return list(ALL_MODES)

    def switch_mode(self, mode: EQMode) -> Configuration:
        config = self.manager.switch_mode(mode)
        self._apply()
        return config

    def update_band(self, band_id: int, gain: float) -> Configuration:
        config = self.manager.update_band_gain(band_id, gain)
        self._apply()
        return config

    def apply_preset(self, preset: Preset) -> Configuration:
        """Apply ``preset``, converting it to the current mode when necessary."""
        config = self.manager.convert_and_apply(preset)
        self._apply()
        return config

    def reset_to_flat(self) -> Configuration:
        config = self.manager.reset_to_flat()
        self._apply()
        return config

    # ---- hardware output --------------------------------------------

    def hardware_gains(self) -> List[float]:
        return list(self._hardware_gains)

    @staticmethod
    def _flat_hardware_gains(descriptor: HardwareBandDescriptor) -> List[float]:
        lo, hi = descriptor.gain_range_db
        step = descriptor.step_db
        mid = round((lo + hi) / 2.0 / step) * step
        return [float(mid)] * descriptor.count

    def _push(self, gains: List[float]) -> None:
        self._hardware_gains = gains
        if self.applier is not None:
            for index, gain in enumerate(gains):
                self.applier(index, gain)

    def _apply(self) -> bool:
        """Map the current curve and push it; flat while switched off.

        Support is re-checked on every call, so a mode the hardware cannot
        take only disables EQ until the next mode that it can.
        """
        descriptor = self.descriptor
        if descriptor is None:
            return False
        config = self.manager.current_configuration
        if not config.is_active:
            self._push(self._flat_hardware_gains(descriptor))
            return True
        bands = [b if b.enabled else b.with_gain(0.0) for b in config.bands]
        try:
            gains = map_to_hardware(bands, descriptor)
        except UnsupportedHardwareBandCount as e:
            self.last_error = f"Hardware does not support equalization: {e}"
            logger.warning(self.last_error)
            self._supported = False
            # The hardware still holds the previous curve until told otherwise.
            self._push(self._flat_hardware_gains(descriptor))
            return False
        if not self._supported:
            logger.info("Hardware EQ supports %s again", config.mode.display_name)
        self._supported = True
        self.last_error = ""
        self._push(gains)
        return True

    def equalizer_info(self) -> Dict[str, object]:
        """Snapshot of the session for debugging output."""
        config, preset = self.manager.snapshot()
        return {
            "mode": config.mode.display_name,
            "band_count": config.mode.band_count,
            "frequency_range": frequency_range(config.frequencies),
            "active_preset": preset.name if preset else None,
            "enabled": self.is_enabled,
            "hardware_bands": self.descriptor.count if self.descriptor else 0,
            "hardware_frequencies": list(self.descriptor.frequencies) if self.descriptor else [],
            "hardware_gain_range": self.descriptor.gain_range_db if self.descriptor else None,
            "session_id": self.descriptor.session_id if self.descriptor else None,
            "hardware_gains": self.hardware_gains(),
            "last_error": self.last_error,
        }
