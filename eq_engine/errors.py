"""Error taxonomy for the equalizer engine.

Every error derives from `EQEngineError` so hosts can catch engine failures
in one place. Several also derive from the matching builtin (IndexError,
ValueError, RuntimeError) so ordinary Python handling keeps working.
A failed operation never leaves the held configuration half-updated.
"""
from __future__ import annotations


class EQEngineError(Exception):
    """Base class for all equalizer engine errors."""


class InvalidBandId(EQEngineError, IndexError):
    """An edit referenced a band id outside ``[0, band_count)``."""

    def __init__(self, band_id: int, band_count: int) -> None:
        super().__init__(f"Band id {band_id} is outside [0, {band_count})")
        self.band_id = band_id
        self.band_count = band_count


class GainOutOfRange(EQEngineError, ValueError):
    """A gain value is not a finite number (NaN or infinity)."""

    def __init__(self, gain: float) -> None:
        super().__init__(f"Gain must be a finite number, got {gain!r}")
        self.gain = gain


class UnsupportedHardwareBandCount(EQEngineError):
    """The hardware exposes zero bands, or more bands than the UI curve has."""

    def __init__(self, hardware_count: int, ui_count: int) -> None:
        super().__init__(
            f"Cannot map {ui_count} UI bands onto {hardware_count} hardware bands"
        )
        self.hardware_count = hardware_count
        self.ui_count = ui_count


class FrequencyLadderOverflow(EQEngineError, RuntimeError):
    """Ladder generation could not place a distinct, increasing frequency.

    Unreachable for the four supported resolutions; seeing it means the
    ladder rules themselves are broken.
    """


class PresetModeMismatch(EQEngineError, ValueError):
    """A preset was applied directly to a configuration of another mode."""

    def __init__(self, preset_name: str, preset_bands: int, current_bands: int) -> None:
        super().__init__(
            f"Preset '{preset_name}' targets {preset_bands} bands but the "
            f"current configuration has {current_bands}; convert it first"
        )
        self.preset_name = preset_name


class PresetFileError(EQEngineError, RuntimeError):
    """Reading or writing a preset file failed."""
