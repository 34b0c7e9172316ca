"""Adaptive multi-resolution equalizer engine.

This package groups together modular components for:
- Frequency ladders for the 5/10/20/32-band resolutions
- Configuration state and mode switching with gain carry-over
- Mapping UI curves onto the bands a hardware equalizer exposes
- Preset catalog, conversion between resolutions, and matching
- Host-side helpers (preset files, conversion reports, session facade)
"""
import logging

__all__ = [
    "config",
    "converter",
    "display",
    "engine",
    "errors",
    "hardware",
    "io_utils",
    "ladder",
    "manager",
    "presets",
    "types",
    "visualization",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
