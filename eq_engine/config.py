"""Engine configuration loaded from JSON.

Example file::

    {
      "initial_mode": 10,
      "influence_radii": {"5": 0.8, "10": 0.4},
      "hardware": {
        "count": 5,
        "frequencies": [60, 230, 910, 3600, 14000],
        "gain_range_db": [-15, 15],
        "step_db": 1.0
      },
      "log_level": "INFO"
    }

Unknown keys are ignored so newer files still load.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .converter import DEFAULT_INFLUENCE_RADII
from .types import EQMode, HardwareBandDescriptor

DEFAULT_HARDWARE = HardwareBandDescriptor(
    count=5,
    frequencies=(60, 230, 910, 3600, 14000),
    gain_range_db=(-15.0, 15.0),
    step_db=1.0,
)


@dataclass
class EngineConfig:
    """Settings for an equalizer session.

    Attributes:
        initial_mode: Resolution the session starts in.
        influence_radii: Downscale radius (decades) per target band count.
        hardware: Descriptor to use when the host does not supply one.
        log_level: Level name for the CLI's log handler.
    """

    initial_mode: EQMode = EQMode.PRO_32
    influence_radii: Dict[int, float] = field(default_factory=lambda: dict(DEFAULT_INFLUENCE_RADII))
    hardware: Optional[HardwareBandDescriptor] = None
    log_level: str = "WARNING"

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "EngineConfig":
        """Build a config from a plain dict, falling back to defaults per key.

        Raises:
            ValueError: a known key holds a value of the wrong type or range.
        """
        if not isinstance(cfg, dict):
            raise ValueError(f"Engine config must be a JSON object, got {type(cfg).__name__}")
        out = cls()
        try:
            if "initial_mode" in cfg:
                out.initial_mode = EQMode.from_band_count(int(cfg["initial_mode"]))
            radii = cfg.get("influence_radii", {})
            if not isinstance(radii, dict):
                raise ValueError(f"influence_radii must be an object, got {type(radii).__name__}")
            for key, value in radii.items():
                count = int(key)
                EQMode.from_band_count(count)
                radius = float(value)
                if not radius > 0:
                    raise ValueError(f"Influence radius for {count} bands must be positive")
                out.influence_radii[count] = radius
            hardware = cfg.get("hardware")
            if hardware:
                if not isinstance(hardware, dict):
                    raise ValueError(f"hardware must be an object, got {type(hardware).__name__}")
                out.hardware = HardwareBandDescriptor.from_config(hardware)
        except TypeError as e:
            # int(None), float([]) and friends
            raise ValueError(f"Malformed engine config: {e}") from e
        if "log_level" in cfg:
            out.log_level = str(cfg["log_level"]).upper()
        return out


def load_config(path: Path | str | None) -> EngineConfig:
    if path is None:
        return EngineConfig()
    with open(path, "r", encoding="utf-8") as f:
        return EngineConfig.from_config(json.load(f))
