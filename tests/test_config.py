from __future__ import annotations

import json

import pytest

from eq_engine.config import EngineConfig, load_config
from eq_engine.types import EQMode


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.initial_mode is EQMode.PRO_32
    assert cfg.influence_radii == {5: 0.8, 10: 0.4, 20: 0.2, 32: 0.1}
    assert cfg.hardware is None


def test_load_from_json(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({
        "initial_mode": 10,
        "influence_radii": {"5": 1.0},
        "hardware": {"count": 3, "frequencies": [100, 1000, 10000], "gain_range_db": [-12, 12]},
        "log_level": "debug",
        "something_new": True,
    }))
    cfg = load_config(path)
    assert cfg.initial_mode is EQMode.STANDARD_10
    assert cfg.influence_radii[5] == 1.0
    assert cfg.influence_radii[10] == 0.4
    assert cfg.hardware.count == 3
    assert cfg.hardware.gain_range_db == (-12.0, 12.0)
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
    "bad",
    [
        {"initial_mode": 7},
        {"influence_radii": {"12": 0.3}},
        {"influence_radii": {"5": -1}},
        {"hardware": {"count": 2, "frequencies": [100]}},
    ],
)
def test_invalid_values_raise(bad):
    with pytest.raises(ValueError):
        EngineConfig.from_config(bad)


@pytest.mark.parametrize(
    "bad",
    [
        {"influence_radii": None},
        {"influence_radii": [0.3, 0.2]},
        {"influence_radii": {"5": None}},
        {"initial_mode": None},
        {"hardware": [5, 60]},
    ],
)
def test_wrongly_typed_values_raise_value_error(bad):
    with pytest.raises(ValueError):
        EngineConfig.from_config(bad)


def test_load_config_reports_wrong_types_as_value_error(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"influence_radii": None}))
    with pytest.raises(ValueError):
        load_config(path)
