from __future__ import annotations

import math

import pytest

from eq_engine.errors import GainOutOfRange, InvalidBandId
from eq_engine.types import (
    Band,
    Configuration,
    EQMode,
    HardwareBandDescriptor,
    Preset,
    PresetCategory,
    clamp_gain,
)


def test_modes_are_closed_and_carry_band_counts():
    assert [m.band_count for m in EQMode] == [5, 10, 20, 32]
    assert EQMode.from_band_count(10) is EQMode.STANDARD_10
    assert EQMode.PRO_32.display_name == "PRO"
    with pytest.raises(ValueError):
        EQMode.from_band_count(7)


@pytest.mark.parametrize("gain, expected", [(40.0, 15.0), (-99.0, -15.0), (3.5, 3.5), (-15.0, -15.0)])
def test_gain_is_clamped(gain, expected):
    assert Band(id=0, frequency=31, gain=gain).gain == expected
    assert clamp_gain(gain) == expected


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_gain_is_rejected(bad):
    with pytest.raises(GainOutOfRange):
        Band(id=0, frequency=31, gain=bad)


def test_configuration_create_matches_ladder():
    config = Configuration.create(EQMode.STANDARD_10)
    assert len(config.bands) == 10
    assert [b.id for b in config.bands] == list(range(10))
    assert tuple(b.frequency for b in config.bands) == config.frequencies
    assert config.gains == [0.0] * 10
    assert config.is_active


def test_configuration_rejects_wrong_band_count():
    bands = tuple(Band(i, f) for i, f in enumerate((31, 125, 500, 2000)))
    with pytest.raises(ValueError):
        Configuration(EQMode.SIMPLE_5, (31, 125, 500, 2000), bands)


def test_configuration_updates_return_new_objects():
    config = Configuration.create(EQMode.SIMPLE_5)
    updated = config.with_band_gain(2, 20.0)
    assert config.bands[2].gain == 0.0
    assert updated.bands[2].gain == 15.0
    assert updated is not config

    with pytest.raises(InvalidBandId):
        config.with_band_gain(5, 1.0)
    with pytest.raises(InvalidBandId):
        config.with_band_gain(-1, 1.0)


def test_with_gains_is_all_or_nothing():
    config = Configuration.create(EQMode.SIMPLE_5)
    with pytest.raises(GainOutOfRange):
        config.with_gains([1.0, 2.0, math.nan, 0.0, 0.0])
    assert config.gains == [0.0] * 5
    assert config.with_gains([1, 2, 3, 4, 50]).gains == [1.0, 2.0, 3.0, 4.0, 15.0]


def test_preset_requires_matching_band_count():
    with pytest.raises(ValueError):
        Preset("Broken", "", (1.0, 2.0), EQMode.SIMPLE_5)
    preset = Preset("Bass Boost", "", (6, 3, 0, 0, 0), EQMode.SIMPLE_5, PresetCategory.ELECTRONIC)
    assert preset.id == "5_bass_boost"
    assert preset.bands == (6.0, 3.0, 0.0, 0.0, 0.0)


def test_hardware_descriptor_validation():
    hw = HardwareBandDescriptor.from_config(
        {"frequencies": [60, 230, 910, 3600, 14000], "gain_range_db": [-15, 15]}
    )
    assert hw.count == 5
    assert hw.gain_range_db == (-15.0, 15.0)
    with pytest.raises(ValueError):
        HardwareBandDescriptor(count=3, frequencies=(60, 230), gain_range_db=(-15, 15))
    with pytest.raises(ValueError):
        HardwareBandDescriptor(count=1, frequencies=(60,), gain_range_db=(5, -5))
