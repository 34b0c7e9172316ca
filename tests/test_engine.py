from __future__ import annotations

from eq_engine import presets as catalog
from eq_engine.config import DEFAULT_HARDWARE, EngineConfig
from eq_engine.engine import AdaptiveEqualizer
from eq_engine.types import EQMode, HardwareBandDescriptor


def _recording_equalizer(mode=EQMode.PRO_32):
    pushed = []
    eq = AdaptiveEqualizer(EngineConfig(initial_mode=mode), applier=lambda i, g: pushed.append((i, g)))
    return eq, pushed


def test_attach_pushes_current_curve():
    eq, pushed = _recording_equalizer()
    assert eq.attach_hardware(DEFAULT_HARDWARE)
    assert eq.is_ready
    assert pushed == [(i, 0.0) for i in range(5)]


def test_edits_are_remapped_to_hardware():
    eq, pushed = _recording_equalizer(EQMode.SIMPLE_5)
    eq.attach_hardware(DEFAULT_HARDWARE)
    pushed.clear()
    eq.update_band(0, 6.0)
    assert pushed == [(0, 6.0), (1, 0.0), (2, 0.0), (3, 0.0), (4, 0.0)]
    assert eq.hardware_gains() == [6.0, 0.0, 0.0, 0.0, 0.0]


def test_preset_of_other_mode_is_converted_on_apply():
    eq, _ = _recording_equalizer(EQMode.STANDARD_10)
    eq.attach_hardware(DEFAULT_HARDWARE)
    config = eq.apply_preset(catalog.get_preset(EQMode.SIMPLE_5, "Bass Boost"))
    assert config.mode is EQMode.STANDARD_10
    # Bands 0-1 (31, 63 Hz) feed hardware band 0: mean of 6 and 4.47 -> 5.
    assert eq.hardware_gains()[0] == 5.0


def test_unsupported_hardware_disables_eq_without_raising():
    eq, pushed = _recording_equalizer(EQMode.SIMPLE_5)
    wide = HardwareBandDescriptor(count=8, frequencies=tuple(range(100, 108)), gain_range_db=(-15, 15))
    assert eq.attach_hardware(wide) is False
    assert not eq.is_enabled
    assert "does not support equalization" in eq.last_error
    assert pushed == [(i, 0.0) for i in range(8)]
    # The UI curve still accepts edits.
    assert eq.update_band(0, 3.0).bands[0].gain == 3.0


def test_disabling_pushes_flat_response():
    eq, pushed = _recording_equalizer(EQMode.SIMPLE_5)
    eq.attach_hardware(DEFAULT_HARDWARE)
    eq.update_band(2, 9.0)
    pushed.clear()
    eq.set_enabled(False)
    assert pushed == [(i, 0.0) for i in range(5)]
    assert eq.configuration.bands[2].gain == 9.0
    eq.set_enabled(True)
    assert eq.hardware_gains()[2] == 9.0


def test_mode_switch_and_info():
    eq, _ = _recording_equalizer()
    eq.attach_hardware(DEFAULT_HARDWARE)
    eq.switch_mode(EQMode.ADVANCED_20)
    info = eq.equalizer_info()
    assert info["mode"] == "ADVANCED"
    assert info["band_count"] == 20
    assert info["hardware_bands"] == 5
    assert len(info["hardware_gains"]) == 5
    eq.detach_hardware()
    assert not eq.is_ready
    assert eq.hardware_gains() == []


EIGHT_BAND = HardwareBandDescriptor(
    count=8,
    frequencies=(60, 150, 400, 1000, 2400, 6000, 12000, 16000),
    gain_range_db=(-15, 15),
)


def test_switch_to_unsupported_mode_pushes_flat():
    eq, pushed = _recording_equalizer(EQMode.PRO_32)
    assert eq.attach_hardware(EIGHT_BAND)
    for band_id in range(32):
        eq.update_band(band_id, 9.0)
    assert eq.hardware_gains() == [9.0] * 8

    pushed.clear()
    eq.switch_mode(EQMode.SIMPLE_5)
    # 5 UI bands cannot drive 8 hardware bands: the boost must not linger.
    assert pushed == [(i, 0.0) for i in range(8)]
    assert eq.hardware_gains() == [0.0] * 8
    assert not eq.is_enabled
    assert not eq.is_ready
    assert eq.configuration.bands[0].gain == 9.0


def test_supported_mode_after_unsupported_one_reenables_eq():
    eq, pushed = _recording_equalizer(EQMode.PRO_32)
    eq.attach_hardware(EIGHT_BAND)
    for band_id in range(32):
        eq.update_band(band_id, 9.0)
    eq.switch_mode(EQMode.SIMPLE_5)
    assert eq.last_error

    pushed.clear()
    eq.switch_mode(EQMode.PRO_32)
    assert eq.is_enabled
    assert eq.is_ready
    assert eq.last_error == ""
    assert pushed == [(i, 9.0) for i in range(8)]


def test_info_pairs_curve_with_its_preset():
    eq, _ = _recording_equalizer(EQMode.SIMPLE_5)
    eq.apply_preset(catalog.get_preset(EQMode.SIMPLE_5, "Rock"))
    info = eq.equalizer_info()
    assert info["active_preset"] == "Rock"
    assert info["frequency_range"] == (31, 8000)
    eq.update_band(0, 1.0)
    assert eq.equalizer_info()["active_preset"] is None
