from __future__ import annotations

import numpy as np
import pytest

from eq_engine import presets as catalog
from eq_engine.converter import (
    analyze_gains,
    analyze_preset_characteristics,
    batch_convert_presets,
    convert_preset,
    decimate_gains,
    find_best_matching_preset,
    influence_radius,
    interpolate_gains,
    levenshtein,
)
from eq_engine.types import EQMode, Preset, PresetCategory


def _bass_boost_5():
    return Preset("Bass Boost", "", (6, 3, 0, 0, 0), EQMode.SIMPLE_5, PresetCategory.ELECTRONIC,
                  tags=("bass", "edm", "hip-hop"))


def test_same_mode_returns_source_unchanged():
    preset = _bass_boost_5()
    assert convert_preset(preset, EQMode.SIMPLE_5) is preset


def test_bass_boost_upscale_matches_log_interpolation():
    converted = convert_preset(_bass_boost_5(), EQMode.STANDARD_10)
    # 63 Hz sits at t = log(63/31) / log(125/31) between 6 dB and 3 dB.
    expected = [6.0, 4.474215, 3.0, 1.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    np.testing.assert_allclose(converted.bands, expected, atol=1e-5)
    assert all(a >= b for a, b in zip(converted.bands, converted.bands[1:]))


def test_converted_preset_metadata():
    converted = convert_preset(_bass_boost_5(), EQMode.PRO_32)
    assert converted.name == "Bass Boost (Converted)"
    assert converted.description == "Converted from SIMPLE to PRO"
    assert converted.target_mode is EQMode.PRO_32
    assert converted.category is PresetCategory.ELECTRONIC
    assert converted.is_custom
    assert converted.tags == ("bass", "edm", "hip-hop", "converted")
    assert len(converted.bands) == 32


def test_upscale_holds_end_gains_beyond_source_range():
    source = catalog.get_preset(EQMode.STANDARD_10, "V-Shaped")
    converted = convert_preset(source, EQMode.PRO_32)
    # 20 Hz and 25 Hz are below 31 Hz; 20 kHz is above 16 kHz.
    assert converted.bands[0] == pytest.approx(4.0)
    assert converted.bands[1] == pytest.approx(4.0)
    assert converted.bands[-1] == pytest.approx(5.0)


def test_flat_is_a_fixed_point_of_conversion():
    flat = catalog.get_preset(EQMode.SIMPLE_5, "Flat")
    up = convert_preset(flat, EQMode.PRO_32)
    assert up.bands == (0.0,) * 32
    down = convert_preset(up, EQMode.SIMPLE_5)
    assert down.bands == (0.0,) * 5


def test_constant_curve_survives_downscale():
    const = Preset("Lift", "", (4.0,) * 32, EQMode.PRO_32)
    for mode in (EQMode.SIMPLE_5, EQMode.STANDARD_10, EQMode.ADVANCED_20):
        np.testing.assert_allclose(convert_preset(const, mode).bands, [4.0] * mode.band_count)


def test_downscale_weights_by_log_distance():
    out = decimate_gains([100, 1000], [0.0, 6.0], [100], radius=1.0)
    np.testing.assert_allclose(out, [0.715218], atol=1e-5)
    # Radius too narrow to reach 1 kHz: only the 100 Hz band counts.
    assert decimate_gains([100, 1000], [0.0, 6.0], [100], radius=0.5)[0] == 0.0


def test_downscale_without_contributors_is_flat():
    out = decimate_gains([10000], [9.0], [31, 10000], radius=0.1)
    np.testing.assert_allclose(out, [0.0, 9.0])


def test_results_are_clamped():
    out = interpolate_gains([100, 1000], [30.0, -30.0], [50, 2000])
    np.testing.assert_allclose(out, [15.0, -15.0])


def test_influence_radius_defaults_and_overrides():
    assert influence_radius(EQMode.SIMPLE_5) == 0.8
    assert influence_radius(EQMode.STANDARD_10) == 0.4
    assert influence_radius(EQMode.ADVANCED_20) == 0.2
    assert influence_radius(EQMode.PRO_32) == 0.1
    assert influence_radius(EQMode.SIMPLE_5, {5: 1.2}) == 1.2


def test_batch_convert():
    out = batch_convert_presets(catalog.get_presets_for_mode(EQMode.SIMPLE_5), EQMode.ADVANCED_20)
    assert len(out) == 7
    assert all(p.target_mode is EQMode.ADVANCED_20 for p in out)


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("Flat", "FLAT") == 0
    assert levenshtein("", "abc") == 3
    assert levenshtein("bass heavy", "bass boost") == 5


def test_matching_prefers_exact_name():
    flat = catalog.get_preset(EQMode.SIMPLE_5, "Flat")
    assert find_best_matching_preset(flat, EQMode.STANDARD_10).name == "Flat"


def test_matching_ranks_same_category_by_tags_then_name():
    match = find_best_matching_preset(_bass_boost_5(), EQMode.STANDARD_10)
    assert match.name == "Bass Heavy"


def test_matching_falls_back_to_reference_preset():
    jazz = Preset("Smoky Club", "", (1, 1, 0, 0, 1), EQMode.SIMPLE_5, PresetCategory.JAZZ)
    assert find_best_matching_preset(jazz, EQMode.ADVANCED_20).name == "Reference Flat"
    assert find_best_matching_preset(jazz, EQMode.PRO_32).name == "Audiophile Reference"
    for mode in EQMode:
        assert find_best_matching_preset(jazz, mode) is not None


def test_matching_with_custom_catalog():
    jazz = Preset("Smoky Club", "", (1, 1, 0, 0, 1), EQMode.SIMPLE_5, PresetCategory.JAZZ)
    only = [catalog.get_preset(EQMode.STANDARD_10, "V-Shaped")]
    assert find_best_matching_preset(jazz, EQMode.STANDARD_10, only) is only[0]
    assert find_best_matching_preset(jazz, EQMode.STANDARD_10, []) is None


@pytest.mark.parametrize(
    "gains, shape",
    [
        ([0.0, 0.2, -0.3, 0.1, 0.0], "Flat"),
        ([5, 5, -3, -3, -3, -3, 5, 5], "V-Shaped"),
        ([3, 0, -2, 2, 4], "Bass-Heavy"),
        ([0, 0, 0, 0, 3, 3, 3, 3], "Bright"),
        ([0, 0, -2, -2, -2, -2, 0, 0], "Scooped"),
        ([0, 2, 2, 0], "Mid-Forward"),
        ([1, 0, 0, 1], "Balanced"),
    ],
)
def test_curve_shape_labels(gains, shape):
    assert analyze_gains(gains).shape == shape


def test_characteristics_levels():
    traits = analyze_preset_characteristics(catalog.get_preset(EQMode.SIMPLE_5, "Rock"))
    assert traits.bass_level == pytest.approx(3.0)
    assert traits.mid_level == pytest.approx(-1.0)
    assert traits.treble_level == pytest.approx(4.0)
    assert traits.dynamic_range == pytest.approx(6.0)
    assert not traits.is_mid_scooped
