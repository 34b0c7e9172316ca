from __future__ import annotations

import numpy as np
import pytest

from eq_engine.errors import FrequencyLadderOverflow
from eq_engine.ladder import (
    STANDARD_FREQUENCIES,
    generate_ladder,
    log_spaced,
    snap_to_standard,
)


@pytest.mark.parametrize("count", [5, 10, 20, 32])
def test_ladder_is_deterministic_and_strictly_increasing(count):
    first = generate_ladder(count)
    second = generate_ladder(count)
    assert first == second
    assert len(first) == count
    assert all(a < b for a, b in zip(first, first[1:]))


def test_curated_ladders():
    assert generate_ladder(5) == (31, 125, 500, 2000, 8000)
    assert generate_ladder(10) == (31, 63, 125, 250, 500, 1000, 2000, 4000, 8000, 16000)


def test_twenty_band_ladder_is_snapped_log_spacing():
    assert generate_ladder(20) == (
        20, 31, 40, 63, 80, 125, 160, 250, 400, 500,
        800, 1000, 1600, 2500, 3150, 5000, 6300, 10000, 12500, 20000,
    )
    assert set(generate_ladder(20)) <= set(STANDARD_FREQUENCIES)


def test_thirty_two_band_ladder_coverage():
    ladder = generate_ladder(32)
    assert ladder[0] == 20
    assert ladder[-1] <= 20000
    assert len(set(ladder)) == 32
    assert 1000 in ladder
    # 31 standard values cannot fill 32 bands: exactly one exact log-spaced value.
    off_grid = [f for f in ladder if f not in STANDARD_FREQUENCIES]
    assert off_grid == [707]


def test_snap_prefers_lower_frequency_on_tie():
    # 22.5 is equidistant from 20 and 25.
    assert snap_to_standard(22.5) == 20
    assert snap_to_standard(1100) == 1000
    assert snap_to_standard(5) == 20
    assert snap_to_standard(30000) == 20000


def test_other_counts_fall_back_to_plain_log_spacing():
    ladder = generate_ladder(3)
    assert ladder == (20, 632, 20000)
    np.testing.assert_allclose(log_spaced(3), [20.0, 632.455532, 20000.0], rtol=1e-6)


def test_single_band_and_invalid_counts():
    assert generate_ladder(1) == (20,)
    with pytest.raises(ValueError):
        generate_ladder(0)


def test_larger_uncurated_counts_stay_strictly_increasing():
    ladder = generate_ladder(64)
    assert len(ladder) == 64
    assert all(a < b for a, b in zip(ladder, ladder[1:]))
    assert ladder[0] == 20 and ladder[-1] == 20000


def test_rounding_collisions_raise_instead_of_repeating():
    # 1000 bands put the lowest neighbours about 0.14 Hz apart.
    with pytest.raises(FrequencyLadderOverflow):
        generate_ladder(1000)
