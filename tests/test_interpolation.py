import pytest

from forensic_dynamics.kinematics.interpolation import interpolate, sample_count


def test_fewer_than_two_points_yields_empty():
    assert interpolate([], 10) == []
    assert interpolate([[0, 5]], 10) == []


def test_midpoint_linear_interpolation():
    dense = interpolate([[0, 0], [10, 20]], 10, 1)
    assert len(dense) == 11
    assert dense[5].time == 5.0
    assert dense[5].value == pytest.approx(10.0)


def test_last_value_held_flat_after_final_anchor():
    dense = interpolate([[0, 10], [5, 20]], 10)
    after = [p.value for p in dense if p.time > 5]
    assert after
    assert all(v == pytest.approx(20.0) for v in after)


def test_values_never_negative():
    dense = interpolate([[0, 5], [2, -10], [4, -3]], 6)
    assert all(p.value >= 0 for p in dense)
    assert dense[-1].value == 0.0


def test_time_grid_is_uniform_and_rounded():
    dense = interpolate([[0, 1], [3, 4]], 3, 0.1)
    assert len(dense) == 31
    assert dense[0].time == 0.0
    assert dense[-1].time == 3.0
    for prev, curr in zip(dense, dense[1:]):
        assert curr.time - prev.time == pytest.approx(0.1)
        assert curr.time == round(curr.time, 1)


def test_unsorted_input_matches_sorted_and_is_deterministic():
    pts = [[4, 8], [0, 0], [2, 4]]
    first = interpolate(pts, 5)
    assert first == interpolate(sorted(pts), 5)
    assert first == interpolate(pts, 5)


def test_duplicate_timestamps_take_the_later_observation():
    dense = interpolate([[1, 4], [1, 6], [2, 8]], 2, 0.5)
    assert [p.time for p in dense] == [0.0, 0.5, 1.0, 1.5, 2.0]
    assert [p.value for p in dense] == [6.0, 6.0, 6.0, pytest.approx(7.0), 8.0]


def test_degenerate_grid_parameters():
    assert interpolate([[0, 1], [1, 2]], -1) == []
    assert interpolate([[0, 1], [1, 2]], 5, 0) == []
    assert len(interpolate([[0, 1], [1, 2]], 0)) == 1


def test_sample_count_includes_endpoint():
    assert sample_count(10, 0.1) == 101
    assert sample_count(15, 0.5) == 31
    assert sample_count(0, 0.1) == 1
