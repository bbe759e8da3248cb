import pytest

from forensic_dynamics.kinematics.derivatives import differentiate, kinetic_energy_proxy
from forensic_dynamics.kinematics.interpolation import interpolate
from forensic_dynamics.utils.types import SeriesPoint


def test_acceleration_of_linear_ramp():
    accel = differentiate(interpolate([[0, 0], [10, 20]], 10, 1))
    assert accel[0].value == 0.0
    assert all(p.value == pytest.approx(2.0) for p in accel[1:])
    assert [p.time for p in accel] == [float(t) for t in range(11)]


def test_non_positive_time_delta_gives_zero():
    series = [SeriesPoint(0.0, 1.0), SeriesPoint(0.0, 5.0), SeriesPoint(1.0, 7.0)]
    assert [p.value for p in differentiate(series)] == [0.0, 0.0, pytest.approx(2.0)]


def test_empty_series():
    assert differentiate([]) == []
    assert kinetic_energy_proxy([]) == []


def test_kinetic_energy_unit_mass():
    energy = kinetic_energy_proxy([SeriesPoint(0.0, 4.0), SeriesPoint(0.1, 0.0)])
    assert energy[0] == SeriesPoint(0.0, 8.0)
    assert energy[1].value == 0.0
