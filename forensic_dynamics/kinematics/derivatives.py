from __future__ import annotations

from typing import List, Sequence

import numpy as np

from forensic_dynamics.utils.types import SeriesPoint


def differentiate(series: Sequence[SeriesPoint]) -> List[SeriesPoint]:
    """
    Backward-difference derivative. The first sample has no predecessor and
    gets 0, as does any sample whose time delta is not positive.
    Applied to a speed series this gives acceleration (m/s^2).
    """
    if not series:
        return []
    times = np.array([p.time for p in series], dtype=float)
    values = np.array([p.value for p in series], dtype=float)

    dt = np.diff(times)
    dv = np.diff(values)
    rates = np.zeros_like(dv)
    np.divide(dv, dt, out=rates, where=dt > 0)

    derivative = np.concatenate(([0.0], rates))
    return [SeriesPoint(time=p.time, value=float(d)) for p, d in zip(series, derivative)]


def kinetic_energy_proxy(series: Sequence[SeriesPoint]) -> List[SeriesPoint]:
    """0.5 * v^2 with unit mass."""
    return [SeriesPoint(time=p.time, value=0.5 * p.value ** 2) for p in series]
