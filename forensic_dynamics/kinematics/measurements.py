"""
Chart-level views over dense kinematic series: a coarse display grid and the
headline numbers of the measurements panel.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from forensic_dynamics.kinematics.interpolation import INTERPOLATION_STEP, sample_count
from forensic_dynamics.utils.types import ClosingSample, MeasurementSummary, SeriesPoint, TrackedObject

CHART_INTERVAL = 0.5  # seconds


def resample(series: Sequence[SeriesPoint], duration: float, interval: float = CHART_INTERVAL) -> List[SeriesPoint]:
    """Dense sample at each grid time (within half an interpolation step), 0 when missing."""
    out: List[SeriesPoint] = []
    for i in range(sample_count(duration, interval)):
        t = round(i * interval, 1)
        out.append(SeriesPoint(time=t, value=_value_near(series, t)))
    return out


def grid_acceleration(series: Sequence[SeriesPoint], duration: float, interval: float = CHART_INTERVAL) -> List[SeriesPoint]:
    """(v(t) - v(t - interval)) / interval on the display grid; v before 0 reads as 0."""
    out: List[SeriesPoint] = []
    for i in range(sample_count(duration, interval)):
        t = round(i * interval, 1)
        curr = _value_near(series, t)
        prev = _value_near(series, t - interval)
        out.append(SeriesPoint(time=t, value=(curr - prev) / interval))
    return out


def _value_near(series: Sequence[SeriesPoint], t: float) -> float:
    for p in series:
        if abs(p.time - t) < INTERPOLATION_STEP / 2:
            return p.value
    return 0.0


def summarize_measurements(objects: Sequence[TrackedObject], closing: Sequence[ClosingSample]) -> MeasurementSummary:
    peak_speed = float(np.max([o.max_speed for o in objects])) if objects else 0.0
    ttcs = np.array([c.ttc for c in closing], dtype=float)
    risky = [c for c in closing if c.risk]
    return MeasurementSummary(
        peak_speed=max(0.0, peak_speed),
        min_ttc=float(ttcs.min()) if ttcs.size else None,
        risk_samples=len(risky),
        first_risk_time=risky[0].time if risky else None,
    )
