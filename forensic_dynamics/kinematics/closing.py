"""
Closing distance and time-to-collision between two tracked objects.

The perception service only reports 1-D speed profiles, not positions, so the
relative distance here is a scalar proxy: both objects start
INITIAL_DISTANCE apart and the gap shrinks by their speed difference at every
step. It does not model real 2-D trajectories and should not be read as one.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from forensic_dynamics.kinematics.interpolation import INTERPOLATION_STEP, interpolate
from forensic_dynamics.safety.risk import is_risky
from forensic_dynamics.safety.ttc import compute_ttc
from forensic_dynamics.utils.types import ClosingSample, SeriesPoint, TrackedObject

logger = logging.getLogger(__name__)

INITIAL_DISTANCE = 50.0
# Must match the step the input series were interpolated with.
CLOSING_STEP = INTERPOLATION_STEP


def closing_metrics(series_a: Sequence[SeriesPoint], series_b: Sequence[SeriesPoint], duration: float) -> List[ClosingSample]:
    """
    Walk two dense speed series index-for-index and accumulate the gap.

    Precondition: both series come from interpolate() with the same step and
    duration so that index i is the same instant in both. Use
    closing_metrics_for_objects() to get that guarantee. Extra samples of the
    longer series and samples past `duration` are ignored.
    """
    n = min(len(series_a), len(series_b))
    if n < max(len(series_a), len(series_b)):
        logger.debug("closing_metrics: truncating to %d aligned samples", n)

    results: List[ClosingSample] = []
    distance = INITIAL_DISTANCE
    for a, b in zip(series_a[:n], series_b[:n]):
        # Times are rounded to 0.1 s, allow half a step of slack.
        if a.time > duration + 0.05:
            break
        closing_speed = abs(a.value - b.value)
        distance = max(0.0, distance - closing_speed * CLOSING_STEP)
        ttc = compute_ttc(distance, closing_speed)
        results.append(ClosingSample(time=a.time, distance=distance, ttc=ttc, risk=is_risky(ttc, distance)))
    return results


def closing_metrics_for_objects(obj_a: TrackedObject, obj_b: TrackedObject, duration: float) -> List[ClosingSample]:
    dense_a = interpolate(obj_a.speed_profile or [], duration, CLOSING_STEP)
    dense_b = interpolate(obj_b.speed_profile or [], duration, CLOSING_STEP)
    return closing_metrics(dense_a, dense_b, duration)
