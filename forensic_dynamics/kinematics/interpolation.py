"""
Sparse-to-dense resampling of per-object speed observations.
"""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np

from forensic_dynamics.utils.types import SeriesPoint, SparsePoint

logger = logging.getLogger(__name__)

INTERPOLATION_STEP = 0.1  # seconds


def sample_count(duration: float, step: float) -> int:
    """Number of grid samples from 0 to duration inclusive."""
    if step <= 0 or duration < 0:
        return 0
    # Tolerance keeps 10.0 / 0.1 from landing on 99.999...
    return int(math.floor(duration / step + 1e-9)) + 1


def interpolate(sparse_points: Sequence[SparsePoint], duration: float, step: float = INTERPOLATION_STEP) -> List[SeriesPoint]:
    """
    Resample sparse (time, value) observations onto a uniform grid.

    Linear interpolation between the anchors around each grid time, clamped
    to >= 0. Past the last anchor the last observed value is held flat
    (tracking lost, assume unchanged). Fewer than two anchors yields [].
    """
    if not sparse_points or len(sparse_points) < 2:
        logger.debug("interpolate: %d anchor point(s), nothing to resample", len(sparse_points or []))
        return []

    points = sorted(((float(p[0]), float(p[1])) for p in sparse_points), key=lambda p: p[0])
    times = np.arange(sample_count(duration, step)) * step

    dense: List[SeriesPoint] = []
    idx = 0
    for t in times:
        while idx < len(points) - 1 and points[idx + 1][0] < t:
            idx += 1

        p1 = points[idx]
        p2 = points[idx + 1] if idx + 1 < len(points) else None

        if p2 is not None:
            span = p2[0] - p1[0]
            if span > 0:
                ratio = (t - p1[0]) / span
                value = p1[1] + (p2[1] - p1[1]) * ratio
            else:
                # Duplicate timestamps: take the later observation.
                value = p2[1]
        else:
            value = p1[1]

        dense.append(SeriesPoint(time=round(float(t), 1), value=max(0.0, float(value))))
    return dense
