from __future__ import annotations

from typing import List, Sequence

import numpy as np

from forensic_dynamics.utils.types import MotionState, TrackedObject, UncertaintyNode

VELOCITY_GAIN = 1.2
ACCELERATION_GAIN = 1.5
HIGH_SPEED_THRESHOLD = 80.0
HIGH_SPEED_PENALTY = 0.2  # motion blur
ERRATIC_PENALTY = 0.3


def _unit(x: float) -> float:
    # NaN means nothing is known: full uncertainty.
    if np.isnan(x):
        return 1.0
    return float(np.clip(x, 0.0, 1.0))


def compute_node_uncertainty(objects: Sequence[TrackedObject]) -> List[UncertaintyNode]:
    """
    Propagate detection confidence into per-object kinematic uncertainty.

    Position error is the inverted detection confidence. Each derivative
    amplifies the error of the quantity it is taken from, so acceleration
    uncertainty is never below velocity uncertainty. Identity persistence
    risk grows with erratic motion.
    """
    nodes: List[UncertaintyNode] = []
    for obj in objects:
        base = _unit(1.0 - obj.avg_confidence)
        vel = _unit(base * VELOCITY_GAIN + (HIGH_SPEED_PENALTY if obj.max_speed > HIGH_SPEED_THRESHOLD else 0.0))
        accel = _unit(vel * ACCELERATION_GAIN)
        persistence = _unit(base + (ERRATIC_PENALTY if obj.motion_state == MotionState.ERRATIC else 0.0))
        nodes.append(
            UncertaintyNode(
                object_id=obj.id,
                label=obj.label,
                pos_uncertainty=base,
                vel_uncertainty=vel,
                accel_uncertainty=accel,
                persistence_risk=persistence,
            )
        )
    return nodes
