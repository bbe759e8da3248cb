"""
Confidence budget: an ideal certainty of 1.0 eroded stage by stage through
the perception pipeline. Each stage consumes the previous stage's output.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from forensic_dynamics.utils.types import ConfidenceBudgetRow, EventType, TimelineEvent, TrackedObject

logger = logging.getLogger(__name__)

STAGE_DETECTION = "Raw Detection"
STAGE_TRACKING = "Multi-Object Tracking"
STAGE_MOTION = "Motion Estimation"
STAGE_DYNAMICS = "Dynamics Modeling"

DETECTION_WEIGHT = 0.15
TRACKING_BASE_LOSS = 0.05
OCCLUSION_LOSS = 0.02
MOTION_GAIN = 1.5  # derivatives amplify tracking noise
DYNAMICS_LOSS = 0.05


def mean_confidence(objects: Sequence[TrackedObject]) -> float:
    """Mean detection confidence, each score clipped to [0, 1]; non-finite scores count as 0."""
    if not objects:
        return 0.0
    scores = np.nan_to_num(np.array([o.avg_confidence for o in objects], dtype=float), nan=0.0, posinf=1.0, neginf=0.0)
    return float(np.clip(scores, 0.0, 1.0).mean())


def count_occlusions(events: Sequence[TimelineEvent]) -> int:
    return sum(1 for e in events if e.type == EventType.OCCLUSION)


def compute_confidence_budget(
    objects: Sequence[TrackedObject],
    events: Sequence[TimelineEvent],
    clamp: bool = True,
) -> List[ConfidenceBudgetRow]:
    """
    Four fixed stages, in order. With clamp=True a stage never loses more
    than it receives, so confidence bottoms out at 0. With clamp=False the
    nominal losses are applied as-is and confidence can go negative when
    there are many occlusions.
    """
    tracking_loss = TRACKING_BASE_LOSS + OCCLUSION_LOSS * count_occlusions(events)
    stages = [
        (STAGE_DETECTION, (1.0 - mean_confidence(objects)) * DETECTION_WEIGHT),
        (STAGE_TRACKING, tracking_loss),
        (STAGE_MOTION, tracking_loss * MOTION_GAIN),
        (STAGE_DYNAMICS, DYNAMICS_LOSS),
    ]

    rows: List[ConfidenceBudgetRow] = []
    conf = 1.0
    for stage, loss in stages:
        if clamp and loss > conf:
            logger.debug("budget: %s loss %.3f capped at remaining confidence %.3f", stage, loss, conf)
            loss = max(0.0, conf)
        output = conf - loss
        rows.append(ConfidenceBudgetRow(stage=stage, input_conf=conf, loss=loss, output_conf=output))
        conf = output
    return rows
