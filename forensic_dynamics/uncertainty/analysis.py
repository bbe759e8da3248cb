from __future__ import annotations

from typing import Sequence

from forensic_dynamics.uncertainty.blind_spots import detect_blind_spots
from forensic_dynamics.uncertainty.budget import compute_confidence_budget
from forensic_dynamics.uncertainty.nodes import compute_node_uncertainty
from forensic_dynamics.utils.types import TimelineEvent, TrackedObject, UncertaintyAnalysis


def compute_uncertainty_metrics(
    objects: Sequence[TrackedObject],
    events: Sequence[TimelineEvent],
    clamp_budget: bool = True,
) -> UncertaintyAnalysis:
    return UncertaintyAnalysis(
        nodes=compute_node_uncertainty(objects),
        budget=compute_confidence_budget(objects, events, clamp=clamp_budget),
        blind_spots=detect_blind_spots(objects, events),
    )
