from __future__ import annotations

from typing import List, Sequence

from forensic_dynamics.utils.types import BlindSpot, BlindSpotType, EventType, Severity, TimelineEvent, TrackedObject

LOW_CONFIDENCE_THRESHOLD = 0.6
PERIMETER_DISCLOSURE = "Perimeter distortion: Lens geometry reduces accuracy at frame edges > 85%."


def detect_blind_spots(objects: Sequence[TrackedObject], events: Sequence[TimelineEvent]) -> List[BlindSpot]:
    """Findings in fixed order: ANALYTICAL, TEMPORAL, then the SPATIAL disclosure that is always present."""
    blind_spots: List[BlindSpot] = []

    low_conf = [o for o in objects if o.avg_confidence < LOW_CONFIDENCE_THRESHOLD]
    if low_conf:
        ids = ", ".join(str(o.id) for o in low_conf)
        blind_spots.append(
            BlindSpot(
                type=BlindSpotType.ANALYTICAL,
                description=f"High uncertainty for IDs: {ids} due to low detection score.",
                severity=Severity.HIGH,
            )
        )

    occlusions = [e for e in events if e.type == EventType.OCCLUSION]
    if occlusions:
        stamps = [e.timestamp for e in occlusions]
        blind_spots.append(
            BlindSpot(
                type=BlindSpotType.TEMPORAL,
                description=f"{len(occlusions)} occlusion intervals detected where tracking relies on prediction.",
                severity=Severity.MEDIUM,
                interval=(min(stamps), max(stamps)),
            )
        )

    blind_spots.append(BlindSpot(type=BlindSpotType.SPATIAL, description=PERIMETER_DISCLOSURE, severity=Severity.LOW))
    return blind_spots
