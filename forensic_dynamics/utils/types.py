from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

# (time, value) as emitted by the perception service; any 2-sequence works.
SparsePoint = Sequence[float]


class MotionState(str, Enum):
    STATIONARY = "stationary"
    MOVING = "moving"
    ERRATIC = "erratic"


class EventType(str, Enum):
    DETECTION = "detection"
    OCCLUSION = "occlusion"
    BRAKING = "braking"
    IMPACT = "impact"
    OTHER = "other"


class EventConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BlindSpotType(str, Enum):
    SPATIAL = "SPATIAL"
    TEMPORAL = "TEMPORAL"
    ANALYTICAL = "ANALYTICAL"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class TrackedObject:
    id: int
    label: str
    first_seen: float = 0.0
    last_seen: float = 0.0
    max_speed: float = 0.0
    avg_confidence: float = 0.0  # 0-1
    motion_state: MotionState = MotionState.MOVING
    direction: str = ""
    speed_profile: List[Tuple[float, float]] = field(default_factory=list)
    trajectory: List[Tuple[float, float]] = field(default_factory=list)
    flow_vector: Optional[Tuple[float, float]] = None
    occlusion_score: Optional[float] = None


@dataclass
class TimelineEvent:
    id: str
    label: str
    timestamp: float
    type: EventType = EventType.OTHER
    confidence: EventConfidence = EventConfidence.LOW
    frame: int = 0


@dataclass(frozen=True)
class SeriesPoint:
    time: float
    value: float


# Interpolated speed samples share the series shape.
DenseSample = SeriesPoint


@dataclass(frozen=True)
class ClosingSample:
    time: float
    distance: float
    ttc: float
    risk: bool


@dataclass(frozen=True)
class UncertaintyNode:
    object_id: int
    label: str
    pos_uncertainty: float  # 0-1, 1 is high uncertainty
    vel_uncertainty: float
    accel_uncertainty: float
    persistence_risk: float


@dataclass(frozen=True)
class ConfidenceBudgetRow:
    stage: str
    input_conf: float
    loss: float
    output_conf: float


@dataclass(frozen=True)
class BlindSpot:
    type: BlindSpotType
    description: str
    severity: Severity
    interval: Optional[Tuple[float, float]] = None  # seconds


@dataclass(frozen=True)
class UncertaintyAnalysis:
    nodes: List[UncertaintyNode]
    budget: List[ConfidenceBudgetRow]
    blind_spots: List[BlindSpot]


@dataclass(frozen=True)
class MeasurementSummary:
    peak_speed: float
    min_ttc: Optional[float]
    risk_samples: int
    first_risk_time: Optional[float]
