"""
Adapter for the structured scene description returned by the perception
service: {"objects": [...], "events": [...]} with camelCase keys.

The payload comes from a generative model and is not trusted. Numeric fields
are coerced with defaults, unknown tags fall back to a safe member, and
malformed speed-profile points are dropped.
"""
from __future__ import annotations

import json
import logging
import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from forensic_dynamics.utils.types import EventConfidence, EventType, MotionState, TimelineEvent, TrackedObject

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _enum(enum_cls: Type[E], value: Any, default: E) -> E:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return default


def _pairs(raw: Any) -> List[Tuple[float, float]]:
    pairs: List[Tuple[float, float]] = []
    for point in raw or []:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            continue
        try:
            t, v = float(point[0]), float(point[1])
        except (TypeError, ValueError):
            continue
        if math.isfinite(t) and math.isfinite(v):
            pairs.append((t, v))
    return pairs


def _flow(raw: Any) -> Optional[Tuple[float, float]]:
    if not isinstance(raw, dict):
        return None
    return (_float(raw.get("x")), _float(raw.get("y")))


def parse_object(raw: Dict[str, Any]) -> TrackedObject:
    occlusion = raw.get("occlusionScore")
    return TrackedObject(
        id=_int(raw.get("id")),
        label=str(raw.get("label", "")),
        first_seen=_float(raw.get("firstSeen")),
        last_seen=_float(raw.get("lastSeen")),
        max_speed=_float(raw.get("maxSpeed")),
        avg_confidence=_float(raw.get("avgConfidence")),
        motion_state=_enum(MotionState, raw.get("motionState"), MotionState.MOVING),
        direction=str(raw.get("direction") or ""),
        speed_profile=_pairs(raw.get("speedProfile")),
        trajectory=_pairs(raw.get("trajectory")),
        flow_vector=_flow(raw.get("flowVector")),
        occlusion_score=_float(occlusion) if occlusion is not None else None,
    )


def parse_event(raw: Dict[str, Any]) -> TimelineEvent:
    return TimelineEvent(
        id=str(raw.get("id", "")),
        label=str(raw.get("label", "")),
        timestamp=_float(raw.get("timestamp")),
        type=_enum(EventType, raw.get("type"), EventType.OTHER),
        confidence=_enum(EventConfidence, raw.get("confidence"), EventConfidence.LOW),
        frame=_int(raw.get("frame")),
    )


def parse_structure(doc: Any) -> Tuple[List[TrackedObject], List[TimelineEvent]]:
    if not isinstance(doc, dict):
        raise ValueError(f"Expected a JSON object with 'objects' and 'events', got {type(doc).__name__}")
    objects = [parse_object(o) for o in doc.get("objects") or [] if isinstance(o, dict)]
    events = [parse_event(e) for e in doc.get("events") or [] if isinstance(e, dict)]
    return objects, events


class StructureInput:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Structure file not found: {self.path}")

        with self.path.open("r", encoding="utf-8") as f:
            try:
                doc = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {self.path}: {exc}") from exc

        self.objects, self.events = parse_structure(doc)
        logger.info("Loaded %s: objects=%d events=%d", self.path, len(self.objects), len(self.events))
