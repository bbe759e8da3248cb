from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from tqdm import tqdm

from forensic_dynamics.kinematics.closing import closing_metrics
from forensic_dynamics.kinematics.derivatives import differentiate, kinetic_energy_proxy
from forensic_dynamics.kinematics.interpolation import INTERPOLATION_STEP, interpolate
from forensic_dynamics.kinematics.measurements import CHART_INTERVAL, grid_acceleration, resample, summarize_measurements
from forensic_dynamics.safety.risk_logger import RiskEventLogger
from forensic_dynamics.uncertainty.analysis import compute_uncertainty_metrics
from forensic_dynamics.utils.config import get
from forensic_dynamics.utils.timing import StageTimer
from forensic_dynamics.utils.types import ClosingSample, SeriesPoint, TimelineEvent, TrackedObject


def _series(points: Sequence[SeriesPoint]) -> List[Dict[str, float]]:
    return [{"time": p.time, "value": p.value} for p in points]


class AnalysisRunner:
    """
    Runs the kinematics and uncertainty engines over one scene structure.
    Both engines are pure; the runner only sequences them, times the stages
    and shapes the result for JSON.
    """

    def __init__(self, cfg: Dict[str, Any], logger: Optional[logging.Logger] = None):
        self.cfg = cfg
        self.logger = logger or logging.getLogger(__name__)
        self.duration = float(get(cfg, "kinematics.duration", 15.0))
        self.chart_interval = float(get(cfg, "kinematics.chart_interval", CHART_INTERVAL))
        self.clamp_budget = bool(get(cfg, "uncertainty.clamp_budget", True))
        self.save_series = bool(get(cfg, "runtime.save_series", True))
        self.show_progress = bool(get(cfg, "runtime.progress", True))
        step = float(get(cfg, "kinematics.step", INTERPOLATION_STEP))
        if step != INTERPOLATION_STEP:
            # Closing distance integrates with a fixed step; a different grid would misalign it.
            self.logger.warning("kinematics.step=%.3f ignored; closing metrics require %.1f", step, INTERPOLATION_STEP)
        self.step = INTERPOLATION_STEP

    def run(
        self,
        objects: Sequence[TrackedObject],
        events: Sequence[TimelineEvent],
        risk_logger: Optional[RiskEventLogger] = None,
    ) -> Dict[str, Any]:
        timer = StageTimer()

        per_object: List[Dict[str, Any]] = []
        dense_series: List[List[SeriesPoint]] = []
        with timer.stage("kinematics"):
            for obj in tqdm(objects, desc="kinematics", disable=not self.show_progress):
                dense = interpolate(obj.speed_profile, self.duration, self.step)
                dense_series.append(dense)
                if not dense:
                    self.logger.info("Object %s (%s): speed profile too sparse, no series", obj.id, obj.label)
                entry: Dict[str, Any] = {"id": obj.id, "label": obj.label, "samples": len(dense)}
                if self.save_series:
                    entry["speed"] = _series(dense)
                    entry["acceleration"] = _series(differentiate(dense))
                    entry["energy"] = _series(kinetic_energy_proxy(dense))
                    entry["chart_speed"] = _series(resample(dense, self.duration, self.chart_interval))
                    entry["chart_acceleration"] = _series(grid_acceleration(dense, self.duration, self.chart_interval))
                per_object.append(entry)

        closing: List[ClosingSample] = []
        pair: Optional[List[int]] = None
        with timer.stage("closing"):
            if len(objects) >= 2:
                a, b = objects[0], objects[1]
                pair = [a.id, b.id]
                closing = closing_metrics(dense_series[0], dense_series[1], self.duration)
                if risk_logger is not None:
                    risk_logger.pair = f"{a.id}-{b.id}"
                    written = risk_logger.log_series(closing)
                    self.logger.info("Risk transitions logged: %d", written)
            else:
                self.logger.info("Closing metrics need 2+ objects, got %d", len(objects))

        summary = summarize_measurements(objects, closing)

        with timer.stage("uncertainty"):
            uncertainty = compute_uncertainty_metrics(objects, events, clamp_budget=self.clamp_budget)

        final_conf = uncertainty.budget[-1].output_conf
        self.logger.info(
            "Analysis done: objects=%d events=%d min_ttc=%s final_conf=%.3f blind_spots=%d",
            len(objects),
            len(events),
            f"{summary.min_ttc:.2f}" if summary.min_ttc is not None else "n/a",
            final_conf,
            len(uncertainty.blind_spots),
        )

        return {
            "duration": self.duration,
            "step": self.step,
            "objects": per_object,
            "closing": {"pair": pair, "samples": [asdict(c) for c in closing]},
            "summary": asdict(summary),
            "uncertainty": {
                "nodes": [asdict(n) for n in uncertainty.nodes],
                "budget": [asdict(r) for r in uncertainty.budget],
                "blind_spots": [
                    {
                        "type": s.type.value,
                        "description": s.description,
                        "severity": s.severity.value,
                        "interval": list(s.interval) if s.interval else None,
                    }
                    for s in uncertainty.blind_spots
                ],
            },
            "timing_ms": dict(timer.stages_ms),
        }
