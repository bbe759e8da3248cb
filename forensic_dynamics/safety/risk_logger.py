from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional

from forensic_dynamics.utils.types import ClosingSample


class RiskEventLogger:
    def __init__(self, run_dir: Path, pair: str = ""):
        self.log_path = Path(run_dir) / "risk_events.jsonl"
        self.pair = pair
        self.last_state: Optional[bool] = None
        self.log_path.touch(exist_ok=True)

    def log(self, sample: ClosingSample) -> bool:
        """Append an event only when the risk flag changes. Returns True if written."""
        if sample.risk == self.last_state:
            return False
        # The series starts safe; only log the initial state if it is already risky.
        if self.last_state is None and not sample.risk:
            self.last_state = False
            return False
        event = {
            "pair": self.pair,
            "time_s": round(sample.time, 3),
            "state": "RISK" if sample.risk else "CLEAR",
            "distance": round(sample.distance, 3),
            "ttc_s": round(sample.ttc, 3),
        }
        with open(self.log_path, "a") as f:
            f.write(json.dumps(event) + "\n")
        self.last_state = sample.risk
        return True

    def log_series(self, samples: Iterable[ClosingSample]) -> int:
        return sum(1 for s in samples if self.log(s))
