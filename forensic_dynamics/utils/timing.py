from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator


@dataclass
class StageTimer:
    """Wall-clock timing per analysis stage for a single run."""

    start_ts: float = field(default_factory=time.perf_counter)
    stages_ms: Dict[str, float] = field(default_factory=dict)

    def mark(self, stage_name: str, stage_start_ts: float) -> None:
        self.stages_ms[stage_name] = (time.perf_counter() - stage_start_ts) * 1000.0

    @contextmanager
    def stage(self, stage_name: str) -> Iterator[None]:
        stage_start = time.perf_counter()
        try:
            yield
        finally:
            self.mark(stage_name, stage_start)
