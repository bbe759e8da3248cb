from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from forensic_dynamics.inputs.structure_input import StructureInput
from forensic_dynamics.runtime.analyzer import AnalysisRunner
from forensic_dynamics.safety.risk_logger import RiskEventLogger
from forensic_dynamics.utils.config import get, load_config
from forensic_dynamics.utils.logger import setup_logger


def make_run_dir(base_dir: str | Path) -> Path:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(base_dir) / f"run_{ts}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def budget_table(result: Dict[str, Any]) -> Table:
    table = Table(title="Confidence budget")
    table.add_column("Stage")
    table.add_column("In", justify="right")
    table.add_column("Loss", justify="right")
    table.add_column("Out", justify="right")
    for row in result["uncertainty"]["budget"]:
        table.add_row(
            row["stage"],
            f"{row['input_conf'] * 100:.1f}%",
            f"{row['loss'] * 100:.1f}%",
            f"{row['output_conf'] * 100:.1f}%",
        )
    return table


def run(argv: Optional[List[str]] = None) -> Path:
    parser = argparse.ArgumentParser(description="Kinematics and uncertainty post-processing for forensic video analysis")
    parser.add_argument("--config", default=None, help="Path to YAML config (built-in defaults when omitted)")
    parser.add_argument("--input", required=True, help="Path to scene structure JSON (objects + events)")
    parser.add_argument("--duration", type=float, default=None, help="Clip duration in seconds (overrides config)")
    parser.add_argument("--output-dir", default=None, help="Base directory for run folders (overrides config)")
    args = parser.parse_args(argv)

    cfg: Dict[str, Any] = load_config(args.config)
    if args.duration is not None:
        cfg.setdefault("kinematics", {})["duration"] = args.duration

    output_base = args.output_dir or get(cfg, "runtime.output_dir", "results")
    run_dir = make_run_dir(output_base)
    logger = setup_logger(log_dir=run_dir, level=get(cfg, "runtime.log_level", "INFO"))

    console = Console()
    console.print(f"[bold]forensic-dynamics[/bold] run dir: {run_dir}")

    structure = StructureInput(args.input)
    logger.info("Input structure: %s", args.input)

    runner = AnalysisRunner(cfg, logger)
    result = runner.run(structure.objects, structure.events, risk_logger=RiskEventLogger(run_dir))
    result["input"] = {"path": str(args.input)}

    out_path = run_dir / "analysis.json"
    out_path.write_text(json.dumps(result, indent=2), encoding="utf-8")
    logger.info("Saved analysis: %s", out_path)

    console.print(budget_table(result))
    for spot in result["uncertainty"]["blind_spots"]:
        console.print(f"[yellow]{spot['severity']}[/yellow] {spot['type']}: {spot['description']}")

    logger.info("Done.")
    return run_dir


def main() -> None:
    run()


if __name__ == "__main__":
    main()
