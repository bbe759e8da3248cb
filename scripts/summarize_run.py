#!/usr/bin/env python3
import json
import sys
from pathlib import Path
from statistics import mean


def safe_mean(xs):
    xs = [x for x in xs if x is not None]
    return mean(xs) if xs else None


def pct(x):
    return f"{100.0 * x:.1f}%"


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/summarize_run.py results/run_YYYYMMDD_HHMMSS")
        sys.exit(1)

    run_dir = Path(sys.argv[1])
    analysis_path = run_dir / "analysis.json"
    if not analysis_path.exists():
        raise FileNotFoundError(f"Missing: {analysis_path}")

    a = json.loads(analysis_path.read_text())
    objects = a.get("objects", [])
    summary = a.get("summary", {})
    unc = a.get("uncertainty", {})

    print("\n============ FORENSIC DYNAMICS RUN SUMMARY ============")
    print(f"Run dir: {run_dir}")
    print(f"Duration: {a.get('duration')}s  step={a.get('step')}s")
    print(f"Objects: {len(objects)}  (with series: {sum(1 for o in objects if o.get('samples'))})")

    print("\nMeasurements:")
    print(f"  peak speed:    {summary.get('peak_speed', 0.0):.1f}")
    min_ttc = summary.get("min_ttc")
    print(f"  min TTC:       {min_ttc:.2f}s" if min_ttc is not None else "  min TTC:       (no pair)")
    print(f"  risk samples:  {summary.get('risk_samples', 0)}")
    first_risk = summary.get("first_risk_time")
    print(f"  first risk at: {first_risk}s" if first_risk is not None else "  first risk at: (none)")

    nodes = unc.get("nodes", [])
    if nodes:
        print("\nUncertainty (avg over objects):")
        for key in ["pos_uncertainty", "vel_uncertainty", "accel_uncertainty", "persistence_risk"]:
            print(f"  {key:18s}: {pct(safe_mean([n.get(key) for n in nodes]))}")

    print("\nConfidence budget:")
    for row in unc.get("budget", []):
        print(f"  {row['stage']:22s} in={pct(row['input_conf'])}  loss={pct(row['loss'])}  out={pct(row['output_conf'])}")

    print("\nBlind spots:")
    for spot in unc.get("blind_spots", []):
        print(f"  [{spot['severity']:6s}] {spot['type']}: {spot['description']}")

    timing = a.get("timing_ms", {})
    if timing:
        print("\nLatency (ms):")
        for stage, ms in timing.items():
            print(f"  {stage:12s}: {ms:.2f}")
    print("=======================================================\n")


if __name__ == "__main__":
    main()
