import json
from collections import Counter
from pathlib import Path


def generate_report(run_dir: Path):
    events_file = run_dir / "risk_events.jsonl"
    report_file = run_dir / "risk_report.json"

    states = []
    times = []
    ttcs = []
    risk_windows = []
    onset = None

    if not events_file.exists():
        print(f"⚠️ No events file found at {events_file}")
        return

    with events_file.open() as f:
        for line in f:
            e = json.loads(line)
            states.append(e.get("state"))
            times.append(e.get("time_s"))
            if e.get("state") == "RISK":
                onset = e.get("time_s")
                ttcs.append(e.get("ttc_s"))
            elif e.get("state") == "CLEAR" and onset is not None:
                risk_windows.append([onset, e.get("time_s")])
                onset = None

    if onset is not None:
        # Still at risk when the series ended.
        risk_windows.append([onset, None])

    report = {
        "total_events": len(states),
        "state_counts": dict(Counter(states)),
        "risk_windows": risk_windows,
        "min_onset_ttc_s": min(ttcs) if ttcs else None,
        "first_event_time_s": min(times) if times else None,
        "last_event_time_s": max(times) if times else None,
    }

    with report_file.open("w") as f:
        json.dump(report, f, indent=2)

    print(f"✅ Risk report written to {report_file}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python scripts/generate_risk_report.py <run_dir>")
        sys.exit(1)
    generate_report(Path(sys.argv[1]))
