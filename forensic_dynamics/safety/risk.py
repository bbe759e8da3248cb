RISK_TTC_S = 2.5
RISK_DISTANCE = 20.0


def is_risky(ttc: float, distance: float) -> bool:
    """Near-collision heuristic: short TTC while already close."""
    return ttc < RISK_TTC_S and distance < RISK_DISTANCE
