from __future__ import annotations

MIN_CLOSING_SPEED = 1.0
TTC_CAP_S = 10.0


def compute_ttc(distance: float, closing_speed: float) -> float:
    """
    TTC = distance / closing_speed.
    Below MIN_CLOSING_SPEED there is no meaningful approach and the capped
    sentinel TTC_CAP_S is returned (treat as non-urgent).
    """
    if closing_speed is None or closing_speed <= MIN_CLOSING_SPEED:
        return TTC_CAP_S
    return max(0.0, distance) / closing_speed
