import pytest

from forensic_dynamics.uncertainty.analysis import compute_uncertainty_metrics
from forensic_dynamics.uncertainty.blind_spots import PERIMETER_DISCLOSURE, detect_blind_spots
from forensic_dynamics.uncertainty.budget import compute_confidence_budget
from forensic_dynamics.uncertainty.nodes import compute_node_uncertainty
from forensic_dynamics.utils.types import BlindSpotType, EventType, MotionState, Severity, TimelineEvent, TrackedObject


def obj(id=1, conf=0.9, speed=40.0, state=MotionState.MOVING):
    return TrackedObject(id=id, label=f"obj{id}", max_speed=speed, avg_confidence=conf, motion_state=state)


def occlusion(i, ts=1.0):
    return TimelineEvent(id=f"e{i}", label="occluded", timestamp=ts, type=EventType.OCCLUSION)


def test_node_uncertainty_moving_object():
    node = compute_node_uncertainty([obj()])[0]
    assert node.pos_uncertainty == pytest.approx(0.1)
    assert node.vel_uncertainty == pytest.approx(0.12)
    assert node.accel_uncertainty == pytest.approx(0.18)
    assert node.persistence_risk == pytest.approx(0.1)


def test_high_speed_and_erratic_penalties():
    fast = compute_node_uncertainty([obj(conf=0.5, speed=100.0)])[0]
    assert fast.vel_uncertainty == pytest.approx(0.8)
    assert fast.accel_uncertainty == 1.0
    erratic = compute_node_uncertainty([obj(conf=0.8, state=MotionState.ERRATIC)])[0]
    assert erratic.persistence_risk == pytest.approx(0.5)


def test_nodes_clamped_to_unit_interval_and_keep_order():
    objects = [obj(1, conf=-0.5, speed=200.0, state=MotionState.ERRATIC), obj(2, conf=1.5), obj(3, conf=0.0)]
    nodes = compute_node_uncertainty(objects)
    assert [n.object_id for n in nodes] == [1, 2, 3]
    for n in nodes:
        for value in (n.pos_uncertainty, n.vel_uncertainty, n.accel_uncertainty, n.persistence_risk):
            assert 0.0 <= value <= 1.0
        assert n.accel_uncertainty >= n.vel_uncertainty
    assert nodes[1].pos_uncertainty == 0.0


def test_budget_stages_and_chain():
    rows = compute_confidence_budget([obj(conf=0.8), obj(2, conf=0.6)], [occlusion(1)])
    assert [r.stage for r in rows] == ["Raw Detection", "Multi-Object Tracking", "Motion Estimation", "Dynamics Modeling"]
    assert rows[0].input_conf == 1.0
    assert rows[0].loss == pytest.approx(0.3 * 0.15)
    assert rows[2].loss == pytest.approx(rows[1].loss * 1.5)
    assert rows[3].loss == pytest.approx(0.05)
    for prev, curr in zip(rows, rows[1:]):
        assert prev.output_conf == curr.input_conf
    for r in rows:
        assert r.output_conf == pytest.approx(r.input_conf - r.loss)


def test_tracking_loss_counts_occlusions():
    events = [occlusion(i) for i in range(3)] + [TimelineEvent(id="b", label="brake", timestamp=2.0, type=EventType.BRAKING)]
    rows = compute_confidence_budget([], events)
    assert rows[0].loss == pytest.approx(0.15)
    assert rows[1].loss == pytest.approx(0.11)


def test_budget_clamped_at_zero_by_default():
    rows = compute_confidence_budget([], [occlusion(i) for i in range(100)])
    assert all(r.output_conf >= 0 for r in rows)
    assert rows[-1].output_conf == 0.0
    for prev, curr in zip(rows, rows[1:]):
        assert prev.output_conf == curr.input_conf


def test_budget_unclamped_can_go_negative():
    rows = compute_confidence_budget([], [occlusion(i) for i in range(100)], clamp=False)
    assert rows[1].loss == pytest.approx(2.05)
    assert rows[-1].output_conf < 0


def test_spatial_blind_spot_always_present():
    spots = detect_blind_spots([], [])
    assert len(spots) == 1
    assert spots[0].type == BlindSpotType.SPATIAL
    assert spots[0].severity == Severity.LOW
    assert spots[0].description == PERIMETER_DISCLOSURE


def test_blind_spot_order():
    spots = detect_blind_spots([obj(7, conf=0.5), obj(8, conf=0.4), obj(9)], [occlusion(1, 2.0), occlusion(2, 4.5)])
    assert [s.type for s in spots] == [BlindSpotType.ANALYTICAL, BlindSpotType.TEMPORAL, BlindSpotType.SPATIAL]
    assert spots[0].severity == Severity.HIGH
    assert "7, 8" in spots[0].description
    assert spots[1].severity == Severity.MEDIUM
    assert spots[1].description.startswith("2 occlusion intervals")
    assert spots[1].interval == (2.0, 4.5)


def test_single_low_confidence_object_reported_first():
    assert detect_blind_spots([obj(conf=0.5)], [])[0].type == BlindSpotType.ANALYTICAL


def test_aggregate_analysis():
    analysis = compute_uncertainty_metrics([obj(), obj(2, conf=0.5)], [occlusion(1)])
    assert len(analysis.nodes) == 2
    assert len(analysis.budget) == 4
    assert analysis.blind_spots[-1].type == BlindSpotType.SPATIAL


def test_out_of_range_confidence_never_raises_budget():
    rows = compute_confidence_budget([obj(conf=1.5), obj(2, conf=-0.4)], [])
    assert rows[0].loss >= 0
    for r in rows:
        assert r.output_conf <= r.input_conf
        assert 0.0 <= r.output_conf <= 1.0


def test_nan_confidence_gives_full_uncertainty():
    node = compute_node_uncertainty([obj(conf=float("nan"))])[0]
    assert node.pos_uncertainty == 1.0
    assert node.vel_uncertainty == 1.0
    assert node.accel_uncertainty == 1.0
    assert node.persistence_risk == 1.0
    rows = compute_confidence_budget([obj(conf=float("nan"))], [])
    assert rows[0].loss == pytest.approx(0.15)
