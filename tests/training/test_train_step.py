# tests/training/test_train_step.py
import math

import pytest

from pa_regression.core.types import FeatureEntry
from pa_regression.training.context import TrainingState
from pa_regression.training.step import StepStatus, TrainingStep
from pa_regression.utils.errors import SessionFinalizedError


@pytest.fixture
def step():
    return TrainingStep()


# =============================================================================
# Concrete scenarios
# =============================================================================

def test_pa1_update_then_converged(step, make_session, single_feature):
    session = make_session("PA1", epsilon=0.1)

    out = step.run(session, single_feature, 5.0)

    assert out.status is StepStatus.UPDATED
    assert out.predicted == 0.0
    assert out.squared_norm == 1.0
    assert out.loss == pytest.approx(4.9)
    assert out.eta == pytest.approx(4.9)
    assert out.coeff == pytest.approx(4.9)
    assert session.model[1] == pytest.approx(4.9)

    out = step.run(session, single_feature, 5.0)

    assert out.status is StepStatus.NO_UPDATE
    assert out.predicted == pytest.approx(4.9)
    assert out.loss == 0.0
    assert session.model[1] == pytest.approx(4.9)


def test_pa2_moves_less_than_pa1(step, make_session, single_feature):
    pa1 = make_session("PA1", epsilon=0.1)
    pa2 = make_session("PA2", aggressiveness=1.0, epsilon=0.1)

    step.run(pa1, single_feature, 5.0)
    out = step.run(pa2, single_feature, 5.0)

    assert out.eta == pytest.approx(4.9 / 1.5)
    assert pa2.model[1] == pytest.approx(3.2666667, rel=1e-6)
    assert pa2.model[1] < pa1.model[1]


def test_negative_error_moves_down(step, make_session, single_feature):
    session = make_session("PA1", epsilon=0.0)

    out = step.run(session, single_feature, -2.0)

    assert out.coeff == pytest.approx(-2.0)
    assert session.model[1] == pytest.approx(-2.0)


def test_update_scales_by_feature_value(step, make_session):
    session = make_session("PA1", epsilon=0.0)
    x = [FeatureEntry("a", 1.0), FeatureEntry("b", 2.0)]

    out = step.run(session, x, 10.0)

    # eta = 10 / 5
    assert out.coeff == pytest.approx(2.0)
    assert session.model["a"] == pytest.approx(2.0)
    assert session.model["b"] == pytest.approx(4.0)
    assert session.predict(x) == pytest.approx(10.0)


def test_pa1_eta_capped_by_c(step, make_session, single_feature):
    session = make_session("PA1", aggressiveness=0.5, epsilon=0.0)

    out = step.run(session, single_feature, 5.0)

    assert out.eta == 0.5
    assert session.model[1] == 0.5


# =============================================================================
# Adaptive epsilon
# =============================================================================

def test_adaptive_epsilon_folds_target_before_loss(step, make_session, single_feature):
    session = make_session("PA1a", epsilon=0.1)

    first = step.run(session, single_feature, 1.0)
    second = step.run(session, single_feature, 2.0)
    third = step.run(session, single_feature, 3.0)

    assert first.epsilon == 0.0
    assert second.epsilon == pytest.approx(0.1 * math.sqrt(0.5))
    assert third.epsilon == pytest.approx(0.1)
    assert session.tracker.count == 3


def test_pa2a_uses_tracker_and_pa2_rule(step, make_session, single_feature):
    session = make_session("PA2a", epsilon=0.1)

    out = step.run(session, single_feature, 4.0)

    # one sample: stddev 0 -> epsilon 0, loss 4, eta 4 / (1 + 0.5)
    assert out.epsilon == 0.0
    assert out.eta == pytest.approx(4.0 / 1.5)


def test_fixed_variants_have_no_tracker(make_session):
    assert make_session("PA1").tracker is None
    assert make_session("PA2").tracker is None


# =============================================================================
# No-op / skip
# =============================================================================

@pytest.mark.parametrize("variant", ["PA1", "PA1a", "PA2", "PA2a"])
def test_no_update_when_inside_tube(step, make_session, variant):
    session = make_session(variant, epsilon=1.0)
    session.model.add("a", 1.0)
    before = session.model.snapshot()

    # prediction == target: loss 0 for any epsilon >= 0, adaptive included
    out = step.run(session, [FeatureEntry("a", 1.0)], 1.0)

    assert out.status is StepStatus.NO_UPDATE
    assert session.model.snapshot() == before
    assert session.no_update == 1


def test_zero_norm_pa1_is_skipped(step, make_session):
    session = make_session("PA1", epsilon=0.1)

    out = step.run(session, [FeatureEntry("z", 0.0)], 5.0)

    assert out.status is StepStatus.SKIPPED
    assert math.isinf(out.coeff)
    assert len(session.model) == 0
    assert session.skipped == 1
    assert session.processed == 1


def test_zero_norm_pa1_finite_c_adds_zero(step, make_session):
    session = make_session("PA1", aggressiveness=2.0, epsilon=0.1)

    out = step.run(session, [FeatureEntry("z", 0.0)], 5.0)

    assert out.status is StepStatus.UPDATED
    assert dict(session.weights()) == {"z": 0.0}


def test_zero_norm_pa2_is_finite(step, make_session):
    session = make_session("PA2", aggressiveness=1.0, epsilon=0.0)

    out = step.run(session, [FeatureEntry("z", 0.0)], 1.0)

    assert out.status is StepStatus.UPDATED
    assert out.eta == pytest.approx(2.0)
    assert session.model["z"] == 0.0


# =============================================================================
# State machine
# =============================================================================

def test_state_returns_to_idle(step, make_session, single_feature):
    session = make_session("PA1")

    step.run(session, single_feature, 5.0)
    assert session.state is TrainingState.IDLE

    step.run(session, single_feature, 5.0)
    assert session.state is TrainingState.IDLE


def test_finalized_session_rejects_examples(step, make_session, single_feature):
    session = make_session("PA1")
    step.run(session, single_feature, 5.0)

    weights = session.finalize()

    assert weights == [(1, pytest.approx(4.9))]
    assert session.state is TrainingState.FINALIZED

    with pytest.raises(SessionFinalizedError):
        step.run(session, single_feature, 5.0)

    # state still readable
    assert session.model[1] == pytest.approx(4.9)


def test_counters(step, make_session, single_feature):
    session = make_session("PA1")

    step.run(session, single_feature, 5.0)
    step.run(session, single_feature, 5.0)
    step.run(session, [FeatureEntry(2, 0.0)], 3.0)

    assert session.counters() == {
        "processed": 3,
        "updated": 1,
        "no_update": 1,
        "skipped": 1,
        "features": 1,
    }


def test_raising_example_leaves_session_consistent(step, make_session, single_feature):
    session = make_session("PA1a")

    # str value: float * str raises while scoring
    with pytest.raises(TypeError):
        step.run(session, [FeatureEntry("a", "oops")], 1.0)

    assert session.state is TrainingState.IDLE
    assert session.tracker.count == 0
    assert session.processed == 0

    out = step.run(session, single_feature, 1.0)

    assert out.status is StepStatus.UPDATED
    assert session.tracker.count == 1
