# pa_regression/training/step.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from pa_regression.core.loss import epsilon_insensitive_loss
from pa_regression.core.scorer import score_and_norm
from pa_regression.core.types import Features
from pa_regression.training.context import TrainingSession, TrainingState
from pa_regression.utils.errors import SessionFinalizedError


class StepStatus(str, Enum):
    UPDATED = "updated"
    NO_UPDATE = "no_update"   # loss <= 0
    SKIPPED = "skipped"       # non-finite coefficient, update discarded


@dataclass(frozen=True)
class StepOutcome:
    status: StepStatus
    predicted: float
    squared_norm: float
    loss: float
    epsilon: float
    eta: float = 0.0
    coeff: float = 0.0


class TrainingStep:
    """
    TrainingStep（ONLINE / FINAL）

    One example:
        IDLE -> SCORING -> EVALUATING -> (NO_UPDATE | UPDATING) -> IDLE

    Contract:
    - consumes (features, target), assumed validated upstream
    - mutates session.model in place only when loss > 0 and coeff is finite
    - adaptive variants fold the target into the tracker BEFORE the loss
    - session returns to IDLE even when the step raises
    """

    def run(
        self,
        session: TrainingSession,
        features: Features,
        target: float,
    ) -> StepOutcome:
        if session.finalized:
            raise SessionFinalizedError(
                "Training session is finalized; no further examples accepted"
            )

        try:
            return self._step(session, features, target)
        finally:
            session.state = TrainingState.IDLE

    def _step(
        self,
        session: TrainingSession,
        features: Features,
        target: float,
    ) -> StepOutcome:
        # scoring does not read the tracker; a raising example leaves it untouched
        session.state = TrainingState.SCORING
        margin = score_and_norm(features, session.model)
        predicted = margin.score

        session.state = TrainingState.EVALUATING
        epsilon = session.epsilon
        tracker = session.tracker
        if tracker is not None:
            tracker.handle(target)
            epsilon = epsilon * tracker.stddev()
        loss = epsilon_insensitive_loss(predicted, target, epsilon)

        session.processed += 1

        if not loss > 0.0:
            session.state = TrainingState.NO_UPDATE
            session.no_update += 1
            return StepOutcome(
                status=StepStatus.NO_UPDATE,
                predicted=predicted,
                squared_norm=margin.squared_norm,
                loss=loss,
                epsilon=epsilon,
            )

        session.state = TrainingState.UPDATING
        sign = 1 if (target - predicted) > 0.0 else -1  # sign(y - w.x)
        eta = session.spec.eta(loss, margin.squared_norm, session.c)
        coeff = sign * eta

        if math.isfinite(coeff):
            model = session.model
            for feature_id, value in features:
                model.add(feature_id, coeff * value)
            session.updated += 1
            status = StepStatus.UPDATED
        else:
            session.skipped += 1
            status = StepStatus.SKIPPED

        return StepOutcome(
            status=status,
            predicted=predicted,
            squared_norm=margin.squared_norm,
            loss=loss,
            epsilon=epsilon,
            eta=eta,
            coeff=coeff,
        )
