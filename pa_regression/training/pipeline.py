# pa_regression/training/pipeline.py
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from pa_regression import logs
from pa_regression.config.training_config import PAConfig
from pa_regression.core.types import FeatureId, Features
from pa_regression.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)
from pa_regression.training.context import TrainingSession
from pa_regression.training.step import StepOutcome, TrainingStep

Example = Tuple[Features, float]


class TrainingPipeline:
    """
    TrainingPipeline（single pass / FINAL）

    Semantics:
    - Pipeline owns example iteration
    - TrainingStep executes the PA update
    - one pipeline == one session; partitions get their own pipeline
    """

    def __init__(
            self,
            cfg: PAConfig | None = None,
            *,
            inst: Instrumentation | None = None,
            step: TrainingStep | None = None,
            log_every: int = 0,
    ):
        self.cfg = cfg if cfg is not None else PAConfig()
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )
        self.step = step if step is not None else TrainingStep()
        self.log_every = log_every

        # ConfigurationError surfaces here, before any example
        self.session = TrainingSession.create(self.cfg)

        logs.info(
            f"[TrainingPipeline] session created variant={self.session.spec.variant.value} "
            f"C={self.session.c} epsilon={self.session.epsilon}"
        )

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------
    def feed(self, features: Features, target: float) -> StepOutcome:
        return self.step.run(self.session, features, target)

    @logs.catch(msg="training stream failed")
    def run(self, examples: Iterable[Example]) -> TrainingSession:
        logs.info("[TrainingPipeline] START")

        with self.inst.timer("train_stream"):
            for features, target in examples:
                self.step.run(self.session, features, target)

                if self.log_every and self.session.processed % self.log_every == 0:
                    logs.info(
                        f"[Progress] processed={self.session.processed} "
                        f"updated={self.session.updated} "
                        f"features={len(self.session.model)}"
                    )

        logs.info(f"[TrainingPipeline] DONE {self.session.counters()}")
        return self.session

    # ------------------------------------------------------------------
    # Read / end-of-stream
    # ------------------------------------------------------------------
    def predict(self, features: Features) -> float:
        return self.session.predict(features)

    def finalize(self) -> List[Tuple[FeatureId, float]]:
        weights = self.session.finalize()

        self.inst.metrics.record_many(self.session.counters())
        logs.info(f"[TrainingPipeline] FINALIZED {self.inst.summary()}")
        return weights

    @property
    def counters(self) -> Dict[str, int]:
        return self.session.counters()
