# pa_regression/training/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pa_regression.config.training_config import PAConfig
from pa_regression.core.scorer import predict
from pa_regression.core.types import FeatureId, Features
from pa_regression.core.variance import OnlineVarianceTracker
from pa_regression.core.variants import VariantSpec
from pa_regression.core.weights import WeightModel


class TrainingState(str, Enum):
    IDLE = "idle"
    SCORING = "scoring"
    EVALUATING = "evaluating"
    NO_UPDATE = "no_update"
    UPDATING = "updating"
    FINALIZED = "finalized"


@dataclass
class TrainingSession:
    """
    TrainingSession（one session == one training sequence）

    Semantics:
    - owns WeightModel and VarianceState exclusively, no sharing
    - cfg / spec / c / epsilon are bound once at creation
    - state is readable at any point (left-to-right prefix of the stream)
    """

    # -------------------------
    # Static bindings (set once by create)
    # -------------------------
    cfg: PAConfig
    spec: VariantSpec
    c: float
    epsilon: float

    # -------------------------
    # Rolling state
    # -------------------------
    model: WeightModel = field(default_factory=WeightModel)
    tracker: Optional[OnlineVarianceTracker] = None
    state: TrainingState = TrainingState.IDLE

    processed: int = 0
    updated: int = 0
    no_update: int = 0
    skipped: int = 0

    @classmethod
    def create(cls, cfg: PAConfig | None = None) -> "TrainingSession":
        """
        cfg -> session

        aggressiveness <= 0 -> ConfigurationError, no session created
        """
        cfg = cfg if cfg is not None else PAConfig()
        spec = cfg.spec
        c = cfg.resolved_aggressiveness()

        return cls(
            cfg=cfg,
            spec=spec,
            c=c,
            epsilon=float(cfg.epsilon),
            tracker=OnlineVarianceTracker() if spec.adaptive else None,
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    @property
    def finalized(self) -> bool:
        return self.state is TrainingState.FINALIZED

    def predict(self, features: Features) -> float:
        return predict(features, self.model)

    def weights(self) -> Iterator[Tuple[FeatureId, float]]:
        """(feature_id, weight) per feature ever observed, zero weights included."""
        return self.model.items()

    def counters(self) -> Dict[str, int]:
        return {
            "processed": self.processed,
            "updated": self.updated,
            "no_update": self.no_update,
            "skipped": self.skipped,
            "features": len(self.model),
        }

    # ------------------------------------------------------------------
    # End-of-stream
    # ------------------------------------------------------------------
    def finalize(self) -> List[Tuple[FeatureId, float]]:
        self.state = TrainingState.FINALIZED
        return list(self.weights())
