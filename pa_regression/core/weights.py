# pa_regression/core/weights.py
from __future__ import annotations

from typing import Dict, Iterator, Tuple

from pa_regression.core.types import FeatureId


class WeightModel:
    """
    WeightModel（session-owned, mutable）

    Semantics:
    - feature_id -> weight, implicit 0.0 for unseen keys
    - grows monotonically: keys are never removed, zero weights are kept
    - reads never insert keys
    """

    def __init__(self):
        self._weights: Dict[FeatureId, float] = {}

    def get(self, feature_id: FeatureId) -> float:
        return self._weights.get(feature_id, 0.0)

    def add(self, feature_id: FeatureId, delta: float) -> None:
        self._weights[feature_id] = self._weights.get(feature_id, 0.0) + delta

    def __getitem__(self, feature_id: FeatureId) -> float:
        return self.get(feature_id)

    def __contains__(self, feature_id: FeatureId) -> bool:
        return feature_id in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def items(self) -> Iterator[Tuple[FeatureId, float]]:
        """(feature_id, weight) for every feature ever observed."""
        return iter(list(self._weights.items()))

    def snapshot(self) -> Dict[FeatureId, float]:
        return dict(self._weights)

    def __repr__(self) -> str:
        return f"WeightModel(n_features={len(self._weights)})"
