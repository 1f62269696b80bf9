# pa_regression/core/scorer.py
from __future__ import annotations

from pa_regression.core.types import Features, PredictionResult
from pa_regression.core.weights import WeightModel


def score_and_norm(features: Features, model: WeightModel) -> PredictionResult:
    """
    Dot product and squared L2 norm of a sparse example.

    Unseen feature ids contribute weight 0 to the score but still
    contribute value^2 to the norm. The model is not mutated.
    """
    score = 0.0
    squared_norm = 0.0

    for feature_id, value in features:
        score += model.get(feature_id) * value
        squared_norm += value * value

    return PredictionResult(score=score, squared_norm=squared_norm)


def predict(features: Features, model: WeightModel) -> float:
    score = 0.0
    for feature_id, value in features:
        score += model.get(feature_id) * value
    return score
