# pa_regression/core/__init__.py
from .types import FeatureEntry, FeatureId, PredictionResult
from .weights import WeightModel
from .scorer import predict, score_and_norm
from .loss import epsilon_insensitive_loss
from .variance import OnlineVarianceTracker, VarianceState
from .step_size import pa1_eta, pa2_eta
from .variants import Variant, VariantSpec, resolve_variant

__all__ = [
    "FeatureEntry", "FeatureId", "PredictionResult",
    "WeightModel",
    "score_and_norm", "predict",
    "epsilon_insensitive_loss",
    "OnlineVarianceTracker", "VarianceState",
    "pa1_eta", "pa2_eta",
    "Variant", "VariantSpec", "resolve_variant",
]
