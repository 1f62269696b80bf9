# pa_regression/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, NamedTuple, Sequence

# opaque key: int / str in practice
FeatureId = Hashable


class FeatureEntry(NamedTuple):
    """One (feature_id, value) pair of a sparse example."""

    feature_id: FeatureId
    value: float


# ordered, ids unique within one example
Features = Sequence[FeatureEntry]


@dataclass(frozen=True)
class PredictionResult:
    """
    PredictionResult（transient）

    Produced and consumed within a single training step, never persisted.
    """

    score: float
    squared_norm: float
