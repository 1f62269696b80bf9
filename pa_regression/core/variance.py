# pa_regression/core/variance.py
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class VarianceState:
    count: int = 0
    mean: float = 0.0
    sum_sq_diff: float = 0.0


class OnlineVarianceTracker:
    """
    OnlineVarianceTracker（Welford）

    Incremental mean / sample variance over a stream of values.

    Invariants:
    - count only increases
    - sum_sq_diff >= 0
    - result depends on call order (feed in arrival order)
    """

    def __init__(self):
        self._count = 0
        self._mean = 0.0
        self._sum_sq_diff = 0.0

    def handle(self, value: float) -> None:
        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        delta2 = value - self._mean
        self._sum_sq_diff += delta * delta2

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    @property
    def count(self) -> int:
        return self._count

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def state(self) -> VarianceState:
        return VarianceState(
            count=self._count,
            mean=self._mean,
            sum_sq_diff=self._sum_sq_diff,
        )

    def variance(self) -> float:
        """Sample variance (divisor n - 1); 0.0 below two samples."""
        if self._count < 2:
            return 0.0
        return self._sum_sq_diff / (self._count - 1)

    def stddev(self) -> float:
        return math.sqrt(self.variance())

    def __repr__(self) -> str:
        return (
            f"OnlineVarianceTracker(count={self._count}, "
            f"mean={self._mean:.6g}, stddev={self.stddev():.6g})"
        )
