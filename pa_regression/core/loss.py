# pa_regression/core/loss.py
from __future__ import annotations


def epsilon_insensitive_loss(predicted: float, target: float, epsilon: float) -> float:
    """
    max(0, |predicted - target| - epsilon)

    Zero inside the epsilon tube. epsilon has no sign constraint.
    """
    loss = abs(predicted - target) - epsilon
    return loss if loss > 0.0 else 0.0
