# pa_regression/core/step_size.py
"""
Closed-form PA step sizes.

Both minimise weight movement subject to driving the loss to zero:
PA-I caps the step at C, PA-II softens the denominator by 0.5 / C.
Division by zero yields +inf (discarded downstream), never an exception.
"""
from __future__ import annotations

import math


def pa1_eta(loss: float, squared_norm: float, c: float) -> float:
    """min(C, loss / |x|^2)"""
    ratio = math.inf if squared_norm == 0.0 else loss / squared_norm
    return min(c, ratio)


def pa2_eta(loss: float, squared_norm: float, c: float) -> float:
    """loss / (|x|^2 + 0.5 / C)"""
    denominator = squared_norm + 0.5 / c
    if denominator == 0.0:
        # C = +inf with an all-zero example
        return math.inf
    return loss / denominator
