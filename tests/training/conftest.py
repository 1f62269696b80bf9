# tests/training/conftest.py
from __future__ import annotations

import pytest

from pa_regression.core.types import FeatureEntry


@pytest.fixture
def linear_stream():
    """
    y = 2*a - 1*b + 0.5*c, noiseless, deterministic order.
    """
    rows = []
    for i in range(200):
        a = ((i * 7) % 11) / 10.0
        b = ((i * 3) % 5) / 4.0
        c = 1.0 if i % 2 else -1.0
        features = [FeatureEntry("a", a), FeatureEntry("b", b), FeatureEntry("c", c)]
        rows.append((features, 2.0 * a - 1.0 * b + 0.5 * c))
    return rows
