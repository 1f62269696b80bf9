# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

from pa_regression.config.training_config import PAConfig
from pa_regression.core.types import FeatureEntry
from pa_regression.training.context import TrainingSession


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(autouse=True)
def _clear_pa_env(monkeypatch):
    for key in ("PA_VARIANT", "PA_AGGRESSIVENESS", "PA_EPSILON"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def single_feature():
    """x = {1: 1.0}"""
    return [FeatureEntry(1, 1.0)]


@pytest.fixture
def make_session():
    """
    Factory fixture for TrainingSession.

    Usage:
        session = make_session("PA2", aggressiveness=1.0)
    """

    def _make(variant: str = "PA1", **kwargs) -> TrainingSession:
        return TrainingSession.create(PAConfig(variant=variant, **kwargs))

    return _make


@pytest.fixture
def examples_csv(tmp_path):
    """
    features,target
    "a:1.0 b:2.0",3.0
    ...
    """
    p = tmp_path / "examples.csv"
    p.write_text(
        "features,target\n"
        "a:1.0 b:2.0,3.0\n"
        "a:0.5 c:1.0,1.0\n"
        "b:1.0,2.0\n"
        "a:1.0 a:2.0,1.0\n"     # duplicate id -> dropped
        "c:1.0,\n",            # missing target -> dropped
        encoding="utf-8",
    )
    return p
