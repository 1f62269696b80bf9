# pa_regression/io/export.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

import pandas as pd

from pa_regression import logs
from pa_regression.core.types import FeatureId
from pa_regression.core.weights import WeightModel
from pa_regression.utils.errors import UserInputError

WeightPairs = Iterable[Tuple[FeatureId, float]]


def weights_to_frame(pairs: WeightPairs) -> pd.DataFrame:
    """(feature, weight) pairs -> DataFrame[feature, weight]; no pruning."""
    return pd.DataFrame(list(pairs), columns=["feature", "weight"])


def write_weights(pairs: WeightPairs, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = weights_to_frame(pairs)
    df.to_csv(path, index=False)

    logs.info(f"[Export] wrote features={len(df)} to {path}")
    return path


def load_weights(path: str | Path, *, int_ids: bool = False) -> WeightModel:
    """
    Weights CSV -> WeightModel (read-only use: prediction).

    Missing file -> FileNotFoundError, empty feature cell -> UserInputError
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {path}")

    df = pd.read_csv(path, dtype={"feature": str})

    model = WeightModel()
    for row_no, (feature, weight) in enumerate(zip(df["feature"], df["weight"])):
        if pd.isna(feature):
            raise UserInputError(f"Empty feature in weights file {path} row={row_no}")
        if int_ids and feature.isdigit():
            feature = int(feature)
        model.add(feature, float(weight))
    return model


def average_weights(*partitions: WeightPairs) -> List[Tuple[FeatureId, float]]:
    """
    Merge per-partition models: mean weight per feature over the
    partitions that emitted it (avg(weight) ... GROUP BY feature).
    """
    frames = [weights_to_frame(p) for p in partitions]
    frames = [f for f in frames if not f.empty]
    if not frames:
        return []

    merged = (
        pd.concat(frames, ignore_index=True)
        .groupby("feature", sort=False)["weight"]
        .mean()
    )
    return [(feature, float(weight)) for feature, weight in merged.items()]
