# pa_regression/io/dataset.py
from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Iterator, List, Tuple

import numpy as np
import pandas as pd

from pa_regression import logs
from pa_regression.config.training_config import DatasetConfig
from pa_regression.core.types import FeatureEntry
from pa_regression.io.features import parse_features
from pa_regression.utils.errors import UserInputError

Example = Tuple[List[FeatureEntry], float]


def validate_example(features: List[FeatureEntry], target: float) -> None:
    """
    Reject examples the PA core assumes never arrive:
    - empty feature list
    - duplicate feature id within the example
    - non-finite feature value / target
    """
    if not features:
        raise UserInputError("Example has no features")

    seen = set()
    for feature_id, value in features:
        if feature_id in seen:
            raise UserInputError(f"Duplicate feature id in example: {feature_id!r}")
        seen.add(feature_id)

        if not math.isfinite(value):
            raise UserInputError(f"Non-finite value for feature {feature_id!r}: {value}")

    if not math.isfinite(target):
        raise UserInputError(f"Non-finite target: {target}")


def iter_examples(
    df: pd.DataFrame,
    *,
    features_column: str = "features",
    target_column: str = "target",
    delimiter: str = " ",
    int_ids: bool = False,
    drop_invalid: bool = True,
) -> Iterator[Example]:
    """
    DataFrame rows -> (features, target), in row order.

    The features cell holds a list of tokens or a delimited string.
    Invalid rows are dropped with a warning (drop_invalid=True) or raise.
    """
    for col in (features_column, target_column):
        if col not in df.columns:
            raise UserInputError(f"Missing column: {col!r}")

    targets = pd.to_numeric(df[target_column], errors="coerce")
    targets = targets.replace([np.inf, -np.inf], np.nan)

    dropped = 0
    for row_no, (raw, target) in enumerate(zip(df[features_column], targets)):
        try:
            features = parse_features(_tokens(raw, delimiter), int_ids=int_ids)
            validate_example(features, float(target))
        except UserInputError as e:
            if not drop_invalid:
                raise
            dropped += 1
            logs.warning(f"[Dataset] drop row={row_no}: {e}")
            continue

        yield features, float(target)

    if dropped:
        logs.warning(f"[Dataset] dropped {dropped} invalid rows")


def load_examples(
    path: str | Path,
    cfg: DatasetConfig | None = None,
) -> List[Example]:
    cfg = cfg if cfg is not None else DatasetConfig()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Example file not found: {path}")

    df = pd.read_csv(path, dtype={cfg.features_column: str})
    logs.info(f"[Dataset] loaded rows={len(df)} from {path}")

    return list(
        iter_examples(
            df,
            features_column=cfg.features_column,
            target_column=cfg.target_column,
            delimiter=cfg.delimiter,
            int_ids=cfg.int_ids,
            drop_invalid=cfg.drop_invalid,
        )
    )


def _tokens(raw: Any, delimiter: str) -> List[Any]:
    if isinstance(raw, str):
        return [t for t in raw.split(delimiter) if t.strip()]
    if isinstance(raw, (list, tuple, np.ndarray)):
        return list(raw)
    # NaN / None cell
    return []
