# pa_regression/io/features.py
from __future__ import annotations

from typing import Any, Iterable, List

from pa_regression.core.types import FeatureEntry
from pa_regression.utils.errors import UserInputError


def parse_feature(token: Any, *, int_ids: bool = False) -> FeatureEntry:
    """
    Feature token -> FeatureEntry

    Accepted forms:
        "name:value"  -> (name, float(value)), split at the first ':'
        "name"        -> (name, 1.0)
        int           -> (int, 1.0)
        (id, value)   -> (id, float(value))
        FeatureEntry  -> unchanged

    int_ids=True turns all-digit names into int keys.
    """
    if isinstance(token, FeatureEntry):
        return token

    if isinstance(token, (tuple, list)) and len(token) == 2:
        feature_id, value = token
        return FeatureEntry(feature_id, _to_float(value, token))

    if isinstance(token, int) and not isinstance(token, bool):
        return FeatureEntry(token, 1.0)

    if not isinstance(token, str):
        raise UserInputError(f"Unsupported feature token: {token!r}")

    text = token.strip()
    pos = text.find(":")

    if pos == 0 or not text:
        raise UserInputError(f"Invalid feature token: {token!r}")

    if pos > 0:
        name = text[:pos]
        value = _to_float(text[pos + 1:], token)
    else:
        name = text
        value = 1.0

    if int_ids and name.isdigit():
        return FeatureEntry(int(name), value)
    return FeatureEntry(name, value)


def parse_features(tokens: Iterable[Any], *, int_ids: bool = False) -> List[FeatureEntry]:
    return [parse_feature(t, int_ids=int_ids) for t in tokens]


def _to_float(value: Any, token: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise UserInputError(f"Invalid feature value in token {token!r}") from e
