# tests/io/test_dataset.py
import math

import pandas as pd
import pytest

from pa_regression.config.training_config import DatasetConfig
from pa_regression.core.types import FeatureEntry
from pa_regression.io.dataset import iter_examples, load_examples, validate_example
from pa_regression.utils.errors import UserInputError


# =============================================================================
# validate_example
# =============================================================================

def test_valid_example_passes():
    validate_example([FeatureEntry("a", 1.0), FeatureEntry("b", 0.0)], 2.0)


@pytest.mark.parametrize(
    "features, target, match",
    [
        ([], 1.0, "no features"),
        ([FeatureEntry("a", 1.0), FeatureEntry("a", 2.0)], 1.0, "Duplicate"),
        ([FeatureEntry("a", math.nan)], 1.0, "Non-finite value"),
        ([FeatureEntry("a", 1.0)], math.inf, "Non-finite target"),
        ([FeatureEntry("a", 1.0)], math.nan, "Non-finite target"),
    ],
)
def test_invalid_examples(features, target, match):
    with pytest.raises(UserInputError, match=match):
        validate_example(features, target)


# =============================================================================
# iter_examples
# =============================================================================

def test_iter_examples_from_strings_and_lists():
    df = pd.DataFrame(
        {
            "features": ["a:1.0 b:2.0", ["c:3.0"]],
            "target": [1.0, 2.0],
        }
    )

    out = list(iter_examples(df))

    assert out == [
        ([FeatureEntry("a", 1.0), FeatureEntry("b", 2.0)], 1.0),
        ([FeatureEntry("c", 3.0)], 2.0),
    ]


def test_iter_examples_custom_columns_and_delimiter():
    df = pd.DataFrame({"x": ["1:0.5,2:0.5"], "y": [3]})

    out = list(iter_examples(df, features_column="x", target_column="y", delimiter=",", int_ids=True))

    assert out == [([FeatureEntry(1, 0.5), FeatureEntry(2, 0.5)], 3.0)]


def test_invalid_rows_dropped():
    df = pd.DataFrame(
        {
            "features": ["a:1", "a:1 a:2", None, "b:1"],
            "target": [1.0, 1.0, 1.0, float("inf")],
        }
    )

    out = list(iter_examples(df))

    assert out == [([FeatureEntry("a", 1.0)], 1.0)]


def test_invalid_rows_raise_when_not_dropping():
    df = pd.DataFrame({"features": ["a:1 a:2"], "target": [1.0]})

    with pytest.raises(UserInputError, match="Duplicate"):
        list(iter_examples(df, drop_invalid=False))


def test_missing_column_raises():
    df = pd.DataFrame({"features": ["a:1"]})

    with pytest.raises(UserInputError, match="Missing column"):
        list(iter_examples(df))


# =============================================================================
# load_examples
# =============================================================================

def test_load_examples(examples_csv):
    out = load_examples(examples_csv)

    assert len(out) == 3
    assert out[0] == ([FeatureEntry("a", 1.0), FeatureEntry("b", 2.0)], 3.0)
    assert out[2] == ([FeatureEntry("b", 1.0)], 2.0)


def test_load_examples_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_examples(tmp_path / "nope.csv", DatasetConfig())
