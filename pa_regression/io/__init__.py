# pa_regression/io/__init__.py
from .features import parse_feature, parse_features
from .dataset import iter_examples, load_examples, validate_example
from .export import average_weights, load_weights, weights_to_frame, write_weights

__all__ = [
    "parse_feature", "parse_features",
    "validate_example", "iter_examples", "load_examples",
    "weights_to_frame", "write_weights", "load_weights", "average_weights",
]
