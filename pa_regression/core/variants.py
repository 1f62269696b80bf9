# pa_regression/core/variants.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

from pa_regression.core.step_size import pa1_eta, pa2_eta
from pa_regression.utils.errors import ConfigurationError


class Variant(str, Enum):
    PA1 = "PA1"
    PA1A = "PA1a"
    PA2 = "PA2"
    PA2A = "PA2a"


EtaFn = Callable[[float, float, float], float]


@dataclass(frozen=True)
class VariantSpec:
    """
    VariantSpec（FROZEN）

    Per-variant behaviour, selected once at session creation:
    - eta          : step-size rule (loss, squared_norm, C) -> eta
    - default_c    : aggressiveness when none is configured
    - adaptive     : epsilon scaled by running stddev of targets
    """

    variant: Variant
    eta: EtaFn
    default_c: float
    adaptive: bool


# ------------------------------------------------------------------
# Dispatch table（唯一注册处）
# ------------------------------------------------------------------
_VARIANT_REGISTRY: Dict[Variant, VariantSpec] = {
    Variant.PA1: VariantSpec(Variant.PA1, pa1_eta, math.inf, False),
    Variant.PA1A: VariantSpec(Variant.PA1A, pa1_eta, math.inf, True),
    Variant.PA2: VariantSpec(Variant.PA2, pa2_eta, 1.0, False),
    Variant.PA2A: VariantSpec(Variant.PA2A, pa2_eta, 1.0, True),
}

# SQL function names of the table-function front end
_ALIASES: Dict[str, Variant] = {
    "train_pa1_regr": Variant.PA1,
    "train_pa1a_regr": Variant.PA1A,
    "train_pa2_regr": Variant.PA2,
    "train_pa2a_regr": Variant.PA2A,
}


def resolve_variant(variant: Union[Variant, str]) -> VariantSpec:
    """
    Variant | "PA1" | "pa2a" | "train_pa1_regr" -> VariantSpec

    Unknown name -> ConfigurationError
    """
    if isinstance(variant, Variant):
        return _VARIANT_REGISTRY[variant]

    key = str(variant).strip().lower()
    lookup = {v.value.lower(): v for v in Variant}
    lookup.update(_ALIASES)

    if key not in lookup:
        available = ", ".join(v.value for v in Variant)
        raise ConfigurationError(
            f"Unknown PA variant: {variant!r}. Available: {available}"
        )

    return _VARIANT_REGISTRY[lookup[key]]
