# pa_regression/config/training_config.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from pa_regression.core.variants import Variant, VariantSpec, resolve_variant
from pa_regression.utils.errors import ConfigurationError


class PAConfig(BaseModel):
    """
    PAConfig（FROZEN once training starts）

    - variant        : PA1 / PA1a / PA2 / PA2a
    - aggressiveness : C, None -> variant default (+inf for PA1*, 1.0 for PA2*)
    - epsilon        : insensitivity margin, no sign constraint
    """

    model_config = ConfigDict(frozen=True)

    variant: Variant = Variant.PA1
    aggressiveness: Optional[float] = None
    epsilon: float = 0.1

    @field_validator("variant", mode="before")
    @classmethod
    def _resolve_variant_name(cls, v):
        return resolve_variant(v).variant

    @property
    def spec(self) -> VariantSpec:
        return resolve_variant(self.variant)

    def resolved_aggressiveness(self) -> float:
        """
        C actually used by the step-size rule.

        C must satisfy C > 0 (NaN fails too) -> ConfigurationError
        """
        c = self.aggressiveness
        if c is None:
            c = self.spec.default_c

        if not c > 0.0:
            raise ConfigurationError(
                f"Aggressiveness parameter C must be C > 0: {c}"
            )
        return float(c)


class DatasetConfig(BaseModel):
    """Column layout of an example table (caller layer)."""

    features_column: str = "features"
    target_column: str = "target"
    delimiter: str = " "
    int_ids: bool = False
    drop_invalid: bool = True
