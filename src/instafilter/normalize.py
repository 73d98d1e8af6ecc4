from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping

from .catalog import FilterVariant, ParamKey


@dataclass(frozen=True)
class NormalizedControls:
    # slider values, nominally in [0, 1]; not clamped here
    intensity: float = 0.5
    radius: float = 0.5
    scale: float = 0.5

    @classmethod
    def uniform(cls, value: float) -> "NormalizedControls":
        """Single-slider mode: one value drives every key."""
        return cls(intensity=value, radius=value, scale=value)

    def value_for(self, key: ParamKey) -> float:
        return float(getattr(self, key.value))

    def with_value(self, key: ParamKey, value: float) -> "NormalizedControls":
        return replace(self, **{key.value: float(value)})

    def to_dict(self) -> Dict[str, float]:
        return {k.value: self.value_for(k) for k in ParamKey}

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "NormalizedControls":
        known = {k.value for k in ParamKey}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


@dataclass(frozen=True)
class FilterConfiguration:
    variant: FilterVariant
    params: Dict[ParamKey, float] = field(default_factory=dict)


def normalize(variant: FilterVariant, controls: NormalizedControls) -> Dict[ParamKey, float]:
    """
    Concrete parameters for `variant`: intensity as-is, radius x200, scale x10.
    Keys the variant does not accept are left out.
    """
    return {key: controls.value_for(key) * key.factor for key in variant.accepted_keys}


def configure(variant: FilterVariant, controls: NormalizedControls) -> FilterConfiguration:
    return FilterConfiguration(variant=variant, params=normalize(variant, controls))
