from __future__ import annotations
from enum import Enum
from typing import FrozenSet, List

from .errors import UnknownFilterError


class ParamKey(str, Enum):
    """Parameter names a filter can accept, with the slider -> value factor."""

    INTENSITY = "intensity"
    RADIUS = "radius"
    SCALE = "scale"

    @property
    def factor(self) -> float:
        return _FACTORS[self]


_FACTORS = {
    ParamKey.INTENSITY: 1.0,
    ParamKey.RADIUS: 200.0,
    ParamKey.SCALE: 10.0,
}


class FilterVariant(Enum):
    # value = (display name, accepted keys); order is the menu order
    CRYSTALLIZE = ("Crystallize", frozenset({ParamKey.RADIUS}))
    EDGES = ("Edges", frozenset({ParamKey.INTENSITY}))
    GAUSSIAN_BLUR = ("Gaussian Blur", frozenset({ParamKey.RADIUS}))
    PIXELLATE = ("Pixellate", frozenset({ParamKey.SCALE}))
    SEPIA_TONE = ("Sepia Tone", frozenset({ParamKey.INTENSITY}))
    UNSHARP_MASK = ("Unsharp Mask", frozenset({ParamKey.INTENSITY, ParamKey.RADIUS}))
    VIGNETTE = ("Vignette", frozenset({ParamKey.INTENSITY, ParamKey.RADIUS}))

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def accepted_keys(self) -> FrozenSet[ParamKey]:
        return self.value[1]

    @classmethod
    def from_name(cls, text: str) -> "FilterVariant":
        """
        Resolve user input to a variant. Accepts the member name, the display
        name, or any spelling that differs only by case, spaces, dashes or
        underscores ("gaussian-blur", "GaussianBlur", "Gaussian Blur").
        """
        wanted = _squash(text)
        for variant in cls:
            if wanted in (_squash(variant.name), _squash(variant.display_name)):
                return variant
        known = ", ".join(v.display_name for v in cls)
        raise UnknownFilterError(f"Unknown filter: {text!r} (choose from {known})")


def _squash(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch.isalnum())


def accepted_keys(variant: FilterVariant) -> FrozenSet[ParamKey]:
    return variant.accepted_keys


def display_name(variant: FilterVariant) -> str:
    return variant.display_name


def all_variants() -> List[FilterVariant]:
    return list(FilterVariant)
