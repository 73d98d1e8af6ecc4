from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, TYPE_CHECKING

import numpy as np

from .catalog import FilterVariant, ParamKey
from .errors import NoSourceImage
from .normalize import FilterConfiguration, NormalizedControls, configure
from .pipeline import ProcessingPipeline

if TYPE_CHECKING:
    from .library import ImageSaver

_PIPELINE = ProcessingPipeline()


@dataclass(frozen=True)
class EditingSession:
    """
    Everything one editing session knows. Handlers below take a session and
    return a new one with `result` already recomputed, so `result` always
    belongs to the current source + configuration (or is None).
    """

    variant: FilterVariant = FilterVariant.SEPIA_TONE
    controls: NormalizedControls = field(default_factory=NormalizedControls)
    source_path: Optional[str] = None
    source: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    result: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    @property
    def configuration(self) -> FilterConfiguration:
        return configure(self.variant, self.controls)

    @property
    def has_image(self) -> bool:
        return self.source is not None

    @property
    def has_output(self) -> bool:
        return self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        # pixel buffers are not serialized; reload from source_path
        return {
            "variant": self.variant.name,
            "controls": self.controls.to_dict(),
            "source_path": self.source_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditingSession":
        return cls(
            variant=FilterVariant[data["variant"]],
            controls=NormalizedControls.from_dict(data.get("controls", {})),
            source_path=data.get("source_path"),
        )


def _recompute(session: EditingSession, pipeline: Optional[ProcessingPipeline]) -> EditingSession:
    pipeline = pipeline or _PIPELINE
    result = pipeline.run(session.configuration, session.source)
    return replace(session, result=result)


def load_image(
    session: EditingSession,
    image: Optional[np.ndarray],
    path: Optional[str] = None,
    pipeline: Optional[ProcessingPipeline] = None,
) -> EditingSession:
    """Bind a freshly picked image. A cancelled pick (None) leaves the session as is."""
    if image is None:
        return session
    return _recompute(replace(session, source=image, source_path=path), pipeline)


def select_filter(
    session: EditingSession,
    variant: FilterVariant,
    pipeline: Optional[ProcessingPipeline] = None,
) -> EditingSession:
    # controls carry over untouched, including ones the new filter ignores
    return _recompute(replace(session, variant=variant), pipeline)


def set_control(
    session: EditingSession,
    key: ParamKey,
    value: float,
    pipeline: Optional[ProcessingPipeline] = None,
) -> EditingSession:
    return _recompute(replace(session, controls=session.controls.with_value(key, value)), pipeline)


def set_intensity(
    session: EditingSession,
    value: float,
    pipeline: Optional[ProcessingPipeline] = None,
) -> EditingSession:
    """Single-slider mode: one value feeds intensity, radius and scale."""
    return _recompute(replace(session, controls=NormalizedControls.uniform(value)), pipeline)


def save(session: EditingSession, saver: "ImageSaver"):
    if session.result is None:
        raise NoSourceImage()
    return saver.write_to_photo_album(session.result)
