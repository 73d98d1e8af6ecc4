from __future__ import annotations
import logging
from typing import Mapping, Optional

import cv2
import numpy as np

from .catalog import FilterVariant, ParamKey
from .filters import make_filter
from .normalize import FilterConfiguration

log = logging.getLogger(__name__)


class ProcessingPipeline:
    """Source image + configured filter -> result image, or None when there is no output."""

    def apply(
        self,
        variant: FilterVariant,
        params: Mapping[ParamKey, float],
        source: Optional[np.ndarray],
    ) -> Optional[np.ndarray]:
        if source is None:
            return None
        flt = make_filter(variant)
        try:
            flt.set_input(source)
            for key, value in params.items():
                flt.set_parameter(key, value)
            return flt.compute_output()
        except (cv2.error, ValueError, KeyError) as e:
            # no preview rather than a crash
            log.warning("%s produced no output: %s", variant.display_name, e)
            return None

    def run(self, config: FilterConfiguration, source: Optional[np.ndarray]) -> Optional[np.ndarray]:
        return self.apply(config.variant, config.params, source)


def apply(
    variant: FilterVariant,
    params: Mapping[ParamKey, float],
    source: Optional[np.ndarray],
) -> Optional[np.ndarray]:
    return ProcessingPipeline().apply(variant, params, source)
