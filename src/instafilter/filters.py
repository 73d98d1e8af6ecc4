from __future__ import annotations
import logging
from typing import Dict, Optional, Type

import cv2
import numpy as np
from skimage.segmentation import slic
from skimage.util import img_as_float

from .catalog import FilterVariant, ParamKey

log = logging.getLogger(__name__)


class ImageFilter:
    """
    One configurable filter over RGB uint8 images (H, W, 3).

    Mirrors the usual "set input, set parameters, read output" filter object:
    parameters not set explicitly fall back to `defaults`, and
    `compute_output()` returns None until an input image is bound.
    """

    variant: FilterVariant
    defaults: Dict[ParamKey, float] = {}

    def __init__(self) -> None:
        self._input: Optional[np.ndarray] = None
        self._params: Dict[ParamKey, float] = dict(self.defaults)

    @property
    def input_keys(self):
        return self.variant.accepted_keys

    def set_input(self, img_rgb: Optional[np.ndarray]) -> None:
        if img_rgb is not None:
            if img_rgb.ndim != 3 or img_rgb.shape[2] != 3:
                raise ValueError(f"expected an RGB image (H, W, 3), got shape {img_rgb.shape}")
            img_rgb = np.ascontiguousarray(img_rgb, dtype=np.uint8)
        self._input = img_rgb

    def set_parameter(self, key: ParamKey, value: float) -> None:
        key = ParamKey(key)
        if key not in self.input_keys:
            raise KeyError(f"{self.variant.display_name} does not accept {key.value!r}")
        self._params[key] = float(value)

    def parameter(self, key: ParamKey) -> float:
        # negative values behave as zero
        return max(0.0, self._params[ParamKey(key)])

    def compute_output(self) -> Optional[np.ndarray]:
        if self._input is None:
            return None
        log.debug("rendering %s with %s", self.variant.display_name,
                  {k.value: v for k, v in self._params.items()})
        return self.render(self._input)

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        raise NotImplementedError


def _clip_u8(arr: np.ndarray) -> np.ndarray:
    return np.clip(arr, 0, 255).astype(np.uint8)


class CrystallizeFilter(ImageFilter):
    """Superpixel polygons (SLIC) of roughly `radius` px, filled with their mean colour."""

    variant = FilterVariant.CRYSTALLIZE
    defaults = {ParamKey.RADIUS: 20.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        radius = self.parameter(ParamKey.RADIUS)
        if radius < 1.0:
            return img_rgb.copy()
        h, w = img_rgb.shape[:2]
        n_segments = int(max(1, min(h * w, round(h * w / (radius * radius)))))
        labels = slic(
            img_as_float(img_rgb),
            n_segments=n_segments,
            compactness=10.0,
            start_label=0,
            channel_axis=-1,
        ).astype(np.int64)

        # per-label mean colour
        flat = labels.ravel()
        n = int(flat.max()) + 1
        counts = np.maximum(np.bincount(flat, minlength=n), 1)
        out = np.empty_like(img_rgb)
        for c in range(3):
            sums = np.bincount(flat, weights=img_rgb[..., c].ravel().astype(np.float64), minlength=n)
            out[..., c] = _clip_u8(np.rint(sums / counts))[labels]
        return out


class EdgesFilter(ImageFilter):
    variant = FilterVariant.EDGES
    defaults = {ParamKey.INTENSITY: 1.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        src = img_rgb.astype(np.float32)
        gx = cv2.Sobel(src, cv2.CV_32F, 1, 0, ksize=3)
        gy = cv2.Sobel(src, cv2.CV_32F, 0, 1, ksize=3)
        mag = np.hypot(gx, gy)
        return _clip_u8(mag * self.parameter(ParamKey.INTENSITY))


class GaussianBlurFilter(ImageFilter):
    variant = FilterVariant.GAUSSIAN_BLUR
    defaults = {ParamKey.RADIUS: 10.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        sigma = self.parameter(ParamKey.RADIUS)
        if sigma <= 0.0:
            return img_rgb.copy()
        return cv2.GaussianBlur(img_rgb, (0, 0), sigmaX=sigma, borderType=cv2.BORDER_REFLECT)


class PixellateFilter(ImageFilter):
    """Blocks of `scale` px, each the block's mean colour."""

    variant = FilterVariant.PIXELLATE
    defaults = {ParamKey.SCALE: 8.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        block = int(round(self.parameter(ParamKey.SCALE)))
        if block <= 1:
            return img_rgb.copy()
        h, w = img_rgb.shape[:2]
        small = cv2.resize(
            img_rgb, (max(1, w // block), max(1, h // block)), interpolation=cv2.INTER_AREA
        )
        return cv2.resize(small, (w, h), interpolation=cv2.INTER_NEAREST)


_SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)


class SepiaToneFilter(ImageFilter):
    variant = FilterVariant.SEPIA_TONE
    defaults = {ParamKey.INTENSITY: 1.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        t = self.parameter(ParamKey.INTENSITY)
        src = img_rgb.astype(np.float32)
        sepia = np.clip(src @ _SEPIA.T, 0, 255)
        return _clip_u8(np.rint((1.0 - t) * src + t * sepia))


class UnsharpMaskFilter(ImageFilter):
    variant = FilterVariant.UNSHARP_MASK
    defaults = {ParamKey.RADIUS: 2.5, ParamKey.INTENSITY: 0.5}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        sigma = self.parameter(ParamKey.RADIUS)
        amount = self.parameter(ParamKey.INTENSITY)
        if sigma <= 0.0 or amount <= 0.0:
            return img_rgb.copy()
        src = img_rgb.astype(np.float32)
        blur = cv2.GaussianBlur(src, (0, 0), sigmaX=sigma, borderType=cv2.BORDER_REFLECT)
        return _clip_u8(np.rint(src + amount * (src - blur)))


class VignetteFilter(ImageFilter):
    """
    Darkens a band of `radius` px running in from the corners; `intensity`
    is the darkening at the very corner (1 = black). The band never reaches
    past half of the centre-to-corner distance, so the centre stays untouched.
    """

    variant = FilterVariant.VIGNETTE
    defaults = {ParamKey.RADIUS: 1.0, ParamKey.INTENSITY: 0.0}

    def render(self, img_rgb: np.ndarray) -> np.ndarray:
        band = self.parameter(ParamKey.RADIUS)
        strength = self.parameter(ParamKey.INTENSITY)
        if band <= 0.0 or strength <= 0.0:
            return img_rgb.copy()
        h, w = img_rgb.shape[:2]
        yy, xx = np.mgrid[0:h, 0:w].astype(np.float32)
        dist = np.hypot(xx - (w - 1) / 2.0, yy - (h - 1) / 2.0)
        reach = max(float(dist.max()), 1e-6)
        band = min(band, 0.5 * reach)
        ramp = np.clip((dist - (reach - band)) / band, 0.0, 1.0)
        ramp = ramp * ramp * (3.0 - 2.0 * ramp)  # smoothstep
        factor = np.clip(1.0 - strength * ramp, 0.0, None)
        return _clip_u8(np.rint(img_rgb.astype(np.float32) * factor[..., None]))


_FILTERS: Dict[FilterVariant, Type[ImageFilter]] = {
    cls.variant: cls
    for cls in (
        CrystallizeFilter,
        EdgesFilter,
        GaussianBlurFilter,
        PixellateFilter,
        SepiaToneFilter,
        UnsharpMaskFilter,
        VignetteFilter,
    )
}


def make_filter(variant: FilterVariant) -> ImageFilter:
    return _FILTERS[variant]()
