import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def gradient_rgb():
    """64x64 RGB with a horizontal red ramp, vertical green ramp, constant blue."""
    h, w = 64, 64
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[..., 0] = np.linspace(0, 255, w, dtype=np.uint8)[None, :]
    img[..., 1] = np.linspace(0, 255, h, dtype=np.uint8)[:, None]
    img[..., 2] = 128
    return img


@pytest.fixture
def flat_rgb():
    img = np.empty((48, 64, 3), dtype=np.uint8)
    img[...] = (200, 120, 40)
    return img
