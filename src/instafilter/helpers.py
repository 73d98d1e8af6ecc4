from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np
import os

from .catalog import FilterVariant
from .normalize import NormalizedControls

IMAGE_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp")


# Config dataclasses

@dataclass
class SaveConfig:
    extension: str = ".png"       # any format OpenCV can encode
    prefix: str = "instafilter"   # file name stem in the library

    def __post_init__(self) -> None:
        ext = self.extension.lower()
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in IMAGE_EXTENSIONS:
            raise ValueError(f"Unsupported extension {self.extension!r}; use one of {IMAGE_EXTENSIONS}")
        self.extension = ext


@dataclass
class EditorConfig:
    default_filter: FilterVariant = FilterVariant.SEPIA_TONE
    default_controls: NormalizedControls = field(default_factory=NormalizedControls)
    library_dir: Optional[str] = None   # None => don't save
    show: bool = False
    save: SaveConfig = field(default_factory=SaveConfig)


# I/O & filesystem helpers

def ensure_dir(path: str | os.PathLike) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def load_image_rgb(path: str | os.PathLike) -> np.ndarray:
    """Load an image as RGB uint8. Raises on failure."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_image_rgb(path: str | os.PathLike, img_rgb: np.ndarray) -> bool:
    """Write an RGB image; False when OpenCV could not encode/write it."""
    return bool(cv2.imwrite(str(path), cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR)))


def list_images(
    dir_path: str | os.PathLike,
    extensions: Tuple[str, ...] = IMAGE_EXTENSIONS,
) -> List[str]:
    p = Path(dir_path)
    return [
        str(fp) for fp in sorted(p.iterdir())
        if fp.is_file() and fp.suffix.lower() in extensions
    ]
