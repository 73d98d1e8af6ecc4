from __future__ import annotations
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np

from .errors import PersistenceFailure
from .helpers import SaveConfig, ensure_dir, list_images, load_image_rgb, save_image_rgb

log = logging.getLogger(__name__)


class ImagePicker:
    """
    Hands out source images. With an explicit path it loads that file; without
    one it takes the most recently modified image under `root`. A pick with
    nothing to pick is a cancelled pick and yields None.
    """

    def __init__(self, root: Optional[str | os.PathLike] = None) -> None:
        self.root = Path(root) if root is not None else None
        self.last_path: Optional[str] = None

    def pick_image(self, path: Optional[str | os.PathLike] = None) -> Optional[np.ndarray]:
        if path is None:
            path = self._latest()
            if path is None:
                log.info("image pick cancelled: nothing to pick")
                return None
        img = load_image_rgb(path)
        self.last_path = str(path)
        return img

    def _latest(self) -> Optional[str]:
        if self.root is None or not self.root.is_dir():
            return None
        candidates = list_images(self.root)
        if not candidates:
            return None
        return max(candidates, key=lambda p: os.path.getmtime(p))


class ImageSaver:
    """
    Writes finished images into a photo library directory.

    Outcome is reported through the handlers: `success_handler(path)` after a
    write, `error_handler(PersistenceFailure)` on failure. Without an error
    handler the failure is raised instead.
    """

    def __init__(
        self,
        library_dir: str | os.PathLike,
        config: Optional[SaveConfig] = None,
        success_handler: Optional[Callable[[Path], None]] = None,
        error_handler: Optional[Callable[[PersistenceFailure], None]] = None,
    ) -> None:
        self.library_dir = Path(library_dir)
        self.config = config or SaveConfig()
        self.success_handler = success_handler
        self.error_handler = error_handler

    def _next_path(self) -> Path:
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        base = f"{self.config.prefix}_{stamp}"
        path = self.library_dir / f"{base}{self.config.extension}"
        n = 1
        while path.exists():
            path = self.library_dir / f"{base}_{n}{self.config.extension}"
            n += 1
        return path

    def write_to_photo_album(self, image: np.ndarray) -> Optional[Path]:
        try:
            ensure_dir(self.library_dir)
            path = self._next_path()
            if not save_image_rgb(path, image):
                raise PersistenceFailure(f"could not encode image to {path.name}")
        except PersistenceFailure as e:
            return self._fail(e)
        except (OSError, cv2.error) as e:
            return self._fail(PersistenceFailure(str(e)))

        log.info("saved %s", path)
        if self.success_handler is not None:
            self.success_handler(path)
        return path

    def _fail(self, failure: PersistenceFailure) -> None:
        log.warning("save failed: %s", failure.reason)
        if self.error_handler is None:
            raise failure
        self.error_handler(failure)
        return None
