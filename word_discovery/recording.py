"""Screenshots, PNG frame sequences and video capture of the pygame surface."""
from __future__ import annotations

import logging
import os
import time
from typing import Optional

import numpy as np
import pygame
from PIL import Image

try:  # imageio is optional during import so we can surface nicer errors later.
    import imageio.v2 as imageio
except Exception:  # pragma: no cover - defer error handling until runtime
    imageio = None

try:  # Pillow < 10 compatibility
    RESAMPLE = Image.Resampling.LANCZOS
except AttributeError:  # pragma: no cover - fallback for older Pillow
    RESAMPLE = Image.LANCZOS

LOG = logging.getLogger("text_discovery.recording")


def surface_to_array(surface: pygame.Surface) -> np.ndarray:
    """(height, width, 3) uint8 copy of the surface."""
    return np.ascontiguousarray(pygame.surfarray.array3d(surface).swapaxes(0, 1))


def surface_to_image(surface: pygame.Surface, scale: float = 1.0) -> Image.Image:
    image = Image.fromarray(surface_to_array(surface))
    if abs(scale - 1.0) > 1e-6:
        w, h = image.size
        image = image.resize((max(1, int(w * scale)), max(1, int(h * scale))), RESAMPLE)
    return image


def save_screenshot(surface: pygame.Surface, directory: str, scale: float = 1.0) -> Optional[str]:
    timestamp = int(time.time() * 1000)
    path = os.path.join(directory, f"discovery_{timestamp}.png")
    try:
        os.makedirs(directory, exist_ok=True)
        surface_to_image(surface, scale).save(path)
    except OSError as exc:
        LOG.error("Screenshot failed (%s): %s", path, exc)
        return None
    LOG.info("Saved screenshot: %s", path)
    return path


class PngSequenceRecorder:
    """Writes numbered PNG frames while active."""

    def __init__(self, directory: str, scale: float = 1.0):
        self.directory = directory
        self.scale = scale
        self.active = False
        self.count = 0

    def toggle(self) -> bool:
        self.active = not self.active
        if self.active:
            os.makedirs(self.directory, exist_ok=True)
            self.count = 0
        LOG.info("PNG frames: %s -> %s", "ON" if self.active else "OFF", self.directory)
        return self.active

    def write(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        path = os.path.join(self.directory, f"f_{self.count:06d}.png")
        try:
            surface_to_image(surface, self.scale).save(path)
        except OSError as exc:
            LOG.error("PNG frame write failed, stopping sequence: %s", exc)
            self.active = False
            return
        self.count += 1


class VideoRecorder:
    """imageio writer opened on the first frame after start()."""

    def __init__(self, directory: str, fps: int, codec: str = "libx264", scale: float = 1.0):
        self.directory = directory
        self.fps = fps
        self.codec = codec
        self.scale = scale
        self.active = False
        self.path: Optional[str] = None
        self._writer = None

    def start(self) -> bool:
        if imageio is None:
            LOG.error("imageio is not installed; video recording unavailable")
            return False
        os.makedirs(self.directory, exist_ok=True)
        self.path = os.path.join(self.directory, time.strftime("discovery_%Y%m%d_%H%M%S.mp4"))
        self.active = True
        LOG.info("Video: ON -> %s", self.path)
        return True

    def toggle(self) -> bool:
        if self.active:
            self.stop()
            return False
        return self.start()

    def write(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        frame = np.array(surface_to_image(surface, self.scale))
        try:
            if self._writer is None:
                self._writer = imageio.get_writer(self.path, fps=self.fps, codec=self.codec, quality=8)
            self._writer.append_data(frame)
        except Exception as exc:
            LOG.error("Video writer failed, recording stopped: %s", exc)
            self._writer = None
            self.active = False

    def stop(self) -> None:
        if self._writer is not None:
            try:
                self._writer.close()
            except Exception as exc:
                LOG.error("Closing video writer failed: %s", exc)
            self._writer = None
            LOG.info("Video: OFF (file finalized) %s", self.path)
        self.active = False
