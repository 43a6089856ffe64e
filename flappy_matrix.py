"""
64 × 32 RGB LED matrix mirror for the Flappy Bird window (Piomatter, Pi 5).
"""
import logging

import numpy as np

from flappy_render import MATRIX_H, MATRIX_W

try:
    import adafruit_blinka_raspberry_pi5_piomatter as piomatter
except ImportError as exc:
    raise RuntimeError("Piomatter driver missing; install via pip on Pi 5") from exc

log = logging.getLogger(__name__)


class LEDDisplay:
    """NumPy‑backed framebuffer pushed to the panel with Piomatter."""

    def __init__(self, w: int = MATRIX_W, h: int = MATRIX_H):
        self.w, self.h = w, h
        self.fb = np.zeros((h, w, 3), dtype=np.uint8)
        geom = piomatter.Geometry(width=w, height=h, n_addr_lines=4,
                                  rotation=piomatter.Orientation.Normal)
        self.matrix = piomatter.PioMatter(colorspace=piomatter.Colorspace.RGB888Packed,
                                          pinout=piomatter.Pinout.AdafruitMatrixBonnet,
                                          framebuffer=self.fb, geometry=geom)
        log.info("LED matrix %dx%d ready", w, h)

    def show(self, frame: np.ndarray):
        self.fb[:] = frame
        try:
            self.matrix.show()
        except TimeoutError:
            log.debug("panel busy, frame dropped")
