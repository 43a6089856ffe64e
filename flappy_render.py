"""
pygame drawing for the Flappy Bird session, plus the LED matrix downsample.
"""
import math
from typing import Dict, Tuple

import numpy as np
import pygame
from PIL import Image, ImageEnhance

MATRIX_W, MATRIX_H = 64, 32
MATRIX_CONTRAST = 1.5
SCALE_CACHE_MAX = 512


def to_surface(img: Image.Image) -> pygame.Surface:
    img = img.convert("RGBA")
    return pygame.image.frombytes(img.tobytes(), img.size, "RGBA")


class SurfaceCanvas:
    """Drawing primitives the session renders through, backed by a pygame Surface."""

    def __init__(self, surface: pygame.Surface, sprites: Dict[str, Image.Image]):
        self.surface = surface
        self.sprites = {name: to_surface(img) for name, img in sprites.items()}
        self._scaled: Dict[Tuple[str, int, int, bool], pygame.Surface] = {}
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _sprite(self, key: str, w: int, h: int, flip: bool) -> pygame.Surface:
        cache_key = (key, w, h, flip)
        surf = self._scaled.get(cache_key)
        if surf is None:
            if len(self._scaled) >= SCALE_CACHE_MAX:
                self._scaled.clear()
            surf = pygame.transform.smoothscale(self.sprites[key], (w, h))
            if flip:
                surf = pygame.transform.flip(surf, False, True)
            self._scaled[cache_key] = surf
        return surf

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def image(self, key: str, x: float, y: float, w: float, h: float,
              angle: float = 0.0, centered: bool = False, flip: bool = False):
        """Draw sprite `key` into the rect (x, y, w, h).

        With `centered`, (x, y) is the rect centre. `angle` is in radians,
        positive turning clockwise on screen. `flip` mirrors vertically.
        """
        w, h = int(round(w)), int(round(h))
        if w <= 0 or h <= 0:
            return
        surf = self._sprite(key, w, h, flip)
        if angle:
            surf = pygame.transform.rotate(surf, -math.degrees(angle))
        pos = (round(x), round(y))
        rect = surf.get_rect(center=pos) if centered else surf.get_rect(topleft=pos)
        self.surface.blit(surf, rect)

    def text(self, msg: str, x: float, y: float, size: int,
             anchor: str = "center", color: Tuple[int, ...] = (255, 255, 255)):
        """Draw `msg` with the given pygame.Rect anchor ("center", "midtop", ...) at (x, y)."""
        surf = self._font(size).render(msg, True, color[:3])
        if len(color) == 4:
            surf.set_alpha(color[3])
        rect = surf.get_rect(**{anchor: (round(x), round(y))})
        self.surface.blit(surf, rect)


def frame_to_matrix(surface: pygame.Surface, size: Tuple[int, int] = (MATRIX_W, MATRIX_H),
                    contrast: float = MATRIX_CONTRAST) -> np.ndarray:
    """Downsample a rendered frame to an (h, w, 3) uint8 array for the LED panel."""
    rgb = np.ascontiguousarray(pygame.surfarray.array3d(surface).swapaxes(0, 1))
    img = Image.fromarray(rgb).resize(size, Image.LANCZOS)
    img = ImageEnhance.Contrast(img).enhance(contrast)
    return np.asarray(img, dtype=np.uint8)
