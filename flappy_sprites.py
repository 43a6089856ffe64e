"""
Sprites for the Flappy Bird host.

Either loaded from an asset directory (``bird.png``, ``sky.png``, ``pipe.png``,
``start.png``) or drawn here so the game runs without any files.
All images are returned as Pillow ``RGBA`` images keyed by name.
"""
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

log = logging.getLogger(__name__)

SPRITE_FILES = {
    "bird": "bird.png",
    "sky": "sky.png",
    "pipe": "pipe.png",
    "start": "start.png",
}

BIRD_SIZE = (443, 311)
SKY_SIZE = (800, 600)
PIPE_SIZE = (52, 320)
START_SIZE = (200, 100)

COL_TAIL = (255, 140, 140, 255)
COL_WING = (255, 165,   0, 255)
COL_BODY = (255, 255,  50, 255)
COL_BEAK = (255, 215,   0, 255)
COL_EYE  = ( 20,  20,  20, 255)
COL_SKY_TOP = (78, 192, 202)
COL_SKY_BOTTOM = (222, 245, 228)
COL_PIPE = (84, 178, 44)
COL_PIPE_EDGE = (40, 90, 20)
COL_BUTTON = (240, 120, 40, 255)
COL_BUTTON_EDGE = (255, 255, 255, 255)

# 0 blank 1 tail 2 wing 3 body 4 beak 5 eye
BIRD_PATTERN = [
    [0, 0, 0, 0, 3, 3, 3, 3, 0, 0, 0],
    [0, 0, 0, 3, 3, 3, 3, 5, 3, 0, 0],
    [1, 1, 2, 2, 3, 3, 3, 3, 3, 4, 4],
    [1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4],
    [0, 1, 0, 2, 3, 3, 3, 3, 3, 4, 0],
    [0, 0, 0, 0, 3, 3, 3, 3, 0, 0, 0],
]
BIRD_COLOR = {1: COL_TAIL, 2: COL_WING, 3: COL_BODY, 4: COL_BEAK, 5: COL_EYE}


def vertical_gradient(size: Tuple[int, int], top, bottom) -> Image.Image:
    w, h = size
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None, None]
    rows = (1 - t) * np.array(top, np.float32) + t * np.array(bottom, np.float32)
    rgb = np.repeat(rows, w, axis=1).astype(np.uint8)
    return Image.fromarray(rgb).convert("RGBA")


def draw_bird() -> Image.Image:
    pattern = np.array(BIRD_PATTERN)
    px = np.zeros(pattern.shape + (4,), dtype=np.uint8)
    for cell, col in BIRD_COLOR.items():
        px[pattern == cell] = col
    return Image.fromarray(px).resize(BIRD_SIZE, Image.NEAREST)


def draw_sky() -> Image.Image:
    sky = vertical_gradient(SKY_SIZE, COL_SKY_TOP, COL_SKY_BOTTOM)
    d = ImageDraw.Draw(sky)
    w, h = SKY_SIZE
    # a few clouds and a ground strip so the scroll is visible
    for cx, cy in [(120, 110), (380, 60), (610, 150)]:
        for dx, r in [(-30, 26), (0, 36), (32, 24)]:
            d.ellipse([cx + dx - r, cy - r, cx + dx + r, cy + r], fill=(255, 255, 255, 255))
    d.rectangle([0, h - 24, w, h], fill=(222, 216, 149, 255))
    for x in range(0, w, 24):
        d.line([x, h - 24, x + 12, h - 12], fill=(200, 190, 120, 255), width=3)
    return sky


def draw_pipe() -> Image.Image:
    w, h = PIPE_SIZE
    # rounded shading across the pipe body
    shade = 0.65 + 0.5 * np.sin(np.linspace(0.2, np.pi - 0.2, w))
    body = np.clip(np.outer(np.ones(h), shade)[:, :, None] * np.array(COL_PIPE), 0, 255)
    rgba = np.dstack([body.astype(np.uint8), np.full((h, w), 255, np.uint8)])
    pipe = Image.fromarray(rgba)
    d = ImageDraw.Draw(pipe)
    d.rectangle([0, 0, w - 1, 23], outline=COL_PIPE_EDGE + (255,), width=2)
    d.line([0, 24, 0, h], fill=COL_PIPE_EDGE + (255,), width=2)
    d.line([w - 2, 24, w - 2, h], fill=COL_PIPE_EDGE + (255,), width=2)
    return pipe


def draw_start_button() -> Image.Image:
    w, h = START_SIZE
    img = Image.new("RGBA", START_SIZE, (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    d.rounded_rectangle([2, 2, w - 3, h - 3], radius=20, fill=COL_BUTTON,
                        outline=COL_BUTTON_EDGE, width=4)
    font = ImageFont.load_default()
    label = "START"
    left, top, right, bottom = d.textbbox((0, 0), label, font=font)
    d.text(((w - (right - left)) / 2 - left, (h - (bottom - top)) / 2 - top), label,
           font=font, fill=COL_BUTTON_EDGE)
    return img


BUILTIN = {
    "bird": draw_bird,
    "sky": draw_sky,
    "pipe": draw_pipe,
    "start": draw_start_button,
}


def load_sprites(asset_dir: Optional[Union[str, Path]] = None) -> Dict[str, Image.Image]:
    """Return the four sprites, read from ``asset_dir`` when given."""
    if asset_dir is None:
        log.info("using built-in sprites")
        return {name: draw() for name, draw in BUILTIN.items()}

    asset_dir = Path(asset_dir)
    sprites = {}
    for name, filename in SPRITE_FILES.items():
        path = asset_dir / filename
        if not path.is_file():
            raise FileNotFoundError(f"missing sprite {name!r}: {path}")
        with Image.open(path) as img:
            sprites[name] = img.convert("RGBA")
        log.info("loaded %s (%dx%d)", path, *sprites[name].size)
    return sprites
