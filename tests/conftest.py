import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class RecordingCanvas:
    """Collects draw calls instead of drawing them."""

    def __init__(self):
        self.calls = []

    def image(self, key, x, y, w, h, angle=0.0, centered=False, flip=False):
        self.calls.append(("image", key, x, y, w, h, angle, centered, flip))

    def text(self, msg, x, y, size, anchor="center", color=(255, 255, 255)):
        self.calls.append(("text", msg, x, y, size, anchor, color))

    def images(self, key):
        return [c for c in self.calls if c[0] == "image" and c[1] == key]

    def texts(self):
        return [c[1] for c in self.calls if c[0] == "text"]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def canvas():
    return RecordingCanvas()
