#!/usr/bin/env python3
"""
Flappy Bird for an 800 × 600 pygame window
==========================================
Click the START button, then click to flap between the pipes. After a crash,
click anywhere to play again. Esc, closing the window, or gamepad buttons
7–9 quit.

Optionally mirrors every frame to a 64 × 32 RGB LED matrix (Piomatter).

Run:
```bash
python3 flappy_bird_game.py [--assets DIR] [--seed N] [--fps 60]
sudo python3 flappy_bird_game.py --matrix --headless
```
"""
import argparse
import logging
import os
import random
from typing import Optional

import pygame

from flappy_core import GameSession, H, W
from flappy_render import SurfaceCanvas, frame_to_matrix
from flappy_sprites import load_sprites

log = logging.getLogger("flappy_bird_game")

FPS = 60
QUIT_BUTTONS = (7, 8, 9)


class FlappyGame:
    def __init__(self, sprites, seed: Optional[int] = None, fps: int = FPS, matrix=None):
        pygame.init(); pygame.joystick.init()
        self.screen = pygame.display.set_mode((W, H))
        pygame.display.set_caption("Flappy Bird")
        self.pad = pygame.joystick.Joystick(0) if pygame.joystick.get_count() else None
        if self.pad:
            self.pad.init()
        self.canvas = SurfaceCanvas(self.screen, sprites)
        self.session = GameSession(random.Random(seed))
        self.fps = fps
        self.matrix = matrix
        self.tick = 0

    # input
    def process_events(self) -> bool:
        """Forward clicks to the session. Returns False when asked to quit."""
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                return False
            if e.type == pygame.JOYBUTTONDOWN and e.button in QUIT_BUTTONS:
                return False
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                self.session.click(*e.pos)
        return True

    # main loop
    def run(self):
        clock = pygame.time.Clock()
        while self.process_events():
            self.tick += 1
            self.session.update(self.tick)
            self.session.render(self.canvas)
            pygame.display.flip()
            if self.matrix is not None:
                self.matrix.show(frame_to_matrix(self.screen))
            clock.tick(self.fps)
        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Flappy Bird (pygame, optional LED matrix mirror)")
    p.add_argument("--assets", help="directory with bird.png, sky.png, pipe.png, start.png")
    p.add_argument("--seed", type=int, help="seed for the pipe gaps")
    p.add_argument("--fps", type=int, default=FPS)
    p.add_argument("--matrix", action="store_true", help="mirror frames to a 64x32 LED panel")
    p.add_argument("--headless", action="store_true", help="no window (SDL dummy video driver)")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )
    if args.headless:
        os.environ["SDL_VIDEODRIVER"] = "dummy"

    matrix = None
    if args.matrix:
        from flappy_matrix import LEDDisplay
        matrix = LEDDisplay()

    sprites = load_sprites(args.assets)
    log.info("starting at %d FPS, seed %s", args.fps, args.seed)
    FlappyGame(sprites, seed=args.seed, fps=args.fps, matrix=matrix).run()


# ───────────────────────────── Entrypoint ───────────────────────────────────
if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
