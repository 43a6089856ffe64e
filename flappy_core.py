"""
Flappy Bird simulation core
===========================
Bird physics, pipe stream, scoring and the start → playing → game‑over flow.

Nothing in here touches pygame: a session is driven by `update(tick)`,
`render(canvas)` and `click(x, y)`, and draws through any object with the
`image()` / `text()` methods of `flappy_render.SurfaceCanvas`.
"""
import enum
import logging
import math
import random
from typing import List, Optional

import numpy as np

log = logging.getLogger(__name__)


# ──────────────────────────── Game Constants ───────────────────────────────
W, H = 800, 600

GRAVITY = 0.3
LIFT = -6
VY_LIMIT = 15
BIRD_W = 55
BIRD_H = BIRD_W * (311 / 443)      # sprite is 443 × 311
TILT_VY = 5                        # |vy| at which the tilt saturates
TILT_MAX = math.pi / 4

PIPE_SPACING = 170                 # gap size, also the gap centre margin
PIPE_WIDTH = 50
PIPE_SPEED = 3
SPAWN_EVERY = 100                  # ticks
HIT_SHRINK = 0.95

BACKGROUND_SCROLL_SPEED = 1

BUTTON_W, BUTTON_H = 200, 100
BUTTON_X = W / 2 - BUTTON_W / 2
BUTTON_Y = H / 2 - BUTTON_H / 2

WHITE = (255, 255, 255)
WHITE_DIM = (255, 255, 255, 180)


class GameState(enum.Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


class GameStateError(RuntimeError):
    """A transition was requested from a state that does not allow it."""

    def __init__(self, action: str, state: GameState):
        super().__init__(f"cannot {action} while {state.value}")
        self.action = action
        self.state = state


# ─────────────────────────────── Entities ──────────────────────────────────
class Bird:
    def __init__(self):
        self.x = W / 4
        self.y = H / 2
        self.vy = 0.0
        self.w = BIRD_W
        self.h = BIRD_H
        self.alive = True

    # physics
    def update(self) -> bool:
        """Advance one frame. Returns True on the frame the bird hits the ground."""
        if not self.alive:
            return False
        self.vy += GRAVITY
        self.y += self.vy
        self.vy = max(-VY_LIMIT, min(VY_LIMIT, self.vy))

        landed = False
        ground = H - self.h / 2
        if self.y > ground:
            self.y = ground
            self.vy = 0.0
            self.alive = False
            landed = True
        if self.y < self.h / 2:
            self.y = self.h / 2
            self.vy = 0.0
        return landed

    def jump(self):
        if self.alive:
            self.vy = LIFT

    # helpers
    @property
    def angle(self) -> float:
        return float(np.interp(self.vy, [-TILT_VY, TILT_VY], [-TILT_MAX, TILT_MAX]))

    def draw(self, canvas, state: GameState):
        if not self.alive and state is GameState.PLAYING:
            return
        canvas.image("bird", self.x, self.y, self.w, self.h, angle=self.angle, centered=True)


class Pipe:
    def __init__(self, rng: Optional[random.Random] = None, center: Optional[float] = None):
        if center is None:
            center = (rng or random).uniform(PIPE_SPACING, H - PIPE_SPACING)
        self.spacing = PIPE_SPACING
        self.center = center
        self.top = center - self.spacing / 2
        self.bottom = H - (center + self.spacing / 2)
        self.x = W
        self.w = PIPE_WIDTH
        self.speed = PIPE_SPEED
        self.passed = False

    def update(self):
        self.x -= self.speed

    def hits(self, bird: Bird) -> bool:
        ew = bird.w * HIT_SHRINK
        eh = bird.h * HIT_SHRINK
        if bird.x + ew / 2 > self.x and bird.x - ew / 2 < self.x + self.w:
            if bird.y - eh / 2 < self.top or bird.y + eh / 2 > H - self.bottom:
                return True
        return False

    def offscreen(self) -> bool:
        return self.x + self.w < 0

    def draw(self, canvas):
        canvas.image("pipe", self.x, H - self.bottom, self.w, self.bottom)
        # top segment is the same sprite mirrored, its mouth on the gap edge
        canvas.image("pipe", self.x, 0, self.w, self.top, flip=True)


# ───────────────────────────── Game Session ────────────────────────────────
def in_start_button(x: float, y: float) -> bool:
    return BUTTON_X < x < BUTTON_X + BUTTON_W and BUTTON_Y < y < BUTTON_Y + BUTTON_H


class GameSession:
    """One independent game: bird, pipes, score, flow state and background scroll.

    The host drives it with strictly increasing ticks:

        session.update(tick)
        session.render(canvas)

    and forwards pointer presses to `click(x, y)`.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.state = GameState.START
        self.bird = Bird()
        self.pipes: List[Pipe] = []
        self.score = 0
        self.background_x = 0
        self.last_tick: Optional[int] = None

    # transitions
    def start_game(self):
        if self.state is not GameState.START:
            raise GameStateError("start", self.state)
        # bird keeps its idle pose and starts falling from there
        self.state = GameState.PLAYING
        log.info("game started")

    def flap(self):
        if self.state is not GameState.PLAYING:
            raise GameStateError("flap", self.state)
        self.bird.jump()

    def restart(self):
        if self.state is not GameState.GAME_OVER:
            raise GameStateError("restart", self.state)
        self.score = 0
        self.pipes = []
        self.bird = Bird()
        self.state = GameState.PLAYING
        log.info("game restarted")

    def _game_over(self, cause: str):
        self.bird.alive = False
        if self.state is GameState.PLAYING:
            self.state = GameState.GAME_OVER
            log.info("game over (%s), score %d", cause, self.score)

    # input
    def click(self, x: float, y: float):
        if self.state is GameState.START:
            if in_start_button(x, y):
                self.start_game()
        elif self.state is GameState.PLAYING:
            self.flap()
        elif self.state is GameState.GAME_OVER:
            self.restart()
        else:
            raise GameStateError("click", self.state)

    # world update
    def update(self, tick: int):
        if self.last_tick is not None and tick <= self.last_tick:
            raise ValueError(f"tick {tick} does not follow {self.last_tick}")
        self.last_tick = tick

        self.background_x -= BACKGROUND_SCROLL_SPEED
        if self.background_x < -W:
            self.background_x = 0

        if self.state is GameState.PLAYING:
            self._update_pipes(tick)
            if self.bird.update():
                self._game_over("ground")

    def _update_pipes(self, tick: int):
        # newest first, so popping index i leaves unvisited indices intact
        for i in range(len(self.pipes) - 1, -1, -1):
            pipe = self.pipes[i]
            pipe.update()
            if pipe.hits(self.bird):
                self._game_over("pipe")
            if not pipe.passed and pipe.x < self.bird.x:
                pipe.passed = True
                self.score += 1
                log.debug("pipe passed, score %d", self.score)
            if pipe.offscreen():
                self.pipes.pop(i)

        if tick % SPAWN_EVERY == 0:
            self.pipes.append(Pipe(self.rng))
            log.debug("tick %d: spawned pipe, gap centre %.1f", tick, self.pipes[-1].center)

    # rendering
    def render(self, canvas):
        canvas.image("sky", self.background_x, 0, W, H)
        canvas.image("sky", self.background_x + W, 0, W, H)

        if self.state is GameState.PLAYING:
            for pipe in reversed(self.pipes):
                pipe.draw(canvas)
            self.bird.draw(canvas, self.state)
            canvas.text(str(self.score), W / 2, 20, 48, anchor="midtop")
            canvas.text("SCORE", W / 2, 80, 20, anchor="midtop", color=WHITE_DIM)
        elif self.state is GameState.START:
            canvas.text("FLAPPY BIRD", W / 2, H / 2 - 150, 64)
            canvas.image("start", BUTTON_X, BUTTON_Y, BUTTON_W, BUTTON_H)
            canvas.text("Click on Start button to begin", W / 2, H / 2 + 150, 24)
            self.bird.draw(canvas, self.state)
        elif self.state is GameState.GAME_OVER:
            canvas.text("Game Over!", W / 2, H / 2 - 50, 64)
            canvas.text(f"Final Score: {self.score}", W / 2, H / 2 + 20, 32)
            canvas.text("Click to Restart", W / 2, H / 2 + 80, 24)
        else:
            raise GameStateError("render", self.state)
