import random

import pytest

from flappy_core import H, HIT_SHRINK, PIPE_SPACING, PIPE_SPEED, PIPE_WIDTH, W, Bird, Pipe


def test_segments_fill_the_screen():
    pipe = Pipe(center=300)
    assert pipe.top == 215
    assert pipe.bottom == 215
    assert pipe.top + PIPE_SPACING + pipe.bottom == H
    assert pipe.x == W
    assert not pipe.passed


def test_random_gap_centre_in_range():
    rng = random.Random(0)
    for _ in range(500):
        pipe = Pipe(rng)
        assert PIPE_SPACING <= pipe.center <= H - PIPE_SPACING
        assert pipe.top + PIPE_SPACING + pipe.bottom == pytest.approx(H)


def test_seeded_gaps_repeat():
    a = [Pipe(random.Random(7)).center for _ in range(3)]
    b = [Pipe(random.Random(7)).center for _ in range(3)]
    assert a == b


def test_update_scrolls_left():
    pipe = Pipe(center=300)
    pipe.update()
    pipe.update()
    assert pipe.x == W - 2 * PIPE_SPEED


@pytest.mark.parametrize("x, gone", [
    (-(PIPE_WIDTH + 1), True),
    (-PIPE_WIDTH, False),
    (-(PIPE_WIDTH - 1), False),
    (0, False),
])
def test_offscreen(x, gone):
    pipe = Pipe(center=300)
    pipe.x = x
    assert pipe.offscreen() is gone


def overlapping(center):
    bird = Bird()
    pipe = Pipe(center=center)
    pipe.x = bird.x - PIPE_WIDTH / 2
    return bird, pipe


def test_bird_inside_gap_is_safe():
    bird, pipe = overlapping(300)
    assert not pipe.hits(bird)

    bird, pipe = overlapping(185)   # gap starts at 100
    bird.y = 185
    assert pipe.top == 100
    assert not pipe.hits(bird)


def test_top_boundary_uses_shrunk_height():
    bird, pipe = overlapping(300)
    half = bird.h * HIT_SHRINK / 2
    bird.y = pipe.top + half + 0.5
    assert not pipe.hits(bird)
    bird.y = pipe.top + half - 0.5
    assert pipe.hits(bird)
    bird.y = pipe.top - half - 1
    assert pipe.hits(bird)


def test_bottom_boundary_uses_shrunk_height():
    bird, pipe = overlapping(300)
    half = bird.h * HIT_SHRINK / 2
    floor = H - pipe.bottom
    bird.y = floor - half - 0.5
    assert not pipe.hits(bird)
    bird.y = floor - half + 0.5
    assert pipe.hits(bird)
    bird.y = floor + half + 1
    assert pipe.hits(bird)


def test_no_hit_without_horizontal_overlap():
    bird, pipe = overlapping(500)   # bird sits in the top segment
    assert pipe.hits(bird)
    half_w = bird.w * HIT_SHRINK / 2

    pipe.x = bird.x + half_w + 0.5
    assert not pipe.hits(bird)
    pipe.x = bird.x + half_w - 0.5
    assert pipe.hits(bird)

    pipe.x = bird.x - half_w - PIPE_WIDTH - 0.5
    assert not pipe.hits(bird)
    pipe.x = bird.x - half_w - PIPE_WIDTH + 0.5
    assert pipe.hits(bird)


def test_draw_mirrors_top_segment(canvas):
    pipe = Pipe(center=250)
    pipe.x = 400
    pipe.draw(canvas)
    bottom, top = canvas.images("pipe")
    assert bottom[2:] == (400, H - pipe.bottom, PIPE_WIDTH, pipe.bottom, 0.0, False, False)
    assert top[2:] == (400, 0, PIPE_WIDTH, pipe.top, 0.0, False, True)
