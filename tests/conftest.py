"""Shared test fixtures for heart tree tests."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from canvas import Canvas
from tree import Tree


class FakeScheduler:
    """Records every suspension and resumes immediately."""

    def __init__(self, clicks=()):
        self.clicks = list(clicks)
        self.sleeps = []
        self.frames = 0
        self.rejected_clicks = []

    async def sleep(self, ms):
        self.sleeps.append(ms)

    async def next_frame(self):
        self.frames += 1

    async def wait_for_click(self, predicate):
        while self.clicks:
            x, y = self.clicks.pop(0)
            if predicate(x, y):
                return x, y
            self.rejected_clicks.append((x, y))
        raise AssertionError("no click landed on the target")


@pytest.fixture()
def canvas():
    return Canvas(400, 300)


@pytest.fixture()
def rng():
    return np.random.default_rng(1234)


@pytest.fixture()
def make_tree(canvas, rng):
    """Factory for a small tree; scene options override the defaults."""

    def _make(**scene):
        options = {
            "seed": {"x": 200, "y": 150, "scale": 1, "text": "hello\nworld"},
            "branch": [],
            "bloom": {"num": 0},
            "footer": {"width": 100, "height": 5, "speed": 10},
        }
        options.update(scene)
        return Tree(canvas, canvas.width, canvas.height, options, rng=rng)

    return _make


@pytest.fixture()
def scheduler():
    return FakeScheduler()
