import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from frogger.world import World  # noqa: E402


class RecordingDisplay:
    def __init__(self):
        self.points = []
        self.levels = []

    def set_points(self, value):
        self.points.append(value)

    def set_level(self, value):
        self.levels.append(value)


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def world(display):
    """A fresh level-1 world with no entities on the board."""
    return World(rng=random.Random(1234), display=display)
