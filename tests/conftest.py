import os

# Pygame must not try to open a real window while testing.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import logging

import numpy as np
import pytest

from galaxy import Galaxy
from settings import Settings


class RecordingCanvas:
    """Stands in for PygameCanvas and remembers every primitive drawn."""

    def __init__(self):
        self.global_alpha = 1.0
        self.stroke_style = None
        self.line_width = 1.0
        self.calls = []
        self._stack = []
        self._path = []

    def save(self):
        self._stack.append((self.global_alpha, self.stroke_style, self.line_width))
        self.calls.append(("save",))

    def restore(self):
        if self._stack:
            self.global_alpha, self.stroke_style, self.line_width = self._stack.pop()
        self.calls.append(("restore",))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill_rect", (x, y, w, h), color, self.global_alpha))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("fill_circle", (x, y), radius, color, self.global_alpha))

    def fill_radial_gradient(self, x, y, radius, stops):
        self.calls.append(("fill_radial_gradient", (x, y), radius, list(stops), self.global_alpha))

    def begin_path(self):
        self._path = []

    def move_to(self, x, y):
        self._path.append((x, y))

    def line_to(self, x, y):
        self._path.append((x, y))

    def stroke(self):
        self.calls.append(
            ("stroke", list(self._path), self.stroke_style, self.line_width, self.global_alpha)
        )

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def galaxy():
    return Galaxy(Settings(particle_count=20), 200, 200, seed=7)


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
