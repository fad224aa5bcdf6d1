import io
import random

import pytest
from blessed import Terminal

from rocket_game.camera import Viewport
from rocket_game.components import Ship


class RecordingSurface:
    """Drawing surface that records calls instead of drawing."""

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(('clear',))

    def fill_rect(self, x, y, w, h, color=None):
        self.calls.append(('rect', x, y, w, h, color))

    def fill_polygon(self, points, color=None):
        self.calls.append(('polygon', list(points), color))

    def fill_circle(self, cx, cy, radius, color=None):
        self.calls.append(('circle', cx, cy, radius, color))

    def draw_text(self, text, x, y, size=16, color=None, align='start'):
        self.calls.append(('text', text, x, y, size, color, align))

    def kinds(self):
        return [c[0] for c in self.calls]

    def texts(self):
        return [c[1] for c in self.calls if c[0] == 'text']


class FixedRandom(random.Random):
    """random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture()
def viewport() -> Viewport:
    return Viewport(800, 600)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def fixed_random():
    return FixedRandom


@pytest.fixture()
def make_ship():
    def _make(screen_x=400.0, screen_y=300.0, cam_x=0.0, half=20.0, **kwargs):
        return Ship(world_x=cam_x + screen_x, screen_y=screen_y, cam_x=cam_x,
                    screen_x=screen_x, half_w=half, half_h=half, **kwargs)
    return _make


@pytest.fixture(scope='session')
def term() -> Terminal:
    return Terminal(kind='xterm-256color', stream=io.StringIO(), force_styling=True)
