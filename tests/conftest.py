import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest


class RecordingSurface:
    """记录绘图调用的假表面"""

    def __init__(self, width=400, height=300):
        self.size = (width, height)
        self.calls = []

    def measure_size(self):
        return self.size

    def clear(self, color=(0, 0, 0)):
        self.calls.append(("clear", color))

    def draw_circle(self, center, radius, color):
        self.calls.append(("circle", tuple(center), radius, color))

    def draw_polyline(self, points, color, width=1):
        self.calls.append(("polyline", [tuple(p) for p in points], color, width))

    def draw_bezier(self, p0, p1, p2, p3, color, width=1):
        self.calls.append(("bezier", (tuple(p0), tuple(p1), tuple(p2), tuple(p3)), color, width))

    def draw_text(self, text, pos, color, align="left"):
        self.calls.append(("text", text, tuple(pos), color, align))

    def calls_of(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def recording_surface():
    return RecordingSurface()
