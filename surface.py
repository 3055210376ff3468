# -*- coding: utf-8 -*-
"""
绘图表面适配层
渲染器只依赖以下能力: measure_size / clear / draw_circle / draw_polyline /
draw_bezier / draw_text，具体实现基于 pygame.Surface
"""

from typing import Sequence, Tuple

import numpy as np
import pygame

from config import BEZIER_SEGMENTS

Point = Tuple[float, float]
Color = Tuple[int, int, int]


def cubic_bezier_points(p0: Point, p1: Point, p2: Point, p3: Point,
                        segments: int = BEZIER_SEGMENTS) -> np.ndarray:
    """三次贝塞尔曲线采样，返回 (segments + 1, 2) 点数组（含两端点）"""
    t = np.linspace(0.0, 1.0, segments + 1)[:, None]
    u = 1.0 - t
    pts = np.array([p0, p1, p2, p3], dtype=np.float64)
    return (u ** 3) * pts[0] + 3 * (u ** 2) * t * pts[1] + 3 * u * (t ** 2) * pts[2] + (t ** 3) * pts[3]


class PygameSurface:
    """pygame.Surface 的绘图表面实现"""

    def __init__(self, surface: pygame.Surface, font_size: int = 12):
        self.surface = surface
        self.font_size = font_size
        self._font = None

    def attach(self, surface: pygame.Surface):
        """窗口尺寸变化后绑定新的子表面"""
        self.surface = surface

    @property
    def font(self):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("Arial", self.font_size)
        return self._font

    def measure_size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def clear(self, color: Color = (0, 0, 0)):
        self.surface.fill(color)

    def draw_circle(self, center: Point, radius: float, color: Color):
        pygame.draw.circle(self.surface, color, (round(center[0]), round(center[1])),
                           max(1, round(radius)))

    def draw_polyline(self, points: Sequence[Point], color: Color, width: int = 1):
        if len(points) < 2:
            return
        pygame.draw.lines(self.surface, color, False,
                          [(float(x), float(y)) for x, y in points], width)

    def draw_bezier(self, p0: Point, p1: Point, p2: Point, p3: Point,
                    color: Color, width: int = 1):
        self.draw_polyline(cubic_bezier_points(p0, p1, p2, p3).tolist(), color, width)

    def draw_text(self, text: str, pos: Point, color: Color, align: str = "left"):
        label = self.font.render(text, True, color)
        x, y = pos
        if align == "center":
            x -= label.get_width() / 2
        elif align == "right":
            x -= label.get_width()
        self.surface.blit(label, (round(x), round(y)))
