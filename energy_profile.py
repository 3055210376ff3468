# -*- coding: utf-8 -*-
"""
能量剖面图（静态）
反应物平台 -> 过渡态峰 -> 产物平台，峰高 = E_edukt + Ea
"""

from dataclasses import dataclass
from typing import Tuple

from config import (
    ENERGY_PROFILE_MAX,
    ENERGY_PROFILE_PADDING,
    ENERGY_CURVE_WIDTH,
    COLOR_PANEL,
    COLOR_LABEL,
    COLOR_ENERGY_CURVE,
)

Point = Tuple[float, float]


@dataclass
class EnergyProfilePath:
    """能量曲线几何: 两段平台 + 两段三次贝塞尔"""
    reactant_plateau: Tuple[Point, Point]
    rise: Tuple[Point, Point, Point, Point]
    fall: Tuple[Point, Point, Point, Point]
    product_plateau: Tuple[Point, Point]
    reactant_label: Point
    product_label: Point

    @property
    def peak(self) -> Point:
        return self.rise[3]


def energy_to_y(energy: float, height: float) -> float:
    draw_height = height - ENERGY_PROFILE_PADDING * 2
    return height - ENERGY_PROFILE_PADDING - (energy / ENERGY_PROFILE_MAX) * draw_height


def energy_profile_path(width: float, height: float, energy_edukt: float,
                        energy_product: float, activation_energy: float) -> EnergyProfilePath:
    w = width
    y_edukt = energy_to_y(energy_edukt, height)
    y_product = energy_to_y(energy_product, height)
    y_transition = energy_to_y(energy_edukt + activation_energy, height)

    return EnergyProfilePath(
        reactant_plateau=((10, y_edukt), (w * 0.25, y_edukt)),
        rise=((w * 0.25, y_edukt), (w * 0.4, y_edukt),
              (w * 0.4, y_transition), (w * 0.5, y_transition)),
        fall=((w * 0.5, y_transition), (w * 0.6, y_transition),
              (w * 0.6, y_product), (w * 0.75, y_product)),
        product_plateau=((w * 0.75, y_product), (w - 10, y_product)),
        reactant_label=(w * 0.15, y_edukt + 15),
        product_label=(w * 0.85, y_product + 15),
    )


class EnergyProfileRenderer:
    """仅在参数或尺寸变化时重绘"""

    def __init__(self, surface):
        self.surface = surface
        self._last_key = None

    def invalidate(self):
        self._last_key = None

    def render(self, energy_edukt: float, energy_product: float, activation_energy: float,
               force: bool = False) -> bool:
        """返回是否实际重绘"""
        size = self.surface.measure_size()
        key = (size, energy_edukt, energy_product, activation_energy)
        if not force and key == self._last_key:
            return False
        self._last_key = key

        w, h = size
        path = energy_profile_path(w, h, energy_edukt, energy_product, activation_energy)

        self.surface.clear(COLOR_PANEL)
        self.surface.draw_polyline(path.reactant_plateau, COLOR_ENERGY_CURVE, ENERGY_CURVE_WIDTH)
        self.surface.draw_bezier(*path.rise, COLOR_ENERGY_CURVE, ENERGY_CURVE_WIDTH)
        self.surface.draw_bezier(*path.fall, COLOR_ENERGY_CURVE, ENERGY_CURVE_WIDTH)
        self.surface.draw_polyline(path.product_plateau, COLOR_ENERGY_CURVE, ENERGY_CURVE_WIDTH)

        self.surface.draw_text("Reactants", path.reactant_label, COLOR_LABEL, align="center")
        self.surface.draw_text("Products", path.product_label, COLOR_LABEL, align="center")
        return True
