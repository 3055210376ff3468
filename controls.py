# -*- coding: utf-8 -*-
"""
控件: 滑条与按钮
对外能力: read_value / on_change (滑条), on_click (按钮)
"""

from typing import Callable, List, Optional

import pygame

from config import COLOR_TEXT, COLOR_LABEL, COLOR_BORDER, COLOR_BUTTON, COLOR_BUTTON_SECONDARY


class Slider:
    """水平滑条，鼠标拖动或点击轨道改变数值"""

    def __init__(self, name: str, label: str, min_value: float, max_value: float,
                 value: float, step: float = 1.0, suffix: str = ""):
        self.name = name
        self.label = label
        self.min_value = min_value
        self.max_value = max_value
        self.step = step
        self.suffix = suffix
        self.rect = pygame.Rect(0, 0, 200, 12)
        self._value = self._snap(value)
        self._dragging = False
        self._listeners: List[Callable[[float], None]] = []

    def _snap(self, value: float) -> float:
        value = max(self.min_value, min(self.max_value, value))
        if self.step > 0:
            value = self.min_value + round((value - self.min_value) / self.step) * self.step
        return min(self.max_value, value)

    def read_value(self) -> float:
        return self._value

    def on_change(self, callback: Callable[[float], None]):
        self._listeners.append(callback)

    def set_value(self, value: float, notify: bool = True):
        value = self._snap(value)
        if value == self._value:
            return
        self._value = value
        if notify:
            for callback in self._listeners:
                callback(value)

    def _value_at(self, x: int) -> float:
        if self.rect.width <= 0:
            return self._value
        ratio = (x - self.rect.left) / self.rect.width
        ratio = max(0.0, min(1.0, ratio))
        return self.min_value + ratio * (self.max_value - self.min_value)

    def handle_event(self, event) -> bool:
        """返回事件是否被本控件消费"""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 12).collidepoint(event.pos):
                self._dragging = True
                self.set_value(self._value_at(event.pos[0]))
                return True
        elif event.type == pygame.MOUSEMOTION and self._dragging:
            self.set_value(self._value_at(event.pos[0]))
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._dragging:
            self._dragging = False
            return True
        return False

    def display_text(self) -> str:
        return f"{self._value:g}{self.suffix}"

    def draw(self, screen: pygame.Surface, font):
        label = font.render(self.label, True, COLOR_LABEL)
        screen.blit(label, (self.rect.left, self.rect.top - 22))
        value = font.render(self.display_text(), True, COLOR_TEXT)
        screen.blit(value, (self.rect.right - value.get_width(), self.rect.top - 22))

        track = pygame.Rect(self.rect.left, self.rect.centery - 2, self.rect.width, 4)
        pygame.draw.rect(screen, COLOR_BORDER, track, border_radius=2)

        ratio = (self._value - self.min_value) / (self.max_value - self.min_value)
        knob_x = self.rect.left + int(ratio * self.rect.width)
        pygame.draw.circle(screen, COLOR_BUTTON, (knob_x, self.rect.centery), 7)


class Button:
    def __init__(self, label: str, secondary: bool = False):
        self.label = label
        self.secondary = secondary
        self.rect = pygame.Rect(0, 0, 100, 32)
        self._on_click: Optional[Callable[[], None]] = None

    def on_click(self, callback: Callable[[], None]):
        self._on_click = callback

    def handle_event(self, event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            if self._on_click is not None:
                self._on_click()
            return True
        return False

    def draw(self, screen: pygame.Surface, font):
        color = COLOR_BUTTON_SECONDARY if self.secondary else COLOR_BUTTON
        pygame.draw.rect(screen, color, self.rect, border_radius=6)
        text = font.render(self.label, True, COLOR_TEXT)
        screen.blit(text, text.get_rect(center=self.rect.center))
