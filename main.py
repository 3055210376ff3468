import sys
from typing import Dict

import pygame

from config import *
from runtime_config import PARAMETER_RANGES
from physics_engine import ReactionSimulation
from chart_renderer import ChartRenderer
from energy_profile import EnergyProfileRenderer
from particle_renderer import render_particles
from surface import PygameSurface
from controls import Slider, Button

SLIDER_SPECS = [
    # (参数名, 标签, 步长, 后缀)
    ("temperature", "Temperature", 10.0, " K"),
    ("activation_energy", "Activation energy", 1.0, " kJ"),
    ("energy_edukt", "Reactant energy", 1.0, " kJ"),
    ("energy_product", "Product energy", 1.0, " kJ"),
]

ENERGY_PARAMETERS = ("activation_energy", "energy_edukt", "energy_product")


def compute_layout(width: int, height: int) -> Dict[str, pygame.Rect]:
    """左侧粒子视图，右侧侧栏: 计数 / 按钮 / 滑条 / 种群图 / 能量图"""
    width = max(width, MIN_SCREEN_WIDTH)
    height = max(height, MIN_SCREEN_HEIGHT)
    side_x = width - SIDEBAR_WIDTH
    inner_x = side_x + 16
    inner_w = SIDEBAR_WIDTH - 32

    layout = {
        "particles": pygame.Rect(0, 0, side_x, height),
        "counts": pygame.Rect(inner_x, 16, inner_w, 24),
        "start": pygame.Rect(inner_x, 50, (inner_w - 10) // 2, 32),
        "reset": pygame.Rect(inner_x + (inner_w + 10) // 2, 50, (inner_w - 10) // 2, 32),
    }

    slider_top = 122
    for i, (name, _, _, _) in enumerate(SLIDER_SPECS):
        layout[name] = pygame.Rect(inner_x, slider_top + i * 48, inner_w, 12)

    panels_top = slider_top + len(SLIDER_SPECS) * 48
    panel_h = max(40, (height - panels_top - 24) // 2)
    layout["graph"] = pygame.Rect(inner_x, panels_top, inner_w, panel_h)
    layout["energy"] = pygame.Rect(inner_x, panels_top + panel_h + 8, inner_w, panel_h)
    return layout


class App:
    def __init__(self):
        pygame.init()
        pygame.display.set_caption("A + B ⇌ AB Reaction Equilibrium")
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.layout = compute_layout(*self.screen.get_size())
        self.simulation = ReactionSimulation(width=self.layout["particles"].width,
                                             height=self.layout["particles"].height)

        self.particle_surface = PygameSurface(self.screen.subsurface(self.layout["particles"]))
        self.graph_surface = PygameSurface(self.screen.subsurface(self.layout["graph"]))
        # 能量图绘制到离屏表面，仅在参数或尺寸变化时重绘
        self.energy_surface = PygameSurface(pygame.Surface(self.layout["energy"].size), font_size=11)
        self.chart = ChartRenderer(self.graph_surface)
        self.energy_profile = EnergyProfileRenderer(self.energy_surface)

        self.start_button = Button("Start")
        self.start_button.on_click(self.toggle_running)
        self.reset_button = Button("Reset", secondary=True)
        self.reset_button.on_click(self.reset)

        self.sliders = []
        for name, label, step, suffix in SLIDER_SPECS:
            low, high, _ = PARAMETER_RANGES[name]
            slider = Slider(name, label, low, high, getattr(self.simulation.config, name),
                            step=step, suffix=suffix)
            slider.on_change(lambda value, name=name: self.simulation.set_parameter(name, value))
            self.sliders.append(slider)

        self._apply_layout()

    def _apply_layout(self):
        self.start_button.rect = self.layout["start"]
        self.reset_button.rect = self.layout["reset"]
        for slider in self.sliders:
            slider.rect = self.layout[slider.name]
        self.particle_surface.attach(self.screen.subsurface(self.layout["particles"]))
        self.graph_surface.attach(self.screen.subsurface(self.layout["graph"]))
        if self.energy_surface.measure_size() != self.layout["energy"].size:
            self.energy_surface.attach(pygame.Surface(self.layout["energy"].size))
        self.energy_profile.invalidate()

    def toggle_running(self):
        running = self.simulation.toggle()
        self.start_button.label = "Pause" if running else "Start"
        self.start_button.secondary = running

    def reset(self):
        self.simulation.reset()
        self.start_button.label = "Start"
        self.start_button.secondary = False

    def resize(self, width: int, height: int):
        width = max(width, MIN_SCREEN_WIDTH)
        height = max(height, MIN_SCREEN_HEIGHT)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.layout = compute_layout(width, height)
        self.simulation.resize(self.layout["particles"].width, self.layout["particles"].height)
        self._apply_layout()

    def handle_event(self, event) -> bool:
        """返回 False 表示退出"""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            elif event.key == pygame.K_SPACE:
                self.toggle_running()
            elif event.key == pygame.K_r:
                self.reset()
        else:
            for control in [self.start_button, self.reset_button] + self.sliders:
                if control.handle_event(event):
                    break
        return True

    def render(self):
        snapshot = self.simulation.get_snapshot()

        self.screen.fill(COLOR_BG, pygame.Rect(self.layout["particles"].right, 0,
                                               SIDEBAR_WIDTH, self.screen.get_height()))
        render_particles(self.particle_surface, snapshot)
        self.chart.render(snapshot.history, snapshot.max_initial_population)

        params = snapshot.parameters
        self.energy_profile.render(params["energy_edukt"], params["energy_product"],
                                   params["activation_energy"])
        self.screen.blit(self.energy_surface.surface, self.layout["energy"].topleft)

        counts = snapshot.counts
        x = self.layout["counts"].left
        for name, color in (("A", COLOR_A), ("B", COLOR_B), ("AB", COLOR_AB)):
            text = self.font.render(f"{name}: {counts[name]}", True, color)
            self.screen.blit(text, (x, self.layout["counts"].top))
            x += 100

        self.start_button.draw(self.screen, self.font)
        self.reset_button.draw(self.screen, self.font)
        for slider in self.sliders:
            slider.draw(self.screen, self.font)

        pygame.draw.rect(self.screen, COLOR_BORDER, self.layout["graph"], 1)
        pygame.draw.rect(self.screen, COLOR_BORDER, self.layout["energy"], 1)

    def run(self):
        running = True
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break

            if self.simulation.running:
                self.simulation.update(DT)

            self.render()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


def main():
    App().run()
    sys.exit()


if __name__ == "__main__":
    main()
