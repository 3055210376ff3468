import numpy as np
import pygame
import pytest

from config import COLOR_A, COLOR_AB, COLOR_B, COLOR_BG, SIDEBAR_WIDTH
from main import SLIDER_SPECS, compute_layout
from particle_renderer import render_particles
from physics_engine import RADII, ReactionSimulation, TYPE_AB, ParticleSet, TYPE_A, TYPE_B
from surface import PygameSurface, cubic_bezier_points


def test_bezier_sampling_hits_endpoints():
    points = cubic_bezier_points((0, 0), (10, 0), (10, 10), (20, 10), segments=8)
    assert points.shape == (9, 2)
    assert points[0].tolist() == [0.0, 0.0]
    assert points[-1].tolist() == [20.0, 10.0]
    assert points[4].tolist() == pytest.approx([10.0, 5.0])


def test_pygame_surface_draws_circle_and_reports_size():
    surface = PygameSurface(pygame.Surface((100, 80)))
    assert surface.measure_size() == (100, 80)

    surface.clear(COLOR_BG)
    surface.draw_circle((50, 40), 6, COLOR_A)

    assert tuple(surface.surface.get_at((50, 40)))[:3] == COLOR_A
    assert tuple(surface.surface.get_at((5, 5)))[:3] == COLOR_BG


def test_render_particles_draws_one_circle_per_particle(recording_surface):
    simulation = ReactionSimulation(seed=3)
    simulation.particles = ParticleSet.from_lists(
        [TYPE_A, TYPE_B, TYPE_AB], [(20.0, 20.0), (60.0, 20.0), (100.0, 40.0)])

    render_particles(recording_surface, simulation.get_snapshot())

    assert recording_surface.calls[0] == ("clear", COLOR_BG)
    circles = recording_surface.calls_of("circle")
    assert [call[3] for call in circles] == [COLOR_A, COLOR_B, COLOR_AB]
    assert circles[2][1] == (100.0, 40.0)
    assert circles[2][2] == pytest.approx(RADII[TYPE_AB])


@pytest.mark.parametrize("size", [(1200, 760), (900, 600), (400, 300)])
def test_layout_fits_window(size):
    layout = compute_layout(*size)
    width = max(size[0], layout["particles"].width + SIDEBAR_WIDTH)

    assert layout["particles"].right == width - SIDEBAR_WIDTH
    assert layout["graph"].bottom <= layout["energy"].top
    for name, _, _, _ in SLIDER_SPECS:
        assert layout[name].left >= layout["particles"].right
        assert layout[name].bottom <= layout["graph"].top
    assert not layout["start"].colliderect(layout["reset"])
