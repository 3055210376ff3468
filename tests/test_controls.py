import pygame
import pytest

from controls import Button, Slider


def mouse(event_type, pos, button=1):
    if event_type == pygame.MOUSEMOTION:
        return pygame.event.Event(event_type, pos=pos, rel=(0, 0), buttons=(1, 0, 0))
    return pygame.event.Event(event_type, pos=pos, button=button)


@pytest.fixture
def slider():
    control = Slider("temperature", "Temperature", 0.0, 100.0, 50.0, step=1.0, suffix=" K")
    control.rect = pygame.Rect(100, 200, 200, 12)
    return control


def test_slider_reports_initial_value(slider):
    assert slider.read_value() == 50.0
    assert slider.display_text() == "50 K"


def test_slider_click_and_drag_notify_listeners(slider):
    seen = []
    slider.on_change(seen.append)

    assert slider.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (150, 205)))
    assert slider.handle_event(mouse(pygame.MOUSEMOTION, (250, 260)))
    assert slider.handle_event(mouse(pygame.MOUSEBUTTONUP, (250, 260)))

    assert seen == [25.0, 75.0]
    assert slider.read_value() == 75.0
    # 拖动结束后移动不再生效
    assert not slider.handle_event(mouse(pygame.MOUSEMOTION, (120, 205)))


def test_slider_clamps_beyond_track(slider):
    slider.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (150, 205)))
    slider.handle_event(mouse(pygame.MOUSEMOTION, (900, 205)))
    assert slider.read_value() == 100.0


def test_click_outside_slider_is_ignored(slider):
    assert not slider.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (150, 400)))
    assert slider.read_value() == 50.0


def test_set_value_snaps_to_step(slider):
    seen = []
    slider.on_change(seen.append)
    slider.set_value(33.4)
    slider.set_value(33.2)
    assert slider.read_value() == 33.0
    assert seen == [33.0]


def test_button_click_invokes_callback():
    button = Button("Start")
    button.rect = pygame.Rect(10, 10, 100, 32)
    clicks = []
    button.on_click(lambda: clicks.append(True))

    assert button.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (50, 20)))
    assert not button.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (300, 20)))
    assert clicks == [True]
