import pytest

from chart_renderer import (
    ChartRenderer,
    downsample,
    graph_max_value,
    graph_polyline,
    smooth,
    smoothed_history,
)
from config import COLOR_A, COLOR_AB, COLOR_AXIS, COLOR_B
from physics_engine import ReactionSimulation


def test_downsample_averages_blocks_and_partial_tail():
    data = list(range(10)) + [20, 30, 40]
    assert downsample(data, 10) == [4.5, 30.0]


def test_downsample_short_sequence_is_single_bucket():
    assert downsample([2, 4, 6], 10) == [4.0]
    assert downsample([], 10) == []


def test_smooth_window_shrinks_near_start():
    assert smooth([1.0, 2.0, 3.0], 10) == [1.0, 1.5, 2.0]
    assert smooth([0, 0, 0, 4], 2) == [0.0, 0.0, 0.0, 2.0]


def test_smooth_uses_trailing_window():
    data = [float(v) for v in range(12)]
    result = smooth(data, 10)
    assert result[9] == pytest.approx(4.5)
    assert result[11] == pytest.approx(sum(range(2, 12)) / 10)


@pytest.mark.parametrize("length", [1, 2, 9, 10, 11, 99, 100, 101, 250])
def test_constant_history_stays_constant(length):
    result = smoothed_history([37] * length)
    assert len(result) == (length + 9) // 10
    assert all(value == 37 for value in result)


def test_graph_max_value_prefers_larger_of_initial_and_observed():
    assert graph_max_value({"A": [40, 38], "B": [40], "AB": [2]}, 80) == 80
    assert graph_max_value({"A": [95], "B": [3], "AB": []}, 80) == 95


def test_graph_polyline_uses_minimum_point_count():
    points = graph_polyline([0.0, 40.0, 80.0], 330.0, 220.0, 80.0)
    step_x = (330.0 - 40) / (30 - 1)
    assert points[0] == pytest.approx((30.0, 200.0))
    assert points[1] == pytest.approx((30.0 + step_x, 200.0 - 0.5 * 190.0))
    assert points[2] == pytest.approx((30.0 + 2 * step_x, 10.0))


def test_graph_polyline_spreads_long_series_across_width():
    data = [10.0] * 60
    points = graph_polyline(data, 330.0, 220.0, 80.0)
    assert points[0][0] == pytest.approx(30.0)
    assert points[-1][0] == pytest.approx(320.0)


def test_compute_lines_requires_two_samples(recording_surface):
    chart = ChartRenderer(recording_surface)
    assert chart.compute_lines({"A": [40], "B": [40], "AB": [0]}, 80) == {}


def test_render_draws_axes_and_three_series(recording_surface):
    chart = ChartRenderer(recording_surface)
    history = {
        "A": [40 - k // 10 for k in range(200)],
        "B": [40 - k // 10 for k in range(200)],
        "AB": [k // 10 for k in range(200)],
    }

    chart.render(history, 80)

    polylines = recording_surface.calls_of("polyline")
    assert polylines[0][1] == [(30, 10), (30, 280), (390, 280)]
    assert polylines[0][2] == COLOR_AXIS
    assert [call[2] for call in polylines[1:]] == [COLOR_A, COLOR_B, COLOR_AB]
    for call in polylines[1:]:
        assert len(call[1]) == 20
        for x, y in call[1]:
            assert 30 <= x <= 390
            assert 10 <= y <= 280


def test_render_empty_simulation_draws_only_axes(recording_surface):
    simulation = ReactionSimulation(width=400.0, height=300.0, initial_counts=(0, 0), seed=6)
    simulation.update()
    snapshot = simulation.get_snapshot()
    chart = ChartRenderer(recording_surface)

    assert chart.compute_lines(snapshot.history, snapshot.max_initial_population) == {}
    chart.render(snapshot.history, snapshot.max_initial_population)

    polylines = recording_surface.calls_of("polyline")
    assert len(polylines) == 1
    assert polylines[0][2] == COLOR_AXIS
