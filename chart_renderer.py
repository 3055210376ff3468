from typing import Dict, List, Sequence, Tuple

from config import *


def downsample(data: Sequence[float], block_size: int = DOWNSAMPLE_BLOCK) -> List[float]:
    """
    分块平均: 每 block_size 个原始样本取均值

    末尾不足一块的部分按实际样本数取均值。
    """
    result = []
    for start in range(0, len(data), block_size):
        chunk = data[start:start + block_size]
        result.append(sum(chunk) / len(chunk))
    return result


def smooth(data: Sequence[float], window_size: int = SMOOTH_WINDOW) -> List[float]:
    """尾随滑动平均; 开头不足 window_size 个点时对已有的全部点取均值"""
    result = []
    for i in range(len(data)):
        start = max(0, i - window_size + 1)
        subset = data[start:i + 1]
        result.append(sum(subset) / len(subset))
    return result


def smoothed_history(raw: Sequence[float]) -> List[float]:
    """两级平滑: 先降采样（每 10 帧），再对降采样结果做窗口为 10 的滑动平均"""
    return smooth(downsample(raw, DOWNSAMPLE_BLOCK), SMOOTH_WINDOW)


def graph_max_value(history: Dict[str, Sequence[int]], max_initial: int) -> float:
    """纵轴上限: 理论最大初始粒子数与历史最大值中的较大者"""
    observed = [max(values) for values in history.values() if len(values) > 0]
    return max([max_initial] + observed)


def graph_polyline(data: Sequence[float], width: float, height: float,
                   max_value: float) -> List[Tuple[float, float]]:
    """
    将平滑后的序列映射为画布坐标

    横向间距按 max(GRAPH_HISTORY_LENGTH / 10, 点数) 计算，
    避免运行初期少量点被拉伸到整个宽度。
    """
    min_points = GRAPH_HISTORY_LENGTH / DOWNSAMPLE_BLOCK
    total_points = max(min_points, len(data))
    step_x = (width - (GRAPH_MARGIN_LEFT + GRAPH_MARGIN_RIGHT)) / (total_points - 1)

    baseline = height - GRAPH_MARGIN_BOTTOM
    plot_height = height - (GRAPH_MARGIN_TOP + GRAPH_MARGIN_BOTTOM)

    points = []
    for i, value in enumerate(data):
        x = GRAPH_MARGIN_LEFT + i * step_x
        y = baseline - (value / max_value) * plot_height
        points.append((x, y))
    return points


SERIES_COLORS = {
    "A": COLOR_A,
    "B": COLOR_B,
    "AB": COLOR_AB,
}


class ChartRenderer:
    """种群历史折线图"""

    def __init__(self, surface):
        self.surface = surface

    def compute_lines(self, history: Dict[str, Sequence[int]],
                      max_initial: int) -> Dict[str, List[Tuple[float, float]]]:
        """各物质的折线坐标; 历史样本少于 2 个或纵轴上限为 0 时返回空字典"""
        if len(history.get("A", [])) < 2:
            return {}

        w, h = self.surface.measure_size()
        max_value = graph_max_value(history, max_initial)
        if max_value <= 0:
            return {}

        lines = {}
        for name in SERIES_COLORS:
            data = smoothed_history(history[name])
            lines[name] = graph_polyline(data, w, h, max_value)
        return lines

    def render(self, history: Dict[str, Sequence[int]], max_initial: int):
        w, h = self.surface.measure_size()
        self.surface.clear(COLOR_PANEL)

        # Axes
        self.surface.draw_polyline(
            [(GRAPH_MARGIN_LEFT, GRAPH_MARGIN_TOP),
             (GRAPH_MARGIN_LEFT, h - GRAPH_MARGIN_BOTTOM),
             (w - GRAPH_MARGIN_RIGHT, h - GRAPH_MARGIN_BOTTOM)],
            COLOR_AXIS, 1)

        for name, points in self.compute_lines(history, max_initial).items():
            # 单点折线无法绘制
            if len(points) > 1:
                self.surface.draw_polyline(points, SERIES_COLORS[name], GRAPH_LINE_WIDTH)
