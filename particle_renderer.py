from config import COLOR_BG, COLOR_A, COLOR_B, COLOR_AB
from physics_engine import RADII, SimulationSnapshot

TYPE_COLORS = (COLOR_A, COLOR_B, COLOR_AB)


def render_particles(surface, snapshot: SimulationSnapshot):
    """按快照绘制粒子视图（无状态）"""
    surface.clear(COLOR_BG)
    for (x, y), p_type in zip(snapshot.positions.tolist(), snapshot.types.tolist()):
        surface.draw_circle((x, y), RADII[p_type], TYPE_COLORS[p_type])
