import math
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from numba import njit, prange

from config import *
from runtime_config import RuntimeConfig

# Type constants
TYPE_A = 0
TYPE_B = 1
TYPE_AB = 2
TYPE_NAMES = ("A", "B", "AB")

# 按类型索引的半径/质量表
RADII = np.array([PARTICLE_RADIUS, PARTICLE_RADIUS, PARTICLE_RADIUS * AB_RADIUS_FACTOR],
                 dtype=np.float64)
MASSES = np.array([MASS, MASS, AB_MASS], dtype=np.float64)


def reaction_probability(temperature: float, activation_energy: float) -> float:
    """A + B -> AB 的单次碰撞反应概率: exp(-Ea / (T / 10))"""
    return math.exp(-activation_energy / (temperature / TEMPERATURE_SCALE))


def break_probability(temperature: float, energy_edukt: float, energy_product: float) -> float:
    """
    AB -> A + B 每帧分解概率

    产物能级越低 (放热), stability 越大, AB 越稳定。
    概率下限 MIN_BREAK_PROBABILITY 保证分解永不停止。
    """
    stability = (energy_edukt - energy_product + STABILITY_OFFSET) / STABILITY_RANGE
    thermal_energy = temperature / THERMAL_SCALE
    return max(MIN_BREAK_PROBABILITY, thermal_energy * BREAK_RATE * (1.0 - stability))


@njit(parallel=True, cache=True)
def integrate_numba(pos, vel, types, radii, width, height, dt):
    """位置积分 + 墙壁反射（各粒子独立，可并行）"""
    for i in prange(len(types)):
        r = radii[types[i]]
        pos[i, 0] += vel[i, 0] * dt
        pos[i, 1] += vel[i, 1] * dt

        if pos[i, 0] < r:
            pos[i, 0] = r
            vel[i, 0] = -vel[i, 0]
        elif pos[i, 0] > width - r:
            pos[i, 0] = width - r
            vel[i, 0] = -vel[i, 0]

        if pos[i, 1] < r:
            pos[i, 1] = r
            vel[i, 1] = -vel[i, 1]
        elif pos[i, 1] > height - r:
            pos[i, 1] = height - r
            vel[i, 1] = -vel[i, 1]


@njit(cache=True)
def resolve_elastic_collision(pos, vel, i, j, min_dist, m_i, m_j):
    """
    弹性碰撞响应 + 位置修正

    返回: 是否施加了冲量（粒子正在分离时返回 False）
    """
    dx = pos[i, 0] - pos[j, 0]
    dy = pos[i, 1] - pos[j, 1]
    dist = math.sqrt(dx * dx + dy * dy)

    # 零向量归一化为零向量
    if dist > 0.0:
        nx = dx / dist
        ny = dy / dist
    else:
        nx = 0.0
        ny = 0.0

    vn = (vel[i, 0] - vel[j, 0]) * nx + (vel[i, 1] - vel[j, 1]) * ny
    if vn >= 0.0:
        return False

    inv_mass_sum = 1.0 / m_i + 1.0 / m_j
    impulse = -(1.0 + RESTITUTION) * vn / inv_mass_sum

    vel[i, 0] += impulse * nx / m_i
    vel[i, 1] += impulse * ny / m_i
    vel[j, 0] -= impulse * nx / m_j
    vel[j, 1] -= impulse * ny / m_j

    penetration = min_dist - dist
    if penetration > CORRECTION_SLOP:
        correction = penetration / inv_mass_sum * CORRECTION_PERCENT
        pos[i, 0] += correction * nx / m_i
        pos[i, 1] += correction * ny / m_i
        pos[j, 0] -= correction * nx / m_j
        pos[j, 1] -= correction * ny / m_j

    return True


@njit(cache=True)
def resolve_collisions_numba(pos, vel, types, radii, masses, reaction_prob, rolls,
                             consumed, merged_pos, merged_vel):
    """
    O(n²) 碰撞检测、弹性响应与 A + B -> AB 反应判定

    扫描顺序: i 升序, j 升序。已反应的粒子 (consumed) 在本次扫描中不再参与。
    rolls: 预先抽取的均匀随机数, 每个 A/B 碰撞候选按扫描顺序消耗一个。
    新生成的 AB 写入 merged_pos / merged_vel，由调用方在扫描结束后统一插入。

    返回: 本次生成的 AB 数
    """
    n = len(types)
    n_merged = 0
    k = 0

    for i in range(n):
        if consumed[i]:
            continue
        for j in range(i + 1, n):
            if consumed[j]:
                continue

            type_i = types[i]
            type_j = types[j]
            min_dist = radii[type_i] + radii[type_j]

            dx = pos[i, 0] - pos[j, 0]
            dy = pos[i, 1] - pos[j, 1]
            if math.sqrt(dx * dx + dy * dy) >= min_dist:
                continue

            resolve_elastic_collision(pos, vel, i, j, min_dist, masses[type_i], masses[type_j])

            if (type_i == TYPE_A and type_j == TYPE_B) or (type_i == TYPE_B and type_j == TYPE_A):
                roll = rolls[k]
                k += 1
                if roll < reaction_prob:
                    consumed[i] = True
                    consumed[j] = True
                    merged_pos[n_merged, 0] = (pos[i, 0] + pos[j, 0]) * 0.5
                    merged_pos[n_merged, 1] = (pos[i, 1] + pos[j, 1]) * 0.5
                    merged_vel[n_merged, 0] = (vel[i, 0] + vel[j, 0]) * 0.5
                    merged_vel[n_merged, 1] = (vel[i, 1] + vel[j, 1]) * 0.5
                    n_merged += 1
                    break  # 粒子 i 已反应

    return n_merged


@njit(cache=True)
def process_dissociation_numba(types, break_prob, rolls, angles, broken, sep_vel):
    """
    AB -> A + B 自发分解（逆序扫描）

    rolls[i] / angles[i]: 粒子 i 预先抽取的判定随机数与分离方向
    sep_vel[i]: 分离速度（单位长度），子粒子 A 取 +, B 取 -
    返回: 分解的 AB 数
    """
    n_broken = 0
    for i in range(len(types) - 1, -1, -1):
        if types[i] != TYPE_AB:
            continue
        if rolls[i] < break_prob:
            angle = angles[i]
            sep_vel[i, 0] = math.cos(angle) * SEPARATION_SPEED
            sep_vel[i, 1] = math.sin(angle) * SEPARATION_SPEED
            broken[i] = True
            n_broken += 1
    return n_broken


@dataclass
class ParticleSet:
    """按列存储的粒子集合"""
    pos: np.ndarray    # (n, 2)
    vel: np.ndarray    # (n, 2)
    types: np.ndarray  # (n,) int32

    def __len__(self) -> int:
        return len(self.types)

    @classmethod
    def empty(cls) -> "ParticleSet":
        return cls(np.zeros((0, 2)), np.zeros((0, 2)), np.zeros(0, dtype=np.int32))

    @classmethod
    def from_lists(cls, types, positions, velocities=None) -> "ParticleSet":
        n = len(types)
        pos = np.asarray(positions, dtype=np.float64).reshape(n, 2)
        if velocities is None:
            vel = np.zeros((n, 2), dtype=np.float64)
        else:
            vel = np.asarray(velocities, dtype=np.float64).reshape(n, 2)
        return cls(pos.copy(), vel.copy(), np.asarray(types, dtype=np.int32).copy())

    def copy(self) -> "ParticleSet":
        return ParticleSet(self.pos.copy(), self.vel.copy(), self.types.copy())

    @property
    def radii(self) -> np.ndarray:
        return RADII[self.types]

    def counts(self) -> Dict[str, int]:
        binned = np.bincount(self.types, minlength=len(TYPE_NAMES))
        return {name: int(binned[t]) for t, name in enumerate(TYPE_NAMES)}


@dataclass
class StepEvents:
    reactions: int = 0
    dissociations: int = 0


def init_particles(count_a: int, count_b: int, width: float, height: float,
                   temperature: float, rng: Optional[np.random.Generator] = None) -> ParticleSet:
    """随机位置、随机方向初始化 A/B 粒子; 速率 (0.5 + 0.5u) * T/300"""
    if rng is None:
        rng = np.random.default_rng()
    n = count_a + count_b
    types = np.concatenate([
        np.full(count_a, TYPE_A, dtype=np.int32),
        np.full(count_b, TYPE_B, dtype=np.int32),
    ])

    r = RADII[types]
    pos = np.empty((n, 2), dtype=np.float64)
    pos[:, 0] = r + rng.random(n) * np.maximum(width - 2 * r, 0.0)
    pos[:, 1] = r + rng.random(n) * np.maximum(height - 2 * r, 0.0)

    speed = (rng.random(n) * 0.5 + 0.5) * (temperature / REFERENCE_TEMPERATURE)
    angle = rng.random(n) * TWO_PI
    vel = np.column_stack([np.cos(angle) * speed, np.sin(angle) * speed])

    return ParticleSet(pos, vel, types)


def _apply_merges(particles: ParticleSet, consumed: np.ndarray,
                  merged_pos: np.ndarray, merged_vel: np.ndarray) -> ParticleSet:
    keep = ~consumed
    n_merged = len(merged_pos)
    return ParticleSet(
        np.concatenate([particles.pos[keep], merged_pos]),
        np.concatenate([particles.vel[keep], merged_vel]),
        np.concatenate([particles.types[keep], np.full(n_merged, TYPE_AB, dtype=np.int32)]),
    )


def _apply_dissociations(particles: ParticleSet, broken: np.ndarray,
                         sep_vel: np.ndarray) -> ParticleSet:
    # 逆序扫描顺序追加子粒子 (A, B)
    order = np.flatnonzero(broken)[::-1]
    n_children = 2 * len(order)

    child_pos = np.repeat(particles.pos[order], 2, axis=0)
    child_vel = np.empty((n_children, 2), dtype=np.float64)
    child_vel[0::2] = particles.vel[order] + sep_vel[order]
    child_vel[1::2] = particles.vel[order] - sep_vel[order]
    child_types = np.tile(np.array([TYPE_A, TYPE_B], dtype=np.int32), len(order))

    keep = ~broken
    return ParticleSet(
        np.concatenate([particles.pos[keep], child_pos]),
        np.concatenate([particles.vel[keep], child_vel]),
        np.concatenate([particles.types[keep], child_types]),
    )


def advance(particles: ParticleSet, config: RuntimeConfig, width: float, height: float,
            dt: float = DT, rng: Optional[np.random.Generator] = None,
            timings: Optional[Dict[str, float]] = None) -> Tuple[ParticleSet, StepEvents]:
    """
    纯状态转移: 积分 -> 碰撞/反应 -> 分解

    输入粒子集合不被修改，返回新的粒子集合与本步事件计数。
    所有随机数取自 rng (未给出时使用新的默认生成器)。
    timings (可选) 累加各阶段耗时 (ms)。
    """
    if rng is None:
        rng = np.random.default_rng()
    state = particles.copy()
    events = StepEvents()

    # 1. 位置积分 + 墙壁反射
    t0 = time.perf_counter()
    integrate_numba(state.pos, state.vel, state.types, RADII, float(width), float(height), float(dt))
    t1 = time.perf_counter()

    # 2. 碰撞 + 反应 (A + B -> AB)
    n = len(state)
    consumed = np.zeros(n, dtype=np.bool_)
    merged_pos = np.zeros((n // 2 + 1, 2), dtype=np.float64)
    merged_vel = np.zeros((n // 2 + 1, 2), dtype=np.float64)
    prob = reaction_probability(config.temperature, config.activation_energy)
    # 每个粒子对最多一个反应候选
    reaction_rolls = rng.random(max(n * (n - 1) // 2, 1))
    n_merged = resolve_collisions_numba(
        state.pos, state.vel, state.types,
        RADII, MASSES, prob, reaction_rolls,
        consumed, merged_pos, merged_vel
    )
    if n_merged > 0:
        state = _apply_merges(state, consumed, merged_pos[:n_merged], merged_vel[:n_merged])
        events.reactions = n_merged
    t2 = time.perf_counter()

    # 3. 分解 (AB -> A + B)
    n = len(state)
    broken = np.zeros(n, dtype=np.bool_)
    sep_vel = np.zeros((n, 2), dtype=np.float64)
    p_break = break_probability(config.temperature, config.energy_edukt, config.energy_product)
    break_rolls = rng.random(n)
    angles = rng.random(n) * TWO_PI
    n_broken = process_dissociation_numba(state.types, p_break, break_rolls, angles,
                                          broken, sep_vel)
    if n_broken > 0:
        state = _apply_dissociations(state, broken, sep_vel)
        events.dissociations = n_broken
    t3 = time.perf_counter()

    if timings is not None:
        timings['integrate'] = timings.get('integrate', 0.0) + (t1 - t0) * 1000
        timings['collision'] = timings.get('collision', 0.0) + (t2 - t1) * 1000
        timings['dissociation'] = timings.get('dissociation', 0.0) + (t3 - t2) * 1000

    return state, events


@dataclass
class SimulationSnapshot:
    """渲染用的只读快照"""
    positions: np.ndarray
    types: np.ndarray
    counts: Dict[str, int]
    history: Dict[str, List[int]]
    max_initial_population: int
    parameters: Dict[str, float]
    width: float
    height: float
    running: bool
    tick: int


class ReactionSimulation:
    """模拟上下文: 参数、粒子、种群历史与运行状态（由驱动层唯一持有）"""

    def __init__(self, runtime_config: Optional[RuntimeConfig] = None,
                 width: float = SCREEN_WIDTH - SIDEBAR_WIDTH,
                 height: float = SCREEN_HEIGHT,
                 initial_counts: Tuple[int, int] = (INITIAL_COUNT_A, INITIAL_COUNT_B),
                 seed: Optional[int] = None):
        self.config = runtime_config if runtime_config is not None else RuntimeConfig()
        self.width = float(width)
        self.height = float(height)
        self.initial_counts = initial_counts
        self.running = False
        # 每个模拟实例独立的随机数生成器
        self.rng = np.random.default_rng(seed)

        self.particles = ParticleSet.empty()
        self.history: Dict[str, List[int]] = {name: [] for name in TYPE_NAMES}
        self.tick = 0
        self.total_reactions = 0
        self.total_dissociations = 0
        self._perf_stats = {'integrate': 0.0, 'collision': 0.0, 'dissociation': 0.0}
        self._perf_count = 0

        self.reset()

    @property
    def max_initial_population(self) -> int:
        return sum(self.initial_counts)

    def reset(self):
        """重置模拟: 停止运行、重新生成粒子、清空历史"""
        self.running = False
        count_a, count_b = self.initial_counts
        self.particles = init_particles(count_a, count_b, self.width, self.height,
                                        self.config.temperature, self.rng)
        self.history = {name: [] for name in TYPE_NAMES}
        self.tick = 0
        self.total_reactions = 0
        self.total_dissociations = 0
        self.record_sample()
        print(f"[Simulation] Reset: A={count_a}, B={count_b}, "
              f"bounds={self.width:.0f}x{self.height:.0f}")

    def start(self):
        self.running = True
        print("[Simulation] Started")

    def pause(self):
        self.running = False
        print("[Simulation] Paused")

    def toggle(self) -> bool:
        if self.running:
            self.pause()
        else:
            self.start()
        return self.running

    def set_parameter(self, name: str, value: float) -> float:
        applied = self.config.set_parameter(name, value)
        print(f"[Simulation] {name} = {applied:g}")
        return applied

    def resize(self, width: float, height: float):
        """更新边界; 不改动粒子状态（越界粒子在下一步积分时被钳制）"""
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid bounds: {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    def counts(self) -> Dict[str, int]:
        return self.particles.counts()

    def record_sample(self):
        counts = self.counts()
        for name in TYPE_NAMES:
            self.history[name].append(counts[name])

    def update(self, dt: float = DT) -> StepEvents:
        """执行一步: 物理/反应更新 + 记录种群样本"""
        self.particles, events = advance(self.particles, self.config, self.width, self.height,
                                         dt, rng=self.rng, timings=self._perf_stats)
        self.record_sample()

        self.tick += 1
        self.total_reactions += events.reactions
        self.total_dissociations += events.dissociations

        self._perf_count += 1
        if self._perf_count >= PERF_REPORT_INTERVAL:
            self._report_performance()

        return events

    def _report_performance(self):
        total = sum(self._perf_stats.values())
        counts = self.counts()
        print(f"[PERF] 积分: {self._perf_stats['integrate']:.1f}ms | "
              f"碰撞: {self._perf_stats['collision']:.1f}ms | "
              f"分解: {self._perf_stats['dissociation']:.1f}ms | "
              f"总计: {total:.1f}ms / {self._perf_count} steps | "
              f"A={counts['A']} B={counts['B']} AB={counts['AB']}")
        self._perf_stats = {'integrate': 0.0, 'collision': 0.0, 'dissociation': 0.0}
        self._perf_count = 0

    def get_snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            positions=self.particles.pos.copy(),
            types=self.particles.types.copy(),
            counts=self.counts(),
            history={name: list(values) for name, values in self.history.items()},
            max_initial_population=self.max_initial_population,
            parameters=self.config.to_dict(),
            width=self.width,
            height=self.height,
            running=self.running,
            tick=self.tick,
        )
