import math

# --- Particle Constants ---
PARTICLE_RADIUS = 6.0
AB_RADIUS_FACTOR = 1.4   # AB 分子半径 = 1.4 × 原子半径
MASS = 1.0
AB_MASS = 2.0 * MASS

INITIAL_COUNT_A = 40
INITIAL_COUNT_B = 40

# 初始速度: speed = (0.5 + 0.5 * u) * (T / REFERENCE_TEMPERATURE)
REFERENCE_TEMPERATURE = 300.0

# === 反应参数 ===
# 反应概率 P = exp(-Ea / (T / TEMPERATURE_SCALE))
# Ea=50, T=300: P = exp(-50/30) = 19%
# Ea=10, T=300: P = exp(-10/30) = 72%
# Ea=100, T=100: P = exp(-100/10) = 0.005%
TEMPERATURE_SCALE = 10.0

# 分解概率 P = max(MIN_BREAK_PROBABILITY, T/1000 * 0.05 * (1 - stability))
# stability = (E_edukt - E_product + STABILITY_OFFSET) / STABILITY_RANGE
THERMAL_SCALE = 1000.0
BREAK_RATE = 0.05
STABILITY_OFFSET = 50.0
STABILITY_RANGE = 100.0
MIN_BREAK_PROBABILITY = 0.001
SEPARATION_SPEED = 1.0

# Collision response
RESTITUTION = 1.0
CORRECTION_PERCENT = 0.2  # 每次修正 20% 穿透深度
CORRECTION_SLOP = 0.01

# Time step (one display frame)
DT = 1.0

# --- Slider Defaults & Ranges (min, max, default) ---
TEMPERATURE_RANGE = (50.0, 1000.0, 300.0)
ACTIVATION_ENERGY_RANGE = (0.0, 100.0, 50.0)
ENERGY_EDUKT_RANGE = (0.0, 100.0, 20.0)
ENERGY_PRODUCT_RANGE = (0.0, 100.0, 10.0)

# --- Rendering Constants ---
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 760
MIN_SCREEN_WIDTH = 720
MIN_SCREEN_HEIGHT = 480
SIDEBAR_WIDTH = 360
FPS = 60

# Colors (R, G, B)
COLOR_BG = (15, 23, 42)
COLOR_PANEL = (30, 41, 59)
COLOR_BORDER = (71, 85, 105)
COLOR_TEXT = (226, 232, 240)
COLOR_LABEL = (148, 163, 184)   # slate-400
COLOR_AXIS = (90, 98, 112)
COLOR_A = (239, 68, 68)         # #ef4444
COLOR_B = (59, 130, 246)        # #3b82f6
COLOR_AB = (168, 85, 247)       # #a855f7
COLOR_ENERGY_CURVE = (251, 191, 36)  # #fbbf24
COLOR_BUTTON = (59, 130, 246)
COLOR_BUTTON_SECONDARY = (71, 85, 105)

# --- Chart Constants ---
GRAPH_HISTORY_LENGTH = 300  # 横轴最少容纳 300 帧 (降采样后 30 点)
DOWNSAMPLE_BLOCK = 10
SMOOTH_WINDOW = 10
GRAPH_MARGIN_LEFT = 30
GRAPH_MARGIN_RIGHT = 10
GRAPH_MARGIN_TOP = 10
GRAPH_MARGIN_BOTTOM = 20
GRAPH_LINE_WIDTH = 2

# --- Energy Profile Constants ---
ENERGY_PROFILE_MAX = 200.0  # Ea + E_edukt 最大 100 + 100
ENERGY_PROFILE_PADDING = 20
ENERGY_CURVE_WIDTH = 3
BEZIER_SEGMENTS = 24

# Performance report interval (ticks)
PERF_REPORT_INTERVAL = 1000

TWO_PI = 2.0 * math.pi
