import time
import numpy as np
from physics_engine import ReactionSimulation, RADII, integrate_numba
from runtime_config import RuntimeConfig
from config import *

def test_physics():
    print("Initializing Simulation...")
    start_time = time.time()
    simulation = ReactionSimulation(RuntimeConfig(), width=800, height=600, seed=0)
    init_time = time.time() - start_time
    print(f"Initialization took {init_time:.4f}s")

    print(f"Particles: {len(simulation.particles)}")
    print(f"Bounds: {simulation.width:.0f}x{simulation.height:.0f}")
    print(f"Initial Counts: {simulation.counts()}")

    # Run for 600 steps (~10 s at 60 FPS)
    steps = 600
    print(f"\nRunning {steps} steps...")

    t0 = time.time()
    for i in range(steps):
        simulation.update(DT)
        if i % 100 == 0:
            print(f"Step {i}: {simulation.counts()}")

    total_time = time.time() - t0
    ops_per_sec = steps / total_time
    print(f"\nCompleted {steps} steps in {total_time:.4f}s")
    print(f"SPS (Steps Per Second): {ops_per_sec:.2f}")
    print(f"Reactions: {simulation.total_reactions}, Dissociations: {simulation.total_dissociations}")

    counts = simulation.counts()
    print(f"Final Counts: {counts}")
    assert counts["A"] + counts["B"] + 2 * counts["AB"] == INITIAL_COUNT_A + INITIAL_COUNT_B
    assert all(len(values) == steps + 1 for values in simulation.history.values())

    # Check bounds: 碰撞修正可能把粒子推过墙壁，墙壁钳制在下一次积分后成立
    state = simulation.particles.copy()
    integrate_numba(state.pos, state.vel, state.types, RADII,
                    simulation.width, simulation.height, DT)
    r = state.radii
    pos = state.pos
    print("Min:", np.min(pos, axis=0), "Max:", np.max(pos, axis=0))
    assert np.all((pos[:, 0] >= r) & (pos[:, 0] <= simulation.width - r))
    assert np.all((pos[:, 1] >= r) & (pos[:, 1] <= simulation.height - r))

if __name__ == "__main__":
    test_physics()
