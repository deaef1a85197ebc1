"""
Microbenchmark: time per step vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time

from particle_sim.config import SimConfig
from particle_sim.engine import PhysicsEngine
from particle_sim.store import ParticleStore
from particle_sim.profiler import Profiler


def run(n: int, steps: int = 300):
    prof = Profiler()
    # Larger arena so that higher counts still fit without piling up
    cfg = SimConfig(particle_count=n, width=1600, height=1600, master_seed=12345)
    engine = PhysicsEngine(cfg, profiler=prof)
    store = ParticleStore.create(cfg)

    # warmup
    for _ in range(30):
        engine.step(store, 1 / cfg.fps)
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(steps):
        engine.step(store, 1 / cfg.fps)
    t1 = time.perf_counter()

    store.destroy()
    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 50, 100, 250, 500]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["integrate", "pairs", "clamp"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
