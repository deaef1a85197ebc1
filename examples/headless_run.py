from particle_sim import SimConfig, ParticleStore, PhysicsEngine
from particle_sim.renderer import DebugRenderer

cfg = SimConfig(particle_count=5, master_seed=1)
engine = PhysicsEngine(cfg)
renderer = DebugRenderer()

with ParticleStore.create(cfg) as store:
    for frame in range(0, cfg.fps, cfg.fps // 4):
        for _ in range(cfg.fps // 4):
            engine.step(store, 1 / cfg.fps)
        renderer.render_store(store, frame)
