from particle_sim import SimConfig, ParticleStore, PhysicsEngine

cfg = SimConfig(particle_count=1)
store = ParticleStore.from_state(cfg, positions=[(400.0, 100.0)], velocities=[(150.0, 0.0)])
engine = PhysicsEngine(cfg)

for frame in range(cfg.fps * 4):
    report = engine.step_with_report(store, 1 / cfg.fps)
    if report.wall_bounces:
        x, y = store.pixel_positions()[0]
        vx, vy = store.velocities[0]
        print(f"t={frame / cfg.fps:5.2f}s bounce @ ({x}, {y}) v=({vx:.1f}, {vy:.1f})")
