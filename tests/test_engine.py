import logging

import numpy as np
import pytest

from particle_sim import step
from particle_sim.config import SimConfig
from particle_sim.core.invariants import kinetic_energy, linear_momentum
from particle_sim.engine import PhysicsEngine
from particle_sim.profiler import Profiler
from particle_sim.store import ParticleStore
from particle_sim.util import clamp_delta_time


def test_negative_delta_time_is_rejected():
    cfg = SimConfig(master_seed=0)
    store = ParticleStore.create(cfg)
    with pytest.raises(ValueError):
        PhysicsEngine(cfg).step(store, -0.01)


def test_clamp_delta_time():
    assert clamp_delta_time(-0.2, 0.05) == 0.0
    assert clamp_delta_time(0.01, 0.05) == 0.01
    assert clamp_delta_time(3.0, 0.05) == 0.05


def test_step_terminates_for_extreme_velocities():
    """Sub-steps per particle never exceed the cap, whatever the speed."""
    cfg = SimConfig(particle_count=30, max_speed=1e9, master_seed=9)
    store = ParticleStore.create(cfg)
    report = PhysicsEngine(cfg).step_with_report(store, cfg.max_delta_time)

    assert report.max_substeps <= cfg.max_iterations
    assert report.substeps <= cfg.max_iterations * len(store)
    assert report.truncated > 0
    assert np.all(np.isfinite(store.positions))


def test_engines_share_no_state():
    """Two simulations with different parameters do not interfere."""
    cfg_a = SimConfig(particle_count=15, master_seed=5)
    cfg_b = SimConfig(particle_count=15, master_seed=5, gravity_acceleration=0.0)
    a1, a2, b = (ParticleStore.create(cfg) for cfg in (cfg_a, cfg_a, cfg_b))
    engine_a, engine_b = PhysicsEngine(cfg_a), PhysicsEngine(cfg_b)

    for _ in range(100):
        engine_a.step(a1, 1 / 240)
        engine_b.step(b, 1 / 240)
    for _ in range(100):
        PhysicsEngine(cfg_a).step(a2, 1 / 240)

    assert np.array_equal(a1.positions, a2.positions)
    assert np.array_equal(a1.velocities, a2.velocities)
    assert not np.array_equal(a1.positions, b.positions)


def test_module_level_step_uses_store_config():
    cfg = SimConfig(particle_count=1, gravity_acceleration=0.0)
    store = ParticleStore.from_state(cfg, [(400.0, 400.0)], [(100.0, 0.0)])
    step(store, 0.1)
    assert store.positions[0].tolist() == pytest.approx([410.0, 400.0])


def test_energy_never_increases_without_gravity(zero_g_config):
    """Wall bounces and pair impulses with coefficients < 1 only dissipate."""
    from dataclasses import replace

    cfg = replace(zero_g_config, particle_count=40, max_speed=5.0, master_seed=21)
    store = ParticleStore.create(cfg)
    engine = PhysicsEngine(cfg)

    energy = kinetic_energy(store)
    contacts = 0
    for _ in range(400):
        contacts += engine.step_with_report(store, 1 / 120).pair_contacts
        e = kinetic_energy(store)
        assert e <= energy * (1 + 1e-12)
        energy = e
    assert contacts > 0


def test_momentum_unchanged_by_gravity_free_flight():
    cfg = SimConfig(particle_count=2, gravity_acceleration=0.0)
    store = ParticleStore.from_state(cfg, [(200.0, 200.0), (600.0, 600.0)], [(10.0, 5.0), (-3.0, 2.0)])
    p0 = linear_momentum(store).copy()
    PhysicsEngine(cfg).step(store, 0.5)
    assert np.allclose(linear_momentum(store), p0)


def test_profiler_records_each_phase():
    cfg = SimConfig(master_seed=2)
    store = ParticleStore.create(cfg)
    profiler = Profiler()
    engine = PhysicsEngine(cfg, profiler=profiler)

    for _ in range(10):
        engine.step(store, 1 / 240)

    summary = profiler.stats.summary()
    assert set(summary) == {"integrate", "pairs", "clamp"}
    assert all(s["n"] == 10 for s in summary.values())
    assert all(s["max_ms"] >= s["mean_ms"] >= 0.0 for s in summary.values())


def test_step_logs_a_debug_summary(caplog):
    cfg = SimConfig(master_seed=2)
    store = ParticleStore.create(cfg)

    with caplog.at_level(logging.DEBUG, logger="particle_sim"):
        PhysicsEngine(cfg).step(store, 1 / 240)

    assert any("substeps=" in r.getMessage() for r in caplog.records)
    assert all(r.name.startswith("particle_sim") for r in caplog.records)
