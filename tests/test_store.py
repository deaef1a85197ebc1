import numpy as np
import pytest

import particle_sim.store as store_module
from particle_sim import create, destroy
from particle_sim.config import SimConfig
from particle_sim.errors import AllocationError, StoreReleasedError
from particle_sim.store import ParticleStore


def test_create_draws_state_from_configured_ranges():
    """
    Positions lie in [r, extent - r), velocity components in [-v, v)
    with v = max_speed * pixels_per_meter.
    """
    cfg = SimConfig(particle_count=500, width=640, height=480, radius=8.0,
                    max_speed=2.0, master_seed=3)
    store = ParticleStore.create(cfg)

    assert len(store) == 500
    p, v = store.positions, store.velocities
    assert np.all(p[:, 0] >= 8.0) and np.all(p[:, 0] < 632.0)
    assert np.all(p[:, 1] >= 8.0) and np.all(p[:, 1] < 472.0)
    assert np.all(v >= -200.0) and np.all(v < 200.0)
    # Not degenerate
    assert np.std(p[:, 0]) > 50.0
    assert np.std(v[:, 1]) > 20.0


def test_create_is_reproducible_for_a_seed():
    cfg = SimConfig(particle_count=20, master_seed=11)
    a = ParticleStore.create(cfg)
    b = ParticleStore.create(cfg)
    c = ParticleStore.create(cfg, rng=np.random.default_rng(12))

    assert np.array_equal(a.positions, b.positions)
    assert np.array_equal(a.velocities, b.velocities)
    assert not np.array_equal(a.positions, c.positions)


def test_module_level_create_and_destroy():
    store = create(5, (400, 300), 2.0, rng=np.random.default_rng(0))

    assert len(store) == 5
    assert store.config.bounds == (400, 300)
    assert np.all(np.abs(store.velocities) <= 200.0)

    destroy(store)
    assert store.released


def test_allocation_failure_raises_allocation_error(monkeypatch):
    def out_of_memory(count):
        raise MemoryError("no room")

    monkeypatch.setattr(store_module, "_allocate_buffer", out_of_memory)

    with pytest.raises(AllocationError) as info:
        ParticleStore.create(SimConfig())
    assert isinstance(info.value, MemoryError)
    assert isinstance(info.value.__cause__, MemoryError)


class _FailingRng:
    """Generator stand-in whose n-th uniform() call raises."""

    def __init__(self, fail_on: int, exc: Exception):
        self.calls = 0
        self.fail_on = fail_on
        self.exc = exc

    def uniform(self, low, high, size=None):
        self.calls += 1
        if self.calls == self.fail_on:
            raise self.exc
        return np.full(size, 0.5 * (low + high))


def _spy_on_destroy(monkeypatch):
    released = []
    original = ParticleStore.destroy

    def spy(self):
        released.append(self._buffer is not None)
        original(self)

    monkeypatch.setattr(ParticleStore, "destroy", spy)
    return released


def test_partial_initialization_is_released(monkeypatch):
    """A failure after allocation must release the buffer before raising."""
    released = _spy_on_destroy(monkeypatch)

    with pytest.raises(AllocationError):
        ParticleStore.create(SimConfig(), rng=_FailingRng(3, MemoryError("late")))

    assert released == [True]


def test_other_initialization_errors_propagate_after_cleanup(monkeypatch):
    released = _spy_on_destroy(monkeypatch)

    with pytest.raises(RuntimeError, match="rng broke"):
        ParticleStore.create(SimConfig(), rng=_FailingRng(1, RuntimeError("rng broke")))

    assert released == [True]


def test_destroy_is_idempotent_and_blocks_access():
    store = ParticleStore.create(SimConfig(master_seed=1))
    store.destroy()
    store.destroy()

    assert store.released
    with pytest.raises(StoreReleasedError):
        store.positions
    with pytest.raises(StoreReleasedError):
        len(store)


def test_destroy_on_never_initialized_store():
    store = ParticleStore(SimConfig())
    store.destroy()
    assert store.released


def test_context_manager_destroys_on_exit():
    with ParticleStore.create(SimConfig(master_seed=2)) as store:
        assert len(store) == 10
    assert store.released


def test_particle_view_writes_through_to_buffer():
    store = ParticleStore.create(SimConfig(master_seed=4))
    p = store[3]
    p.velocity[0] = 123.0
    p.position[1] = 55.5

    assert store.velocities[3, 0] == 123.0
    assert store.positions[3, 1] == 55.5
    assert p.radius == store.radius
    assert store[-1].index == len(store) - 1
    with pytest.raises(IndexError):
        store[len(store)]


def test_buffer_is_one_contiguous_record_array():
    store = ParticleStore.create(SimConfig(particle_count=7, master_seed=5))
    assert store.buffer.flags["C_CONTIGUOUS"]
    assert store.buffer.shape == (7,)
    assert np.shares_memory(store.positions, store.buffer)
    assert np.shares_memory(store.velocities, store.buffer)


def test_pixel_positions_truncate_toward_zero():
    store = ParticleStore.from_state(
        SimConfig(),
        positions=[(10.9, 20.2), (799.99, 0.5), (-3.7, 5.5)],
        velocities=[(0, 0), (0, 0), (0, 0)],
    )
    assert store.pixel_positions().tolist() == [[10, 20], [799, 0], [-3, 5]]
    assert store[0].pixel_position == (10, 20)


def test_from_state_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        ParticleStore.from_state(SimConfig(), [(1, 1), (2, 2)], [(0, 0)])
