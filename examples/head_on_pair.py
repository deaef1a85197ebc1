from particle_sim import SimConfig, ParticleStore, PhysicsEngine
from particle_sim.core.invariants import kinetic_energy, linear_momentum

cfg = SimConfig(gravity_acceleration=0.0, restitution=0.9)
store = ParticleStore.from_state(
    cfg,
    positions=[(100.0, 100.0), (115.0, 100.0)],
    velocities=[(10.0, 0.0), (-10.0, 0.0)],
)

p0, ke0 = linear_momentum(store).copy(), kinetic_energy(store)
PhysicsEngine(cfg).step(store, 0.0)
p1, ke1 = linear_momentum(store), kinetic_energy(store)

print("p0", p0, "p1", p1, "dp", p1 - p0)
print("ke0", ke0, "ke1", ke1, "dke", ke1 - ke0)
print("v_final a,b:", store.velocities[0], store.velocities[1])
print("x_final a,b:", store.positions[0, 0], store.positions[1, 0])
