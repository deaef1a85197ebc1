# MIT License (see LICENSE)
"""
Command-line front-end.

Opens a pygame window, measures the frame time with pygame's clock, feeds
it (clamped) to the engine and draws the particles, until the window is
closed. With --headless the same loop runs without a window at a fixed
time step of 1/fps and prints frames as text.

Run:
  particle-sim --config config.json
  particle-sim --headless --frames 240 --seed 1
"""
from __future__ import annotations
import argparse
import logging
from dataclasses import replace

from .config import RunConfig, load_run_config
from .core.invariants import kinetic_energy
from .engine import PhysicsEngine
from .errors import AllocationError
from .logging_setup import setup_logging
from .renderer import DebugRenderer, NullRenderer, RendererAdapter
from .store import ParticleStore
from .util import clamp_delta_time

logger = logging.getLogger(__name__)

TITLE = "Particles"


def _log_energy(store: ParticleStore, frame: int, fps: int) -> None:
    # Throttled to once per simulated second
    if frame % fps == 0:
        logger.debug("Frame=%d, Kinetic=%.2f", frame, kinetic_energy(store))


def run_headless(
    engine: PhysicsEngine,
    store: ParticleStore,
    frames: int,
    renderer: RendererAdapter,
) -> int:
    """
    Step store for a fixed number of frames at dt = 1/fps.

    Returns:
        Number of frames simulated.
    """
    dt = 1.0 / engine.config.fps
    for frame in range(frames):
        engine.step(store, dt)
        renderer.render_store(store, frame)
        _log_energy(store, frame, engine.config.fps)
    return frames


def run_window(engine: PhysicsEngine, store: ParticleStore, frames: int | None = None) -> int:
    """
    Interactive loop in a pygame window.

    Args:
        frames: Stop after this many frames (None = until the window closes).

    Returns:
        Number of frames simulated.
    """
    import pygame

    from .renderer.pygame_renderer import PygameRenderer

    cfg = engine.config
    pygame.init()
    try:
        screen = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        renderer = PygameRenderer(screen)

        frame = 0
        running = True
        clock.tick()
        while running and (frames is None or frame < frames):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

            # tick() paces the loop to cfg.fps and returns elapsed ms
            dt = clamp_delta_time(clock.tick(cfg.fps) / 1000.0, cfg.max_delta_time)
            engine.step(store, dt)
            renderer.render_store(store, frame)
            _log_energy(store, frame, cfg.fps)
            frame += 1
    finally:
        pygame.quit()
    return frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="particle-sim", description="2D particle simulator")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--seed", type=int, help="Override the initialization seed")
    parser.add_argument("--count", type=int, help="Override the particle count")
    parser.add_argument("--frames", type=int, help="Stop after this many frames")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--quiet", action="store_true", help="With --headless, do not print frames")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run_cfg = load_run_config(args.config) if args.config else RunConfig()
        sim = run_cfg.simulation
        if args.seed is not None:
            sim = replace(sim, master_seed=args.seed)
        if args.count is not None:
            sim = replace(sim, particle_count=args.count)
        setup_logging(run_cfg.log_level, run_cfg.log_format, run_cfg.run_id)
    except (OSError, ValueError) as exc:
        # ConfigError and json.JSONDecodeError are both ValueErrors
        parser.error(str(exc))

    logger.info("Application starting...")
    logger.info("Loaded configuration: %s", sim)

    try:
        store = ParticleStore.create(sim)
    except AllocationError:
        logger.exception("Could not create the particle store")
        return 1

    engine = PhysicsEngine(sim)
    with store:
        if args.headless:
            renderer = NullRenderer() if args.quiet else DebugRenderer()
            n = run_headless(engine, store, args.frames if args.frames is not None else sim.fps, renderer)
        else:
            n = run_window(engine, store, args.frames)

    logger.info("Simulated %d frames. Application shutting down.", n)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
