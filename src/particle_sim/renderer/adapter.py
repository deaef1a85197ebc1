# MIT License (see LICENSE)
"""
Renderer adapters for particle visualization.

The engine has no rendering dependency. Renderers only read particle
centres, converted to integer pixels by truncation toward zero, and the
shared radius.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

if TYPE_CHECKING:
    from ..store import ParticleStore


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame(frame)
        for i, (x, y) in enumerate(store.pixel_positions()):
            renderer.draw_particle(i, x, y, radius)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_store(store, frame)
    """

    @abstractmethod
    def begin_frame(self, frame: int) -> None:
        """
        Begin a new frame.

        Args:
            frame: Index of the frame being drawn.
        """
        ...

    @abstractmethod
    def draw_particle(self, index: int, x: int, y: int, radius: int) -> None:
        """
        Draw one particle as a filled circle.

        Args:
            index: Particle index in the store.
            x: Centre x in pixels.
            y: Centre y in pixels.
            radius: Radius in pixels.
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_store(self, store: "ParticleStore", frame: int = 0) -> None:
        """Render every particle of store as one frame."""
        radius = int(store.radius)
        self.begin_frame(frame)
        for i, (x, y) in enumerate(store.pixel_positions()):
            self.draw_particle(i, int(x), int(y), radius)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and headless runs.

    Output:
        === Frame 12 ===
        [0] r=10 @ (412, 87)
        [1] r=10 @ (35, 790)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def begin_frame(self, frame: int) -> None:
        self.output.write(f"=== Frame {frame} ===\n")

    def draw_particle(self, index: int, x: int, y: int, radius: int) -> None:
        self.output.write(f"[{index}] r={radius} @ ({x}, {y})\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarking without drawing overhead."""

    def begin_frame(self, frame: int) -> None:
        pass

    def draw_particle(self, index: int, x: int, y: int, radius: int) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records drawn frames for later inspection.

    Example:
        renderer = BufferedRenderer()
        for frame in range(100):
            engine.step(store, 1 / 240)
            renderer.render_store(store, frame)

        for f in renderer.frames:
            print(f["frame"], f["particles"][0])
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, frame: int) -> None:
        self._current_frame = {
            "frame": frame,
            "particles": [],
        }

    def draw_particle(self, index: int, x: int, y: int, radius: int) -> None:
        if self._current_frame is None:
            return
        self._current_frame["particles"].append((x, y, radius))

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
