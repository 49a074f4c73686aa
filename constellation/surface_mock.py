"""
Mock surface implementation for testing the particle engine.
"""
from typing import List, NamedTuple

from .particles import Particle
from .types import ParticlePhase


class ParticleSnapshot(NamedTuple):
    """What a particle looked like when it was drawn."""
    id: int
    age: float
    alpha: float
    phase: ParticlePhase


class MockSurface:
    """Mock surface that records frames instead of drawing them."""

    def __init__(self):
        """Initialize the mock surface."""
        self.frames: List[List[ParticleSnapshot]] = []
        self.render_count = 0
        self.clear_count = 0

    def render(self, particles: List[Particle]) -> None:
        """Record the particles that would have been drawn, as of this call."""
        self.render_count += 1
        self.frames.append([ParticleSnapshot(p.id, p.age, p.alpha, p.phase) for p in particles])

    def clear(self) -> None:
        """Record a clear."""
        self.clear_count += 1

    @property
    def last_frame(self) -> List[ParticleSnapshot]:
        return self.frames[-1] if self.frames else []

    def history(self, particle_id: int) -> List[ParticleSnapshot]:
        """Every recorded snapshot of one particle, oldest first."""
        return [s for frame in self.frames for s in frame if s.id == particle_id]

    def reset_counters(self) -> None:
        """Reset recorded calls for testing."""
        self.frames = []
        self.render_count = 0
        self.clear_count = 0
