"""
Particle lifecycle engine for the constellation effect.
"""
import itertools
import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .config import ParticleConfig
from .scheduler import monotonic_ms
from .templates import ConstellationTemplate, get_template
from .types import FrameScheduler, ParticlePhase, SchedulerState, SurfaceProto

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Particle:
    """
    One point of light in a constellation.

    phase and alpha are computed from age and max_age on every access, so
    they can never drift from the particle's age.
    """
    id: int
    position: np.ndarray
    target_position: np.ndarray
    velocity: np.ndarray
    size: float
    color: Tuple[int, int, int]
    rotation: float
    rotation_speed: float
    max_age: float
    age: float = 0.0
    spawn_ms: float = 500.0
    fade_out_ms: float = 1000.0

    @property
    def phase(self) -> ParticlePhase:
        if self.age < self.spawn_ms:
            return ParticlePhase.SPAWNING
        if self.age < self.max_age - self.fade_out_ms:
            return ParticlePhase.FLOATING
        return ParticlePhase.DYING

    @property
    def alpha(self) -> float:
        phase = self.phase
        if phase is ParticlePhase.SPAWNING:
            return max(0.0, self.age / self.spawn_ms)
        if phase is ParticlePhase.FLOATING:
            return 1.0
        fade_start = self.max_age - self.fade_out_ms
        return max(0.0, 1.0 - (self.age - fade_start) / self.fade_out_ms)

    @property
    def expired(self) -> bool:
        return self.age >= self.max_age


class ParticleEngine:
    """
    Owns the live particle set and its tick loop.

    Features:
    - One constellation at a time; a new spawn replaces the old one
    - Tick loop runs only while particles are alive and goes idle by itself
    - Spring-like settling toward template anchors with damping and a
      per-particle wobble
    """

    def __init__(self, cfg: Optional[ParticleConfig] = None,
                 surface: Optional[SurfaceProto] = None,
                 scheduler: Optional[FrameScheduler] = None,
                 template: Optional[ConstellationTemplate] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = monotonic_ms):
        """
        Initialize the engine.

        Args:
            cfg: Particle configuration
            surface: Where live particles are drawn each tick
            scheduler: Frame scheduler; without one the owner must call tick()
            template: Template to spawn; defaults to cfg.template
            rng: Random source for jitter, sizes, colors and lifetimes
            clock: Millisecond monotonic clock used when no time is passed in
        """
        self.cfg = cfg or ParticleConfig()
        self.surface = surface
        self.scheduler = scheduler
        self.template = template or get_template(self.cfg.template)
        self.rng = rng or random.Random()
        self.clock = clock

        self.particles: List[Particle] = []
        self.state = SchedulerState.IDLE
        self._ids = itertools.count()
        self._started_at = 0.0
        self._last_tick = 0.0

    @property
    def running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def spawn_constellation(self, center: Tuple[float, float], scale: Optional[float] = None,
                            now: Optional[float] = None) -> int:
        """
        Replace the live set with a fresh constellation.

        Args:
            center: Center of the constellation in surface units (pixels)
            scale: Side length the template square is mapped to; cfg.scale_px by default
            now: Spawn time in ms; the engine clock by default

        Returns:
            Number of particles spawned
        """
        now = self.clock() if now is None else now
        scale = self.cfg.scale_px if scale is None else scale

        self.particles = [self._make_particle(anchor) for anchor in self.template.scaled(center, scale)]
        self._started_at = now
        self._last_tick = now

        logger.info(f"🌌 Spawned '{self.template.name}' constellation with {len(self.particles)} particles")
        self._start()
        return len(self.particles)

    def _make_particle(self, anchor: Tuple[float, float]) -> Particle:
        cfg = self.cfg
        rng = self.rng
        target = np.array(anchor, dtype=float)

        angle = rng.uniform(0.0, 2.0 * math.pi)
        radius = rng.uniform(0.0, cfg.jitter_px)
        jitter = np.array([math.cos(angle), math.sin(angle)]) * radius

        return Particle(
            id=next(self._ids),
            position=target + jitter,
            target_position=target,
            velocity=np.array([rng.uniform(-cfg.max_speed, cfg.max_speed),
                               rng.uniform(-cfg.max_speed, cfg.max_speed)]),
            size=rng.uniform(cfg.size_min, cfg.size_max),
            color=tuple(rng.choice(cfg.palette)),
            rotation=rng.uniform(0.0, 2.0 * math.pi),
            rotation_speed=rng.uniform(-cfg.max_rotation_speed, cfg.max_rotation_speed),
            max_age=rng.uniform(cfg.lifetime_min_ms, cfg.lifetime_max_ms),
            spawn_ms=cfg.spawn_ms,
            fade_out_ms=cfg.fade_out_ms
        )

    def _start(self) -> None:
        if self.state is SchedulerState.RUNNING:
            return
        self.state = SchedulerState.RUNNING
        if self.scheduler is not None:
            self.scheduler.request_frame(self._on_frame)

    def _on_frame(self, now: float) -> None:
        if self.state is not SchedulerState.RUNNING:
            return
        self.tick(now)
        if self.state is SchedulerState.RUNNING and self.scheduler is not None:
            self.scheduler.request_frame(self._on_frame)

    def tick(self, now: Optional[float] = None) -> int:
        """
        Advance every particle to time now, drop the expired ones and render.

        Returns:
            Number of particles still alive
        """
        if self.state is not SchedulerState.RUNNING:
            return 0

        now = self.clock() if now is None else now
        dt = max(0.0, now - self._last_tick)
        self._last_tick = now
        elapsed = now - self._started_at

        for p in self.particles:
            p.age += dt
            self._move(p, elapsed)

        self.particles = [p for p in self.particles if not p.expired]

        if self.surface is not None:
            self.surface.render(list(self.particles))

        if not self.particles:
            self.state = SchedulerState.IDLE
            logger.debug("Constellation finished, tick loop idle")
        return len(self.particles)

    def _move(self, p: Particle, elapsed: float) -> None:
        cfg = self.cfg
        phase = elapsed * cfg.wobble_frequency + p.id
        p.velocity += np.array([math.sin(phase), math.cos(phase * 1.3)]) * cfg.wobble_amplitude
        p.velocity += (p.target_position - p.position) * cfg.attraction
        p.velocity *= cfg.damping
        p.position += p.velocity
        p.rotation = (p.rotation + p.rotation_speed) % (2.0 * math.pi)

    def stop(self) -> None:
        """Drop every particle and halt the tick loop. Safe to call when idle."""
        if self.state is SchedulerState.IDLE and not self.particles:
            return
        if self.scheduler is not None:
            self.scheduler.cancel()
        self.particles = []
        self.state = SchedulerState.IDLE
        if self.surface is not None:
            self.surface.clear()
        logger.info("🛑 Constellation stopped")
