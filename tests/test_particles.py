"""
Test cases for the particle lifecycle engine.
"""
import random
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from constellation.config import ParticleConfig
from constellation.particles import Particle, ParticleEngine
from constellation.scheduler import ManualFrameScheduler
from constellation.surface_mock import MockSurface
from constellation.templates import TIGER, ConstellationTemplate, get_template
from constellation.types import ParticlePhase, SchedulerState, SurfaceProto

PHASE_ORDER = [ParticlePhase.SPAWNING, ParticlePhase.FLOATING, ParticlePhase.DYING]


def make_particle(max_age=6000.0, age=0.0):
    return Particle(
        id=0,
        position=np.zeros(2),
        target_position=np.zeros(2),
        velocity=np.zeros(2),
        size=5.0,
        color=(255, 255, 255),
        rotation=0.0,
        rotation_speed=0.01,
        max_age=max_age,
        age=age,
    )


class TestParticlePhases(unittest.TestCase):
    """Test age-derived phase and alpha."""

    def test_alpha_curve(self):
        p = make_particle(max_age=6000.0)
        expectations = [
            (0.0, 0.0),
            (250.0, 0.5),
            (500.0, 1.0),
            (3000.0, 1.0),
            (5000.0, 1.0),
            (5500.0, 0.5),
            (6000.0, 0.0),
            (6500.0, 0.0),
        ]
        for age, alpha in expectations:
            p.age = age
            self.assertAlmostEqual(p.alpha, alpha, msg=f"age={age}")

    def test_phase_boundaries(self):
        p = make_particle(max_age=6000.0)
        for age, phase in [(0.0, ParticlePhase.SPAWNING), (499.9, ParticlePhase.SPAWNING),
                           (500.0, ParticlePhase.FLOATING), (4999.9, ParticlePhase.FLOATING),
                           (5000.0, ParticlePhase.DYING), (6000.0, ParticlePhase.DYING)]:
            p.age = age
            self.assertIs(p.phase, phase, msg=f"age={age}")

    def test_phase_never_regresses(self):
        p = make_particle(max_age=5500.0)
        last = 0
        while not p.expired:
            index = PHASE_ORDER.index(p.phase)
            self.assertGreaterEqual(index, last)
            last = index
            p.age += 16.0
        self.assertEqual(last, 2)

    def test_phase_not_settable(self):
        p = make_particle()
        with self.assertRaises(AttributeError):
            p.phase = ParticlePhase.DYING


class TestParticleEngine(unittest.TestCase):
    """Test spawning, ticking and stopping."""

    def setUp(self):
        self.surface = MockSurface()
        self.scheduler = ManualFrameScheduler()
        self.engine = ParticleEngine(
            cfg=ParticleConfig(),
            surface=self.surface,
            scheduler=self.scheduler,
            rng=random.Random(7),
            clock=self.scheduler.clock,
        )

    def test_mock_surface_implements_protocol(self):
        self.assertIsInstance(self.surface, SurfaceProto)

    def test_spawn_one_particle_per_anchor(self):
        count = self.engine.spawn_constellation((320.0, 240.0), 300.0)
        self.assertEqual(count, len(TIGER))
        self.assertEqual(len(self.engine.particles), len(TIGER))
        for p in self.engine.particles:
            self.assertEqual(p.alpha, 0.0)
            self.assertIs(p.phase, ParticlePhase.SPAWNING)

    def test_spawn_ranges(self):
        self.engine.spawn_constellation((320.0, 240.0), 300.0)
        anchors = TIGER.scaled((320.0, 240.0), 300.0)
        for p, anchor in zip(self.engine.particles, anchors):
            self.assertTrue(3.0 <= p.size <= 7.0)
            self.assertTrue(5000.0 <= p.max_age <= 8000.0)
            np.testing.assert_allclose(p.target_position, anchor)
            self.assertLessEqual(np.linalg.norm(p.position - p.target_position), 40.0 + 1e-9)
        self.assertEqual(len({p.id for p in self.engine.particles}), len(TIGER))

    def test_spawn_starts_loop(self):
        self.assertIs(self.engine.state, SchedulerState.IDLE)
        self.engine.spawn_constellation((320.0, 240.0))
        self.assertIs(self.engine.state, SchedulerState.RUNNING)
        self.assertTrue(self.scheduler.pending)

    def test_respawn_replaces_live_set(self):
        ring = get_template("ring")
        engine = ParticleEngine(surface=self.surface, scheduler=self.scheduler,
                                template=ring, clock=self.scheduler.clock)
        engine.spawn_constellation((100.0, 100.0), 100.0)
        self.scheduler.advance(1000.0)
        first_ids = {p.id for p in engine.particles}

        engine.spawn_constellation((200.0, 200.0), 100.0)
        self.assertEqual(len(engine.particles), len(ring))
        self.assertTrue(first_ids.isdisjoint({p.id for p in engine.particles}))
        self.assertTrue(all(p.age == 0.0 for p in engine.particles))

    def test_tick_advances_age_and_renders(self):
        self.engine.spawn_constellation((320.0, 240.0))
        self.scheduler.advance(250.0)
        self.assertEqual(self.surface.render_count, 1)
        for p in self.engine.particles:
            self.assertEqual(p.age, 250.0)
            self.assertAlmostEqual(p.alpha, 0.5)

    def test_particles_removed_at_max_age(self):
        self.engine.spawn_constellation((320.0, 240.0))
        shortest = min(p.max_age for p in self.engine.particles)

        self.scheduler.advance(shortest - 1.0)
        self.assertEqual(len(self.engine.particles), len(TIGER))

        self.scheduler.advance(1.0)
        self.assertLess(len(self.engine.particles), len(TIGER))
        for p in self.engine.particles:
            self.assertLess(p.age, p.max_age)

    def test_loop_goes_idle_when_empty(self):
        self.engine.spawn_constellation((320.0, 240.0))
        frames = self.scheduler.run_until_idle()

        self.assertGreater(frames, 0)
        self.assertIs(self.engine.state, SchedulerState.IDLE)
        self.assertFalse(self.scheduler.pending)
        self.assertEqual(self.engine.particles, [])
        self.assertEqual(self.surface.last_frame, [])
        # Every particle lives between 5 and 8 seconds
        self.assertGreaterEqual(self.scheduler.now_ms, 5000.0)
        self.assertLessEqual(self.scheduler.now_ms, 8000.0 + self.scheduler.frame_ms)

        # Nothing further is scheduled
        self.assertFalse(self.scheduler.advance())

    def test_rendered_alpha_follows_lifecycle(self):
        """Alpha drawn each tick rises to 1 by 500ms, holds, and fades to 0 by max_age."""
        self.engine.spawn_constellation((320.0, 240.0))
        max_ages = {p.id: p.max_age for p in self.engine.particles}
        self.scheduler.run_until_idle()

        for pid, max_age in max_ages.items():
            history = self.surface.history(pid)
            self.assertGreater(len(history), 0)

            last_phase = 0
            last_age = 0.0
            for snap in history:
                self.assertGreater(snap.age, last_age)
                last_age = snap.age
                index = PHASE_ORDER.index(snap.phase)
                self.assertGreaterEqual(index, last_phase)
                last_phase = index

                if snap.age < 500.0:
                    self.assertAlmostEqual(snap.alpha, snap.age / 500.0)
                elif snap.age <= max_age - 1000.0:
                    self.assertEqual(snap.alpha, 1.0)
                else:
                    self.assertAlmostEqual(snap.alpha, 1.0 - (snap.age - (max_age - 1000.0)) / 1000.0)
                self.assertLess(snap.age, max_age)

            self.assertLess(history[0].alpha, 0.1)
            self.assertEqual(last_phase, 2)
            # Last drawn within one frame of max_age, so nearly transparent
            self.assertLessEqual(history[-1].alpha, self.scheduler.frame_ms / 1000.0 + 1e-9)

    def test_recorded_frames_do_not_change(self):
        self.engine.spawn_constellation((320.0, 240.0))
        self.scheduler.advance(250.0)
        first = list(self.surface.frames[0])
        self.scheduler.advance(1000.0)
        self.assertEqual(self.surface.frames[0], first)
        self.assertAlmostEqual(first[0].alpha, 0.5)
        self.assertEqual(self.surface.frames[1][0].alpha, 1.0)

    def test_particles_settle_toward_targets(self):
        cfg = ParticleConfig(wobble_amplitude=0.0)
        engine = ParticleEngine(cfg=cfg, scheduler=self.scheduler, rng=random.Random(3),
                                clock=self.scheduler.clock)
        engine.spawn_constellation((320.0, 240.0), 300.0)
        start = np.mean([np.linalg.norm(p.position - p.target_position) for p in engine.particles])

        for _ in range(240):
            self.scheduler.advance()
        end = np.mean([np.linalg.norm(p.position - p.target_position) for p in engine.particles])
        self.assertLess(end, start)

    def test_rotation_advances(self):
        self.engine.spawn_constellation((320.0, 240.0))
        before = [p.rotation for p in self.engine.particles]
        self.scheduler.advance()
        for p, r in zip(self.engine.particles, before):
            self.assertAlmostEqual(p.rotation, (r + p.rotation_speed) % (2 * np.pi))

    def test_stop_on_idle_engine_is_noop(self):
        self.engine.stop()
        self.engine.stop()
        self.assertIs(self.engine.state, SchedulerState.IDLE)
        self.assertEqual(self.surface.clear_count, 0)
        self.assertEqual(self.surface.render_count, 0)

    def test_stop_empties_active_engine(self):
        self.engine.spawn_constellation((320.0, 240.0))
        self.scheduler.advance(100.0)
        self.engine.stop()

        self.assertEqual(self.engine.particles, [])
        self.assertIs(self.engine.state, SchedulerState.IDLE)
        self.assertFalse(self.scheduler.pending)
        self.assertEqual(self.surface.clear_count, 1)

        self.engine.stop()
        self.assertEqual(self.surface.clear_count, 1)

    def test_spawn_after_stop_restarts(self):
        self.engine.spawn_constellation((320.0, 240.0))
        self.engine.stop()
        self.engine.spawn_constellation((320.0, 240.0))
        self.assertIs(self.engine.state, SchedulerState.RUNNING)
        self.assertTrue(self.scheduler.pending)

    def test_running_follows_loop_state(self):
        self.assertFalse(self.engine.running)
        self.engine.spawn_constellation((320.0, 240.0))
        self.assertTrue(self.engine.running)
        self.engine.stop()
        self.assertFalse(self.engine.running)

        self.engine.spawn_constellation((320.0, 240.0))
        self.scheduler.run_until_idle()
        self.assertFalse(self.engine.running)

    def test_manual_tick_without_scheduler(self):
        engine = ParticleEngine(rng=random.Random(1), clock=lambda: 0.0)
        engine.spawn_constellation((0.0, 0.0), 10.0, now=0.0)
        self.assertEqual(engine.tick(now=9000.0), 0)
        self.assertIs(engine.state, SchedulerState.IDLE)
        self.assertEqual(engine.tick(now=9100.0), 0)


class TestTemplates(unittest.TestCase):
    """Test constellation templates."""

    def test_registry(self):
        self.assertIs(get_template("tiger"), TIGER)
        self.assertGreater(len(get_template("ring")), 0)
        self.assertGreater(len(get_template("star")), 0)

    def test_unknown_template(self):
        with self.assertRaises(KeyError):
            get_template("dragon")

    def test_points_normalized(self):
        for name in ("tiger", "ring", "star"):
            for x, y in get_template(name).points:
                self.assertTrue(0.0 <= x <= 1.0 and 0.0 <= y <= 1.0)

    def test_scaled_maps_center(self):
        template = ConstellationTemplate("pair", ((0.5, 0.5), (1.0, 0.0)))
        self.assertEqual(template.scaled((100.0, 50.0), 200.0), [(100.0, 50.0), (200.0, -50.0)])

    def test_rejects_points_outside_unit_square(self):
        with self.assertRaises(ValueError):
            ConstellationTemplate("bad", ((1.5, 0.5),))

    def test_templates_are_read_only(self):
        with self.assertRaises(AttributeError):
            TIGER.points = ()


if __name__ == '__main__':
    unittest.main()
