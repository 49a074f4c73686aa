"""
Test cases for configuration loading.
"""
import tempfile
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from constellation.config import (
    DEFAULT_CONFIG_PATH,
    GestureConfig,
    ParticleConfig,
    TriggerConfig,
    load_config,
)


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def test_default_config_matches_calibration(self):
        cfg = load_config()
        self.assertEqual(cfg.gesture, GestureConfig())
        self.assertEqual(cfg.trigger, TriggerConfig())
        self.assertEqual(cfg.particles, ParticleConfig())
        self.assertEqual(cfg.mediapipe.max_num_hands, 2)
        self.assertEqual(cfg.particles.template, "tiger")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_custom_file(self):
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            data = yaml.safe_load(f)
        data['gesture']['wrist_distance_max'] = 0.3
        data['trigger']['cooldown_ms'] = 1500

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            with open(path, 'w') as f:
                yaml.safe_dump(data, f)
            cfg = load_config(str(path))

        self.assertEqual(cfg.gesture.wrist_distance_max, 0.3)
        self.assertEqual(cfg.trigger.cooldown_ms, 1500)
        self.assertEqual(cfg.particles.palette[0], (255, 215, 0))

    def test_missing_section(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("camera: {}\n")
            with self.assertRaises(KeyError):
                load_config(str(path))


class TestConfigValidation(unittest.TestCase):
    """Test calibration range checks."""

    def test_stability_out_of_range(self):
        with self.assertRaises(ValueError):
            GestureConfig(stability_min=1.5)

    def test_non_positive_threshold(self):
        with self.assertRaises(ValueError):
            GestureConfig(wrist_distance_max=0.0)

    def test_negative_cooldown(self):
        with self.assertRaises(ValueError):
            TriggerConfig(cooldown_ms=-1)

    def test_lifetime_too_short_for_fades(self):
        with self.assertRaises(ValueError):
            ParticleConfig(lifetime_min_ms=1000.0, lifetime_max_ms=2000.0)

    def test_empty_palette(self):
        with self.assertRaises(ValueError):
            ParticleConfig(palette=[])

    def test_zero_fade_durations(self):
        """Zero fades would divide by zero when computing alpha."""
        with self.assertRaises(ValueError):
            ParticleConfig(spawn_ms=0.0)
        with self.assertRaises(ValueError):
            ParticleConfig(fade_out_ms=0.0)
        with self.assertRaises(ValueError):
            ParticleConfig(spawn_ms=-500.0, fade_out_ms=1000.0)

    def test_neutral_stillness_out_of_range(self):
        with self.assertRaises(ValueError):
            GestureConfig(neutral_stillness=1.2)
        with self.assertRaises(ValueError):
            GestureConfig(neutral_stillness=-0.1)
        self.assertEqual(GestureConfig(neutral_stillness=1.0).neutral_stillness, 1.0)


if __name__ == '__main__':
    unittest.main()
