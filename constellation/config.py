"""
Configuration management for the gesture constellation system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, field


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 2
    model_complexity: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.5


@dataclass
class GestureConfig:
    """Two-hand gesture calibration."""
    wrist_distance_max: float = 0.25
    center_distance_max: float = 0.20
    stability_min: float = 0.7
    movement_scale: float = 10.0
    neutral_stillness: float = 0.5
    proximity_weight: float = 0.7

    def __post_init__(self):
        if self.wrist_distance_max <= 0 or self.center_distance_max <= 0:
            raise ValueError("Proximity thresholds must be positive")
        if not 0.0 <= self.stability_min <= 1.0:
            raise ValueError(f"stability_min must be in [0, 1], got {self.stability_min}")
        if not 0.0 <= self.proximity_weight <= 1.0:
            raise ValueError(f"proximity_weight must be in [0, 1], got {self.proximity_weight}")
        if not 0.0 <= self.neutral_stillness <= 1.0:
            raise ValueError(f"neutral_stillness must be in [0, 1], got {self.neutral_stillness}")


@dataclass
class TriggerConfig:
    """Spawn trigger configuration."""
    confidence_threshold: float = 0.8
    cooldown_ms: float = 3000.0

    def __post_init__(self):
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must not be negative, got {self.cooldown_ms}")


@dataclass
class ParticleConfig:
    """Particle lifecycle and motion configuration."""
    template: str = "tiger"
    scale_px: float = 320.0
    spawn_ms: float = 500.0
    fade_out_ms: float = 1000.0
    lifetime_min_ms: float = 5000.0
    lifetime_max_ms: float = 8000.0
    size_min: float = 3.0
    size_max: float = 7.0
    jitter_px: float = 40.0
    max_speed: float = 1.5
    max_rotation_speed: float = 0.05
    damping: float = 0.98
    attraction: float = 0.02
    wobble_amplitude: float = 0.05
    wobble_frequency: float = 0.002
    palette: List[Tuple[int, int, int]] = field(default_factory=lambda: [
        (255, 215, 0),
        (255, 140, 0),
        (135, 206, 250),
        (255, 255, 255),
        (186, 85, 211),
    ])

    def __post_init__(self):
        if self.spawn_ms <= 0 or self.fade_out_ms <= 0:
            raise ValueError("spawn_ms and fade_out_ms must be positive")
        if self.lifetime_min_ms > self.lifetime_max_ms:
            raise ValueError("lifetime_min_ms must not exceed lifetime_max_ms")
        if self.lifetime_min_ms < self.spawn_ms + self.fade_out_ms:
            raise ValueError("Particle lifetime must cover the fade-in and fade-out")
        if self.size_min > self.size_max:
            raise ValueError("size_min must not exceed size_max")
        if not self.palette:
            raise ValueError("Particle palette must not be empty")


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    show_fps: bool = True
    glow: bool = True
    render_fps: int = 60
    window_name: str = "Gesture Constellation"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gesture: GestureConfig = field(default_factory=GestureConfig)
    trigger: TriggerConfig = field(default_factory=TriggerConfig)
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data['mirror']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gesture_data = data['gesture']
    gesture = GestureConfig(
        wrist_distance_max=gesture_data['wrist_distance_max'],
        center_distance_max=gesture_data['center_distance_max'],
        stability_min=gesture_data['stability_min'],
        movement_scale=gesture_data['movement_scale'],
        neutral_stillness=gesture_data['neutral_stillness'],
        proximity_weight=gesture_data['proximity_weight']
    )

    trigger_data = data['trigger']
    trigger = TriggerConfig(
        confidence_threshold=trigger_data['confidence_threshold'],
        cooldown_ms=trigger_data['cooldown_ms']
    )

    p_data = data['particles']
    particles = ParticleConfig(
        template=p_data['template'],
        scale_px=p_data['scale_px'],
        spawn_ms=p_data['spawn_ms'],
        fade_out_ms=p_data['fade_out_ms'],
        lifetime_min_ms=p_data['lifetime_min_ms'],
        lifetime_max_ms=p_data['lifetime_max_ms'],
        size_min=p_data['size_min'],
        size_max=p_data['size_max'],
        jitter_px=p_data['jitter_px'],
        max_speed=p_data['max_speed'],
        max_rotation_speed=p_data['max_rotation_speed'],
        damping=p_data['damping'],
        attraction=p_data['attraction'],
        wobble_amplitude=p_data['wobble_amplitude'],
        wobble_frequency=p_data['wobble_frequency'],
        palette=[tuple(c) for c in p_data['palette']]
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_fps=display_data['show_fps'],
        glow=display_data['glow'],
        render_fps=display_data['render_fps'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gesture=gesture,
        trigger=trigger,
        particles=particles,
        display=display
    )
