"""
Type definitions for the gesture constellation system.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, NamedTuple, Optional, Protocol, Sequence, Tuple, runtime_checkable


class Point3D(NamedTuple):
    """A landmark in normalized scene space: x, y in [0..1], z is relative depth."""
    x: float
    y: float
    z: float = 0.0


# 21 landmarks: wrist (0) then four joints per finger, thumb to pinky
HandObservation = Sequence[Point3D]

LANDMARK_COUNT = 21
WRIST = 0


@dataclass
class GestureMetrics:
    """Geometry measured on a two-hand frame."""
    wrist_distance: float
    center_distance: float
    proximity: float  # 0 when wrists are at the proximity limit, 1 when touching
    stability: float  # mean stillness of both hands


@dataclass
class GestureResult:
    """Outcome of classifying a single frame."""
    detected: bool
    confidence: float
    metrics: Optional[GestureMetrics]
    reason: str


@dataclass
class GestureState:
    """
    Gesture status carried across frames.

    The classifier writes detected/confidence/metrics/reason every frame.
    last_trigger_timestamp belongs to the trigger policy and is never touched
    by classification.
    """
    detected: bool = False
    confidence: float = 0.0
    metrics: Optional[GestureMetrics] = None
    reason: str = "no hands"
    last_trigger_timestamp: Optional[float] = None

    def apply(self, result: GestureResult) -> None:
        """Copy a frame's classification into the state."""
        self.detected = result.detected
        self.confidence = result.confidence
        self.metrics = result.metrics
        self.reason = result.reason

    @property
    def confidence_percent(self) -> int:
        return int(round(self.confidence * 100))

    def status_text(self) -> str:
        """Human-readable status line for display."""
        if self.detected:
            return f"Gesture detected ({self.confidence_percent}%)"
        return f"No gesture: {self.reason}"


@dataclass
class SpawnEvent:
    """Emitted by the trigger policy when a constellation should appear."""
    timestamp: float  # ms, monotonic
    confidence: float
    center: Tuple[float, float]  # normalized [0..1] frame coordinates


class ParticlePhase(str, Enum):
    """Life phase of a particle, derived from its age."""
    SPAWNING = "spawning"
    FLOATING = "floating"
    DYING = "dying"


class SchedulerState(str, Enum):
    """Whether the particle tick loop has a frame scheduled."""
    IDLE = "idle"
    RUNNING = "running"


FrameCallback = Callable[[float], None]


@runtime_checkable
class FrameScheduler(Protocol):
    """Schedules one callback on the next display refresh."""

    def request_frame(self, callback: FrameCallback) -> None:
        """Run callback(now_ms) once on the next frame."""
        ...

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        ...


@runtime_checkable
class SurfaceProto(Protocol):
    """Abstract protocol for surfaces that draw particles."""

    def render(self, particles: List[Any]) -> None:
        """Draw the given live particles."""
        ...

    def clear(self) -> None:
        """Remove everything drawn so far."""
        ...
