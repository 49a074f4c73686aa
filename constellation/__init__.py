"""
Gesture Constellation

Recognizes two hands held together and still from per-frame hand landmarks,
and answers with a particle constellation that settles into a silhouette and
fades out.
"""

__version__ = "0.1.0"

from .types import (
    Point3D,
    GestureMetrics,
    GestureResult,
    GestureState,
    SpawnEvent,
    ParticlePhase,
    SchedulerState,
    SurfaceProto,
    FrameScheduler,
)
from .errors import ConstellationError, InvalidObservation
from .config import load_config, Cfg
from .geometry import distance, centroid
from .stability import StabilityTracker
from .gestures import GestureClassifier, TriggerPolicy, GestureProcessor
from .templates import ConstellationTemplate, get_template, TEMPLATES
from .particles import Particle, ParticleEngine
from .scheduler import AsyncioFrameScheduler, ManualFrameScheduler
from .surface_mock import MockSurface

__all__ = [
    "Point3D",
    "GestureMetrics",
    "GestureResult",
    "GestureState",
    "SpawnEvent",
    "ParticlePhase",
    "SchedulerState",
    "SurfaceProto",
    "FrameScheduler",
    "ConstellationError",
    "InvalidObservation",
    "load_config",
    "Cfg",
    "distance",
    "centroid",
    "StabilityTracker",
    "GestureClassifier",
    "TriggerPolicy",
    "GestureProcessor",
    "ConstellationTemplate",
    "get_template",
    "TEMPLATES",
    "Particle",
    "ParticleEngine",
    "AsyncioFrameScheduler",
    "ManualFrameScheduler",
    "MockSurface",
]
