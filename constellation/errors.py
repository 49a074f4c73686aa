"""
Exceptions raised by the gesture constellation core.
"""


class ConstellationError(Exception):
    """Base class for errors raised by this package."""


class InvalidObservation(ConstellationError, ValueError):
    """A hand observation did not contain 21 finite 3D landmarks."""
