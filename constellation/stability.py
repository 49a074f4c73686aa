"""
Per-hand stillness tracking across frames.
"""
import logging
from typing import Any, List, Optional

import numpy as np

from .geometry import as_observation, clamp

logger = logging.getLogger(__name__)

SLOT_COUNT = 2


class StabilityTracker:
    """
    Scores how still each tracked hand is from its inter-frame displacement.

    Keeps the previous observation for hand slots 0 and 1. A slot without
    history reports the neutral stillness.
    """

    def __init__(self, movement_scale: float = 10.0, neutral_stillness: float = 0.5):
        """
        Initialize the tracker.

        Args:
            movement_scale: Multiplier on mean landmark movement; the default
                keeps normal hand jitter above 0.7 stillness
            neutral_stillness: Stillness reported for a slot seen for the first time
        """
        self.movement_scale = movement_scale
        self.neutral_stillness = neutral_stillness
        self._previous: List[Optional[np.ndarray]] = [None] * SLOT_COUNT
        self._stillness: List[float] = [neutral_stillness] * SLOT_COUNT

    def update(self, slot: int, observation: Any) -> float:
        """
        Advance one slot by a frame and return its stillness.

        Args:
            slot: Hand slot index (0 or 1)
            observation: 21 landmarks for the hand in that slot

        Returns:
            Stillness in [0..1], 1 meaning motionless

        Raises:
            InvalidObservation: if the observation is malformed; stored
                history is left untouched
        """
        if slot < 0 or slot >= SLOT_COUNT:
            raise ValueError(f"Hand slot must be 0 or 1, got {slot}")

        current = as_observation(observation)
        previous = self._previous[slot]

        if previous is None:
            stillness = self.neutral_stillness
        else:
            avg_movement = float(np.linalg.norm(current - previous, axis=1).mean())
            stillness = clamp(1.0 - avg_movement * self.movement_scale, 0.0, 1.0)

        self._previous[slot] = current.copy()
        self._stillness[slot] = stillness
        return stillness

    def stillness(self, slot: int) -> float:
        """Last stillness computed for a slot."""
        return self._stillness[slot]

    def has_history(self, slot: int) -> bool:
        return self._previous[slot] is not None

    def reset(self) -> None:
        """Forget all slot history."""
        if any(p is not None for p in self._previous):
            logger.debug("Clearing stability history")
        self._previous = [None] * SLOT_COUNT
        self._stillness = [self.neutral_stillness] * SLOT_COUNT
