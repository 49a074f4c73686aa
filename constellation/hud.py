"""
Status overlay: frame rate, hand count, gesture status and instructions.
"""
from typing import Optional, Sequence

import cv2
import numpy as np

from .types import GestureState

# BGR
STATUS_COLORS = {
    "success": (80, 175, 76),
    "warning": (7, 193, 255),
    "error": (34, 87, 255),
}

INSTRUCTIONS = {
    0: ("Hold your hands in front of the camera", (200, 200, 200)),
    1: ("Now show your other hand", STATUS_COLORS["warning"]),
    2: ("Bring both hands together and hold still", STATUS_COLORS["success"]),
}


class FrameRateMeter:
    """Frames per second over one-second windows."""

    def __init__(self, window_ms: float = 1000.0, good_fps: int = 25, fair_fps: int = 15):
        self.window_ms = window_ms
        self.good_fps = good_fps
        self.fair_fps = fair_fps
        self.fps = 0
        self._count = 0
        self._window_start: Optional[float] = None

    def tick(self, t_now: float) -> int:
        if self._window_start is None:
            self._window_start = t_now
        self._count += 1
        elapsed = t_now - self._window_start
        if elapsed >= self.window_ms:
            self.fps = int(round(self._count * 1000.0 / elapsed))
            self._count = 0
            self._window_start = t_now
        return self.fps

    def status(self) -> str:
        """Rate class of the last measurement: success, warning or error."""
        if self.fps >= self.good_fps:
            return "success"
        if self.fps >= self.fair_fps:
            return "warning"
        return "error"


def draw_status(frame: np.ndarray, state: GestureState, hands: Sequence,
                meter: Optional[FrameRateMeter] = None) -> np.ndarray:
    """
    Draw the status lines and the hand-count instruction on the frame.

    Args:
        frame: BGR frame
        state: Current gesture state
        hands: Hands seen this frame
        meter: Frame rate meter to show; None hides the FPS line

    Returns:
        Frame with the overlay drawn
    """
    lines = []
    if meter is not None:
        lines.append((f"FPS: {meter.fps}", STATUS_COLORS[meter.status()]))
    lines.append((f"Hands: {len(hands)}", (255, 255, 255)))
    lines.append((state.status_text(), (0, 255, 0) if state.detected else (255, 255, 255)))

    for i, (text, color) in enumerate(lines):
        cv2.putText(frame, text, (10, 30 + i * 25), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)

    instruction, color = INSTRUCTIONS[min(len(hands), 2)]
    cv2.putText(frame, instruction, (10, frame.shape[0] - 40), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)
    cv2.putText(frame, "'r' reset | 'q' quit", (10, frame.shape[0] - 15),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
    return frame
