"""
Hand landmark detection using MediaPipe and landmark overlay drawing.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import List, Sequence

from .types import Point3D

# BGR colors grouped by finger
WRIST_COLOR = (0, 0, 255)
FINGER_COLORS = [
    (0, 140, 255),   # thumb
    (0, 215, 255),   # index
    (50, 205, 50),   # middle
    (255, 144, 30),  # ring
    (226, 43, 138),  # pinky
]

HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),         # thumb
    (0, 5), (5, 6), (6, 7), (7, 8),         # index
    (0, 9), (9, 10), (10, 11), (11, 12),    # middle
    (0, 13), (13, 14), (14, 15), (15, 16),  # ring
    (0, 17), (17, 18), (18, 19), (19, 20),  # pinky
    (5, 9), (9, 13), (13, 17),              # palm
]


def landmark_color(index: int):
    """Overlay color for a landmark index."""
    if index == 0:
        return WRIST_COLOR
    return FINGER_COLORS[(index - 1) // 4]


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, model_complexity: int = 1,
                 min_detection_conf: float = 0.7, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> List[List[Point3D]]:
        """
        Process a frame and return landmarks for every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One list of 21 Point3D per hand, empty if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return []

        return [
            [Point3D(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]
            for hand_landmarks in results.multi_hand_landmarks
        ]

    def close(self) -> None:
        self.hands.close()


def draw_landmarks(frame: np.ndarray, hands: Sequence[Sequence[Point3D]]) -> np.ndarray:
    """
    Draw hand skeletons, landmark dots and hand labels on the frame.

    Args:
        frame: Input frame
        hands: Hands as lists of 21 normalized landmarks

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for hand_index, landmarks in enumerate(hands):
        pts = [(int(p.x * width), int(p.y * height)) for p in landmarks]

        for start, end in HAND_CONNECTIONS:
            cv2.line(frame, pts[start], pts[end], (200, 200, 200), 1, cv2.LINE_AA)

        for i, (px, py) in enumerate(pts):
            cv2.circle(frame, (px, py), 6 if i == 0 else 4, landmark_color(i), -1)

        wx, wy = pts[0]
        cv2.putText(frame, f"Hand {hand_index + 1}", (wx + 10, wy - 10),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 191, 0), 1)

    return frame
