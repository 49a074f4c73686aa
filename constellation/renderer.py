"""
OpenCV rendering surface for constellation particles.
"""
import math
from typing import List, Tuple

import cv2
import numpy as np

from .particles import Particle

# x, y, radius, bgr color, alpha, rotation
Sprite = Tuple[float, float, float, Tuple[int, int, int], float, float]


class OpenCVSurface:
    """
    Keeps the latest particle snapshot and composites it onto camera frames.

    The tick loop and the camera loop run at different rates, so render()
    only stores a snapshot; composite() does the drawing.
    """

    def __init__(self, glow: bool = True, glow_sigma: float = 6.0):
        self.glow = glow
        self.glow_sigma = glow_sigma
        self._sprites: List[Sprite] = []

    def render(self, particles: List[Particle]) -> None:
        self._sprites = [
            (float(p.position[0]), float(p.position[1]), p.size,
             (p.color[2], p.color[1], p.color[0]), p.alpha, p.rotation)
            for p in particles
        ]

    def clear(self) -> None:
        self._sprites = []

    @property
    def sprite_count(self) -> int:
        return len(self._sprites)

    def composite(self, frame: np.ndarray) -> np.ndarray:
        """
        Alpha-blend the current particles onto a BGR frame in place.

        Args:
            frame: BGR uint8 image

        Returns:
            The same frame, for chaining
        """
        if not self._sprites:
            return frame

        h, w = frame.shape[:2]
        layer = np.zeros((h, w, 3), dtype=np.float32)
        mask = np.zeros((h, w), dtype=np.float32)

        for x, y, size, color, alpha, rotation in self._sprites:
            if alpha <= 0.0:
                continue
            center = (int(round(x)), int(round(y)))
            radius = max(1, int(round(size)))
            cv2.circle(layer, center, radius, color, -1, cv2.LINE_AA)
            cv2.circle(mask, center, radius, alpha, -1, cv2.LINE_AA)

            # Four-point sparkle turning with the particle
            arm = size * 2.0
            for k in range(2):
                a = rotation + k * math.pi / 2
                dx, dy = math.cos(a) * arm, math.sin(a) * arm
                p1 = (int(round(x - dx)), int(round(y - dy)))
                p2 = (int(round(x + dx)), int(round(y + dy)))
                cv2.line(layer, p1, p2, color, 1, cv2.LINE_AA)
                cv2.line(mask, p1, p2, alpha * 0.6, 1, cv2.LINE_AA)

        m = mask[..., None]
        premultiplied = layer * m
        blended = frame.astype(np.float32) * (1.0 - m) + premultiplied
        if self.glow:
            # additive halo
            blended += cv2.GaussianBlur(premultiplied, (0, 0), self.glow_sigma) * 0.8
        frame[:] = np.clip(blended, 0, 255).astype(np.uint8)
        return frame
