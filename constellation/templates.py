"""
Constellation templates: named point sets that particles settle into.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

Anchor = Tuple[float, float]


@dataclass(frozen=True)
class ConstellationTemplate:
    """Ordered normalized (x, y) anchors in [0..1], shared by every spawn."""
    name: str
    points: Tuple[Anchor, ...]

    def __post_init__(self):
        if not self.points:
            raise ValueError(f"Template '{self.name}' has no points")
        for x, y in self.points:
            if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
                raise ValueError(f"Template '{self.name}' point ({x}, {y}) is outside [0, 1]")

    def __len__(self) -> int:
        return len(self.points)

    def scaled(self, center: Tuple[float, float], scale: float) -> List[Anchor]:
        """Anchors mapped around center, with the template square spanning scale units."""
        cx, cy = center
        return [(cx + (x - 0.5) * scale, cy + (y - 0.5) * scale) for x, y in self.points]


# Tiger head seen from the front
TIGER = ConstellationTemplate("tiger", (
    # ears
    (0.22, 0.12), (0.30, 0.06), (0.36, 0.16),
    (0.64, 0.16), (0.70, 0.06), (0.78, 0.12),
    # head outline
    (0.50, 0.14), (0.18, 0.26), (0.12, 0.42), (0.14, 0.58), (0.22, 0.74),
    (0.34, 0.86), (0.50, 0.90), (0.66, 0.86), (0.78, 0.74), (0.86, 0.58),
    (0.88, 0.42), (0.82, 0.26),
    # forehead stripes
    (0.44, 0.22), (0.50, 0.26), (0.56, 0.22),
    (0.42, 0.32), (0.58, 0.32),
    # eyes
    (0.34, 0.42), (0.40, 0.40), (0.60, 0.40), (0.66, 0.42),
    # cheek stripes
    (0.18, 0.50), (0.24, 0.54), (0.82, 0.50), (0.76, 0.54),
    # nose and mouth
    (0.50, 0.56), (0.46, 0.60), (0.54, 0.60),
    (0.50, 0.66), (0.42, 0.72), (0.58, 0.72),
))


def _ring(count: int = 24) -> ConstellationTemplate:
    points = tuple(
        (0.5 + 0.45 * math.cos(2 * math.pi * i / count),
         0.5 + 0.45 * math.sin(2 * math.pi * i / count))
        for i in range(count)
    )
    return ConstellationTemplate("ring", points)


def _star(tips: int = 5, per_edge: int = 3) -> ConstellationTemplate:
    vertices = []
    for i in range(tips * 2):
        radius = 0.48 if i % 2 == 0 else 0.2
        angle = -math.pi / 2 + math.pi * i / tips
        vertices.append((0.5 + radius * math.cos(angle), 0.5 + radius * math.sin(angle)))

    points = []
    for i, (x0, y0) in enumerate(vertices):
        x1, y1 = vertices[(i + 1) % len(vertices)]
        for k in range(per_edge):
            t = k / per_edge
            points.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    return ConstellationTemplate("star", tuple(points))


TEMPLATES: Dict[str, ConstellationTemplate] = {
    t.name: t for t in (TIGER, _ring(), _star())
}


def get_template(name: str) -> ConstellationTemplate:
    """Look up a template by name."""
    try:
        return TEMPLATES[name]
    except KeyError:
        known = ", ".join(sorted(TEMPLATES))
        raise KeyError(f"Unknown constellation template '{name}' (known: {known})") from None
