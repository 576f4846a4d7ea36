"""
Pure geometry helpers for pointer interaction.

These functions have no side effects and can be tested in isolation.
"""

import math
from typing import NamedTuple, Optional, Sequence, Tuple


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def union(self, other: "Rect") -> "Rect":
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    def inflate(self, amount: float) -> "Rect":
        return Rect(
            self.x - amount,
            self.y - amount,
            self.width + 2 * amount,
            self.height + 2 * amount,
        )


def distance(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    """
    Euclidean distance between two points.

    Args:
        p1: (x, y)
        p2: (x, y)

    Returns:
        Straight-line distance in pixels
    """
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def midpoint(p1: Tuple[float, float], p2: Tuple[float, float]) -> Point:
    return Point((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)


def within_radius(
    point: Tuple[float, float], center: Tuple[float, float], radius: float
) -> bool:
    return distance(point, center) <= radius


def find_point_at(
    x: float, y: float, points: Sequence[Tuple[float, float]], radius: float
) -> Optional[int]:
    """
    Hit-test a list of points.

    Points are scanned from last to first so that, when several overlap,
    the most recently created one wins.

    Args:
        x: Pointer X in surface coordinates
        y: Pointer Y in surface coordinates
        points: Candidate (x, y) positions in creation order
        radius: Hit radius in pixels (inclusive)

    Returns:
        Index of the hit point, or None
    """
    for index in range(len(points) - 1, -1, -1):
        if within_radius((x, y), points[index], radius):
            return index
    return None


def pixels_to_km(pixel_distance: float, km_per_pixel: float = 0.5) -> int:
    """Convert an on-screen length to the rounded display unit (km)."""
    # half-up rounding, matching what a browser shows for the same input
    return int(math.floor(pixel_distance * km_per_pixel + 0.5))


def arrow_head(
    start: Tuple[float, float],
    end: Tuple[float, float],
    length: float = 15,
    spread: float = math.pi / 6,
) -> Tuple[Point, Point, Point]:
    """Triangle vertices of an arrow head pointing at ``end``."""
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    return (
        Point(end[0], end[1]),
        Point(
            end[0] - length * math.cos(angle - spread),
            end[1] - length * math.sin(angle - spread),
        ),
        Point(
            end[0] - length * math.cos(angle + spread),
            end[1] - length * math.sin(angle + spread),
        ),
    )


def dash_segments(
    start: Tuple[float, float],
    end: Tuple[float, float],
    pattern: Sequence[float] = (10, 5),
):
    """
    Split a segment into the visible pieces of a dash pattern.

    Yields (p1, p2) pairs for the "on" parts of the pattern.
    """
    total = distance(start, end)
    if total == 0:
        yield Point(*start), Point(*end)
        return
    ux = (end[0] - start[0]) / total
    uy = (end[1] - start[1]) / total
    position = 0.0
    index = 0
    while position < total:
        length = pattern[index % len(pattern)]
        stop = min(position + length, total)
        if index % 2 == 0:
            yield (
                Point(start[0] + ux * position, start[1] + uy * position),
                Point(start[0] + ux * stop, start[1] + uy * stop),
            )
        position = stop
        index += 1
