"""
Tests for the pure geometry helpers.
"""

import math

from tripboard.core.canvas.geometry import (
    Point,
    Rect,
    arrow_head,
    dash_segments,
    distance,
    find_point_at,
    midpoint,
    pixels_to_km,
    within_radius,
)


class TestPointHelpers:
    def test_distance_and_midpoint(self):
        assert distance((0, 0), (3, 4)) == 5
        assert midpoint((0, 0), (10, 20)) == Point(5, 10)

    def test_within_radius_is_inclusive(self):
        assert within_radius((20, 0), (0, 0), 20)
        assert not within_radius((20.1, 0), (0, 0), 20)

    def test_find_point_at_prefers_last_created(self):
        """Overlapping hit areas resolve to the most recent point."""
        points = [(50, 50), (55, 50), (300, 300)]
        assert find_point_at(52, 50, points, 20) == 1
        assert find_point_at(300, 310, points, 20) == 2
        assert find_point_at(150, 150, points, 20) is None
        assert find_point_at(0, 0, [], 20) is None

    def test_pixels_to_km_rounds_half_up(self):
        assert pixels_to_km(160) == 80
        assert pixels_to_km(1) == 1
        assert pixels_to_km(0.8) == 0
        assert pixels_to_km(100, km_per_pixel=2) == 200


class TestRect:
    def test_contains_edges(self):
        rect = Rect(10, 10, 20, 5)
        assert rect.contains(10, 10)
        assert rect.contains(30, 15)
        assert not rect.contains(31, 15)

    def test_union_and_inflate(self):
        a = Rect(0, 0, 10, 10)
        b = Rect(5, 20, 10, 10)
        assert a.union(b) == Rect(0, 0, 15, 30)
        assert a.inflate(2) == Rect(-2, -2, 14, 14)


class TestLineShapes:
    def test_arrow_head_tip_is_end(self):
        tip, left, right = arrow_head((0, 0), (100, 0), length=15)
        assert tip == Point(100, 0)
        assert math.isclose(left.x, 100 - 15 * math.cos(math.pi / 6))
        assert math.isclose(left.y, -right.y)

    def test_dash_segments_follow_pattern(self):
        segments = list(dash_segments((0, 0), (30, 0), (10, 5)))
        assert [(round(a.x), round(b.x)) for a, b in segments] == [(0, 10), (15, 25)]

    def test_dash_segments_degenerate(self):
        segments = list(dash_segments((5, 5), (5, 5)))
        assert segments == [(Point(5, 5), Point(5, 5))]
