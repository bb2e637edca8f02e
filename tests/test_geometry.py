"""Tests for radial menu geometry.

Tests cover:
- Mid-angle assignment per orientation and half-circle direction
- Automatic orientation by item count
- Clockwise ranking used for staggered animations
- Sector outlines, labels and hit testing
"""

import pytest

from orbital.menu.geometry import (
    HalfCircleDirection,
    Orientation,
    clockwise_ranks,
    hit_test,
    layout_segments,
    mid_angles,
    normalize_clockwise,
    resolve_orientation,
    segment_angle,
)


class TestMidAngles:

    def test_two_items_vertical(self):
        assert mid_angles(2) == [-90.0, 90.0]

    def test_three_items_triangle(self):
        assert mid_angles(3) == [-90.0, 150.0, 30.0]

    def test_four_items_cardinal(self):
        assert mid_angles(4) == [-90.0, 0.0, 90.0, 180.0]

    def test_five_items_ordinal(self):
        assert mid_angles(5) == pytest.approx([-45.0, 27.0, 99.0, 171.0, 243.0])

    def test_explicit_orientation_overrides_auto(self):
        assert mid_angles(4, Orientation.ORDINAL) == [-45.0, 45.0, 135.0, 225.0]
        assert mid_angles(3, "cardinal") == [-90.0, 30.0, 150.0]

    def test_triangle_with_extra_items_falls_back(self):
        angles = mid_angles(4, Orientation.TRIANGLE)
        assert angles[:3] == [-90.0, 150.0, 30.0]
        assert angles[3] == 180.0

    def test_half_circle_bottom_symmetric(self):
        angles = mid_angles(3, half_circle="bottom")
        assert angles == [30.0, 90.0, 150.0]
        assert all(0.0 <= a <= 180.0 for a in angles)
        assert angles[0] + angles[2] == pytest.approx(2 * 90.0)

    @pytest.mark.parametrize("direction, center", [
        (HalfCircleDirection.TOP, -90.0),
        (HalfCircleDirection.BOTTOM, 90.0),
        (HalfCircleDirection.LEFT, 180.0),
        (HalfCircleDirection.RIGHT, 0.0),
    ])
    def test_half_circle_centered_on_direction(self, direction, center):
        for count in (1, 2, 3, 4):
            angles = mid_angles(count, half_circle=direction)
            assert sum(angles) / count == pytest.approx(center)
            assert max(angles) - min(angles) == pytest.approx(180.0 / count * (count - 1))

    def test_half_circle_ignores_orientation(self):
        assert mid_angles(2, "triangle", "right") == [-45.0, 45.0]

    def test_empty(self):
        assert mid_angles(0) == []


class TestOrientation:

    @pytest.mark.parametrize("count, expected", [
        (1, Orientation.CARDINAL),
        (2, Orientation.VERTICAL),
        (3, Orientation.TRIANGLE),
        (4, Orientation.CARDINAL),
        (5, Orientation.ORDINAL),
        (6, Orientation.CARDINAL),
        (7, Orientation.ORDINAL),
    ])
    def test_auto(self, count, expected):
        assert resolve_orientation(count) is expected

    def test_unknown_names_rejected(self):
        with pytest.raises(ValueError):
            mid_angles(3, "diagonal")
        with pytest.raises(ValueError):
            mid_angles(3, half_circle="up")

    def test_segment_angle(self):
        assert segment_angle(4) == 90.0
        assert segment_angle(3, half_circle=True) == 60.0
        assert segment_angle(0) == 0.0


class TestClockwiseOrder:

    def test_normalize(self):
        assert normalize_clockwise(-90) == 0.0
        assert normalize_clockwise(0) == 90.0
        assert normalize_clockwise(180) == 270.0
        assert normalize_clockwise(-100) == 350.0

    def test_triangle_ranks_follow_position_not_input(self):
        # top, bottom-left, bottom-right -> top, bottom-right, bottom-left
        assert clockwise_ranks([-90.0, 150.0, 30.0]) == [0, 2, 1]

    @pytest.mark.parametrize("count", range(1, 9))
    def test_ranks_are_a_permutation(self, count):
        for angles in (mid_angles(count), mid_angles(count, half_circle="left")):
            ranks = clockwise_ranks(angles)
            assert sorted(ranks) == list(range(count))
            by_rank = sorted(range(count), key=lambda i: ranks[i])
            keys = [normalize_clockwise(angles[i]) for i in by_rank]
            assert keys == sorted(keys)


class TestSegments:

    def test_radii(self):
        segments = layout_segments(4, 120)
        assert all(s.hollow_radius == 120 and s.outer_radius == 200 for s in segments)
        assert [s.rank for s in segments] == [0, 1, 2, 3]

    def test_start_end_span(self):
        seg = layout_segments(4, 120)[1]
        assert (seg.start_angle, seg.mid_angle, seg.end_angle) == (-45.0, 0.0, 45.0)

    def test_empty_menu_has_no_segments(self):
        assert layout_segments(0, 80) == []

    def test_negative_hollow_rejected(self):
        with pytest.raises(ValueError):
            layout_segments(3, -1)

    def test_large_arc_only_above_half_turn(self):
        assert layout_segments(1, 80)[0].large_arc
        assert not layout_segments(2, 80)[0].large_arc
        assert not layout_segments(4, 80)[0].large_arc

    def test_svg_path(self):
        seg = layout_segments(4, 120)[1]
        path = seg.svg_path()
        assert path.startswith("M ")
        assert path.endswith(" Z")
        assert "A 120 120 0 0 1" in path
        assert "A 200 200 0 0 0" in path

    def test_half_turn_segment_has_no_large_arc(self):
        path = layout_segments(2, 80)[0].svg_path()
        assert "A 80 80 0 0 1" in path
        assert "A 160 160 0 0 0" in path

    def test_full_ring_path_uses_half_arcs(self):
        path = layout_segments(1, 80)[0].svg_path()
        assert path == (
            "M 0 80 "
            "A 80 80 0 0 1 0 -80 "
            "A 80 80 0 0 1 0 80 "
            "L 0 160 "
            "A 160 160 0 0 0 0 -160 "
            "A 160 160 0 0 0 0 160 Z"
        )

    def test_label_at_mid_ring(self):
        x, y = layout_segments(4, 120)[0].label_position
        assert (x, y) == pytest.approx((0.0, -160.0), abs=1e-9)

    def test_divider_on_start_boundary(self):
        (x1, y1), (x2, y2) = layout_segments(4, 120)[1].divider
        # start angle -45 degrees
        assert x1 == pytest.approx(120 * 0.7071067811865476)
        assert y1 == pytest.approx(-120 * 0.7071067811865476)
        assert x2 == pytest.approx(200 * 0.7071067811865476)


class TestHitTest:

    def test_points_map_to_segments(self):
        segments = layout_segments(4, 120)
        assert hit_test(segments, 0, -160) == 0
        assert hit_test(segments, 160, 0) == 1
        assert hit_test(segments, 0, 160) == 2
        assert hit_test(segments, -160, 0) == 3

    def test_hollow_and_outside_miss(self):
        segments = layout_segments(4, 120)
        assert hit_test(segments, 0, -50) is None
        assert hit_test(segments, 0, -300) is None

    def test_half_circle_gap(self):
        segments = layout_segments(3, 80, half_circle="bottom")
        assert hit_test(segments, 0, 120) == 1
        assert hit_test(segments, 0, -120) is None

    def test_single_item_full_ring(self):
        segments = layout_segments(1, 80)
        assert hit_test(segments, 100, 0) == 0
        assert hit_test(segments, -100, 50) == 0
