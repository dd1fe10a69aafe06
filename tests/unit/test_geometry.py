"""Unit tests for the geometry kernel."""

import math

import pytest

from compassrule.core.geometry import (
    closest_point_on_circle,
    distance,
    distance_to_circle,
    distance_to_line,
    distance_to_ray,
    distance_to_segment,
    get_angle,
    interpolate,
    intersection_of_circle_and_line,
    intersection_of_two_circles,
    intersection_of_two_lines,
    midpoint,
    perpendicular_foot,
    point_in_segment,
    point_on_circle,
    points_in_rectangle,
    points_in_rectangle_ray,
    reflect,
)
from compassrule.domain import Circle, Point2D, Rectangle


def _cross(line: tuple[Point2D, Point2D], point: Point2D) -> float:
    """Signed area spanned by the line and a point (0 when collinear)."""
    p, q = line
    return (q.x - p.x) * (point.y - p.y) - (q.y - p.y) * (point.x - p.x)


class TestAngles:
    """Tests for the bearing convention."""

    def test_distance(self) -> None:
        """Test Euclidean distance."""
        assert distance(Point2D(0, 0), Point2D(3, 4)) == 5.0

    def test_horizontal_special_case(self) -> None:
        """Test that equal y values avoid the division by zero."""
        assert get_angle(Point2D(0, 0), Point2D(5, 0)) == -math.pi / 2
        assert get_angle(Point2D(0, 0), Point2D(-5, 0)) == math.pi / 2
        assert get_angle(Point2D(0, 0), Point2D(0, 0)) == 0.0

    def test_bearing_below(self) -> None:
        """Test that a point with smaller y gets the pi offset."""
        assert get_angle(Point2D(0, 0), Point2D(0, -5)) == pytest.approx(math.pi)

    @pytest.mark.parametrize("angle", [0.3, 1.2, 2.5, 4.0, -0.7])
    def test_point_on_circle_inverts_get_angle(self, angle: float) -> None:
        """Test that get_angle recovers the bearing used to place a point."""
        circle = Circle(2.0, -1.0, 7.0)
        point = point_on_circle(circle, angle)
        assert get_angle(circle.center, point) == pytest.approx(angle)
        assert distance(circle.center, point) == pytest.approx(7.0)

    def test_point_on_circle_reference_positions(self) -> None:
        """Test angle 0 and pi/2 on a radius 5 circle."""
        circle = Circle(0.0, 0.0, 5.0)
        top = point_on_circle(circle, 0.0)
        left = point_on_circle(circle, math.pi / 2)
        assert (top.x, top.y) == pytest.approx((0.0, 5.0))
        assert (left.x, left.y) == pytest.approx((-5.0, 0.0))


class TestPointOperations:
    """Tests for interpolation, midpoint and reflection."""

    def test_interpolate(self) -> None:
        """Test weights 1-p and p on the two endpoints."""
        segment = (Point2D(0, 0), Point2D(2, 4))
        assert interpolate(segment, 0.25) == Point2D(0.5, 1.0)
        assert interpolate(segment, 0.0) == Point2D(0, 0)
        assert interpolate(segment, 1.0) == Point2D(2, 4)

    def test_midpoint(self) -> None:
        """Test arithmetic midpoint."""
        assert midpoint(Point2D(0, 0), Point2D(-1, 1)) == Point2D(-0.5, 0.5)

    def test_reflect(self) -> None:
        """Test reflection of a point across an anchor."""
        assert reflect(Point2D(1, 0), Point2D(2, 0)) == Point2D(3, 0)
        assert reflect(Point2D(1, 1), Point2D(1, 1)) == Point2D(1, 1)


class TestSegmentPosition:
    """Tests for parametric positions and perpendicular feet."""

    def test_position_along_x(self) -> None:
        """Test position measured along x."""
        segment = (Point2D(0, 0), Point2D(4, 2))
        assert point_in_segment(Point2D(1, 0.5), segment) == 0.25

    def test_position_along_y_for_vertical(self) -> None:
        """Test position measured along y for a vertical segment."""
        segment = (Point2D(0, 0), Point2D(0, 4))
        assert point_in_segment(Point2D(0, 1), segment) == 0.25

    def test_zero_length_is_infinite(self) -> None:
        """Test zero-length segments report infinity."""
        segment = (Point2D(1, 1), Point2D(1, 1))
        assert math.isinf(point_in_segment(Point2D(1, 1), segment))

    def test_perpendicular_foot(self) -> None:
        """Test the foot on a diagonal line."""
        foot = perpendicular_foot(Point2D(0, 2), (Point2D(0, 0), Point2D(2, 2)))
        assert (foot.x, foot.y) == pytest.approx((1.0, 1.0))

    def test_perpendicular_foot_zero_length(self) -> None:
        """Test a zero-length line returns its single point."""
        line = (Point2D(3, 3), Point2D(3, 3))
        assert perpendicular_foot(Point2D(0, 0), line) == Point2D(3, 3)


class TestDistances:
    """Tests for distances to curves."""

    def test_distance_to_segment_inside(self) -> None:
        """Test perpendicular distance within the segment's span."""
        segment = (Point2D(0, 0), Point2D(2, 0))
        assert distance_to_segment(Point2D(1, 1), segment) == pytest.approx(1.0)

    def test_distance_to_segment_outside(self) -> None:
        """Test infinity when the foot falls outside the segment."""
        segment = (Point2D(0, 0), Point2D(2, 0))
        assert math.isinf(distance_to_segment(Point2D(3, 1), segment))
        assert math.isinf(distance_to_segment(Point2D(-1, 1), segment))

    def test_distance_to_ray(self) -> None:
        """Test rays extend past their second point but not behind the origin."""
        ray = (Point2D(0, 0), Point2D(2, 0))
        assert distance_to_ray(Point2D(5, 1), ray) == pytest.approx(1.0)
        assert math.isinf(distance_to_ray(Point2D(-1, 1), ray))

    def test_distance_to_line(self) -> None:
        """Test infinite lines have no extent limit."""
        line = (Point2D(0, 0), Point2D(2, 0))
        assert distance_to_line(Point2D(-10, 1), line) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "point", [Point2D(0, 0), Point2D(3, 4), Point2D(10, -2), Point2D(1.5, 0.5)]
    )
    def test_distance_to_circle(self, point: Point2D) -> None:
        """Test radial distance equals |d - r|."""
        circle = Circle(1.0, 1.0, 3.0)
        expected = abs(distance(point, circle.center) - circle.radius)
        assert distance_to_circle(point, circle) == pytest.approx(expected)

    def test_distance_to_missing_circle(self) -> None:
        """Test a missing circle is infinitely far away."""
        assert math.isinf(distance_to_circle(Point2D(0, 0), None))

    def test_closest_point_on_circle(self) -> None:
        """Test projection along the center to point direction."""
        circle = Circle(0.0, 0.0, 5.0)
        assert closest_point_on_circle(Point2D(0, 10), circle) == Point2D(0, 5)

    def test_closest_point_at_center(self) -> None:
        """Test the bearing 0 point is returned at the center."""
        circle = Circle(1.0, 1.0, 2.0)
        point = closest_point_on_circle(Point2D(1, 1), circle)
        assert (point.x, point.y) == pytest.approx((1.0, 3.0))


class TestLineIntersection:
    """Tests for line-line intersection."""

    def test_crossing_lines(self) -> None:
        """Test two diagonals meet in the middle."""
        s1 = (Point2D(0, 0), Point2D(2, 2))
        s2 = (Point2D(0, 2), Point2D(2, 0))
        assert intersection_of_two_lines(s1, s2) == Point2D(1, 1)

    def test_lines_extend_beyond_segments(self) -> None:
        """Test the intersection may lie outside both segments."""
        s1 = (Point2D(0, 0), Point2D(1, 0))
        s2 = (Point2D(5, 1), Point2D(5, 2))
        point = intersection_of_two_lines(s1, s2)
        assert point is not None
        assert (point.x, point.y) == pytest.approx((5.0, 0.0))

    def test_parallel_lines(self) -> None:
        """Test parallel and coincident lines have no intersection."""
        s1 = (Point2D(0, 0), Point2D(1, 1))
        assert intersection_of_two_lines(s1, (Point2D(0, 1), Point2D(1, 2))) is None
        assert intersection_of_two_lines(s1, (Point2D(2, 2), Point2D(3, 3))) is None

    @pytest.mark.parametrize(
        "s1,s2",
        [
            ((Point2D(0, 0), Point2D(3, 1)), (Point2D(1, 5), Point2D(2, -4))),
            ((Point2D(-7, 2), Point2D(4, 9)), (Point2D(0, 0), Point2D(0, 1))),
            ((Point2D(1.5, 2.5), Point2D(-3, 0.25)), (Point2D(10, -10), Point2D(11, 12))),
        ],
    )
    def test_intersection_lies_on_both_lines(
        self, s1: tuple[Point2D, Point2D], s2: tuple[Point2D, Point2D]
    ) -> None:
        """Test the result is collinear with both input lines."""
        point = intersection_of_two_lines(s1, s2)
        assert point is not None
        assert _cross(s1, point) == pytest.approx(0.0, abs=1e-9)
        assert _cross(s2, point) == pytest.approx(0.0, abs=1e-9)


class TestCircleIntersections:
    """Tests for circle-circle and circle-line intersections."""

    def test_two_circles_nearest_branch(self) -> None:
        """Test the branch closer to the anchor is returned."""
        c1 = Circle(0.0, 0.0, 5.0)
        c2 = Circle(6.0, 0.0, 5.0)
        upper = intersection_of_two_circles(Point2D(3, 5), c1, c2)
        lower = intersection_of_two_circles(Point2D(3, -5), c1, c2)
        assert upper is not None and lower is not None
        assert (upper.x, upper.y) == pytest.approx((3.0, 4.0))
        assert (lower.x, lower.y) == pytest.approx((3.0, -4.0))

    @pytest.mark.parametrize(
        "c1,c2",
        [
            (Circle(0, 0, 5), Circle(4, 3, 4)),
            (Circle(-2, 1, 3), Circle(1, 2, 2.5)),
            (Circle(10, 10, 7), Circle(2, 14, 6)),
        ],
    )
    def test_two_circles_result_on_both(self, c1: Circle, c2: Circle) -> None:
        """Test the result lies on both circles when they properly intersect."""
        point = intersection_of_two_circles(Point2D(0, 0), c1, c2)
        assert point is not None
        assert distance(point, c1.center) == pytest.approx(c1.radius)
        assert distance(point, c2.center) == pytest.approx(c2.radius)

    def test_concentric_circles_fallback(self) -> None:
        """Test coincident centers fall back to the nearer closest point."""
        c1 = Circle(0.0, 0.0, 5.0)
        c2 = Circle(0.0, 0.0, 3.0)
        assert intersection_of_two_circles(Point2D(10, 0), c1, c2) == Point2D(5, 0)

    def test_distant_circles_fallback(self) -> None:
        """Test circles too far apart fall back to the nearer closest point."""
        c1 = Circle(0.0, 0.0, 1.0)
        c2 = Circle(10.0, 0.0, 1.0)
        assert intersection_of_two_circles(Point2D(4, 0), c1, c2) == Point2D(1, 0)

    def test_missing_circle(self) -> None:
        """Test a missing circle yields None."""
        assert intersection_of_two_circles(Point2D(0, 0), None, Circle(0, 0, 1)) is None

    def test_circle_and_horizontal_line(self) -> None:
        """Test the root closer to the anchor is returned."""
        circle = Circle(0.0, 0.0, 5.0)
        line = (Point2D(-10, 3), Point2D(10, 3))
        right = intersection_of_circle_and_line(Point2D(5, 5), circle, line)
        left = intersection_of_circle_and_line(Point2D(-5, 5), circle, line)
        assert right is not None and left is not None
        assert (right.x, right.y) == pytest.approx((4.0, 3.0))
        assert (left.x, left.y) == pytest.approx((-4.0, 3.0))

    def test_circle_and_vertical_line(self) -> None:
        """Test the vertical branch solves for y."""
        circle = Circle(0.0, 0.0, 5.0)
        line = (Point2D(3, -10), Point2D(3, 10))
        point = intersection_of_circle_and_line(Point2D(0, -10), circle, line)
        assert point is not None
        assert (point.x, point.y) == pytest.approx((3.0, -4.0))

    def test_circle_and_tangent_line(self) -> None:
        """Test a zero discriminant returns the tangent point."""
        circle = Circle(0.0, 0.0, 5.0)
        line = (Point2D(-10, 5), Point2D(10, 5))
        assert intersection_of_circle_and_line(Point2D(9, 9), circle, line) == Point2D(0, 5)

    def test_circle_and_missing_line(self) -> None:
        """Test a line that misses the circle yields None."""
        circle = Circle(0.0, 0.0, 5.0)
        line = (Point2D(-10, 6), Point2D(10, 6))
        assert intersection_of_circle_and_line(Point2D(0, 0), circle, line) is None

    def test_circle_and_zero_length_line(self) -> None:
        """Test a zero-length line yields None."""
        circle = Circle(0.0, 0.0, 5.0)
        line = (Point2D(1, 1), Point2D(1, 1))
        assert intersection_of_circle_and_line(Point2D(0, 0), circle, line) is None


class TestViewportClipping:
    """Tests for clipping lines and rays against a rectangle."""

    def test_horizontal_line(self) -> None:
        """Test a horizontal line is clipped by the left and right sides."""
        rect = Rectangle(0, 0, 10, 10)
        clipped = points_in_rectangle((Point2D(-1, 5), Point2D(1, 5)), rect)
        assert clipped == (Point2D(0, 5), Point2D(10, 5))

    def test_diagonal_through_corners(self) -> None:
        """Test corners are taken from top and bottom only."""
        rect = Rectangle(0, 0, 10, 10)
        clipped = points_in_rectangle((Point2D(0, 0), Point2D(1, 1)), rect)
        assert clipped == (Point2D(0, 0), Point2D(10, 10))

    def test_line_outside(self) -> None:
        """Test a line missing the rectangle yields None."""
        rect = Rectangle(0, 0, 10, 10)
        assert points_in_rectangle((Point2D(0, 20), Point2D(1, 20)), rect) is None

    def test_ray_starting_inside(self) -> None:
        """Test the endpoint behind the ray origin is replaced by the origin."""
        rect = Rectangle(0, 0, 10, 10)
        clipped = points_in_rectangle_ray((Point2D(5, 5), Point2D(6, 5)), rect)
        assert clipped == (Point2D(5, 5), Point2D(10, 5))

    def test_ray_starting_outside_pointing_in(self) -> None:
        """Test a ray entering the rectangle keeps both clipped points."""
        rect = Rectangle(0, 0, 10, 10)
        clipped = points_in_rectangle_ray((Point2D(-5, 5), Point2D(-4, 5)), rect)
        assert clipped == (Point2D(0, 5), Point2D(10, 5))

    def test_ray_pointing_away(self) -> None:
        """Test a ray pointing away from the rectangle yields None."""
        rect = Rectangle(0, 0, 10, 10)
        assert points_in_rectangle_ray((Point2D(20, 5), Point2D(21, 5)), rect) is None
