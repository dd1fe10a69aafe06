"""Geometric operations for straightedge-and-compass constructions.

This module provides the kernel used by snapping and propagation:
- Distances and the bearing convention used by angle-bound points
- Distances to segments, rays, lines and circles
- Line-line, circle-circle and circle-line intersections
- Perpendicular foot and parametric position along a segment
- Clipping infinite lines and rays against a viewport rectangle

All functions are pure and stateless. Degenerate inputs never raise: they
return ``None``, infinity, or a documented best-effort fallback.
"""

import math

from compassrule.domain import Circle, Point2D, Rectangle, Segment


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def distance(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def get_angle(a: Point2D, b: Point2D) -> float:
    """Bearing of ``b`` seen from ``a``.

    Angle 0 points towards +y and angles grow towards -x, matching
    ``point_on_circle``. The horizontal case is special-cased to avoid the
    division by zero; points bound to circles depend on this exact branch.

    Examples:
        >>> get_angle(Point2D(0, 0), Point2D(0, 5))
        0.0
        >>> get_angle(Point2D(0, 0), Point2D(-5, 0))  # pi / 2
        1.5707963267948966
    """
    if a.y == b.y:
        return _sign(a.x - b.x) * math.pi / 2

    return math.atan((b.x - a.x) / (a.y - b.y)) + (math.pi if a.y > b.y else 0.0)


def point_on_circle(circle: Circle, angle: float) -> Point2D:
    """Point of a circle at the given bearing (inverse of ``get_angle``)."""
    return Point2D(
        circle.x - circle.radius * math.sin(angle),
        circle.y + circle.radius * math.cos(angle),
    )


def interpolate(segment: Segment, position: float) -> Point2D:
    """Point at fraction ``position`` from ``segment[0]`` towards ``segment[1]``."""
    start, end = segment
    return Point2D(
        start.x * (1 - position) + end.x * position,
        start.y * (1 - position) + end.y * position,
    )


def midpoint(a: Point2D, b: Point2D) -> Point2D:
    """Arithmetic midpoint of two points."""
    return Point2D((a.x + b.x) / 2, (a.y + b.y) / 2)


def reflect(point: Point2D, anchor: Point2D) -> Point2D:
    """Reflection of ``point`` across ``anchor`` (point symmetry)."""
    return Point2D(2 * anchor.x - point.x, 2 * anchor.y - point.y)


def point_in_segment(point: Point2D, segment: Segment) -> float:
    """Parametric position of ``point`` relative to ``segment``.

    Measured along x unless the segment is vertical, then along y. Values in
    0..1 lie on the segment; anything else lies outside.

    Returns:
        The position, or infinity for a zero-length segment
    """
    start, end = segment
    if start.x != end.x:
        return (point.x - start.x) / (end.x - start.x)
    if start.y != end.y:
        return (point.y - start.y) / (end.y - start.y)
    return math.inf


def perpendicular_foot(point: Point2D, line: Segment) -> Point2D:
    """Foot of the perpendicular from ``point`` onto the infinite line.

    A zero-length line has no direction; its single point is returned.

    Examples:
        >>> perpendicular_foot(Point2D(1, 1), (Point2D(0, 0), Point2D(2, 0)))
        Point2D(x=1.0, y=0.0)
    """
    start, end = line
    # Line as Ax + By = C
    a = end.y - start.y
    b = start.x - end.x
    norm_sq = a * a + b * b
    if norm_sq == 0:
        return start

    u = ((start.x - point.x) * b + (point.y - start.y) * a) / norm_sq
    return Point2D(start.x - u * b, start.y + u * a)


def distance_to_line(point: Point2D, line: Segment) -> float:
    """Distance from ``point`` to the infinite line through ``line``."""
    foot = perpendicular_foot(point, line)
    return math.hypot(point.x - foot.x, point.y - foot.y)


def distance_to_segment(point: Point2D, segment: Segment) -> float:
    """Perpendicular distance to a segment.

    Returns:
        The distance, or infinity when the perpendicular foot falls outside
        the segment
    """
    foot = perpendicular_foot(point, segment)
    position = point_in_segment(foot, segment)
    if position < 0 or position > 1:
        return math.inf

    return math.hypot(point.x - foot.x, point.y - foot.y)


def distance_to_ray(point: Point2D, ray: Segment) -> float:
    """Perpendicular distance to a ray starting at ``ray[0]``.

    Returns:
        The distance, or infinity when the perpendicular foot falls behind
        the ray's origin
    """
    foot = perpendicular_foot(point, ray)
    position = point_in_segment(foot, ray)
    if position < 0 or math.isinf(position):
        return math.inf

    return math.hypot(point.x - foot.x, point.y - foot.y)


def distance_to_circle(point: Point2D, circle: Circle | None) -> float:
    """Radial distance from ``point`` to the circle's boundary."""
    if circle is None:
        return math.inf
    return abs(distance(point, circle.center) - circle.radius)


def closest_point_on_circle(point: Point2D, circle: Circle) -> Point2D:
    """Project ``point`` onto the circle along the center -> point direction.

    At the center every direction is equally close; the point at bearing 0
    is returned.
    """
    d = distance(point, circle.center)
    if d == 0:
        return point_on_circle(circle, 0.0)
    return Point2D(
        circle.x + circle.radius * (point.x - circle.x) / d,
        circle.y + circle.radius * (point.y - circle.y) / d,
    )


def intersection_of_two_lines(segment1: Segment, segment2: Segment) -> Point2D | None:
    """Intersection of the infinite lines through two segments.

    Each line is written as Ax + By = C and the system is solved with
    Cramer's rule.

    Returns:
        The intersection, or None when the determinant is exactly zero
        (parallel or coincident lines)

    Examples:
        >>> s1 = (Point2D(0, 0), Point2D(2, 2))
        >>> s2 = (Point2D(0, 2), Point2D(2, 0))
        >>> intersection_of_two_lines(s1, s2)
        Point2D(x=1.0, y=1.0)
    """
    a1 = segment1[1].y - segment1[0].y
    b1 = segment1[0].x - segment1[1].x
    c1 = a1 * segment1[0].x + b1 * segment1[0].y

    a2 = segment2[1].y - segment2[0].y
    b2 = segment2[0].x - segment2[1].x
    c2 = a2 * segment2[0].x + b2 * segment2[0].y

    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    return Point2D((b2 * c1 - b1 * c2) / det, (a1 * c2 - a2 * c1) / det)


def _nearer(point: Point2D, first: Point2D, second: Point2D) -> Point2D:
    return first if distance(first, point) < distance(second, point) else second


def intersection_of_two_circles(
    point: Point2D, circle1: Circle | None, circle2: Circle | None
) -> Point2D | None:
    """Intersection of two circles closest to ``point``.

    When the circles are concentric, or too far apart or nested to meet,
    the closest point to ``point`` on whichever circle is nearer is
    returned instead, so a bound point keeps tracking something sensible.

    Args:
        point: Disambiguation anchor choosing between the two solutions
        circle1: First circle
        circle2: Second circle

    Returns:
        The chosen point, or None if either circle is missing
    """
    if circle1 is None or circle2 is None:
        return None

    d = distance(circle1.center, circle2.center)
    if d == 0:
        return _nearer(
            point,
            closest_point_on_circle(point, circle1),
            closest_point_on_circle(point, circle2),
        )

    # Distance from circle1's center to the radical line
    l = (circle1.radius**2 - circle2.radius**2 + d * d) / (2 * d)  # noqa: E741
    if abs(l) > circle1.radius:
        return _nearer(
            point,
            closest_point_on_circle(point, circle1),
            closest_point_on_circle(point, circle2),
        )

    h = math.sqrt(circle1.radius**2 - l * l)
    dx = circle2.x - circle1.x
    dy = circle2.y - circle1.y
    first = Point2D(
        l * dx / d + circle1.x + h * dy / d,
        l * dy / d + circle1.y - h * dx / d,
    )
    second = Point2D(
        l * dx / d + circle1.x - h * dy / d,
        l * dy / d + circle1.y + h * dx / d,
    )
    return _nearer(point, first, second)


def intersection_of_circle_and_line(
    point: Point2D, circle: Circle, line: Segment
) -> Point2D | None:
    """Intersection of a circle and an infinite line closest to ``point``.

    The line is written as Ax + By + C = 0 and substituted into the circle
    equation; vertical lines (B == 0) are solved for y instead of x.

    Returns:
        The tangent point when the discriminant is zero, the root closer to
        ``point`` when positive, or None when the line misses the circle or
        has zero length
    """
    a = line[1].y - line[0].y
    b = line[0].x - line[1].x
    c = -a * line[0].x - b * line[0].y
    if a == 0 and b == 0:
        return None

    if b == 0:
        # Vertical line x = -C / A
        qb = -2 * circle.y
        qc = (
            circle.x * circle.x
            + circle.y * circle.y
            + 2 * circle.x * c / a
            + c * c / (a * a)
            - circle.radius * circle.radius
        )
        disc = qb * qb - 4 * qc
        if disc < 0:
            return None
        x = -c / a
        first = Point2D(x, (-qb + math.sqrt(disc)) / 2)
        if disc == 0:
            return first
        second = Point2D(x, (-qb - math.sqrt(disc)) / 2)
    else:
        # Quadratic in x: qa x^2 + qb x + qc = 0
        qa = a * a / (b * b) + 1
        qb = 2 * (a * c / (b * b) - circle.x + a * circle.y / b)
        qc = (
            circle.x * circle.x
            + circle.y * circle.y
            + 2 * circle.y * c / b
            + c * c / (b * b)
            - circle.radius * circle.radius
        )
        disc = qb * qb - 4 * qa * qc
        if disc < 0:
            return None
        x1 = (-qb + math.sqrt(disc)) / (2 * qa)
        first = Point2D(x1, -a / b * x1 - c / b)
        if disc == 0:
            return first
        x2 = (-qb - math.sqrt(disc)) / (2 * qa)
        second = Point2D(x2, -a / b * x2 - c / b)

    return _nearer(point, first, second)


def points_in_rectangle(line: Segment, rect: Rectangle) -> Segment | None:
    """Clip the infinite line through ``line`` against a rectangle.

    The line is intersected with the four sides; top and bottom hits are
    kept when inside the horizontal span (inclusive), left and right hits
    when strictly inside the vertical span, so corners are not doubled.

    Returns:
        The two boundary points (the same point twice when the line only
        touches a corner), or None when the line misses the rectangle
    """
    a = line[1].y - line[0].y
    b = line[0].x - line[1].x
    c = a * line[0].x + b * line[0].y

    points: list[Point2D] = []
    if a != 0:
        top = (c - b * rect.y) / a
        bottom = (c - b * (rect.y + rect.height)) / a
        if rect.x <= top <= rect.x + rect.width:
            points.append(Point2D(top, rect.y))
        if rect.x <= bottom <= rect.x + rect.width:
            points.append(Point2D(bottom, rect.y + rect.height))
    if b != 0:
        left = (c - a * rect.x) / b
        right = (c - a * (rect.x + rect.width)) / b
        if rect.y < left < rect.y + rect.height:
            points.append(Point2D(rect.x, left))
        if rect.y < right < rect.y + rect.height:
            points.append(Point2D(rect.x + rect.width, right))

    if len(points) >= 2:
        return (points[0], points[1])
    if len(points) == 1:
        return (points[0], points[0])
    return None


def points_in_rectangle_ray(ray: Segment, rect: Rectangle) -> Segment | None:
    """Clip a ray starting at ``ray[0]`` against a rectangle.

    The clipped endpoint lying behind the ray's origin is replaced by the
    origin itself. A ray pointing away from the rectangle yields None.
    """
    clipped = points_in_rectangle(ray, rect)
    if clipped is None:
        return None
    if point_in_segment(clipped[0], ray) < 0 and point_in_segment(clipped[1], ray) < 0:
        return None
    if point_in_segment(clipped[0], ray) < 0:
        return (ray[0], clipped[1])
    if point_in_segment(clipped[1], ray) < 0:
        return (ray[0], clipped[0])
    return clipped
