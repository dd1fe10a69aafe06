"""Curves a point can be bound to.

Lines (of any extent) and circles are reduced to plain geometry here so
snapping and propagation share one dispatch over curve pairs.
"""

import math
from dataclasses import dataclass

from compassrule.core.geometry import (
    closest_point_on_circle,
    distance_to_circle,
    distance_to_line,
    distance_to_ray,
    distance_to_segment,
    get_angle,
    interpolate,
    intersection_of_circle_and_line,
    intersection_of_two_circles,
    intersection_of_two_lines,
    perpendicular_foot,
    point_on_circle,
)
from compassrule.domain import (
    Circle,
    CircleEntity,
    Entity,
    LineEntity,
    LineType,
    Mutation,
    Point2D,
    PointRef,
    Segment,
)


@dataclass(frozen=True, slots=True)
class LinearCurve:
    """A line, ray or segment reduced to its two defining positions."""

    id: str
    line_type: LineType
    segment: Segment


@dataclass(frozen=True, slots=True)
class CircularCurve:
    """A circle reduced to center and radius."""

    id: str
    circle: Circle


Curve = LinearCurve | CircularCurve


def _segment(points: tuple[PointRef, ...] | list[PointRef]) -> Segment:
    return (points[0].position, points[1].position)


def curve_of(entity: Entity | None, mutation: Mutation | None = None) -> Curve | None:
    """Reduce a line or circle entity to a curve.

    Fields set on ``mutation`` take precedence over the stored ones, so a
    curve can be read as it will be once an in-flight batch is applied.

    Returns:
        The curve, or None for other kinds and for entities still under
        construction
    """
    if isinstance(entity, LineEntity):
        points = mutation.points if mutation and mutation.points is not None else entity.points
        if len(points) != 2:
            return None
        return LinearCurve(entity.id, entity.line_type, _segment(points))

    if isinstance(entity, CircleEntity):
        center = mutation.center if mutation and mutation.center is not None else entity.origin
        points = mutation.points if mutation and mutation.points is not None else entity.points
        if len(points) != 1:
            return None
        edge = points[0]
        radius = math.hypot(edge.x - center.x, edge.y - center.y)
        return CircularCurve(entity.id, Circle(center.x, center.y, radius))

    return None


def distance_to_curve(point: Point2D, curve: Curve) -> float:
    """Distance used to rank snapping candidates.

    Segments and rays report infinity outside their extent.
    """
    if isinstance(curve, CircularCurve):
        return distance_to_circle(point, curve.circle)
    if curve.line_type is LineType.SEGMENT:
        return distance_to_segment(point, curve.segment)
    if curve.line_type is LineType.RAY:
        return distance_to_ray(point, curve.segment)
    return distance_to_line(point, curve.segment)


def intersect_curves(anchor: Point2D, first: Curve, second: Curve) -> Point2D | None:
    """Intersection of two curves, choosing the branch nearest ``anchor``.

    Linear curves are intersected as infinite lines regardless of extent.
    """
    if isinstance(first, LinearCurve) and isinstance(second, LinearCurve):
        return intersection_of_two_lines(first.segment, second.segment)
    if isinstance(first, CircularCurve) and isinstance(second, CircularCurve):
        return intersection_of_two_circles(anchor, first.circle, second.circle)
    if isinstance(first, CircularCurve) and isinstance(second, LinearCurve):
        return intersection_of_circle_and_line(anchor, first.circle, second.segment)
    if isinstance(first, LinearCurve) and isinstance(second, CircularCurve):
        return intersection_of_circle_and_line(anchor, second.circle, first.segment)
    return None


def project_onto_curve(point: Point2D, curve: Curve) -> tuple[Point2D, float]:
    """Closest point on a curve and its binding parameter.

    For linear curves the parameter is the fraction from the first defining
    point to the second (measured along x, or y for vertical lines, 0.5 for
    a zero-length line). For circles it is the bearing from the center.

    Returns:
        Tuple of (snapped point, parameter)
    """
    if isinstance(curve, CircularCurve):
        snapped = closest_point_on_circle(point, curve.circle)
        return snapped, get_angle(curve.circle.center, snapped)

    start, end = curve.segment
    foot = perpendicular_foot(point, curve.segment)
    if start.x != end.x:
        position = (start.x - foot.x) / (start.x - end.x)
    elif start.y != end.y:
        position = (start.y - foot.y) / (start.y - end.y)
    else:
        position = 0.5
    return foot, position


def point_at(curve: Curve, position: float) -> Point2D:
    """Point of a curve at a binding parameter (inverse of ``project_onto_curve``)."""
    if isinstance(curve, CircularCurve):
        return point_on_circle(curve.circle, position)
    return interpolate(curve.segment, position)
