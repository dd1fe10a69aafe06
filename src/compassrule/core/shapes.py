"""Declarative render descriptions.

The renderer is external; ``describe`` tells it what to draw for an entity
in terms of simple shapes, already clipped to the visible viewport where the
entity is unbounded.
"""

import math
from dataclasses import dataclass

from compassrule.config import RenderConfig
from compassrule.core.geometry import (
    distance,
    get_angle,
    points_in_rectangle,
    points_in_rectangle_ray,
)
from compassrule.domain import (
    AngleEntity,
    CircleEntity,
    Entity,
    LineEntity,
    LineType,
    Point2D,
    PointEntity,
    Rectangle,
)

# Arc radius of an angle marker once the angle is at least a right angle
MIN_ARC_RADIUS = 30.0


@dataclass(frozen=True, slots=True)
class EllipseShape:
    """Axis-aligned ellipse (points and circles)."""

    center: Point2D
    half_width: float
    half_height: float


@dataclass(frozen=True, slots=True)
class SegmentShape:
    """Straight stroke between two points."""

    start: Point2D
    end: Point2D


@dataclass(frozen=True, slots=True)
class ArcShape:
    """Angle marker arc.

    Attributes:
        center: Vertex of the angle
        radius: Arc radius
        angle_from: Start of the arc, canvas angle in radians
        angle_to: End of the arc, always greater than ``angle_from``
        arcs: Number of concentric arcs (0 draws a right-angle square)
        marks: Number of tick marks
    """

    center: Point2D
    radius: float
    angle_from: float
    angle_to: float
    arcs: int = 1
    marks: int = 0


Shape = EllipseShape | SegmentShape | ArcShape


def angle_span(vertex: Point2D, first: Point2D, second: Point2D) -> tuple[float, float]:
    """Start and end canvas angles of the arc between two arms.

    The arc always runs the short way round; the end angle is shifted by a
    full turn when the arc crosses angle zero.
    """
    angle1 = math.pi / 2 + get_angle(vertex, first)
    angle2 = math.pi / 2 + get_angle(vertex, second)

    if angle2 > angle1 and angle2 - angle1 > math.pi:
        return angle2, angle1 + 2 * math.pi
    if angle1 > angle2 and angle1 - angle2 < math.pi:
        return angle2, angle1
    if angle1 > angle2 and angle1 - angle2 > math.pi:
        return angle1, angle2 + 2 * math.pi
    return angle1, angle2


def arc_radius(angle_from: float, angle_to: float, angle_size: float) -> float:
    """Marker radius, shrinking from ``angle_size`` as the angle opens.

    Angles under 0.1 pi get the full size, right angles and wider get
    ``MIN_ARC_RADIUS``, with a linear ramp in between.
    """
    diff = abs(angle_to - angle_from)
    if diff < math.pi * 0.1:
        return angle_size
    if diff >= math.pi * 0.5:
        return MIN_ARC_RADIUS
    return angle_size - (angle_size - MIN_ARC_RADIUS) * (diff - math.pi * 0.1) / (math.pi * 0.4)


def _describe_line(line: LineEntity, viewport: Rectangle) -> Shape | None:
    points = [ref.position for ref in line.points]
    if len(points) == 1 and line.hover_point is not None:
        points.append(line.hover_point)
    if len(points) != 2 or distance(points[0], points[1]) == 0:
        return None

    segment = (points[0], points[1])
    if line.line_type is LineType.SEGMENT:
        clipped = segment
    elif line.line_type is LineType.RAY:
        clipped = points_in_rectangle_ray(segment, viewport)
    else:
        clipped = points_in_rectangle(segment, viewport)

    if clipped is None:
        return None
    return SegmentShape(clipped[0], clipped[1])


def describe(
    entity: Entity, viewport: Rectangle, render: RenderConfig | None = None
) -> Shape | None:
    """Shape to draw for an entity.

    Args:
        entity: Entity to describe
        viewport: Visible area, used to clip lines and rays
        render: Marker sizes (defaults if None)

    Returns:
        The shape, or None when there is nothing to draw (too few points,
        zero-length line, line outside the viewport, or a label)
    """
    render = render or RenderConfig()

    if isinstance(entity, PointEntity):
        half, _ = render.point_size(entity.point_size)
        return EllipseShape(entity.origin, half, half)

    if isinstance(entity, CircleEntity):
        if not entity.points and entity.hover_point is None:
            return None
        radius = entity.radius
        return EllipseShape(entity.origin.position, radius, radius)

    if isinstance(entity, LineEntity):
        return _describe_line(entity, viewport)

    if isinstance(entity, AngleEntity):
        if entity.origin is None or len(entity.points) < 2:
            return None
        vertex = entity.origin.position
        angle_from, angle_to = angle_span(
            vertex, entity.points[0].position, entity.points[1].position
        )
        return ArcShape(
            center=vertex,
            radius=arc_radius(angle_from, angle_to, render.angle_size),
            angle_from=angle_from,
            angle_to=angle_to,
            arcs=entity.angle_arcs,
            marks=entity.marks,
        )

    return None
