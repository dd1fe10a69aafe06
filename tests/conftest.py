"""Shared builders for hand-wired scenes.

Most tests go through ``ConstructionDocument``; these helpers build
entities and dependency edges directly so engine tests control every field.
"""

from compassrule.domain import (
    FREE,
    BindingRule,
    CircleEntity,
    LineEntity,
    LineType,
    Point2D,
    PointEntity,
    Scene,
)


def make_point(point_id: str, x: float, y: float, binding: BindingRule = FREE) -> PointEntity:
    return PointEntity(id=point_id, origin=Point2D(x, y), binding=binding)


def make_line(
    line_id: str,
    first: PointEntity,
    second: PointEntity,
    line_type: LineType = LineType.SEGMENT,
) -> LineEntity:
    """Line through two points, registered as a dependent of both."""
    line = LineEntity(id=line_id, line_type=line_type, points=[first.ref(), second.ref()])
    first.bound_elements.append(line_id)
    second.bound_elements.append(line_id)
    return line


def make_circle(circle_id: str, center: PointEntity, boundary: PointEntity) -> CircleEntity:
    """Circle around ``center`` through ``boundary``, registered on both."""
    circle = CircleEntity(id=circle_id, origin=center.ref(), points=[boundary.ref()])
    center.bound_elements.append(circle_id)
    boundary.bound_elements.append(circle_id)
    return circle


def depends(point: PointEntity, *sources: object) -> PointEntity:
    """Register ``point`` as a dependent of every source entity."""
    for source in sources:
        source.bound_elements.append(point.id)  # type: ignore[attr-defined]
    return point


def scene_of(*entities: object) -> Scene:
    return Scene(entities)  # type: ignore[arg-type]
