"""Snapping of new points onto curves and curve intersections.

Key functions:
- resolve_binding: Decide whether a point at the cursor lies on a curve,
  on the intersection of two curves, or stays free
- get_closest_points: Existing points ranked by distance, for point reuse
"""

from collections.abc import Collection, Mapping
from dataclasses import dataclass

from compassrule.config import MIN_DISTANCE
from compassrule.core.curves import (
    Curve,
    curve_of,
    distance_to_curve,
    intersect_curves,
    project_onto_curve,
)
from compassrule.core.geometry import distance
from compassrule.domain import (
    FREE,
    BindingRule,
    Entity,
    IntersectionBinding,
    Point2D,
    PointEntity,
    PositionBinding,
)


@dataclass(frozen=True, slots=True)
class Snap:
    """Result of binding resolution.

    Attributes:
        origin: Where the new point should be placed
        binding: The rule deriving its position from here on
    """

    origin: Point2D
    binding: BindingRule


@dataclass(frozen=True, slots=True)
class PointDistance:
    """An existing point and its distance to a query location."""

    point: PointEntity
    distance: float


@dataclass(frozen=True, slots=True)
class _Candidate:
    curve: Curve
    distance: float


def _candidates(
    location: Point2D,
    entities: Mapping[str, Entity],
    ids_to_ignore: Collection[str],
) -> list[_Candidate]:
    candidates = []
    for entity in entities.values():
        if entity.id in ids_to_ignore:
            continue
        curve = curve_of(entity)
        if curve is None:
            continue
        candidates.append(_Candidate(curve, distance_to_curve(location, curve)))
    candidates.sort(key=lambda c: c.distance)
    return candidates


def resolve_binding(
    point: Point2D,
    entities: Mapping[str, Entity],
    ids_to_ignore: Collection[str] = (),
    min_distance: float = MIN_DISTANCE,
) -> Snap:
    """Resolve where a point placed at ``point`` should go and what binds it.

    Candidates are every complete line (two defining points) and circle (one
    boundary point) not listed in ``ids_to_ignore``, ranked by distance.
    An intersection of the two closest candidates wins over snapping onto a
    single curve, so a point created where two curves cross always binds to
    the crossing.

    Args:
        point: Cursor position
        entities: Current scene
        ids_to_ignore: Ids of curves that must not be snapped to
        min_distance: Proximity threshold

    Returns:
        Snap with the placed origin and its binding rule

    Examples:
        >>> snap = resolve_binding(Point2D(5, 50), {})
        >>> snap.binding
        FreeBinding()
    """
    candidates = _candidates(point, entities, ids_to_ignore)

    if len(candidates) >= 2 and candidates[1].distance < min_distance:
        first, second = candidates[0].curve, candidates[1].curve
        intersection = intersect_curves(point, first, second)
        if intersection is not None:
            return Snap(
                origin=intersection,
                binding=IntersectionBinding(ids=(first.id, second.id), index=0),
            )

    if candidates and candidates[0].distance < min_distance:
        curve = candidates[0].curve
        snapped, position = project_onto_curve(point, curve)
        return Snap(origin=snapped, binding=PositionBinding(id=curve.id, position=position))

    return Snap(origin=point, binding=FREE)


def get_closest_points(
    location: Point2D, entities: Mapping[str, Entity]
) -> list[PointDistance]:
    """All point entities sorted by ascending distance to ``location``.

    Tools compare the first entry against the snapping threshold to decide
    whether a click reuses an existing point instead of creating a new one.
    """
    ranked = [
        PointDistance(entity, distance(location, entity.origin))
        for entity in entities.values()
        if isinstance(entity, PointEntity)
    ]
    ranked.sort(key=lambda p: p.distance)
    return ranked


def find_reusable_point(
    location: Point2D,
    entities: Mapping[str, Entity],
    min_distance: float = MIN_DISTANCE,
    exclude: Collection[str] = (),
) -> PointEntity | None:
    """Closest existing point within the snapping threshold, if any."""
    for candidate in get_closest_points(location, entities):
        if candidate.point.id in exclude:
            continue
        if candidate.distance < min_distance:
            return candidate.point
        break
    return None
