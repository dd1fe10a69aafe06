"""Side effects of direct user interaction.

- drag_entity: Move an entity by a pointer delta and propagate
- release_point: Re-snap a dragged point when the pointer is released
- unbind_point: Make a point free and drop its dependency edges
"""

from collections.abc import Mapping

from compassrule.config import MIN_DISTANCE, RenderConfig
from compassrule.core.behaviors import behavior_for
from compassrule.core.bindings import cleanup_point_bindings, register_binding
from compassrule.core.mutation import apply_mutation, apply_propagation
from compassrule.core.propagation import PropagationResult, traverse
from compassrule.core.resolver import Snap, resolve_binding
from compassrule.domain import (
    FREE,
    Entity,
    EntityMutation,
    LabelEntity,
    LineEntity,
    Mutation,
    Point2D,
    PointEntity,
)


def unbind_point(
    point: PointEntity,
    entities: Mapping[str, Entity],
    render: RenderConfig | None = None,
) -> bool:
    """Make ``point`` free and remove it from the dependents of other entities.

    Returns:
        True if the point had a binding rule
    """
    cleanup_point_bindings(point, entities, render)
    if point.is_free:
        return False
    apply_mutation(point, Mutation(binding=FREE), render)
    return True


def drag_entity(
    entity: Entity,
    shift: Point2D,
    entities: Mapping[str, Entity],
    render: RenderConfig | None = None,
) -> PropagationResult:
    """Move ``entity`` by ``shift`` and update everything depending on it.

    Dragging a line by its body frees its bound endpoints first (only when
    the shift is nonzero), so both endpoints follow the pointer. Circles and
    angles move their free defining points; bound ones stay on their curves.
    Labels are translated and have no dependents.

    Returns:
        The applied propagation batch
    """
    if isinstance(entity, LabelEntity):
        mutation = behavior_for(entity).translate(entity, shift)
        apply_mutation(entity, mutation, render)
        return PropagationResult(mutations=[EntityMutation(entity, mutation)])

    if isinstance(entity, LineEntity) and (shift.x != 0 or shift.y != 0):
        for ref in entity.points:
            endpoint = entities.get(ref.id)
            if isinstance(endpoint, PointEntity) and not endpoint.is_free:
                unbind_point(endpoint, entities, render)

    return apply_propagation(entity, entities, shift, render)


def release_point(
    point: PointEntity,
    entities: Mapping[str, Entity],
    min_distance: float = MIN_DISTANCE,
    render: RenderConfig | None = None,
) -> tuple[Snap, PropagationResult]:
    """Re-resolve the binding of a point at the end of a drag.

    The point is detached from its old bindings and resolved again at its
    current position. Curves that depend on the point, directly or through
    other entities, are never snap candidates, so a point cannot be bound to
    a curve built from itself.

    Returns:
        Tuple of (chosen snap, applied propagation batch)
    """
    cleanup_point_bindings(point, entities, render)

    dependents = traverse(point, entities).discovered.keys()
    snap = resolve_binding(point.origin, entities, dependents, min_distance)

    register_binding(point, snap.binding, entities, render)
    apply_mutation(point, Mutation(binding=snap.binding), render)
    result = apply_propagation(point, entities, point.origin.delta_to(snap.origin), render)
    return snap, result
