"""Per-kind behaviour of construction entities.

Each entity kind has one behaviour object, looked up by the entity's kind
tag in ``BEHAVIORS``. A behaviour knows:
- which point entities define the entity (``defining_point_ids``)
- how to recompute the entity inside a propagation batch (``recompute``)
- how to merge a mutation into the entity and refresh its bounding box
  (``apply``)
- how to express a plain translation as a mutation (``translate``)
"""

from typing import Protocol, assert_never

from compassrule.config import RenderConfig
from compassrule.core.curves import intersect_curves, point_at
from compassrule.core.geometry import midpoint, reflect
from compassrule.core.overlay import RecomputeContext
from compassrule.domain import (
    EMPTY_MUTATION,
    FREE,
    AngleEntity,
    CircleEntity,
    Entity,
    EntityKind,
    FreeBinding,
    IntersectionBinding,
    LabelEntity,
    LineEntity,
    MidpointBinding,
    Mutation,
    Point2D,
    PointEntity,
    PositionBinding,
    ReflectBinding,
)


class EntityBehavior(Protocol):
    """Protocol implemented once per entity kind."""

    def defining_point_ids(self, entity: Entity) -> tuple[str, ...]:
        """Ids of the point entities this entity is built from."""

    def recompute(self, entity: Entity, ctx: RecomputeContext) -> Mutation:
        """Compute the entity's mutation from the batch's resolved state."""

    def apply(self, entity: Entity, mutation: Mutation, render: RenderConfig) -> None:
        """Merge ``mutation`` into ``entity`` and refresh its bounding box."""

    def translate(self, entity: Entity, shift: Point2D) -> Mutation:
        """Mutation moving the entity's own coordinates by ``shift``."""


def _merge_bound_elements(entity: Entity, mutation: Mutation) -> None:
    if mutation.bound_elements is not None:
        entity.bound_elements = list(mutation.bound_elements)


class PointBehavior:
    """Points are recomputed from their binding rule."""

    def defining_point_ids(self, entity: PointEntity) -> tuple[str, ...]:
        return ()

    def recompute(self, entity: PointEntity, ctx: RecomputeContext) -> Mutation:
        rule = entity.binding
        overlay = ctx.overlay

        if isinstance(rule, FreeBinding):
            return EMPTY_MUTATION

        if isinstance(rule, PositionBinding):
            if overlay.entity(rule.id) is None:
                ctx.degraded.append(entity.id)
                return Mutation(binding=FREE)
            curve = overlay.curve_of(rule.id)
            if curve is None:
                return EMPTY_MUTATION
            return Mutation(origin=point_at(curve, rule.position))

        if isinstance(rule, IntersectionBinding):
            if any(overlay.entity(curve_id) is None for curve_id in rule.ids):
                ctx.degraded.append(entity.id)
                return Mutation(binding=FREE)
            first = overlay.curve_of(rule.ids[0])
            second = overlay.curve_of(rule.ids[1])
            if first is None or second is None:
                return EMPTY_MUTATION
            # Own position as anchor keeps the point on the same branch
            anchor = overlay.origin_of(entity.id) or entity.origin
            found = intersect_curves(anchor, first, second)
            if found is None:
                ctx.skipped.append(entity.id)
                return EMPTY_MUTATION
            return Mutation(origin=found)

        if isinstance(rule, (MidpointBinding, ReflectBinding)):
            if any(overlay.origin_of(ref.id) is None for ref in rule.points):
                ctx.degraded.append(entity.id)
                return Mutation(binding=FREE)
            if len(rule.points) < 2:
                return EMPTY_MUTATION
            refs = tuple(overlay.refresh(ref) for ref in rule.points)
            first, second = refs[0].position, refs[1].position
            if isinstance(rule, MidpointBinding):
                return Mutation(origin=midpoint(first, second), binding=MidpointBinding(refs))
            return Mutation(origin=reflect(first, second), binding=ReflectBinding(refs))

        assert_never(rule)

    def apply(self, entity: PointEntity, mutation: Mutation, render: RenderConfig) -> None:
        if mutation.origin is not None:
            entity.origin = mutation.origin
        if mutation.binding is not None:
            entity.binding = mutation.binding
        _merge_bound_elements(entity, mutation)

        half, full = render.point_size(entity.point_size)
        entity.x = entity.origin.x - half
        entity.y = entity.origin.y - half
        entity.width = full
        entity.height = full

    def translate(self, entity: PointEntity, shift: Point2D) -> Mutation:
        return Mutation(origin=entity.origin.translated(shift))


class LineBehavior:
    """Lines, rays and segments follow their two defining points."""

    def defining_point_ids(self, entity: LineEntity) -> tuple[str, ...]:
        return tuple(ref.id for ref in entity.points)

    def recompute(self, entity: LineEntity, ctx: RecomputeContext) -> Mutation:
        if not entity.points:
            return EMPTY_MUTATION
        return Mutation(points=tuple(ctx.overlay.refresh(ref) for ref in entity.points))

    def apply(self, entity: LineEntity, mutation: Mutation, render: RenderConfig) -> None:
        if mutation.points is not None:
            entity.points = list(mutation.points)
        if mutation.hover_point is not None:
            entity.hover_point = mutation.hover_point
        _merge_bound_elements(entity, mutation)

        corners = [ref.position for ref in entity.points]
        if entity.hover_point is not None and not entity.is_complete:
            corners.append(entity.hover_point)
        if not corners:
            return
        xs = [p.x for p in corners]
        ys = [p.y for p in corners]
        entity.x = min(xs)
        entity.y = min(ys)
        entity.width = max(xs) - entity.x
        entity.height = max(ys) - entity.y

    def translate(self, entity: LineEntity, shift: Point2D) -> Mutation:
        return Mutation(points=tuple(ref.translated(shift) for ref in entity.points))


class CircleBehavior:
    """Circles follow their center and boundary points."""

    def defining_point_ids(self, entity: CircleEntity) -> tuple[str, ...]:
        return (entity.origin.id, *(ref.id for ref in entity.points))

    def recompute(self, entity: CircleEntity, ctx: RecomputeContext) -> Mutation:
        overlay = ctx.overlay
        return Mutation(
            center=overlay.refresh(entity.origin),
            points=tuple(overlay.refresh(ref) for ref in entity.points),
        )

    def apply(self, entity: CircleEntity, mutation: Mutation, render: RenderConfig) -> None:
        if mutation.center is not None:
            entity.origin = mutation.center
        if mutation.points is not None:
            entity.points = list(mutation.points)
        if mutation.hover_point is not None:
            entity.hover_point = mutation.hover_point
        _merge_bound_elements(entity, mutation)

        radius = entity.radius
        entity.x = entity.origin.x - radius
        entity.y = entity.origin.y - radius
        entity.width = 2 * radius
        entity.height = 2 * radius

    def translate(self, entity: CircleEntity, shift: Point2D) -> Mutation:
        return Mutation(
            center=entity.origin.translated(shift),
            points=tuple(ref.translated(shift) for ref in entity.points),
        )


class AngleBehavior:
    """Angle markers follow their vertex and arm points."""

    def defining_point_ids(self, entity: AngleEntity) -> tuple[str, ...]:
        ids = tuple(ref.id for ref in entity.points)
        return ids if entity.origin is None else (entity.origin.id, *ids)

    def recompute(self, entity: AngleEntity, ctx: RecomputeContext) -> Mutation:
        overlay = ctx.overlay
        return Mutation(
            center=overlay.refresh(entity.origin) if entity.origin is not None else None,
            points=tuple(overlay.refresh(ref) for ref in entity.points),
        )

    def apply(self, entity: AngleEntity, mutation: Mutation, render: RenderConfig) -> None:
        if mutation.center is not None:
            entity.origin = mutation.center
        if mutation.points is not None:
            entity.points = list(mutation.points)
        _merge_bound_elements(entity, mutation)

        if entity.origin is not None:
            entity.x = entity.origin.x - render.angle_size
            entity.y = entity.origin.y - render.angle_size
            entity.width = 2 * render.angle_size
            entity.height = 2 * render.angle_size

    def translate(self, entity: AngleEntity, shift: Point2D) -> Mutation:
        return Mutation(
            center=entity.origin.translated(shift) if entity.origin is not None else None,
            points=tuple(ref.translated(shift) for ref in entity.points),
        )


class LabelBehavior:
    """Labels move by the same delta as the point that discovered them."""

    def defining_point_ids(self, entity: LabelEntity) -> tuple[str, ...]:
        return ()

    def recompute(self, entity: LabelEntity, ctx: RecomputeContext) -> Mutation:
        if ctx.parent_id is None:
            return EMPTY_MUTATION
        parent = ctx.overlay.entity(ctx.parent_id)
        pending = ctx.overlay.get(ctx.parent_id)
        if not isinstance(parent, PointEntity) or pending is None or pending.origin is None:
            return EMPTY_MUTATION
        delta = parent.origin.delta_to(pending.origin)
        if delta.x == 0 and delta.y == 0:
            return EMPTY_MUTATION
        return Mutation(position=entity.position.translated(delta))

    def apply(self, entity: LabelEntity, mutation: Mutation, render: RenderConfig) -> None:
        if mutation.position is not None:
            entity.x = mutation.position.x
            entity.y = mutation.position.y
        _merge_bound_elements(entity, mutation)

    def translate(self, entity: LabelEntity, shift: Point2D) -> Mutation:
        return Mutation(position=entity.position.translated(shift))


BEHAVIORS: dict[EntityKind, EntityBehavior] = {
    EntityKind.POINT: PointBehavior(),
    EntityKind.LINE: LineBehavior(),
    EntityKind.CIRCLE: CircleBehavior(),
    EntityKind.ANGLE: AngleBehavior(),
    EntityKind.LABEL: LabelBehavior(),
}


def behavior_for(entity: Entity) -> EntityBehavior:
    """Behaviour registered for the entity's kind tag."""
    return BEHAVIORS[entity.kind]
