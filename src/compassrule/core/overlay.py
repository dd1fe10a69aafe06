"""Override map consulted while a propagation batch is being computed.

Reads go through the batch's pending mutation for an id first and fall
back to the stored entity, so an entity recomputed later in the batch sees
upstream values that have already changed in this batch.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from compassrule.core.curves import Curve, curve_of
from compassrule.domain import Entity, Mutation, Point2D, PointEntity, PointRef


class Overlay:
    """Pending mutations keyed by entity id, layered over the stored scene."""

    def __init__(self, entities: Mapping[str, Entity]) -> None:
        self.entities = entities
        self._mutations: dict[str, Mutation] = {}

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._mutations

    def set(self, entity_id: str, mutation: Mutation) -> None:
        self._mutations[entity_id] = mutation

    def get(self, entity_id: str) -> Mutation | None:
        return self._mutations.get(entity_id)

    def entity(self, entity_id: str) -> Entity | None:
        return self.entities.get(entity_id)

    def origin_of(self, point_id: str) -> Point2D | None:
        """Resolved origin of a point entity, or None if it does not exist."""
        point = self.entities.get(point_id)
        if not isinstance(point, PointEntity):
            return None
        mutation = self._mutations.get(point_id)
        if mutation is not None and mutation.origin is not None:
            return mutation.origin
        return point.origin

    def refresh(self, ref: PointRef) -> PointRef:
        """Refresh a cached reference, keeping the cache if the point is gone."""
        origin = self.origin_of(ref.id)
        return ref if origin is None else ref.moved_to(origin)

    def curve_of(self, entity_id: str) -> Curve | None:
        """Resolved curve of a line or circle entity."""
        return curve_of(self.entities.get(entity_id), self._mutations.get(entity_id))


@dataclass
class RecomputeContext:
    """Everything a per-kind recompute may read during a batch.

    Attributes:
        overlay: Override map for the batch
        parent_id: Id of the entity that discovered this one in the traversal
        degraded: Ids of points whose binding was downgraded to free
        skipped: Ids of points that kept their position because no
            intersection exists
    """

    overlay: Overlay
    parent_id: str | None = None
    degraded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
