"""Dependency propagation engine.

One batch recomputes every entity reachable from a changed entity through
``bound_elements`` edges:

1. Iterative depth-first traversal from the changed entity (and, for a
   dragged line, circle or angle, from its moved defining points first),
   recording discovery and finish times.
2. Entities are ordered by finish time, descending. Every entity comes
   after the entities it was discovered from, so it is recomputed after
   everything it reads that changes in the batch.
3. Each entity's mutation is computed by its kind's behaviour against an
   override map holding the mutations already computed in this batch.

The engine never writes to entities. Applying the result is the job of
``compassrule.core.mutation``.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from compassrule.core.behaviors import behavior_for
from compassrule.core.overlay import Overlay, RecomputeContext
from compassrule.domain import (
    EMPTY_MUTATION,
    Entity,
    EntityMutation,
    Mutation,
    Point2D,
    PointEntity,
)


@dataclass
class Traversal:
    """Discovery bookkeeping of one depth-first traversal.

    Attributes:
        discovered: Discovery time per visited id
        finished: Finish time per visited id
        parent: Id of the entity each visited id was discovered from (a
            root is its own parent)
    """

    discovered: dict[str, int] = field(default_factory=dict)
    finished: dict[str, int] = field(default_factory=dict)
    parent: dict[str, str] = field(default_factory=dict)

    def order(self) -> list[str]:
        """Visited ids by finish time, descending."""
        return sorted(self.finished, key=self.finished.__getitem__, reverse=True)


def traverse(
    start: Entity,
    entities: Mapping[str, Entity],
    extra_roots: Iterable[str] = (),
) -> Traversal:
    """Depth-first traversal of the dependency graph from ``start``.

    Uses an explicit stack, so arbitrarily long dependency chains do not hit
    the recursion limit. Ids listed in ``bound_elements`` but missing from
    ``entities`` are skipped. Each entity is visited at most once; cycles
    are cut at the first revisit.

    Args:
        start: Root of the traversal
        entities: Entity lookup
        extra_roots: Ids traversed as roots before ``start``. Anything
            reachable from them, ``start`` included, finishes before them
            and is ordered after them.
    """
    result = Traversal()
    time = 0
    roots = [entities.get(root_id) for root_id in extra_roots]

    for root in [*roots, start]:
        if root is None or root.id in result.discovered:
            continue
        result.discovered[root.id] = time
        result.parent[root.id] = root.id
        time += 1
        stack: list[tuple[Entity, Iterator[str]]] = [(root, iter(root.bound_elements))]

        while stack:
            entity, pending = stack[-1]
            for child_id in pending:
                child = entities.get(child_id)
                if child is None or child_id in result.discovered:
                    continue
                result.discovered[child_id] = time
                result.parent[child_id] = entity.id
                time += 1
                stack.append((child, iter(child.bound_elements)))
                break
            else:
                stack.pop()
                result.finished[entity.id] = time
                time += 1

    return result


@dataclass
class PropagationResult:
    """Outcome of one propagation batch.

    Attributes:
        mutations: Entity/mutation pairs in application order; each entity
            follows every entity of the batch it reads from
        degraded: Ids of points whose binding was downgraded to free because
            a referenced entity no longer exists
        skipped: Ids of intersection points left in place because their
            curves do not meet
    """

    mutations: list[EntityMutation] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def order(self) -> list[str]:
        return [item.entity.id for item in self.mutations]


class PropagationEngine:
    """Computes propagation batches over an entity lookup.

    The engine holds no state between batches; one instance can serve any
    number of ``compute`` calls.

    Example:
        engine = PropagationEngine(scene)
        result = engine.compute(scene["P2"], Point2D(-1, 1))
        for item in result.mutations:
            apply_mutation(item.entity, item.mutation)
    """

    def __init__(self, entities: Mapping[str, Entity]) -> None:
        self.entities = entities

    def compute(self, start: Entity, shift: Point2D) -> PropagationResult:
        """Compute the mutations caused by moving ``start`` by ``shift``.

        A point start is seeded with ``origin + shift`` whatever its binding.
        For a line, circle or angle start, its free defining points are
        seeded with ``origin + shift`` and traversed as roots ahead of the
        start, so the start is recomputed once every defining point it reads
        has its final value, and before any of its own dependents. Label
        starts are expected to be edited by the caller beforehand and are
        only used as a traversal root.
        """
        seeds: dict[str, Mutation] = {}
        if isinstance(start, PointEntity):
            seeds[start.id] = Mutation(origin=start.origin.translated(shift))
        else:
            for point_id in behavior_for(start).defining_point_ids(start):
                point = self.entities.get(point_id)
                if isinstance(point, PointEntity) and point.is_free:
                    seeds[point_id] = Mutation(origin=point.origin.translated(shift))

        traversal = traverse(
            start, self.entities, extra_roots=[i for i in seeds if i != start.id]
        )
        overlay = Overlay(self.entities)
        ctx = RecomputeContext(overlay)
        for point_id, mutation in seeds.items():
            overlay.set(point_id, mutation)

        order = traversal.order()
        for entity_id in order:
            if entity_id in seeds:
                continue
            entity = self.entities[entity_id]
            ctx.parent_id = traversal.parent[entity_id]
            overlay.set(entity_id, behavior_for(entity).recompute(entity, ctx))

        mutations = [
            EntityMutation(self.entities[entity_id], overlay.get(entity_id) or EMPTY_MUTATION)
            for entity_id in order
        ]
        return PropagationResult(mutations=mutations, degraded=ctx.degraded, skipped=ctx.skipped)


def compute_propagation(
    start: Entity, shift: Point2D, entities: Mapping[str, Entity]
) -> list[EntityMutation]:
    """Ordered entity/mutation pairs for moving ``start`` by ``shift``.

    Nothing is written; pass the result to ``apply_mutations``.
    """
    return PropagationEngine(entities).compute(start, shift).mutations
