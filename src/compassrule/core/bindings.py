"""Dependency edge bookkeeping.

An edge "B depends on A" is stored as B's id in A's ``bound_elements``.
Tools register the edges of a new bound point here, and the interaction
layer removes them before a point is unbound or rebound.
"""

from collections.abc import Mapping

from compassrule.config import RenderConfig
from compassrule.core.mutation import apply_mutation
from compassrule.domain import BindingRule, Entity, Mutation, referenced_ids


def add_dependency(
    dependent_id: str, entity: Entity, render: RenderConfig | None = None
) -> bool:
    """Record that ``dependent_id`` must be recomputed when ``entity`` changes.

    Returns:
        True if the edge was added, False if it already existed
    """
    if dependent_id in entity.bound_elements:
        return False
    edges = (*entity.bound_elements, dependent_id)
    return apply_mutation(entity, Mutation(bound_elements=edges), render)


def register_binding(
    point: Entity,
    rule: BindingRule,
    entities: Mapping[str, Entity],
    render: RenderConfig | None = None,
) -> list[str]:
    """Add ``point`` to the dependents of every entity ``rule`` reads from.

    Referenced ids that are not in ``entities`` are skipped.

    Returns:
        Ids of the entities that gained an edge
    """
    linked = []
    for entity_id in referenced_ids(rule):
        entity = entities.get(entity_id)
        if entity is None or entity.id == point.id:
            continue
        if add_dependency(point.id, entity, render):
            linked.append(entity_id)
    return linked


def cleanup_point_bindings(
    point: Entity,
    entities: Mapping[str, Entity],
    render: RenderConfig | None = None,
) -> list[str]:
    """Remove ``point`` from the dependents of every other entity.

    Returns:
        Ids of the entities that lost an edge
    """
    detached = []
    for entity in entities.values():
        if point.id not in entity.bound_elements:
            continue
        edges = tuple(i for i in entity.bound_elements if i != point.id)
        apply_mutation(entity, Mutation(bound_elements=edges), render)
        detached.append(entity.id)
    return detached
