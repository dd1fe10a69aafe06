"""Mutation application.

Writes computed mutations into entities, in batch order, through each
kind's behaviour. Every applied mutation also:
- refreshes the entity's bounding box
- drops the renderer's cached shape
- bumps ``version``, replaces ``version_nonce`` and stamps ``updated``
"""

import random
import time
from collections.abc import Iterable, Mapping

from compassrule.config import RenderConfig
from compassrule.core.behaviors import behavior_for
from compassrule.core.propagation import PropagationEngine, PropagationResult
from compassrule.domain import EMPTY_MUTATION, Entity, EntityMutation, Mutation, Point2D

_DEFAULT_RENDER = RenderConfig()


def _bump_version(entity: Entity) -> None:
    entity.shape_cache = None
    entity.version += 1
    entity.version_nonce = random.randrange(2**31)
    entity.updated = int(time.time() * 1000)


def apply_mutation(
    entity: Entity, mutation: Mutation, render: RenderConfig | None = None
) -> bool:
    """Merge one mutation into its entity.

    Args:
        entity: Entity to update in place
        mutation: Fields to replace
        render: Marker sizes for bounding boxes (defaults if None)

    Returns:
        True if the entity was changed, False for an empty mutation
    """
    if mutation.is_empty:
        return False

    behavior_for(entity).apply(entity, mutation, render or _DEFAULT_RENDER)
    _bump_version(entity)
    return True


def refresh_bounds(entity: Entity, render: RenderConfig | None = None) -> None:
    """Recompute the bounding box of a freshly created entity."""
    behavior_for(entity).apply(entity, EMPTY_MUTATION, render or _DEFAULT_RENDER)


def apply_mutations(
    mutations: Iterable[EntityMutation], render: RenderConfig | None = None
) -> int:
    """Apply entity/mutation pairs in order.

    Returns:
        Number of entities actually changed
    """
    return sum(apply_mutation(item.entity, item.mutation, render) for item in mutations)


def apply_propagation(
    moved: Entity,
    entities: Mapping[str, Entity],
    shift: Point2D,
    render: RenderConfig | None = None,
) -> PropagationResult:
    """Compute the batch caused by moving ``moved`` by ``shift`` and apply it.

    Returns:
        The batch that was applied
    """
    result = PropagationEngine(entities).compute(moved, shift)
    apply_mutations(result.mutations, render)
    return result
