"""Domain models for compassrule.

This module contains the entity model of a construction. Geometry values
(``Point2D``, ``PointRef``, binding rules, mutations) are immutable; entities
are mutable and only changed through mutation application.

Key classes:
- Point2D, PointRef: Plane coordinates and cached point references
- BindingRule variants: FreeBinding, PositionBinding, IntersectionBinding,
  MidpointBinding, ReflectBinding
- PointEntity, LineEntity, CircleEntity, AngleEntity, LabelEntity
- Mutation: Partial update computed by the propagation engine
- Scene: Id-indexed entity arena
"""

from compassrule.domain.binding import (
    FREE,
    BindingRule,
    BindingType,
    FreeBinding,
    IntersectionBinding,
    MidpointBinding,
    PositionBinding,
    ReflectBinding,
    binding_from_dict,
    binding_to_dict,
    referenced_ids,
)
from compassrule.domain.entities import (
    AngleEntity,
    CircleEntity,
    ConstructionEntity,
    Entity,
    EntityKind,
    LabelEntity,
    LineEntity,
    LineType,
    PointEntity,
    entity_from_dict,
)
from compassrule.domain.mutation import EMPTY_MUTATION, EntityMutation, Mutation
from compassrule.domain.primitives import Circle, Point2D, PointRef, Rectangle, Segment
from compassrule.domain.scene import Scene

__all__: list[str] = [
    # Enums
    "BindingType",
    "EntityKind",
    "LineType",
    # Primitives
    "Circle",
    "Point2D",
    "PointRef",
    "Rectangle",
    "Segment",
    # Binding rules
    "FREE",
    "BindingRule",
    "FreeBinding",
    "IntersectionBinding",
    "MidpointBinding",
    "PositionBinding",
    "ReflectBinding",
    "binding_from_dict",
    "binding_to_dict",
    "referenced_ids",
    # Entities
    "AngleEntity",
    "CircleEntity",
    "ConstructionEntity",
    "Entity",
    "LabelEntity",
    "LineEntity",
    "PointEntity",
    "entity_from_dict",
    # Mutations
    "EMPTY_MUTATION",
    "EntityMutation",
    "Mutation",
    # Arena
    "Scene",
]
