"""Partial updates computed by the propagation engine.

A ``Mutation`` names only the fields that change; ``None`` means "keep the
stored value". Nested structures (``points``, ``binding``, ``bound_elements``)
are replaced as a whole, never merged.
"""

from dataclasses import dataclass, fields
from typing import Any

from compassrule.domain.binding import BindingRule, binding_to_dict
from compassrule.domain.entities import Entity
from compassrule.domain.primitives import Point2D, PointRef


@dataclass(frozen=True, slots=True)
class Mutation:
    """A partial update for one entity.

    Attributes:
        origin: New position of a point
        center: New center reference of a circle, or vertex reference of an angle
        points: New defining point references of a line, circle or angle
        binding: New binding rule of a point
        position: New bounding box corner of a label
        bound_elements: New dependency list
        hover_point: New construction preview position
    """

    origin: Point2D | None = None
    center: PointRef | None = None
    points: tuple[PointRef, ...] | None = None
    binding: BindingRule | None = None
    position: Point2D | None = None
    bound_elements: tuple[str, ...] | None = None
    hover_point: Point2D | None = None

    @property
    def is_empty(self) -> bool:
        """Whether this mutation changes nothing."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the fields that are set."""
        data: dict[str, Any] = {}
        if self.origin is not None:
            data["origin"] = self.origin.to_dict()
        if self.center is not None:
            data["center"] = self.center.to_dict()
        if self.points is not None:
            data["points"] = [ref.to_dict() for ref in self.points]
        if self.binding is not None:
            data["binding"] = binding_to_dict(self.binding)
        if self.position is not None:
            data["position"] = self.position.to_dict()
        if self.bound_elements is not None:
            data["bound_elements"] = list(self.bound_elements)
        if self.hover_point is not None:
            data["hover_point"] = self.hover_point.to_dict()
        return data


EMPTY_MUTATION = Mutation()


@dataclass(frozen=True, slots=True)
class EntityMutation:
    """An entity paired with the mutation computed for it."""

    entity: Entity
    mutation: Mutation
