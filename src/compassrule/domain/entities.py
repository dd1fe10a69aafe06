"""Entity types making up a construction.

Every entity is addressed by id. Dependency edges are stored as id lists
(``bound_elements``) on the entity that is depended upon, never as object
references, so the scene is an id-indexed arena.

- PointEntity: A free or derived point
- LineEntity: An infinite line, a ray or a segment through two points
- CircleEntity: A circle through a boundary point around a center point
- AngleEntity: An angle marker at a vertex between two points
- LabelEntity: A text label that follows its anchor point
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from compassrule.domain.binding import (
    FREE,
    BindingRule,
    FreeBinding,
    binding_from_dict,
    binding_to_dict,
)
from compassrule.domain.primitives import Point2D, PointRef


class EntityKind(str, Enum):
    """Kind tag used to dispatch per-kind behaviour."""

    POINT = "point"
    LINE = "line"
    CIRCLE = "circle"
    ANGLE = "angle"
    LABEL = "label"


class LineType(str, Enum):
    """Extent of a linear entity."""

    LINE = "line"
    RAY = "ray"
    SEGMENT = "segment"


@dataclass(kw_only=True)
class Entity:
    """Fields shared by every entity.

    Attributes:
        id: Unique id within the scene
        bound_elements: Ids of entities that must be recomputed when this one changes
        style: Opaque styling attributes, carried but never interpreted
        x: Bounding box left
        y: Bounding box top
        width: Bounding box width
        height: Bounding box height
        version: Incremented on every applied mutation
        version_nonce: Random token replaced on every applied mutation
        updated: Timestamp of the last applied mutation (ms since epoch)
        shape_cache: Renderer-owned cached shape, cleared on mutation
    """

    kind: ClassVar[EntityKind]

    id: str
    bound_elements: list[str] = field(default_factory=list)
    style: dict[str, Any] = field(default_factory=dict)
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    version: int = 1
    version_nonce: int = 0
    updated: int = 0
    shape_cache: Any = field(default=None, repr=False, compare=False)

    def _base_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "bound_elements": list(self.bound_elements),
            "style": dict(self.style),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "version": self.version,
            "version_nonce": self.version_nonce,
            "updated": self.updated,
        }

    @staticmethod
    def _base_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": str(data["id"]),
            "bound_elements": [str(i) for i in data.get("bound_elements", [])],
            "style": dict(data.get("style", {})),
            "x": float(data.get("x", 0.0)),
            "y": float(data.get("y", 0.0)),
            "width": float(data.get("width", 0.0)),
            "height": float(data.get("height", 0.0)),
            "version": int(data.get("version", 1)),
            "version_nonce": int(data.get("version_nonce", 0)),
            "updated": int(data.get("updated", 0)),
        }


def _optional_point(data: dict[str, Any] | None) -> Point2D | None:
    return Point2D.from_dict(data) if data is not None else None


@dataclass(kw_only=True)
class PointEntity(Entity):
    """A point, either free or derived through its binding rule.

    Attributes:
        origin: Current position
        binding: How the position is derived (``FREE`` when authoritative)
        point_size: Marker size level (see RenderConfig.point_sizes)
    """

    kind: ClassVar[EntityKind] = EntityKind.POINT

    origin: Point2D = field(default_factory=lambda: Point2D(0.0, 0.0))
    binding: BindingRule = FREE
    point_size: int = 1

    @property
    def is_free(self) -> bool:
        """Whether the point's position is authoritative."""
        return isinstance(self.binding, FreeBinding)

    def ref(self) -> PointRef:
        """Build a cached reference to this point."""
        return PointRef(self.id, self.origin.x, self.origin.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = self._base_dict()
        data.update(
            origin=self.origin.to_dict(),
            binding=binding_to_dict(self.binding),
            point_size=self.point_size,
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PointEntity":
        """Deserialize from dictionary."""
        return cls(
            **cls._base_kwargs(data),
            origin=Point2D.from_dict(data["origin"]),
            binding=binding_from_dict(data.get("binding", {"type": "none"})),
            point_size=int(data.get("point_size", 1)),
        )


@dataclass(kw_only=True)
class LineEntity(Entity):
    """A line, ray or segment defined by two points.

    Attributes:
        line_type: Whether this is an infinite line, a ray from ``points[0]``
            through ``points[1]``, or a segment between them
        points: Cached references to the defining points (one while under
            construction)
        hover_point: Preview position of the second point while under construction
    """

    kind: ClassVar[EntityKind] = EntityKind.LINE

    line_type: LineType = LineType.SEGMENT
    points: list[PointRef] = field(default_factory=list)
    hover_point: Point2D | None = None

    @property
    def is_complete(self) -> bool:
        """Whether both defining points are set."""
        return len(self.points) == 2

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = self._base_dict()
        data.update(
            line_type=self.line_type.value,
            points=[ref.to_dict() for ref in self.points],
            hover_point=self.hover_point.to_dict() if self.hover_point else None,
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineEntity":
        """Deserialize from dictionary."""
        return cls(
            **cls._base_kwargs(data),
            line_type=LineType(data.get("line_type", LineType.SEGMENT.value)),
            points=[PointRef.from_dict(p) for p in data.get("points", [])],
            hover_point=_optional_point(data.get("hover_point")),
        )


@dataclass(kw_only=True)
class CircleEntity(Entity):
    """A circle around a center point through a boundary point.

    The radius is never stored; it is always the distance from ``origin`` to
    ``points[0]``.

    Attributes:
        origin: Cached reference to the center point
        points: Cached reference to the boundary point (empty while under construction)
        hover_point: Preview boundary position while under construction
    """

    kind: ClassVar[EntityKind] = EntityKind.CIRCLE

    origin: PointRef
    points: list[PointRef] = field(default_factory=list)
    hover_point: Point2D | None = None

    @property
    def is_complete(self) -> bool:
        """Whether the boundary point is set."""
        return len(self.points) == 1

    @property
    def radius(self) -> float:
        """Radius derived from the center and the boundary (or hover) point."""
        if self.points:
            edge = self.points[0].position
        elif self.hover_point is not None:
            edge = self.hover_point
        else:
            return 0.0
        return math.hypot(edge.x - self.origin.x, edge.y - self.origin.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = self._base_dict()
        data.update(
            origin=self.origin.to_dict(),
            points=[ref.to_dict() for ref in self.points],
            hover_point=self.hover_point.to_dict() if self.hover_point else None,
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CircleEntity":
        """Deserialize from dictionary."""
        return cls(
            **cls._base_kwargs(data),
            origin=PointRef.from_dict(data["origin"]),
            points=[PointRef.from_dict(p) for p in data.get("points", [])],
            hover_point=_optional_point(data.get("hover_point")),
        )


@dataclass(kw_only=True)
class AngleEntity(Entity):
    """An angle marker at ``origin`` between the rays to ``points[0]`` and ``points[1]``.

    Attributes:
        origin: Cached reference to the vertex (None while under construction)
        points: Cached references to the two arm points
        marks: Number of tick marks drawn on the arc (cosmetic)
        angle_arcs: Number of concentric arcs drawn (cosmetic)
    """

    kind: ClassVar[EntityKind] = EntityKind.ANGLE

    origin: PointRef | None = None
    points: list[PointRef] = field(default_factory=list)
    marks: int = 0
    angle_arcs: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = self._base_dict()
        data.update(
            origin=self.origin.to_dict() if self.origin else None,
            points=[ref.to_dict() for ref in self.points],
            marks=self.marks,
            angle_arcs=self.angle_arcs,
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AngleEntity":
        """Deserialize from dictionary."""
        origin = data.get("origin")
        return cls(
            **cls._base_kwargs(data),
            origin=PointRef.from_dict(origin) if origin is not None else None,
            points=[PointRef.from_dict(p) for p in data.get("points", [])],
            marks=int(data.get("marks", 0)),
            angle_arcs=int(data.get("angle_arcs", 1)),
        )


@dataclass(kw_only=True)
class LabelEntity(Entity):
    """A text label positioned by its bounding box corner (``x``, ``y``).

    Labels have no binding rule; when listed in a point's ``bound_elements``
    they are translated by the same delta as the point.
    """

    kind: ClassVar[EntityKind] = EntityKind.LABEL

    text: str = ""

    @property
    def position(self) -> Point2D:
        return Point2D(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = self._base_dict()
        data["text"] = self.text
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LabelEntity":
        """Deserialize from dictionary."""
        return cls(**cls._base_kwargs(data), text=str(data.get("text", "")))


ConstructionEntity = PointEntity | LineEntity | CircleEntity | AngleEntity | LabelEntity

_ENTITY_TYPES: dict[EntityKind, type[Entity]] = {
    EntityKind.POINT: PointEntity,
    EntityKind.LINE: LineEntity,
    EntityKind.CIRCLE: CircleEntity,
    EntityKind.ANGLE: AngleEntity,
    EntityKind.LABEL: LabelEntity,
}


def entity_from_dict(data: dict[str, Any]) -> Entity:
    """Deserialize any entity from its tagged dictionary.

    Raises:
        ValueError: If the ``kind`` tag is unknown
        KeyError: If a required field is missing
    """
    entity_type = _ENTITY_TYPES[EntityKind(data["kind"])]
    return entity_type.from_dict(data)  # type: ignore[attr-defined,no-any-return]
