"""Plane primitives shared by the kernel and the entity model.

- Point2D: A plane coordinate
- PointRef: A cached reference to a point entity (id plus last known coordinates)
- Circle: A circle given by center and radius
- Rectangle: An axis-aligned rectangle (viewport)
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point2D:
    """A point in the plane.

    Attributes:
        x: X coordinate in scene units
        y: Y coordinate in scene units
    """

    x: float
    y: float

    def translated(self, shift: "Point2D") -> "Point2D":
        """Return this point moved by ``shift``."""
        return Point2D(self.x + shift.x, self.y + shift.y)

    def delta_to(self, other: "Point2D") -> "Point2D":
        """Return the vector from this point to ``other``."""
        return Point2D(other.x - self.x, other.y - self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point2D":
        """Deserialize from dictionary."""
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class PointRef:
    """Reference to a point entity with its cached coordinates.

    The cached coordinates must equal the referenced point's origin; they are
    refreshed by every propagation batch that moves the point.

    Attributes:
        id: Id of the referenced point entity
        x: Cached X coordinate
        y: Cached Y coordinate
    """

    id: str
    x: float
    y: float

    @property
    def position(self) -> Point2D:
        """Cached coordinates as a plain point."""
        return Point2D(self.x, self.y)

    def moved_to(self, point: Point2D) -> "PointRef":
        """Return a copy of this reference with refreshed coordinates."""
        return PointRef(self.id, point.x, point.y)

    def translated(self, shift: Point2D) -> "PointRef":
        """Return a copy of this reference moved by ``shift``."""
        return PointRef(self.id, self.x + shift.x, self.y + shift.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PointRef":
        """Deserialize from dictionary."""
        return cls(id=str(data["id"]), x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle given by its center and radius."""

    x: float
    y: float
    radius: float

    @property
    def center(self) -> Point2D:
        return Point2D(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Rectangle:
    """An axis-aligned rectangle, typically the visible viewport."""

    x: float
    y: float
    width: float
    height: float


Segment = tuple[Point2D, Point2D]
