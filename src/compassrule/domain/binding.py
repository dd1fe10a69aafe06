"""Binding rules describing how a point's position is derived.

A binding rule is a closed sum type: exactly one of ``FreeBinding``,
``PositionBinding``, ``IntersectionBinding``, ``MidpointBinding`` or
``ReflectBinding``. Code that branches on a rule ends with
``assert_never`` so a new variant cannot be silently ignored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeAlias, assert_never

from compassrule.domain.primitives import PointRef
from compassrule.exceptions import BindingError


class BindingType(str, Enum):
    """Tag of a binding rule variant."""

    NONE = "none"
    POSITION = "position"
    INTERSECTION = "intersection"
    MIDPOINT = "midpoint"
    REFLECT = "reflect"


@dataclass(frozen=True, slots=True)
class FreeBinding:
    """Free point: its stored position is authoritative."""

    type: ClassVar[BindingType] = BindingType.NONE


@dataclass(frozen=True, slots=True)
class PositionBinding:
    """Point lying on a curve at a fixed parameter.

    Attributes:
        id: Id of the line or circle the point lies on
        position: Interpolation fraction between the two defining points of a
            line (0 at the first, 1 at the second), or the angle in radians
            around a circle
    """

    id: str
    position: float

    type: ClassVar[BindingType] = BindingType.POSITION


@dataclass(frozen=True, slots=True)
class IntersectionBinding:
    """Point at the intersection of two curves.

    The intersection is recomputed from scratch on every propagation, using
    the point's own current position to pick the branch.

    Attributes:
        ids: Ids of the two intersecting curves
        index: Branch index recorded at creation time
    """

    ids: tuple[str, str]
    index: int = 0

    type: ClassVar[BindingType] = BindingType.INTERSECTION


@dataclass(frozen=True, slots=True)
class MidpointBinding:
    """Point at the midpoint of two referenced points.

    ``points`` holds a single reference while the midpoint tool is still
    waiting for its second click.
    """

    points: tuple[PointRef, ...]

    type: ClassVar[BindingType] = BindingType.MIDPOINT


@dataclass(frozen=True, slots=True)
class ReflectBinding:
    """Point at the reflection of ``points[0]`` across ``points[1]``."""

    points: tuple[PointRef, ...]

    type: ClassVar[BindingType] = BindingType.REFLECT


BindingRule: TypeAlias = (
    FreeBinding | PositionBinding | IntersectionBinding | MidpointBinding | ReflectBinding
)

FREE = FreeBinding()


def referenced_ids(rule: BindingRule) -> tuple[str, ...]:
    """Ids of every entity a binding rule reads from.

    Args:
        rule: The binding rule

    Returns:
        Tuple of referenced entity ids, in rule order
    """
    if isinstance(rule, FreeBinding):
        return ()
    if isinstance(rule, PositionBinding):
        return (rule.id,)
    if isinstance(rule, IntersectionBinding):
        return rule.ids
    if isinstance(rule, (MidpointBinding, ReflectBinding)):
        return tuple(ref.id for ref in rule.points)
    assert_never(rule)


def binding_to_dict(rule: BindingRule) -> dict[str, Any]:
    """Serialize a binding rule to a tagged dictionary."""
    if isinstance(rule, FreeBinding):
        return {"type": rule.type.value}
    if isinstance(rule, PositionBinding):
        return {"type": rule.type.value, "id": rule.id, "position": rule.position}
    if isinstance(rule, IntersectionBinding):
        return {"type": rule.type.value, "ids": list(rule.ids), "index": rule.index}
    if isinstance(rule, (MidpointBinding, ReflectBinding)):
        return {"type": rule.type.value, "points": [ref.to_dict() for ref in rule.points]}
    assert_never(rule)


def binding_from_dict(data: dict[str, Any]) -> BindingRule:
    """Deserialize a binding rule from a tagged dictionary.

    Args:
        data: Dictionary with a ``type`` tag and the variant's fields

    Returns:
        The binding rule

    Raises:
        BindingError: If the tag is unknown or a required field is missing
    """
    try:
        binding_type = BindingType(data.get("type", BindingType.NONE.value))
    except ValueError as e:
        raise BindingError(f"unknown type {data.get('type')!r}") from e

    try:
        if binding_type is BindingType.NONE:
            return FREE
        if binding_type is BindingType.POSITION:
            return PositionBinding(id=str(data["id"]), position=float(data["position"]))
        if binding_type is BindingType.INTERSECTION:
            ids = [str(i) for i in data["ids"]]
            if len(ids) != 2:
                raise BindingError(f"intersection needs 2 ids, got {len(ids)}")
            return IntersectionBinding(ids=(ids[0], ids[1]), index=int(data.get("index", 0)))
        points = tuple(PointRef.from_dict(p) for p in data["points"])
        if not 1 <= len(points) <= 2:
            raise BindingError(f"{binding_type.value} needs 1 or 2 points, got {len(points)}")
        if binding_type is BindingType.MIDPOINT:
            return MidpointBinding(points=points)
        return ReflectBinding(points=points)
    except (KeyError, TypeError, ValueError) as e:
        raise BindingError(f"{binding_type.value}: {e}") from e
