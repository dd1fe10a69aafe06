"""Tests for domain models to verify they work correctly."""

import pytest

from compassrule.domain import (
    EMPTY_MUTATION,
    FREE,
    AngleEntity,
    BindingType,
    CircleEntity,
    EntityKind,
    FreeBinding,
    IntersectionBinding,
    LabelEntity,
    LineEntity,
    LineType,
    MidpointBinding,
    Mutation,
    Point2D,
    PointEntity,
    PointRef,
    PositionBinding,
    ReflectBinding,
    Scene,
    binding_from_dict,
    binding_to_dict,
    entity_from_dict,
    referenced_ids,
)
from compassrule.exceptions import BindingError, DuplicateEntityError, EntityNotFoundError


class TestPoint2D:
    """Tests for Point2D and PointRef."""

    def test_translated(self) -> None:
        """Test translation and delta are inverse."""
        p = Point2D(1.0, 2.0)
        moved = p.translated(Point2D(3.0, -1.0))
        assert moved == Point2D(4.0, 1.0)
        assert p.delta_to(moved) == Point2D(3.0, -1.0)

    def test_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p = Point2D(100.0, 200.0)
        assert Point2D.from_dict(p.to_dict()) == p
        assert p.to_tuple() == (100.0, 200.0)

    def test_immutable(self) -> None:
        """Test points are frozen."""
        p = Point2D(0.0, 0.0)
        with pytest.raises(AttributeError):
            p.x = 1.0  # type: ignore[misc]

    def test_point_ref(self) -> None:
        """Test cached references keep their id when moved."""
        ref = PointRef("A", 1.0, 1.0)
        assert ref.position == Point2D(1.0, 1.0)
        assert ref.moved_to(Point2D(5.0, 6.0)) == PointRef("A", 5.0, 6.0)
        assert ref.translated(Point2D(1.0, 0.0)) == PointRef("A", 2.0, 1.0)
        assert PointRef.from_dict(ref.to_dict()) == ref


class TestBindingRules:
    """Tests for binding rule variants."""

    def test_type_tags(self) -> None:
        """Test every variant carries its tag."""
        assert FREE.type is BindingType.NONE
        assert PositionBinding("L", 0.5).type is BindingType.POSITION
        assert IntersectionBinding(("A", "B")).type is BindingType.INTERSECTION
        assert MidpointBinding(()).type is BindingType.MIDPOINT
        assert ReflectBinding(()).type is BindingType.REFLECT

    def test_referenced_ids(self) -> None:
        """Test the ids a rule reads from."""
        refs = (PointRef("A", 0, 0), PointRef("B", 1, 1))
        assert referenced_ids(FREE) == ()
        assert referenced_ids(PositionBinding("L", 0.5)) == ("L",)
        assert referenced_ids(IntersectionBinding(("C", "L"), 1)) == ("C", "L")
        assert referenced_ids(MidpointBinding(refs)) == ("A", "B")
        assert referenced_ids(ReflectBinding(refs)) == ("A", "B")

    @pytest.mark.parametrize(
        "rule",
        [
            FREE,
            PositionBinding("L", 0.25),
            IntersectionBinding(("C", "L"), 1),
            MidpointBinding((PointRef("A", 0, 0), PointRef("B", 2, 2))),
            ReflectBinding((PointRef("A", 0, 0), PointRef("B", 2, 2))),
        ],
    )
    def test_serialization(self, rule: object) -> None:
        """Test rules survive serialization."""
        assert binding_from_dict(binding_to_dict(rule)) == rule  # type: ignore[arg-type]

    def test_missing_type_is_free(self) -> None:
        """Test an untagged payload is a free point."""
        assert isinstance(binding_from_dict({}), FreeBinding)

    @pytest.mark.parametrize(
        "payload,match",
        [
            ({"type": "orbit"}, "unknown type"),
            ({"type": "position", "id": "L"}, "position"),
            ({"type": "intersection", "ids": ["A"]}, "2 ids"),
            ({"type": "midpoint", "points": []}, "1 or 2 points"),
            ({"type": "reflect", "points": [{"id": "A"}]}, "reflect"),
        ],
    )
    def test_malformed(self, payload: dict[str, object], match: str) -> None:
        """Test malformed payloads raise BindingError."""
        with pytest.raises(BindingError, match=match):
            binding_from_dict(payload)


class TestEntities:
    """Tests for entity types."""

    def test_point_defaults(self) -> None:
        """Test a new point is free at the origin."""
        p = PointEntity(id="P")
        assert p.kind is EntityKind.POINT
        assert p.origin == Point2D(0.0, 0.0)
        assert p.is_free
        assert p.bound_elements == []
        assert p.version == 1

    def test_circle_radius(self) -> None:
        """Test the radius is derived, never stored."""
        circle = CircleEntity(id="C", origin=PointRef("O", 0, 0), points=[PointRef("R", 6, 8)])
        assert circle.radius == pytest.approx(10.0)
        assert circle.is_complete
        assert CircleEntity(id="D", origin=PointRef("O", 0, 0)).radius == 0.0

    def test_line_completeness(self) -> None:
        """Test lines need two points."""
        assert not LineEntity(id="L", points=[PointRef("A", 0, 0)]).is_complete
        assert LineEntity(id="L", points=[PointRef("A", 0, 0), PointRef("B", 1, 0)]).is_complete

    @pytest.mark.parametrize(
        "entity",
        [
            PointEntity(
                id="P",
                origin=Point2D(1, 2),
                binding=PositionBinding("L", 0.5),
                point_size=2,
                bound_elements=["T"],
                style={"stroke": "#000"},
            ),
            LineEntity(
                id="L",
                line_type=LineType.RAY,
                points=[PointRef("A", 0, 0), PointRef("B", 1, 1)],
            ),
            LineEntity(id="H", points=[PointRef("A", 0, 0)], hover_point=Point2D(3, 3)),
            CircleEntity(id="C", origin=PointRef("O", 0, 0), points=[PointRef("R", 1, 0)]),
            AngleEntity(
                id="G",
                origin=PointRef("V", 0, 0),
                points=[PointRef("A", 1, 0), PointRef("B", 0, 1)],
                marks=2,
                angle_arcs=0,
            ),
            LabelEntity(id="T", text="A", x=3, y=4, version=5, version_nonce=77, updated=123),
        ],
    )
    def test_serialization(self, entity: object) -> None:
        """Test entities survive serialization through the kind tag."""
        data = entity.to_dict()  # type: ignore[attr-defined]
        assert data["kind"] == entity.kind.value  # type: ignore[attr-defined]
        assert entity_from_dict(data) == entity

    def test_unknown_kind(self) -> None:
        """Test an unknown kind tag is rejected."""
        with pytest.raises(ValueError):
            entity_from_dict({"kind": "polygon", "id": "X"})


class TestMutation:
    """Tests for Mutation."""

    def test_empty(self) -> None:
        """Test emptiness ignores nothing but unset fields."""
        assert EMPTY_MUTATION.is_empty
        assert Mutation().is_empty
        assert not Mutation(bound_elements=()).is_empty
        assert not Mutation(binding=FREE).is_empty

    def test_to_dict_only_set_fields(self) -> None:
        """Test serialization lists only the fields that change."""
        mutation = Mutation(origin=Point2D(1, 2), binding=FREE)
        assert mutation.to_dict() == {"origin": {"x": 1, "y": 2}, "binding": {"type": "none"}}


class TestScene:
    """Tests for the entity arena."""

    def test_add_and_require(self) -> None:
        """Test entities are addressed by id."""
        scene = Scene([PointEntity(id="A")])
        assert "A" in scene
        assert len(scene) == 1
        assert scene.require("A").id == "A"
        with pytest.raises(EntityNotFoundError, match="'B'"):
            scene.require("B")

    def test_duplicate(self) -> None:
        """Test ids are unique."""
        scene = Scene([PointEntity(id="A")])
        with pytest.raises(DuplicateEntityError):
            scene.add(PointEntity(id="A"))

    def test_points(self) -> None:
        """Test point listing skips other kinds."""
        scene = Scene([PointEntity(id="A"), LabelEntity(id="T"), PointEntity(id="B")])
        assert [p.id for p in scene.points()] == ["A", "B"]

    def test_remove_unknown(self) -> None:
        """Test removing an unknown id raises."""
        with pytest.raises(EntityNotFoundError):
            Scene().remove("A")
