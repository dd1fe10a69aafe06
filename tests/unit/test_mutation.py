"""Unit tests for mutation application and bounding boxes."""

import pytest
from conftest import depends, make_line, make_point, scene_of

from compassrule.config import RenderConfig
from compassrule.core.mutation import (
    apply_mutation,
    apply_mutations,
    apply_propagation,
    refresh_bounds,
)
from compassrule.domain import (
    EMPTY_MUTATION,
    AngleEntity,
    CircleEntity,
    EntityMutation,
    LabelEntity,
    LineEntity,
    Mutation,
    Point2D,
    PointRef,
    PositionBinding,
)


class TestApplyMutation:
    """Tests for apply_mutation."""

    def test_empty_mutation_is_noop(self) -> None:
        """Test an empty mutation changes nothing, version included."""
        point = make_point("P", 1, 1)
        assert apply_mutation(point, EMPTY_MUTATION) is False
        assert point.version == 1
        assert point.updated == 0

    def test_version_bookkeeping(self) -> None:
        """Test an applied mutation bumps version and clears the shape cache."""
        point = make_point("P", 1, 1)
        point.shape_cache = object()

        assert apply_mutation(point, Mutation(origin=Point2D(2, 2))) is True

        assert point.origin == Point2D(2, 2)
        assert point.version == 2
        assert point.updated > 0
        assert point.shape_cache is None
        assert 0 <= point.version_nonce < 2**31

    def test_nested_fields_replaced(self) -> None:
        """Test list fields are replaced as a whole."""
        point = make_point("P", 0, 0)
        point.bound_elements = ["A", "B"]
        apply_mutation(point, Mutation(bound_elements=("C",)))
        assert point.bound_elements == ["C"]

    def test_binding_replaced(self) -> None:
        """Test a binding rule is replaced by the mutation's."""
        point = make_point("P", 0, 0)
        apply_mutation(point, Mutation(binding=PositionBinding(id="L", position=0.2)))
        assert point.binding == PositionBinding(id="L", position=0.2)
        assert not point.is_free


class TestBoundingBoxes:
    """Tests for bounding boxes written on mutation."""

    def test_point_box(self) -> None:
        """Test a point box is centered on its origin."""
        point = make_point("P", 0, 0)
        apply_mutation(point, Mutation(origin=Point2D(10, 10)))
        assert (point.x, point.y, point.width, point.height) == (7, 7, 7, 7)

    def test_point_size_levels(self) -> None:
        """Test larger point sizes use larger boxes and unknown levels fall back."""
        big = make_point("P", 0, 0)
        big.point_size = 3
        apply_mutation(big, Mutation(origin=Point2D(10, 10)))
        assert (big.x, big.width) == (5, 11)

        odd = make_point("Q", 0, 0)
        odd.point_size = 9
        apply_mutation(odd, Mutation(origin=Point2D(10, 10)))
        assert (odd.x, odd.width) == (7, 7)

    def test_line_box(self) -> None:
        """Test a line box spans its defining points."""
        line = LineEntity(id="L")
        apply_mutation(line, Mutation(points=(PointRef("A", 10, 40), PointRef("B", 30, 5))))
        assert (line.x, line.y, line.width, line.height) == (10, 5, 20, 35)

    def test_incomplete_line_box_includes_hover(self) -> None:
        """Test an incomplete line box includes the preview point."""
        line = LineEntity(id="L", points=[PointRef("A", 0, 0)])
        apply_mutation(line, Mutation(hover_point=Point2D(-5, 8)))
        assert (line.x, line.y, line.width, line.height) == (-5, 0, 5, 8)

    def test_circle_box(self) -> None:
        """Test a circle box is the square around it."""
        circle = CircleEntity(id="C", origin=PointRef("O", 0, 0))
        apply_mutation(circle, Mutation(points=(PointRef("R", 3, 4),)))
        assert (circle.x, circle.y, circle.width, circle.height) == pytest.approx((-5, -5, 10, 10))

    def test_angle_box(self) -> None:
        """Test an angle box is fixed around its vertex."""
        angle = AngleEntity(id="G")
        apply_mutation(angle, Mutation(center=PointRef("V", 100, 100)))
        assert (angle.x, angle.y, angle.width, angle.height) == (50, 50, 100, 100)

    def test_custom_render_sizes(self) -> None:
        """Test bounding boxes follow the render configuration."""
        angle = AngleEntity(id="G")
        apply_mutation(angle, Mutation(center=PointRef("V", 0, 0)), RenderConfig(angle_size=10))
        assert (angle.x, angle.width) == (-10, 20)

    def test_label_position(self) -> None:
        """Test a label mutation moves its box corner."""
        label = LabelEntity(id="T", x=1, y=2)
        apply_mutation(label, Mutation(position=Point2D(11, 12)))
        assert (label.x, label.y) == (11, 12)

    def test_refresh_bounds_keeps_version(self) -> None:
        """Test refreshing bounds does not count as a mutation."""
        point = make_point("P", 10, 10)
        refresh_bounds(point)
        assert (point.x, point.y) == (7, 7)
        assert point.version == 1


class TestBatches:
    """Tests for applying whole batches."""

    def test_apply_mutations_counts_changes(self) -> None:
        """Test only non-empty mutations are counted."""
        a, b = make_point("A", 0, 0), make_point("B", 0, 0)
        changed = apply_mutations(
            [
                EntityMutation(a, Mutation(origin=Point2D(1, 1))),
                EntityMutation(b, EMPTY_MUTATION),
            ]
        )
        assert changed == 1
        assert a.version == 2
        assert b.version == 1

    def test_apply_propagation(self) -> None:
        """Test a propagation batch is computed and written."""
        p1, p2 = make_point("P1", 0, 0), make_point("P2", 2, 0)
        line = make_line("L", p1, p2)
        p3 = depends(make_point("P3", 1, 0, PositionBinding(id="L", position=0.5)), line)

        result = apply_propagation(p2, scene_of(p1, p2, line, p3), Point2D(-1, 1))

        assert result.order == ["P2", "L", "P3"]
        assert p2.origin == Point2D(1, 1)
        assert line.points == [PointRef("P1", 0, 0), PointRef("P2", 1, 1)]
        assert p3.origin == Point2D(0.5, 0.5)
        assert p1.version == 1
