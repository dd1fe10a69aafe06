"""Construction document orchestrating scene, snapping and propagation.

This module plays the part of the tool and document layers around the
engine: it creates entities with their dependency edges, routes drags
through propagation, and logs every batch.

Key components:
- ConstructionDocument: Owns a scene and the settings it is edited with
"""

import time
import uuid

from compassrule.config import CompassruleSettings, get_default_settings
from compassrule.core.bindings import add_dependency, register_binding
from compassrule.core.geometry import midpoint, reflect
from compassrule.core.interaction import drag_entity, release_point
from compassrule.core.mutation import refresh_bounds
from compassrule.core.propagation import PropagationResult
from compassrule.core.resolver import Snap, find_reusable_point, resolve_binding
from compassrule.domain import (
    FREE,
    AngleEntity,
    CircleEntity,
    Entity,
    LabelEntity,
    LineEntity,
    LineType,
    MidpointBinding,
    Point2D,
    PointEntity,
    ReflectBinding,
    Scene,
)
from compassrule.exceptions import EntityKindError
from compassrule.utils import PropagationLogger, PropagationStats, configure_logging

# Default offset of a new label from its anchor point
LABEL_OFFSET = Point2D(10.0, -20.0)


def _new_id() -> str:
    return uuid.uuid4().hex


class ConstructionDocument:
    """A straightedge-and-compass construction.

    Example:
        doc = ConstructionDocument()
        a = doc.add_point(0, 0)
        b = doc.add_point(100, 0)
        doc.add_line(a.id, b.id)
        doc.drag(b.id, 0, 50)
    """

    def __init__(
        self,
        settings: CompassruleSettings | None = None,
        scene: Scene | None = None,
    ) -> None:
        """Initialize document.

        Args:
            settings: Snapping, render and logging settings (defaults if None)
            scene: Existing scene to edit (empty if None)
        """
        self.settings = settings or get_default_settings()
        self.scene = scene if scene is not None else Scene()
        self.logger = configure_logging(
            log_file=self.settings.logging.log_file,
            console_level=self.settings.logging.log_level,
            file_level=self.settings.logging.file_log_level,
            quiet=self.settings.logging.quiet,
        )
        self.propagation_logger = PropagationLogger(self.logger)

    @property
    def stats(self) -> PropagationStats:
        """Statistics of every batch run by this document."""
        return self.propagation_logger.stats

    @property
    def min_distance(self) -> float:
        return self.settings.snapping.min_distance

    def get(self, entity_id: str) -> Entity:
        """Get an entity by id.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        return self.scene.require(entity_id)

    def point(self, point_id: str) -> PointEntity:
        """Get a point entity by id.

        Raises:
            EntityNotFoundError: If no entity has this id
            EntityKindError: If the entity is not a point
        """
        entity = self.scene.require(point_id)
        if not isinstance(entity, PointEntity):
            raise EntityKindError(point_id, "point", entity.kind.value)
        return entity

    def add(self, entity: Entity) -> Entity:
        """Add a prebuilt entity, computing its bounding box."""
        refresh_bounds(entity, self.settings.render)
        return self.scene.add(entity)

    def remove(self, entity_id: str) -> Entity:
        """Remove an entity and the dependency edges pointing at it.

        Points bound to the removed entity keep their rule until the next
        propagation batch reaching them downgrades it.
        """
        entity, detached = self.scene.remove(entity_id)
        self.propagation_logger.log_entity_removed(entity_id, detached)
        return entity

    def snap(self, x: float, y: float, ignore: tuple[str, ...] = ()) -> Snap:
        """Resolve where a point placed at (x, y) would go."""
        return resolve_binding(Point2D(x, y), self.scene, ignore, self.min_distance)

    def point_near(self, x: float, y: float) -> PointEntity | None:
        """Existing point close enough to (x, y) to be reused by a tool."""
        return find_reusable_point(Point2D(x, y), self.scene, self.min_distance)

    def add_point(
        self,
        x: float,
        y: float,
        point_size: int = 1,
        snap: bool = True,
        entity_id: str | None = None,
    ) -> PointEntity:
        """Create a point, snapped onto nearby curves unless ``snap`` is False."""
        resolved = self.snap(x, y) if snap else Snap(Point2D(x, y), FREE)
        point = PointEntity(
            id=entity_id or _new_id(),
            origin=resolved.origin,
            binding=resolved.binding,
            point_size=point_size,
        )
        self.add(point)
        register_binding(point, point.binding, self.scene, self.settings.render)
        self.propagation_logger.log_snap(point.id, point.binding.type.value)
        return point

    def add_line(
        self,
        first_id: str,
        second_id: str,
        line_type: LineType = LineType.SEGMENT,
        entity_id: str | None = None,
    ) -> LineEntity:
        """Create a line, ray or segment through two existing points."""
        first, second = self.point(first_id), self.point(second_id)
        line = LineEntity(
            id=entity_id or _new_id(),
            line_type=line_type,
            points=[first.ref(), second.ref()],
        )
        self.add(line)
        self._depend_on(line, first, second)
        return line

    def add_circle(
        self, center_id: str, boundary_id: str, entity_id: str | None = None
    ) -> CircleEntity:
        """Create a circle around one point through another."""
        center, boundary = self.point(center_id), self.point(boundary_id)
        circle = CircleEntity(
            id=entity_id or _new_id(),
            origin=center.ref(),
            points=[boundary.ref()],
        )
        self.add(circle)
        self._depend_on(circle, center, boundary)
        return circle

    def add_angle(
        self,
        first_id: str,
        vertex_id: str,
        second_id: str,
        entity_id: str | None = None,
    ) -> AngleEntity:
        """Create an angle marker at ``vertex_id`` between two arm points."""
        first, vertex, second = (
            self.point(first_id),
            self.point(vertex_id),
            self.point(second_id),
        )
        angle = AngleEntity(
            id=entity_id or _new_id(),
            origin=vertex.ref(),
            points=[first.ref(), second.ref()],
        )
        self.add(angle)
        self._depend_on(angle, vertex, first, second)
        return angle

    def add_midpoint(
        self, first_id: str, second_id: str, entity_id: str | None = None
    ) -> PointEntity:
        """Create a point bound to the midpoint of two points."""
        first, second = self.point(first_id), self.point(second_id)
        point = PointEntity(
            id=entity_id or _new_id(),
            origin=midpoint(first.origin, second.origin),
            binding=MidpointBinding(points=(first.ref(), second.ref())),
        )
        self.add(point)
        register_binding(point, point.binding, self.scene, self.settings.render)
        return point

    def add_reflection(
        self, point_id: str, anchor_id: str, entity_id: str | None = None
    ) -> PointEntity:
        """Create a point bound to the reflection of ``point_id`` across ``anchor_id``."""
        source, anchor = self.point(point_id), self.point(anchor_id)
        point = PointEntity(
            id=entity_id or _new_id(),
            origin=reflect(source.origin, anchor.origin),
            binding=ReflectBinding(points=(source.ref(), anchor.ref())),
        )
        self.add(point)
        register_binding(point, point.binding, self.scene, self.settings.render)
        return point

    def add_label(
        self,
        point_id: str,
        text: str,
        offset: Point2D = LABEL_OFFSET,
        entity_id: str | None = None,
    ) -> LabelEntity:
        """Create a text label that follows ``point_id``."""
        anchor = self.point(point_id)
        position = anchor.origin.translated(offset)
        label = LabelEntity(id=entity_id or _new_id(), text=text, x=position.x, y=position.y)
        self.add(label)
        add_dependency(label.id, anchor, self.settings.render)
        return label

    def drag(self, entity_id: str, dx: float, dy: float) -> PropagationResult:
        """Move an entity by (dx, dy) and update its dependents."""
        entity = self.get(entity_id)
        shift = Point2D(dx, dy)
        start_time = time.time()
        result = drag_entity(entity, shift, self.scene, self.settings.render)
        self._record(entity_id, shift, result, start_time)
        return result

    def release(self, point_id: str) -> Snap:
        """Re-snap a point at the end of a drag."""
        point = self.point(point_id)
        start_time = time.time()
        snap, result = release_point(
            point, self.scene, self.min_distance, self.settings.render
        )
        self.propagation_logger.log_snap(point_id, snap.binding.type.value)
        self._record(point_id, point.origin.delta_to(snap.origin), result, start_time)
        return snap

    def propagate(self, entity_id: str) -> PropagationResult:
        """Recompute everything depending on an entity without moving it."""
        return self.drag(entity_id, 0.0, 0.0)

    def _depend_on(self, entity: Entity, *points: PointEntity) -> None:
        for point in points:
            add_dependency(entity.id, point, self.settings.render)

    def _record(
        self,
        start_id: str,
        shift: Point2D,
        result: PropagationResult,
        start_time: float,
    ) -> None:
        duration_ms = (time.time() - start_time) * 1000
        for point_id in result.degraded:
            self.propagation_logger.log_binding_degraded(point_id)
        for point_id in result.skipped:
            self.propagation_logger.log_intersection_skipped(point_id)
        updated = sum(1 for item in result.mutations if not item.mutation.is_empty)
        self.propagation_logger.log_batch(start_id, shift.to_tuple(), updated, duration_ms)
