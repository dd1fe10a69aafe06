"""Core algorithms for compassrule.

This module contains the engine of a construction:

- Geometry kernel (distances, bearings, intersections, viewport clipping)
- Binding resolution (snapping new points onto curves and intersections)
- Dependency propagation (ordered recomputation of dependent entities)
- Mutation application (in-place updates with version bookkeeping)
- Interaction side effects (dragging, releasing, unbinding)

The kernel and the propagation engine are pure: they never write to
entities. Only ``apply_*`` functions and the interaction layer do.

Key functions:
- resolve_binding: Decide how a new point is bound
- compute_propagation: Mutations caused by moving an entity
- apply_propagation: Compute and apply a batch
- drag_entity: Direct drag with endpoint freeing for lines
- describe: Declarative render shape of an entity

Key classes:
- PropagationEngine: Batch computation over an entity lookup
- ConstructionDocument: Scene, settings and logging in one place
"""

from compassrule.core.behaviors import BEHAVIORS, EntityBehavior, behavior_for
from compassrule.core.bindings import add_dependency, cleanup_point_bindings, register_binding
from compassrule.core.curves import CircularCurve, Curve, LinearCurve, curve_of
from compassrule.core.document import ConstructionDocument
from compassrule.core.geometry import (
    closest_point_on_circle,
    distance,
    distance_to_circle,
    distance_to_line,
    distance_to_ray,
    distance_to_segment,
    get_angle,
    intersection_of_circle_and_line,
    intersection_of_two_circles,
    intersection_of_two_lines,
    perpendicular_foot,
    point_in_segment,
    point_on_circle,
    points_in_rectangle,
    points_in_rectangle_ray,
)
from compassrule.core.interaction import drag_entity, release_point, unbind_point
from compassrule.core.mutation import (
    apply_mutation,
    apply_mutations,
    apply_propagation,
    refresh_bounds,
)
from compassrule.core.propagation import (
    PropagationEngine,
    PropagationResult,
    compute_propagation,
    traverse,
)
from compassrule.core.resolver import (
    PointDistance,
    Snap,
    find_reusable_point,
    get_closest_points,
    resolve_binding,
)
from compassrule.core.shapes import ArcShape, EllipseShape, SegmentShape, Shape, describe

__all__ = [
    # Behaviours
    "BEHAVIORS",
    "EntityBehavior",
    "behavior_for",
    # Curves
    "CircularCurve",
    "Curve",
    "LinearCurve",
    "curve_of",
    # Document
    "ConstructionDocument",
    # Propagation
    "PropagationEngine",
    "PropagationResult",
    "compute_propagation",
    "traverse",
    # Resolver
    "PointDistance",
    "Snap",
    "find_reusable_point",
    "get_closest_points",
    "resolve_binding",
    # Shapes
    "ArcShape",
    "EllipseShape",
    "SegmentShape",
    "Shape",
    "describe",
    # Bindings and mutation
    "add_dependency",
    "apply_mutation",
    "apply_mutations",
    "apply_propagation",
    "cleanup_point_bindings",
    "drag_entity",
    "refresh_bounds",
    "register_binding",
    "release_point",
    "unbind_point",
    # Geometry functions
    "closest_point_on_circle",
    "distance",
    "distance_to_circle",
    "distance_to_line",
    "distance_to_ray",
    "distance_to_segment",
    "get_angle",
    "intersection_of_circle_and_line",
    "intersection_of_two_circles",
    "intersection_of_two_lines",
    "perpendicular_foot",
    "point_in_segment",
    "point_on_circle",
    "points_in_rectangle",
    "points_in_rectangle_ray",
]
