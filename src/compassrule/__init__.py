"""Compassrule - straightedge-and-compass constructions that stay consistent.

Compassrule is the constraint propagation engine behind a freeform geometry
canvas. Points, lines, rays, segments, circles and angles can be bound to one
another (a point on a line, the intersection of two circles, a midpoint, a
reflection). Dragging one object recomputes every object that depends on it,
transitively, in a single ordered pass.

Example:
    >>> from compassrule.core import ConstructionDocument
    >>> doc = ConstructionDocument()
    >>> a = doc.add_point(0, 0)
    >>> b = doc.add_point(2, 0)
    >>> line = doc.add_line(a.id, b.id)
    >>> m = doc.add_point(1, 0)  # snaps onto the line at position 0.5
    >>> result = doc.drag(b.id, -1, 1)
"""

__version__ = "0.1.0"
__author__ = "Compassrule contributors"

__all__ = ["__author__", "__version__"]
