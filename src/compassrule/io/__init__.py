"""Scene snapshot I/O for compassrule.

This module reads and writes JSON snapshots of a scene. Snapshots are an
inspection aid for the developer CLI, not a document format.

Key classes:
- SceneReader: Load a snapshot into a Scene
- SceneWriter: Save a Scene as a snapshot
"""

from compassrule.io.reader import SNAPSHOT_FORMAT, SNAPSHOT_VERSION, SceneReader
from compassrule.io.writer import SceneWriter, scene_to_dict

__all__ = [
    "SNAPSHOT_FORMAT",
    "SNAPSHOT_VERSION",
    "SceneReader",
    "SceneWriter",
    "scene_to_dict",
]
