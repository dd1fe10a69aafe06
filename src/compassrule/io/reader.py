"""Scene reader for loading JSON snapshots.

This module provides the SceneReader class for loading a snapshot file
and rebuilding the entity arena from it.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from compassrule.domain import Entity, Scene, entity_from_dict
from compassrule.exceptions import CompassruleError, DuplicateEntityError, SnapshotLoadError

SNAPSHOT_FORMAT = "compassrule-scene"
SNAPSHOT_VERSION = 1


class SceneReader:
    """Loads scene snapshots written by ``SceneWriter``.

    Example:
        reader = SceneReader(Path("scene.json"))
        scene = reader.load()
        for entity in reader.iter_entities():
            print(entity.id)
    """

    def __init__(self, snapshot_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            snapshot_path: Path to the JSON snapshot
        """
        self._snapshot_path = snapshot_path
        self._scene: Scene | None = None

    def load(self) -> Scene:
        """Load and validate the snapshot.

        Returns:
            The rebuilt scene

        Raises:
            SnapshotLoadError: If the file is missing, is not valid JSON, or
                holds malformed entities
        """
        path = str(self._snapshot_path)
        if not self._snapshot_path.exists():
            raise SnapshotLoadError(path, "file not found")

        try:
            data = json.loads(self._snapshot_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotLoadError(path, str(e)) from e

        if not isinstance(data, dict) or data.get("format") != SNAPSHOT_FORMAT:
            raise SnapshotLoadError(path, "not a compassrule scene snapshot")
        if data.get("version") != SNAPSHOT_VERSION:
            raise SnapshotLoadError(path, f"unsupported version {data.get('version')!r}")

        try:
            self._scene = Scene(self._parse_entities(data.get("entities", [])))
        except DuplicateEntityError as e:
            raise SnapshotLoadError(path, str(e)) from e
        return self._scene

    def _parse_entities(self, items: list[dict[str, Any]]) -> list[Entity]:
        path = str(self._snapshot_path)
        entities = []
        for index, item in enumerate(items):
            try:
                entities.append(entity_from_dict(item))
            except (KeyError, TypeError, ValueError, CompassruleError) as e:
                raise SnapshotLoadError(path, f"entity #{index}: {e}") from e
        return entities

    @property
    def scene(self) -> Scene:
        """Return the loaded scene.

        Raises:
            RuntimeError: If the snapshot has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._scene

    def iter_entities(self) -> Iterator[Entity]:
        """Iterate over entities in snapshot order."""
        yield from self.scene.values()

    def __enter__(self) -> "SceneReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._scene = None
