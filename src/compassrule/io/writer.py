"""Scene writer for saving JSON snapshots."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from compassrule.domain import Entity
from compassrule.exceptions import SnapshotSaveError
from compassrule.io.reader import SNAPSHOT_FORMAT, SNAPSHOT_VERSION


def scene_to_dict(entities: Mapping[str, Entity]) -> dict[str, Any]:
    """Serialize an entity lookup into the snapshot layout."""
    return {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "entities": [entity.to_dict() for entity in entities.values()],  # type: ignore[attr-defined]
    }


class SceneWriter:
    """Writes scene snapshots.

    Example:
        writer = SceneWriter(scene, Path("scene-moved.json"))
        writer.save()
    """

    def __init__(self, entities: Mapping[str, Entity], output_path: Path) -> None:
        """Initialize the scene writer.

        Args:
            entities: Scene (or any id -> entity mapping) to write
            output_path: Path where the snapshot will be saved
        """
        self._entities = entities
        self._output_path = output_path

    def save(self) -> None:
        """Write the snapshot.

        Raises:
            SnapshotSaveError: If the file cannot be written
        """
        payload = json.dumps(scene_to_dict(self._entities), indent=2)
        try:
            self._output_path.write_text(payload + "\n", encoding="utf-8")
        except OSError as e:
            raise SnapshotSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path, suffix: str = "moved") -> Path:
        """Generate a sibling output path.

        Converts: scene.json -> scene-moved.json

        Args:
            input_path: Original snapshot path
            suffix: Marker inserted before the extension

        Returns:
            Path with ``-<suffix>`` before the extension
        """
        return input_path.parent / f"{input_path.stem}-{suffix}{input_path.suffix}"
