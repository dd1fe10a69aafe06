"""Exception hierarchy for compassrule.

Geometric degeneracy never raises: the kernel returns ``None`` or a
best-effort fallback and the propagation engine degrades bindings locally.
Exceptions are reserved for misuse of the outer API (unknown ids, malformed
snapshots).
"""


class CompassruleError(Exception):
    """Base exception for all compassrule errors."""

    pass


class SceneError(CompassruleError):
    """Errors related to the entity arena."""

    pass


class EntityNotFoundError(SceneError):
    """Requested entity is not part of the scene."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"Entity '{entity_id}' not found in scene")


class DuplicateEntityError(SceneError):
    """An entity with the same id is already part of the scene."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"Entity '{entity_id}' already exists in scene")


class EntityKindError(SceneError):
    """Entity exists but is not of the kind the operation needs."""

    def __init__(self, entity_id: str, expected: str, actual: str) -> None:
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"Entity '{entity_id}' is a {actual}, expected a {expected}")


class BindingError(CompassruleError):
    """Malformed binding rule payload."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid binding rule: {reason}")


class SnapshotError(CompassruleError):
    """Errors related to reading or writing scene snapshots."""

    pass


class SnapshotLoadError(SnapshotError):
    """Error loading a scene snapshot."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class SnapshotSaveError(SnapshotError):
    """Error saving a scene snapshot."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save scene '{path}': {reason}")
