"""Id-indexed arena holding every entity of a construction."""

from collections.abc import Iterable, Iterator, Mapping

from compassrule.domain.entities import Entity, PointEntity
from compassrule.exceptions import DuplicateEntityError, EntityNotFoundError


class Scene(Mapping[str, Entity]):
    """Mutable id -> entity map owned by the document.

    The propagation engine only reads through the ``Mapping`` interface, so a
    plain ``dict`` can stand in for a scene in tests and tooling.

    Example:
        scene = Scene([PointEntity(id="A", origin=Point2D(0, 0))])
        scene["A"].origin
    """

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: dict[str, Entity] = {}
        for entity in entities:
            self.add(entity)

    def __getitem__(self, entity_id: str) -> Entity:
        return self._entities[entity_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def add(self, entity: Entity) -> Entity:
        """Add an entity.

        Raises:
            DuplicateEntityError: If the id is already taken
        """
        if entity.id in self._entities:
            raise DuplicateEntityError(entity.id)
        self._entities[entity.id] = entity
        return entity

    def require(self, entity_id: str) -> Entity:
        """Get an entity by id.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        try:
            return self._entities[entity_id]
        except KeyError:
            raise EntityNotFoundError(entity_id) from None

    def remove(self, entity_id: str) -> tuple[Entity, int]:
        """Remove an entity and every dependency edge pointing at it.

        Binding rules referencing the removed entity are left untouched; the
        next propagation batch downgrades them to free points.

        Args:
            entity_id: Id of the entity to remove

        Returns:
            Tuple of (removed entity, number of dependency edges removed)

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        entity = self.require(entity_id)
        del self._entities[entity_id]

        detached = 0
        for other in self._entities.values():
            if entity_id in other.bound_elements:
                other.bound_elements = [i for i in other.bound_elements if i != entity_id]
                detached += 1

        return entity, detached

    def points(self) -> list[PointEntity]:
        """All point entities, in insertion order."""
        return [e for e in self._entities.values() if isinstance(e, PointEntity)]
