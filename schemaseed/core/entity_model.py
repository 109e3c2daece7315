"""Entity model: the full set of entities and relationships."""

from pydantic import BaseModel, ConfigDict, Field

from schemaseed.core.entity import Entity
from schemaseed.core.relationship import Relationship


class EntityModel(BaseModel):
    """Immutable entity model consumed by the schema compiler.

    Entities and relationships keep their declaration order, which is also
    the order tables are emitted in.
    """

    model_config = ConfigDict(frozen=True)

    entities: tuple[Entity, ...] = Field(default=(), description="Entity definitions")
    relationships: tuple[Relationship, ...] = Field(
        default=(), description="Many-to-many relationship definitions"
    )

    def has_entity(self, name: str) -> bool:
        key = name.lower()
        return any(entity.table_name == key for entity in self.entities)

    def get_entity(self, name: str) -> Entity:
        """Get entity by name (case-insensitive).

        Args:
            name: Entity name

        Returns:
            Entity instance

        Raises:
            KeyError: If entity not found
        """
        key = name.lower()
        for entity in self.entities:
            if entity.table_name == key:
                return entity
        raise KeyError(f"Entity {name} not found")

    @property
    def table_names(self) -> list[str]:
        return [entity.table_name for entity in self.entities]
