"""Entity definitions."""

from pydantic import BaseModel, ConfigDict, Field

from schemaseed.core.property import Property


class Entity(BaseModel):
    """Entity (table) definition.

    Entity names are case-insensitive; the physical table is always the
    lowercase form of the name.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entity name, unique across the model (case-insensitive)")
    description: str | None = Field(None, description="Human-readable description")
    properties: tuple[Property, ...] = Field(default=(), description="Ordered property definitions")

    @property
    def table_name(self) -> str:
        return self.name.lower()

    @property
    def primary_keys(self) -> list[Property]:
        """Get all properties carrying a primary key constraint."""
        return [prop for prop in self.properties if prop.is_primary_key]

    @property
    def primary_key(self) -> Property | None:
        """Get the primary key property (first one if several are declared)."""
        keys = self.primary_keys
        return keys[0] if keys else None

    @property
    def foreign_keys(self) -> list[Property]:
        """Get properties carrying a foreign key constraint, in declared order."""
        return [prop for prop in self.properties if prop.foreign_key is not None]

    def get_property(self, name: str) -> Property | None:
        """Get property by name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None
