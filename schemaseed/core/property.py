"""Property definitions."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class PrimaryKey(BaseModel):
    """Marks a property as the table's auto-increment primary key."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primary_key"] = "primary_key"


class ForeignKey(BaseModel):
    """Marks a property as referencing a column of another entity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["foreign_key"] = "foreign_key"
    entity: str = Field(..., description="Name of the referenced entity")
    column: str = Field(default="id", description="Referenced column in the target entity")

    def __str__(self) -> str:
        return f"{self.entity}({self.column})"


Constraint = Annotated[PrimaryKey | ForeignKey, Field(discriminator="kind")]


class Property(BaseModel):
    """Property (column) definition.

    The type is an opaque SQL type string such as ``BIGINT`` or
    ``VARCHAR(255)`` and is passed through to the generated DDL unchanged.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name, unique within its entity")
    type: str = Field(..., description="SQL column type (e.g. BIGINT, VARCHAR(255), TEXT)")
    constraint: Constraint | None = Field(None, description="Primary or foreign key constraint")

    @property
    def is_primary_key(self) -> bool:
        return isinstance(self.constraint, PrimaryKey)

    @property
    def foreign_key(self) -> ForeignKey | None:
        """Get the foreign key constraint, if this property has one."""
        if isinstance(self.constraint, ForeignKey):
            return self.constraint
        return None
