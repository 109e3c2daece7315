"""Many-to-many relationship definitions."""

from pydantic import BaseModel, ConfigDict, Field


class Relationship(BaseModel):
    """Many-to-many relationship between two entities.

    Compiles to a junction table holding one column per side, with a
    composite primary key over both and a foreign key from each column to
    its entity.
    """

    model_config = ConfigDict(frozen=True)

    entity_a: str = Field(..., description="First related entity")
    entity_b: str = Field(..., description="Second related entity")
    table: str = Field(..., description="Junction table name")
    column_a: str = Field(..., description="Junction column referencing entity_a")
    column_b: str = Field(..., description="Junction column referencing entity_b")

    def __str__(self) -> str:
        return f"{self.entity_a}:{self.entity_b}:{self.table}:{self.column_a}:{self.column_b}"

    @property
    def sides(self) -> tuple[tuple[str, str], tuple[str, str]]:
        """Get (column, entity) pairs for both sides, in declared order."""
        return (self.column_a, self.entity_a), (self.column_b, self.entity_b)
