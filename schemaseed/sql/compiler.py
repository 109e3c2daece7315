"""Schema compiler: entity model to SQL DDL statements."""

from typing import Literal

from schemaseed.core.entity import Entity
from schemaseed.core.entity_model import EntityModel
from schemaseed.core.ordering import dependency_order
from schemaseed.core.relationship import Relationship
from schemaseed.validation import ConfigurationError, SchemaError, check_entity_model, is_valid_identifier

TableOrder = Literal["declaration", "dependency"]

JUNCTION_COLUMN_TYPE = "BIGINT NOT NULL"
JUNCTION_REFERENCE_COLUMN = "id"


def quote(identifier: str) -> str:
    """Quote an identifier with backticks."""
    return f"`{identifier}`"


def _table_body(lines: list[str]) -> str:
    # Comma after every line but the last
    return ",\n".join(f"  {line}" for line in lines)


class SchemaCompiler:
    """Compiles an entity model into an ordered list of DDL statements.

    Output order is fixed: database creation, database selection, a
    ``DROP TABLE IF EXISTS`` + ``CREATE TABLE`` pair per entity, then a pair
    per many-to-many relationship. Dropping before every create lets the
    script be applied again against a database that already has the tables.

    Example:
        >>> compiler = SchemaCompiler()
        >>> statements = compiler.compile(model, "myappdb")
        >>> statements[0]
        'CREATE DATABASE IF NOT EXISTS `myappdb`;'
    """

    def __init__(self, order: TableOrder = "declaration", resolve_junction_keys: bool = False):
        """Initialize compiler.

        Args:
            order: "declaration" emits entity tables as declared; "dependency"
                emits each table after the tables its foreign keys reference
            resolve_junction_keys: Reference each entity's actual primary key
                column from junction tables instead of ``id``
        """
        if order not in ("declaration", "dependency"):
            raise ValueError(f"Unknown table order '{order}'. Must be one of: declaration, dependency")
        self.order = order
        self.resolve_junction_keys = resolve_junction_keys

    def compile(self, model: EntityModel, database_name: str) -> list[str]:
        """Compile a model into SQL statements.

        Nothing is returned unless the whole model compiles.

        Args:
            model: Entity model to compile
            database_name: Database to create and select

        Returns:
            Ordered SQL statement strings

        Raises:
            ConfigurationError: If the model or database name is invalid
            SchemaError: If an entity does not have exactly one primary key
        """
        if not database_name or not database_name.strip():
            raise ConfigurationError("Database name must not be empty")
        if not is_valid_identifier(database_name):
            raise ConfigurationError(f"Database name '{database_name}' is not a valid identifier")

        for entity in model.entities:
            self._check_primary_key(entity)
        check_entity_model(model)

        entities = dependency_order(model) if self.order == "dependency" else list(model.entities)

        statements = [
            f"CREATE DATABASE IF NOT EXISTS {quote(database_name)};",
            f"USE {quote(database_name)};",
        ]
        for entity in entities:
            statements.extend(self.compile_entity(entity))
        for relationship in model.relationships:
            statements.extend(self.compile_relationship(relationship, model))

        return statements

    def compile_entity(self, entity: Entity) -> list[str]:
        """Compile the drop and create statements for one entity table.

        Raises:
            SchemaError: If the entity does not have exactly one primary key
        """
        self._check_primary_key(entity)

        columns = []
        foreign_keys = []
        for prop in entity.properties:
            line = f"{quote(prop.name)} {prop.type}"
            if prop.is_primary_key:
                line += " AUTO_INCREMENT PRIMARY KEY"
            elif prop.foreign_key is not None:
                fk = prop.foreign_key
                foreign_keys.append(
                    f"FOREIGN KEY ({quote(prop.name)}) REFERENCES {quote(fk.entity.lower())}({quote(fk.column)})"
                )
            columns.append(line)

        table = quote(entity.table_name)
        return [
            f"DROP TABLE IF EXISTS {table};",
            f"CREATE TABLE {table} (\n{_table_body(columns + foreign_keys)}\n);",
        ]

    def _check_primary_key(self, entity: Entity) -> None:
        primary_keys = entity.primary_keys
        if len(primary_keys) != 1:
            raise SchemaError(
                f"Entity '{entity.name}' must have exactly one primary key, found {len(primary_keys)}"
            )

    def compile_relationship(self, relationship: Relationship, model: EntityModel) -> list[str]:
        """Compile the drop and create statements for a junction table."""
        lines = [f"{quote(column)} {JUNCTION_COLUMN_TYPE}" for column, _ in relationship.sides]
        lines.append(f"PRIMARY KEY ({quote(relationship.column_a)}, {quote(relationship.column_b)})")
        for column, entity_name in relationship.sides:
            target = entity_name.lower()
            reference = self._junction_reference(entity_name, model)
            lines.append(f"FOREIGN KEY ({quote(column)}) REFERENCES {quote(target)}({reference})")

        table = quote(relationship.table)
        return [
            f"DROP TABLE IF EXISTS {table};",
            f"CREATE TABLE {table} (\n{_table_body(lines)}\n);",
        ]

    def _junction_reference(self, entity_name: str, model: EntityModel) -> str:
        if not self.resolve_junction_keys:
            return JUNCTION_REFERENCE_COLUMN

        primary_key = model.get_entity(entity_name).primary_key
        if primary_key is None:
            raise SchemaError(f"Entity '{entity_name}' has no primary key to reference from a junction table")
        return quote(primary_key.name)


def compile_schema(
    model: EntityModel,
    database_name: str,
    order: TableOrder = "declaration",
    resolve_junction_keys: bool = False,
) -> list[str]:
    """Compile a model into SQL statements.

    Convenience wrapper around SchemaCompiler.compile().
    """
    compiler = SchemaCompiler(order=order, resolve_junction_keys=resolve_junction_keys)
    return compiler.compile(model, database_name)


def render_script(statements: list[str]) -> str:
    """Join compiled statements into an init script.

    Each statement goes on its own line and every CREATE TABLE is followed
    by a blank line.
    """
    lines = []
    for statement in statements:
        lines.append(statement)
        if statement.startswith("CREATE TABLE"):
            lines.append("")
    return "\n".join(lines) + "\n"
