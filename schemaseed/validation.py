"""Validation and error handling for entity models."""

import re
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from schemaseed.core.entity import Entity
from schemaseed.core.entity_model import EntityModel
from schemaseed.core.relationship import Relationship


# Letters, digits, underscores and $, not starting with a digit.
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


class SchemaseedError(Exception):
    """Base class for schemaseed errors."""

    pass


class ConfigurationError(SchemaseedError):
    """Raised when an entity model, spec string or config file is invalid."""

    pass


class SchemaError(SchemaseedError):
    """Raised when the schema compiler detects an internal invariant violation."""

    pass


def format_errors(header: str, errors: list[str]) -> str:
    return header + ":\n" + "\n".join(f"  - {e}" for e in errors)


def is_valid_identifier(value: str) -> bool:
    """Check that a name is safe to use as a quoted SQL identifier."""
    return bool(value) and _IDENTIFIER_PATTERN.match(value) is not None


def validate_entity(entity: Entity, model: EntityModel) -> list[str]:
    """Validate a single entity against the model it belongs to.

    Args:
        entity: Entity to validate
        model: Model used to resolve foreign key targets

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    seen: set[str] = set()
    for prop in entity.properties:
        if not prop.name:
            errors.append(f"Entity '{entity.name}' has a property with an empty name")
            continue
        if not is_valid_identifier(prop.name):
            errors.append(f"Entity '{entity.name}': property name '{prop.name}' is not a valid identifier")
        # Column names are case-insensitive in MySQL
        if prop.name.lower() in seen:
            errors.append(f"Entity '{entity.name}': duplicate property '{prop.name}'")
        seen.add(prop.name.lower())

        if not prop.type:
            errors.append(f"Entity '{entity.name}': property '{prop.name}' has no type")

    primary_keys = entity.primary_keys
    if len(primary_keys) > 1:
        names = ", ".join(f"'{p.name}'" for p in primary_keys)
        errors.append(f"Entity '{entity.name}' declares more than one primary key: {names}")

    # Forward references are fine; only existence matters
    for prop in entity.foreign_keys:
        fk = prop.foreign_key
        if not model.has_entity(fk.entity):
            errors.append(
                f"Entity '{entity.name}': foreign key '{prop.name}' references unknown entity '{fk.entity}'"
            )
        elif model.get_entity(fk.entity).get_property(fk.column) is None:
            errors.append(
                f"Entity '{entity.name}': foreign key '{prop.name}' references unknown column "
                f"'{fk.column}' of entity '{fk.entity}'"
            )

    return errors


def validate_relationship(relationship: Relationship, model: EntityModel) -> list[str]:
    """Validate a many-to-many relationship.

    Table name collisions with other relationships are checked by
    validate_entity_model, which sees the declaration order.
    """
    errors = []
    label = f"Relationship '{relationship}'"

    for entity_name in (relationship.entity_a, relationship.entity_b):
        if not model.has_entity(entity_name):
            errors.append(f"{label} references unknown entity '{entity_name}'")

    if not relationship.table:
        errors.append(f"{label} must have a junction table name")
    elif not is_valid_identifier(relationship.table):
        errors.append(f"{label}: junction table '{relationship.table}' is not a valid identifier")
    elif relationship.table.lower() in model.table_names:
        errors.append(f"{label}: junction table '{relationship.table}' collides with an entity table")

    if not relationship.column_a or not relationship.column_b:
        errors.append(f"{label} must name both junction columns")
    elif not (is_valid_identifier(relationship.column_a) and is_valid_identifier(relationship.column_b)):
        errors.append(f"{label}: junction column names must be valid identifiers")
    elif relationship.column_a.lower() == relationship.column_b.lower():
        errors.append(
            f"{label}: junction columns must differ (got '{relationship.column_a}' and '{relationship.column_b}')"
        )

    return errors


def validate_entity_model(model: EntityModel) -> list[str]:
    """Validate an entity model.

    Args:
        model: Model to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    seen_tables: dict[str, str] = {}
    for entity in model.entities:
        if not entity.name:
            errors.append("Entity names must not be empty")
            continue
        if not is_valid_identifier(entity.name):
            errors.append(f"Entity name '{entity.name}' is not a valid identifier")
        if entity.table_name in seen_tables:
            errors.append(
                f"Entity '{entity.name}' duplicates entity '{seen_tables[entity.table_name]}' "
                f"(names are case-insensitive)"
            )
        else:
            seen_tables[entity.table_name] = entity.name

    for entity in model.entities:
        errors.extend(validate_entity(entity, model))

    junction_tables: set[str] = set()
    for relationship in model.relationships:
        errors.extend(validate_relationship(relationship, model))

        key = relationship.table.lower()
        if key and key in junction_tables:
            errors.append(
                f"Relationship '{relationship}': junction table '{relationship.table}' is already used "
                f"by another relationship"
            )
        junction_tables.add(key)

    return errors


def check_entity_model(model: EntityModel) -> EntityModel:
    """Validate a model and return it unchanged.

    Raises:
        ConfigurationError: If any validation rule is violated
    """
    errors = validate_entity_model(model)
    if errors:
        raise ConfigurationError(format_errors("Entity model validation failed", errors))
    return model


def load_entity_model(
    entities: Iterable[Entity | dict[str, Any]],
    relationships: Iterable[Relationship | dict[str, Any]] = (),
) -> EntityModel:
    """Build and validate an entity model from ordered declarations.

    Args:
        entities: Entity objects or dicts accepted by Entity
        relationships: Relationship objects or dicts accepted by Relationship

    Returns:
        Validated entity model

    Raises:
        ConfigurationError: If a declaration is malformed or validation fails
    """
    try:
        model = EntityModel(entities=tuple(entities), relationships=tuple(relationships))
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid entity declarations: {e}") from e

    return check_entity_model(model)
