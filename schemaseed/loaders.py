"""Loaders for entity model files (YAML or JSON)."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from schemaseed.core.entity import Entity
from schemaseed.core.entity_model import EntityModel
from schemaseed.core.property import ForeignKey, PrimaryKey, Property
from schemaseed.core.relationship import Relationship
from schemaseed.core.spec_parser import (
    parse_foreign_key_target,
    parse_properties,
    parse_property_spec,
    parse_relationship_spec,
)
from schemaseed.validation import ConfigurationError, load_entity_model

logger = logging.getLogger(__name__)


def substitute_env_vars(content: str) -> str:
    """Substitute environment variables in file content.

    Supports:
    - ${ENV_VAR} - replaced with environment variable value
    - ${ENV_VAR:-default} - replaced with value or default if not set
    - $ENV_VAR - simple form without braces

    Unset variables without a default are left as written.

    Examples:
        >>> os.environ['DB_TYPE'] = 'BIGINT'
        >>> substitute_env_vars('type: ${DB_TYPE}')
        'type: BIGINT'
        >>> substitute_env_vars('type: ${MISSING:-TEXT}')
        'type: TEXT'
    """

    def replace_var(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.environ.get(var_name, default)
        value = os.environ.get(var_expr)
        if value is None:
            return match.group(0)
        return value

    content = re.sub(r"\$\{([^}]+)\}", replace_var, content)

    def replace_simple_var(match):
        value = os.environ.get(match.group(1))
        if value is None:
            return match.group(0)
        return value

    return re.sub(r"\$([A-Z_][A-Z0-9_]*)", replace_simple_var, content)


def _parse_property(entity_name: str, prop_def: Any) -> Property:
    if isinstance(prop_def, str):
        return parse_property_spec(prop_def)

    if not isinstance(prop_def, dict):
        raise ConfigurationError(f"Entity '{entity_name}': property must be a spec string or mapping, got {prop_def!r}")

    prop_def = dict(prop_def)
    primary_key = prop_def.pop("primary_key", False)
    foreign_key = prop_def.pop("foreign_key", None)

    if primary_key and foreign_key:
        raise ConfigurationError(
            f"Entity '{entity_name}': property '{prop_def.get('name')}' cannot be both primary and foreign key"
        )
    if primary_key:
        prop_def["constraint"] = PrimaryKey()
    elif isinstance(foreign_key, str):
        prop_def["constraint"] = parse_foreign_key_target(foreign_key)
    elif isinstance(foreign_key, dict):
        prop_def["constraint"] = ForeignKey(**foreign_key)
    elif foreign_key is not None:
        raise ConfigurationError(f"Entity '{entity_name}': invalid foreign_key {foreign_key!r}")

    return Property(**prop_def)


def _parse_entity(entity_def: Any) -> Entity:
    if not isinstance(entity_def, dict) or "name" not in entity_def:
        raise ConfigurationError(f"Entity definition must be a mapping with a name, got {entity_def!r}")

    name = entity_def["name"]
    properties = entity_def.get("properties") or []
    if isinstance(properties, str):
        parsed = parse_properties(properties)
    else:
        parsed = [_parse_property(name, prop_def) for prop_def in properties]

    return Entity(name=name, description=entity_def.get("description"), properties=parsed)


def _parse_relationship(rel_def: Any) -> Relationship:
    if isinstance(rel_def, str):
        return parse_relationship_spec(rel_def)
    if not isinstance(rel_def, dict):
        raise ConfigurationError(f"Relationship must be a spec string or mapping, got {rel_def!r}")
    return Relationship(**rel_def)


def parse_entity_data(data: dict[str, Any] | None) -> EntityModel:
    """Build a validated entity model from parsed file content.

    Args:
        data: Mapping with ``entities`` and optional ``relationships`` lists

    Returns:
        Validated entity model

    Raises:
        ConfigurationError: If the content is malformed or fails validation
    """
    if not data:
        raise ConfigurationError("Entity file is empty")
    if not isinstance(data, dict):
        raise ConfigurationError("Entity file must contain a mapping with an 'entities' list")

    try:
        entities = [_parse_entity(entity_def) for entity_def in data.get("entities") or []]
        relationships = [_parse_relationship(rel_def) for rel_def in data.get("relationships") or []]
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid entity file content: {e}") from e

    if not entities:
        raise ConfigurationError("Entity file defines no entities")

    return load_entity_model(entities, relationships)


def load_entity_file(path: str | Path) -> EntityModel:
    """Load an entity model from a YAML or JSON file.

    Args:
        path: Path to a .yaml, .yml or .json entity file

    Returns:
        Validated entity model

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file format or content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Entity file not found: {path}")

    content = substitute_env_vars(path.read_text())
    suffix = path.suffix.lower()

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigurationError(f"Unsupported entity file format: {suffix}. Use .yaml, .yml, or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e

    model = parse_entity_data(data)
    logger.info("Loaded %d entities and %d relationships from %s", len(model.entities), len(model.relationships), path)
    return model


def _export_property(prop: Property) -> dict[str, Any]:
    result: dict[str, Any] = {"name": prop.name, "type": prop.type}
    if prop.is_primary_key:
        result["primary_key"] = True
    elif prop.foreign_key is not None:
        result["foreign_key"] = str(prop.foreign_key)
    return result


def dump_entity_model(model: EntityModel, output_path: str | Path) -> None:
    """Write an entity model to a YAML file in structured form.

    Args:
        model: Entity model to export
        output_path: Path to output YAML file
    """
    output_path = Path(output_path)

    entities = []
    for entity in model.entities:
        entity_def: dict[str, Any] = {"name": entity.name}
        if entity.description:
            entity_def["description"] = entity.description
        entity_def["properties"] = [_export_property(prop) for prop in entity.properties]
        entities.append(entity_def)

    data: dict[str, Any] = {"entities": entities}
    if model.relationships:
        data["relationships"] = [rel.model_dump() for rel in model.relationships]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(data, f, sort_keys=False, default_flow_style=False)
