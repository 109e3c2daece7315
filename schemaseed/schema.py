"""Generate JSON Schema from Pydantic models for YAML editor completion."""

import json
from pathlib import Path

from schemaseed.core.entity import Entity
from schemaseed.core.property import Property
from schemaseed.core.relationship import Relationship

SPEC_STRING_PATTERN = r"^[^:\s]+:[^:\s]+(:[A-Za-z_]+(:.+)?)?$"


def generate_yaml_schema() -> dict:
    """Generate JSON Schema for the entity file format.

    Properties and relationships may be written either as structured
    mappings or as compact spec strings, so both forms are accepted.

    Returns:
        JSON Schema dict compatible with YAML Language Server
    """
    property_schema = Property.model_json_schema()
    relationship_schema = Relationship.model_json_schema()
    entity_schema = Entity.model_json_schema()

    structured_property = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Column name"},
            "type": {"type": "string", "description": "SQL column type"},
            "primary_key": {"type": "boolean", "description": "Auto-increment primary key"},
            "foreign_key": {
                "description": "Referenced column, as Entity(column) or a mapping",
                "oneOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "properties": {"entity": {"type": "string"}, "column": {"type": "string"}},
                        "required": ["entity"],
                    },
                ],
            },
        },
        "required": ["name", "type"],
    }

    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "Schemaseed Entity Model",
        "description": "Schema for schemaseed entity definition files",
        "type": "object",
        "properties": {
            "entities": {
                "type": "array",
                "description": "Entity definitions, in table emission order",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "Entity name (table is its lowercase form)"},
                        "description": {"type": "string"},
                        "properties": {
                            "description": "Properties as a list, or one whitespace-separated spec string",
                            "oneOf": [
                                {"type": "string"},
                                {
                                    "type": "array",
                                    "items": {
                                        "oneOf": [
                                            {"type": "string", "pattern": SPEC_STRING_PATTERN},
                                            structured_property,
                                        ]
                                    },
                                },
                            ],
                        },
                    },
                    "required": ["name", "properties"],
                },
            },
            "relationships": {
                "type": "array",
                "description": "Many-to-many relationships (junction tables)",
                "items": {
                    "oneOf": [
                        {"type": "string", "pattern": r"^[^:]+:[^:]+:[^:]+:[^:]+:[^:]+$"},
                        {"$ref": "#/$defs/Relationship"},
                    ]
                },
            },
        },
        "required": ["entities"],
        "$defs": {
            "Entity": entity_schema,
            "Property": property_schema,
            "Relationship": relationship_schema,
        },
    }

    return schema


def export_schema(output_path: str | Path = "schemaseed-schema.json") -> Path:
    """Export JSON Schema to file for editor completion.

    Args:
        output_path: Where to write the schema file

    Usage:
        In your YAML file, add at the top:
        # yaml-language-server: $schema=./schemaseed-schema.json
    """
    schema = generate_yaml_schema()

    output_path = Path(output_path)
    with output_path.open("w") as f:
        json.dump(schema, f, indent=2)

    return output_path


if __name__ == "__main__":
    path = export_schema()
    print(f"JSON Schema exported to: {path}")
    print(f"# yaml-language-server: $schema=./{path.name}")
