"""Schemaseed: entity model to SQL DDL, with database container bootstrap."""

__version__ = "0.1.0"

from schemaseed.core.entity import Entity
from schemaseed.core.entity_model import EntityModel
from schemaseed.core.property import ForeignKey, PrimaryKey, Property
from schemaseed.core.relationship import Relationship
from schemaseed.loaders import load_entity_file
from schemaseed.sql.compiler import SchemaCompiler, compile_schema, render_script
from schemaseed.validation import ConfigurationError, SchemaError, load_entity_model

__all__ = [
    "ConfigurationError",
    "Entity",
    "EntityModel",
    "ForeignKey",
    "PrimaryKey",
    "Property",
    "Relationship",
    "SchemaCompiler",
    "SchemaError",
    "compile_schema",
    "load_entity_file",
    "load_entity_model",
    "render_script",
]
