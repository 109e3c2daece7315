"""Shorthand constructors for test entity models."""

from schemaseed import ForeignKey, PrimaryKey, Property


def pk(name: str = "id", type: str = "BIGINT") -> Property:
    return Property(name=name, type=type, constraint=PrimaryKey())


def col(name: str, type: str = "VARCHAR(255)") -> Property:
    return Property(name=name, type=type)


def fk(name: str, entity: str, column: str = "id", type: str = "BIGINT") -> Property:
    return Property(name=name, type=type, constraint=ForeignKey(entity=entity, column=column))
