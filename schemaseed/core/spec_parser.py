"""Parser for compact property and relationship spec strings.

Property specs use the colon-delimited form::

    id:BIGINT:PRIMARY_KEY
    name:VARCHAR(255)
    country_id:BIGINT:FOREIGN_KEY:Country(id)

Relationship specs name both entities, the junction table and its two
columns::

    User:Role:user_roles:user_id:role_id
"""

import re

from schemaseed.core.property import ForeignKey, PrimaryKey, Property
from schemaseed.core.relationship import Relationship
from schemaseed.validation import ConfigurationError

PRIMARY_KEY_KEYWORDS = {"PRIMARY_KEY", "PK"}
FOREIGN_KEY_KEYWORDS = {"FOREIGN_KEY", "FK"}

_TARGET_PATTERN = re.compile(r"^\s*([A-Za-z_][\w$]*)\s*(?:\(\s*([A-Za-z_][\w$]*)\s*\))?\s*$")


def parse_foreign_key_target(target: str) -> ForeignKey:
    """Parse a foreign key target such as ``Country(id)``.

    The column defaults to ``id`` when omitted (``Country``).

    Raises:
        ConfigurationError: If the target is malformed
    """
    match = _TARGET_PATTERN.match(target)
    if not match:
        raise ConfigurationError(f"Invalid foreign key target '{target}'. Expected Entity(column)")

    entity, column = match.groups()
    return ForeignKey(entity=entity, column=column or "id")


def parse_property_spec(spec: str) -> Property:
    """Parse a single ``name:type[:constraint[:target]]`` property spec.

    Args:
        spec: Property spec string

    Returns:
        Parsed property

    Raises:
        ConfigurationError: If the spec is malformed
    """
    parts = spec.strip().split(":", 3)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise ConfigurationError(f"Invalid property spec '{spec}'. Expected name:type[:constraint[:target]]")

    name, prop_type = parts[0], parts[1]
    keyword = parts[2].upper() if len(parts) > 2 else ""

    if not keyword:
        if len(parts) > 3:
            raise ConfigurationError(f"Invalid property spec '{spec}': target given without a constraint")
        return Property(name=name, type=prop_type)

    if keyword in PRIMARY_KEY_KEYWORDS:
        if len(parts) > 3:
            raise ConfigurationError(f"Invalid property spec '{spec}': primary keys take no target")
        return Property(name=name, type=prop_type, constraint=PrimaryKey())

    if keyword in FOREIGN_KEY_KEYWORDS:
        if len(parts) < 4 or not parts[3]:
            raise ConfigurationError(f"Invalid property spec '{spec}': foreign key needs a target like Entity(id)")
        return Property(name=name, type=prop_type, constraint=parse_foreign_key_target(parts[3]))

    raise ConfigurationError(
        f"Invalid property spec '{spec}': unknown constraint '{parts[2]}'. Must be one of: PRIMARY_KEY, FOREIGN_KEY"
    )


def parse_properties(specs: str) -> list[Property]:
    """Parse a whitespace-separated list of property specs."""
    return [parse_property_spec(spec) for spec in specs.split()]


def parse_relationship_spec(spec: str) -> Relationship:
    """Parse an ``EntityA:EntityB:table:column_a:column_b`` relationship spec.

    Raises:
        ConfigurationError: If the spec does not have exactly five non-empty parts
    """
    parts = [part.strip() for part in spec.strip().split(":")]
    if len(parts) != 5 or not all(parts):
        raise ConfigurationError(
            f"Invalid relationship spec '{spec}'. Expected EntityA:EntityB:table:column_a:column_b"
        )

    entity_a, entity_b, table, column_a, column_b = parts
    return Relationship(entity_a=entity_a, entity_b=entity_b, table=table, column_a=column_a, column_b=column_b)
