"""Tests for compact property and relationship spec strings."""

import pytest

from schemaseed import ForeignKey, PrimaryKey
from schemaseed.core.spec_parser import (
    parse_foreign_key_target,
    parse_properties,
    parse_property_spec,
    parse_relationship_spec,
)
from schemaseed.validation import ConfigurationError


def test_plain_property():
    prop = parse_property_spec("name:VARCHAR(255)")

    assert prop.name == "name"
    assert prop.type == "VARCHAR(255)"
    assert prop.constraint is None


def test_primary_key_property():
    prop = parse_property_spec("id:BIGINT:PRIMARY_KEY")

    assert prop.type == "BIGINT"
    assert prop.constraint == PrimaryKey()


def test_foreign_key_property():
    prop = parse_property_spec("category_id:BIGINT:FOREIGN_KEY:AttackVectorCategory(id)")

    assert prop.name == "category_id"
    assert prop.constraint == ForeignKey(entity="AttackVectorCategory", column="id")


def test_constraint_keyword_case_and_aliases():
    assert parse_property_spec("id:BIGINT:primary_key").is_primary_key
    assert parse_property_spec("id:BIGINT:PK").is_primary_key
    assert parse_property_spec("country_id:BIGINT:fk:Country(id)").foreign_key.entity == "Country"


def test_foreign_key_target_defaults_to_id():
    assert parse_foreign_key_target("Country") == ForeignKey(entity="Country", column="id")
    assert parse_foreign_key_target(" Country ( code ) ") == ForeignKey(entity="Country", column="code")


@pytest.mark.parametrize("target", ["", "Country(", "Country(id", "(id)", "Country(id)x"])
def test_invalid_foreign_key_target(target):
    with pytest.raises(ConfigurationError):
        parse_foreign_key_target(target)


@pytest.mark.parametrize(
    "spec,message",
    [
        ("id", "Expected name:type"),
        (":BIGINT", "Expected name:type"),
        ("id:", "Expected name:type"),
        ("id:BIGINT:UNIQUE", "unknown constraint 'UNIQUE'"),
        ("id:BIGINT:FOREIGN_KEY", "foreign key needs a target"),
        ("id:BIGINT:PRIMARY_KEY:User(id)", "primary keys take no target"),
        ("id:BIGINT::User(id)", "target given without a constraint"),
    ],
)
def test_invalid_property_specs(spec, message):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_property_spec(spec)

    assert message in str(exc_info.value)


def test_parse_properties_whitespace_separated():
    props = parse_properties(
        "id:BIGINT:PRIMARY_KEY ip_address:VARCHAR(45)  latitude:DOUBLE\n country_id:BIGINT:FOREIGN_KEY:Country(id)"
    )

    assert [p.name for p in props] == ["id", "ip_address", "latitude", "country_id"]
    assert props[0].is_primary_key
    assert props[3].foreign_key.entity == "Country"


def test_parse_relationship_spec():
    rel = parse_relationship_spec("User:Role:user_roles:user_id:role_id")

    assert rel.entity_a == "User"
    assert rel.entity_b == "Role"
    assert rel.table == "user_roles"
    assert rel.column_a == "user_id"
    assert rel.column_b == "role_id"


@pytest.mark.parametrize("spec", ["User:Role:user_roles:user_id", "User:Role:user_roles:user_id:role_id:x", "User::t:a:b"])
def test_invalid_relationship_spec(spec):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_relationship_spec(spec)

    assert "Expected EntityA:EntityB:table:column_a:column_b" in str(exc_info.value)
