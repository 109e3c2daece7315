"""Tests for entity, property and relationship definitions."""

import pytest
from pydantic import ValidationError

from schemaseed import Entity, EntityModel, ForeignKey, PrimaryKey, Property, Relationship
from tests.utils import col, fk, pk


def test_table_name_is_lowercase():
    entity = Entity(name="ThreatActor", properties=[pk()])
    assert entity.table_name == "threatactor"


def test_primary_and_foreign_key_accessors():
    entity = Entity(name="Geolocation", properties=[pk(), col("city"), fk("country_id", "Country")])

    assert entity.primary_key.name == "id"
    assert [p.name for p in entity.primary_keys] == ["id"]
    assert [p.name for p in entity.foreign_keys] == ["country_id"]
    assert entity.get_property("city").type == "VARCHAR(255)"
    assert entity.get_property("missing") is None


def test_property_constraint_variants():
    plain = Property(name="name", type="TEXT")
    primary = Property(name="id", type="BIGINT", constraint=PrimaryKey())
    foreign = Property(name="type_id", type="BIGINT", constraint=ForeignKey(entity="ThreatActorType"))

    assert plain.constraint is None
    assert not plain.is_primary_key and plain.foreign_key is None
    assert primary.is_primary_key and primary.foreign_key is None
    assert foreign.foreign_key.entity == "ThreatActorType"
    assert foreign.foreign_key.column == "id"
    assert str(foreign.foreign_key) == "ThreatActorType(id)"


def test_constraint_from_dict_uses_discriminator():
    prop = Property(name="country_id", type="BIGINT", constraint={"kind": "foreign_key", "entity": "Country"})
    assert isinstance(prop.constraint, ForeignKey)

    prop = Property(name="id", type="BIGINT", constraint={"kind": "primary_key"})
    assert isinstance(prop.constraint, PrimaryKey)

    with pytest.raises(ValidationError):
        Property(name="id", type="BIGINT", constraint={"kind": "unique"})


def test_models_are_immutable():
    entity = Entity(name="User", properties=[pk()])
    with pytest.raises(ValidationError):
        entity.name = "Account"

    model = EntityModel(entities=[entity])
    assert isinstance(model.entities, tuple)
    assert isinstance(model.entities[0].properties, tuple)


def test_get_entity_is_case_insensitive():
    model = EntityModel(entities=[Entity(name="ThreatActor", properties=[pk()])])

    assert model.get_entity("threatactor").name == "ThreatActor"
    assert model.get_entity("THREATACTOR").name == "ThreatActor"
    assert model.has_entity("threatActor")
    assert not model.has_entity("Country")

    with pytest.raises(KeyError):
        model.get_entity("Country")


def test_relationship_sides_and_str():
    rel = Relationship(entity_a="User", entity_b="Role", table="user_roles", column_a="user_id", column_b="role_id")

    assert rel.sides == (("user_id", "User"), ("role_id", "Role"))
    assert str(rel) == "User:Role:user_roles:user_id:role_id"
