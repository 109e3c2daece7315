"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from schemaseed import Entity, EntityModel, Relationship
from tests.utils import col, fk, pk

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.fixture
def user_role_model():
    """Two entities joined by a many-to-many relationship."""
    return EntityModel(
        entities=[
            Entity(name="User", properties=[pk(), col("username"), col("email")]),
            Entity(name="Role", properties=[pk(), col("name"), col("description", "TEXT")]),
        ],
        relationships=[
            Relationship(entity_a="User", entity_b="Role", table="user_roles", column_a="user_id", column_b="role_id")
        ],
    )


@pytest.fixture
def threat_model():
    """Entities with foreign keys, including a forward reference."""
    return EntityModel(
        entities=[
            Entity(name="ThreatActor", properties=[pk(), col("name"), fk("type_id", "ThreatActorType")]),
            Entity(name="ThreatActorType", properties=[pk(), col("name")]),
            Entity(name="Country", properties=[pk(), col("code", "VARCHAR(10)")]),
            Entity(
                name="Geolocation",
                properties=[pk(), col("city"), col("latitude", "DOUBLE"), fk("country_id", "Country")],
            ),
        ],
    )


@pytest.fixture
def threat_intel_file():
    return EXAMPLES_DIR / "threat_intel" / "entities.yml"
