"""Tests for compose file generation."""

import yaml

from schemaseed.bootstrap.compose import build_compose, write_compose_file
from schemaseed.bootstrap.credentials import Credentials
from schemaseed.config import SchemaseedConfig


def _config(tmp_path):
    return SchemaseedConfig(
        paths={
            "data_dir": str(tmp_path / "data"),
            "compose_file": str(tmp_path / "docker-compose.yml"),
            "sql_script": str(tmp_path / "init_db.sql"),
        }
    )


def test_build_compose(tmp_path):
    credentials = Credentials(root_password="pw", database="myappdb", port=3307)

    doc = build_compose(_config(tmp_path), credentials)
    service = doc["services"]["mysql"]

    assert service["image"] == "mysql:9.1.0"
    assert service["container_name"] == "mysql_db"
    assert service["restart"] == "unless-stopped"
    assert service["ports"] == ["3307:3306"]
    assert service["environment"] == ["MYSQL_ROOT_PASSWORD=pw", "MYSQL_DATABASE=myappdb"]
    assert service["volumes"] == [
        f"{tmp_path / 'data'}:/var/lib/mysql",
        f"{tmp_path / 'init_db.sql'}:/docker-entrypoint-initdb.d/init_db.sql",
    ]
    assert service["networks"] == ["mysql_network"]
    assert service["healthcheck"]["test"][:3] == ["CMD", "mysqladmin", "ping"]
    assert doc["networks"] == {"mysql_network": {"external": True}}
    assert "version" not in doc


def test_write_compose_file(tmp_path):
    config = _config(tmp_path)
    credentials = Credentials(root_password="pw", database="myappdb", port=3306)

    path = write_compose_file(config, credentials)

    assert path == tmp_path / "docker-compose.yml"
    assert yaml.safe_load(path.read_text()) == build_compose(config, credentials)
