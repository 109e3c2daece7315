"""Docker Compose file generation."""

import logging
from pathlib import Path
from typing import Any

import yaml

from schemaseed.bootstrap.credentials import Credentials
from schemaseed.config import SchemaseedConfig

logger = logging.getLogger(__name__)

SERVICE_NAME = "mysql"
CONTAINER_DATA_DIR = "/var/lib/mysql"
CONTAINER_INIT_DIR = "/docker-entrypoint-initdb.d"
CONTAINER_PORT = 3306


def build_compose(config: SchemaseedConfig, credentials: Credentials) -> dict[str, Any]:
    """Build the compose document for the database service.

    The init script is mounted into the image's init directory so the
    database runs it on first start.
    """
    db = config.database
    script = Path(config.paths.sql_script)

    service = {
        "image": db.image,
        "container_name": db.container_name,
        "restart": "unless-stopped",
        "ports": [f"{credentials.port}:{CONTAINER_PORT}"],
        "environment": [
            f"MYSQL_ROOT_PASSWORD={credentials.root_password}",
            f"MYSQL_DATABASE={credentials.database}",
        ],
        "volumes": [
            f"{config.paths.data_dir}:{CONTAINER_DATA_DIR}",
            f"{script}:{CONTAINER_INIT_DIR}/{script.name}",
        ],
        "networks": [db.network],
        "healthcheck": {
            "test": ["CMD", "mysqladmin", "ping", "-h", "localhost", f"-p{credentials.root_password}"],
            "interval": "30s",
            "timeout": "10s",
            "retries": 5,
        },
    }

    return {
        "services": {SERVICE_NAME: service},
        "networks": {db.network: {"external": True}},
    }


def write_compose_file(config: SchemaseedConfig, credentials: Credentials) -> Path:
    """Write the compose file and return its path."""
    output_path = Path(config.paths.compose_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(build_compose(config, credentials), f, sort_keys=False, default_flow_style=False)

    logger.info("Compose file written to %s", output_path)
    return output_path
