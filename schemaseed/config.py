"""Configuration file format for schemaseed."""

import json
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from schemaseed.loaders import substitute_env_vars
from schemaseed.validation import ConfigurationError

CONFIG_FILENAMES = ["schemaseed.yaml", "schemaseed.yml", "schemaseed.json"]


class DatabaseConfig(BaseModel):
    """Database container configuration."""

    name: str = Field(default="myappdb", description="Database created inside the container")
    image: str = Field(default="mysql:9.1.0", description="Container image (pin a specific version)")
    container_name: str = Field(default="mysql_db", description="Container name")
    network: str = Field(default="mysql_network", description="Container network (created if missing)")
    port: int = Field(default=3306, description="First host port to try; the next free one is used")


class PathsConfig(BaseModel):
    """Locations of generated and persisted files."""

    data_dir: str = Field(default="~/docker/mysql/data", description="Host directory for database files")
    env_file: str = Field(default="~/docker/mysql/.env", description="Credentials file (created with mode 600)")
    compose_file: str = Field(default="docker-compose.yml", description="Generated compose file")
    app_properties_file: str = Field(
        default="application.properties", description="Generated Spring Boot connection properties"
    )
    sql_script: str = Field(default="init_db.sql", description="Generated schema init script")


class HealthCheckConfig(BaseModel):
    """Readiness polling after the container starts."""

    interval: float = Field(default=2.0, description="Seconds between readiness checks")
    max_attempts: int = Field(default=60, description="Checks before giving up")


class SchemaseedConfig(BaseModel):
    """Schemaseed configuration file format.

    Can be saved as schemaseed.yaml or schemaseed.json.

    Example YAML:
        entities_file: ./entities.yml
        database:
          name: myappdb
          image: mysql:9.1.0
          port: 3306
        paths:
          data_dir: ~/docker/mysql/data
          sql_script: init_db.sql
        health_check:
          interval: 2
          max_attempts: 60
    """

    entities_file: str = Field(default="entities.yml", description="Entity model file")
    order: Literal["declaration", "dependency"] = Field(
        default="declaration", description="Table order: declaration or dependency"
    )
    resolve_junction_keys: bool = Field(
        default=False, description="Reference actual primary key columns from junction tables"
    )
    database: DatabaseConfig = Field(default_factory=DatabaseConfig, description="Database container settings")
    paths: PathsConfig = Field(default_factory=PathsConfig, description="Generated file locations")
    health_check: HealthCheckConfig = Field(default_factory=HealthCheckConfig, description="Readiness polling")

    def resolve_paths(self, base_dir: Path | None = None) -> "SchemaseedConfig":
        """Resolve relative paths to absolute paths.

        ``~`` is expanded first; remaining relative paths are resolved
        against base_dir.

        Args:
            base_dir: Base directory for resolving relative paths (defaults to cwd)

        Returns:
            New config with resolved paths
        """
        base = base_dir or Path.cwd()

        def resolve(value: str) -> str:
            path = Path(value).expanduser()
            if not path.is_absolute():
                path = (base / path).resolve()
            return str(path)

        paths = PathsConfig(**{key: resolve(value) for key, value in self.paths.model_dump().items()})
        return self.model_copy(update={"entities_file": resolve(self.entities_file), "paths": paths})


def load_config(config_path: Path) -> SchemaseedConfig:
    """Load configuration from YAML or JSON file.

    Args:
        config_path: Path to config file (schemaseed.yaml or schemaseed.json)

    Returns:
        Loaded and validated configuration, with ${VAR} references substituted

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config file format or content is invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    content = substitute_env_vars(config_path.read_text())

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigurationError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse config file {config_path}: {e}") from e

    try:
        config = SchemaseedConfig(**(data or {}))
    except (PydanticValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    # Resolve relative paths relative to config file directory
    return config.resolve_paths(config_path.parent)


def find_config(start_dir: Path | None = None) -> Path | None:
    """Find config file by searching up the directory tree.

    Searches for schemaseed.yaml, schemaseed.yml, or schemaseed.json.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for name in CONFIG_FILENAMES:
            config_path = current / name
            if config_path.exists():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None
