"""End-to-end bootstrap: compile the schema and start a seeded container."""

import logging
from dataclasses import dataclass
from pathlib import Path

from schemaseed.bootstrap.compose import write_compose_file
from schemaseed.bootstrap.credentials import load_or_create_credentials, read_credentials
from schemaseed.bootstrap.ports import find_available_port
from schemaseed.bootstrap.properties import write_application_properties
from schemaseed.bootstrap.runtime import DockerRuntime
from schemaseed.config import SchemaseedConfig
from schemaseed.core.entity_model import EntityModel
from schemaseed.sql.compiler import compile_schema, render_script

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """Outcome of a bootstrap run."""

    database: str
    port: int
    statement_count: int
    sql_script: Path
    compose_file: Path
    app_properties_file: Path
    env_file: Path


def write_sql_script(path: Path, statements: list[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_script(statements))
    logger.info("SQL script written to %s (%d statements)", path, len(statements))
    return path


def bootstrap(
    config: SchemaseedConfig,
    model: EntityModel,
    runtime: DockerRuntime | None = None,
) -> BootstrapResult:
    """Provision a database container seeded with the model's schema.

    Steps run in order and stop at the first failure. The schema is compiled
    before any file is written or container state is touched, so an invalid
    model or database name changes nothing.

    Args:
        config: Resolved configuration
        model: Validated entity model
        runtime: Container runtime (defaults to the docker CLI)

    Returns:
        Paths written and connection details

    Raises:
        ConfigurationError: If the model does not compile
        SchemaError: If an entity does not have exactly one primary key
        BootstrapError: If a runtime, port or credentials step fails
    """
    runtime = runtime or DockerRuntime()
    paths = config.paths

    runtime.check_installed()
    runtime.compose_command()

    # Existing credentials decide the database name
    env_file = Path(paths.env_file)
    database = read_credentials(env_file).database if env_file.exists() else config.database.name

    statements = compile_schema(
        model,
        database,
        order=config.order,
        resolve_junction_keys=config.resolve_junction_keys,
    )

    port = find_available_port(config.database.port)
    credentials = load_or_create_credentials(env_file, config.database.name, port)

    data_dir = Path(paths.data_dir)
    logger.info("Creating data directory at %s", data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    data_dir.chmod(0o700)

    runtime.ensure_network(config.database.network)
    runtime.remove_container(config.database.container_name)

    sql_script = write_sql_script(Path(paths.sql_script), statements)
    compose_file = write_compose_file(config, credentials)

    runtime.compose_up(str(compose_file))
    runtime.wait_until_ready(
        config.database.container_name,
        credentials.root_password,
        interval=config.health_check.interval,
        max_attempts=config.health_check.max_attempts,
    )

    app_properties_file = write_application_properties(
        Path(paths.app_properties_file), credentials, str(data_dir / "logs")
    )

    logger.info("Database container %s set up on port %d", config.database.container_name, credentials.port)
    return BootstrapResult(
        database=credentials.database,
        port=credentials.port,
        statement_count=len(statements),
        sql_script=sql_script,
        compose_file=compose_file,
        app_properties_file=app_properties_file,
        env_file=env_file,
    )
