"""Database credentials persisted in a dotenv-style file."""

import base64
import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

from schemaseed.bootstrap import BootstrapError

logger = logging.getLogger(__name__)

PASSWORD_BYTES = 16


@dataclass(frozen=True)
class Credentials:
    """Root credentials and connection settings for the database container."""

    root_password: str
    database: str
    port: int

    def to_env(self) -> str:
        return (
            f"MYSQL_ROOT_PASSWORD={self.root_password}\n"
            f"MYSQL_DATABASE={self.database}\n"
            f"MYSQL_PORT={self.port}\n"
        )


def generate_password(num_bytes: int = PASSWORD_BYTES) -> str:
    """Generate a random base64 password from num_bytes random bytes."""
    return base64.b64encode(secrets.token_bytes(num_bytes)).decode("ascii")


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse KEY=VALUE lines, skipping blanks and comments."""
    values = {}
    for line_no, line in enumerate(path.read_text().splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise BootstrapError(f"Malformed line {line_no} in {path}: {line!r}")
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip("\"'")
    return values


def read_credentials(path: Path) -> Credentials:
    """Read credentials from an existing env file.

    Raises:
        BootstrapError: If the file is missing keys or has an invalid port
    """
    values = parse_env_file(path)

    missing = [key for key in ("MYSQL_ROOT_PASSWORD", "MYSQL_DATABASE", "MYSQL_PORT") if not values.get(key)]
    if missing:
        raise BootstrapError(f"Credentials file {path} is missing: {', '.join(missing)}")

    try:
        port = int(values["MYSQL_PORT"])
    except ValueError as e:
        raise BootstrapError(f"Credentials file {path} has an invalid MYSQL_PORT: {values['MYSQL_PORT']!r}") from e

    return Credentials(root_password=values["MYSQL_ROOT_PASSWORD"], database=values["MYSQL_DATABASE"], port=port)


def write_credentials(path: Path, credentials: Credentials) -> None:
    """Write credentials readable by the owner only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(credentials.to_env())
    os.chmod(path, 0o600)


def load_or_create_credentials(path: Path, database: str, port: int) -> Credentials:
    """Reuse existing credentials or generate and persist new ones.

    An existing file wins over the database name and port passed in, so a
    re-run keeps talking to the same database.

    Args:
        path: Env file location
        database: Database name for new credentials
        port: Host port for new credentials

    Returns:
        Credentials in effect
    """
    if path.exists():
        logger.info("Existing credentials file found at %s, reusing it", path)
        return read_credentials(path)

    credentials = Credentials(root_password=generate_password(), database=database, port=port)
    write_credentials(path, credentials)
    logger.info("Generated new credentials in %s", path)
    return credentials
