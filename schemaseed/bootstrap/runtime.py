"""Container runtime commands (docker CLI via subprocess)."""

import logging
import shutil
import subprocess
import time
from collections.abc import Callable

from schemaseed.bootstrap import BootstrapError

logger = logging.getLogger(__name__)


class DockerRuntime:
    """Thin wrapper around the docker CLI.

    Every command runs synchronously. Failures raise BootstrapError with the
    command's stderr.
    """

    def __init__(self, docker: str = "docker", sleep: Callable[[float], None] = time.sleep):
        self.docker = docker
        self._sleep = sleep
        self._compose_command: list[str] | None = None

    def _run(self, args: list[str], check: bool = True) -> subprocess.CompletedProcess:
        logger.debug("Running command: %s", " ".join(args))
        try:
            result = subprocess.run(args, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise BootstrapError(f"Command not found: {args[0]}") from e

        if check and result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise BootstrapError(f"Command failed ({result.returncode}): {' '.join(args)}\n{detail}")
        return result

    def check_installed(self) -> None:
        """Raise BootstrapError unless the docker CLI is on PATH."""
        if shutil.which(self.docker) is None:
            raise BootstrapError(
                "Docker is not installed. Please install Docker from https://www.docker.com/get-started"
            )

    def compose_command(self) -> list[str]:
        """Detect the compose CLI: the docker plugin first, then docker-compose."""
        if self._compose_command is not None:
            return self._compose_command

        if self._run([self.docker, "compose", "version"], check=False).returncode == 0:
            self._compose_command = [self.docker, "compose"]
        elif shutil.which("docker-compose") is not None:
            self._compose_command = ["docker-compose"]
        else:
            raise BootstrapError(
                "Docker Compose is not available. Please install it from https://docs.docker.com/compose/install/"
            )
        return self._compose_command

    def ensure_network(self, name: str) -> bool:
        """Create the network if missing. Returns True if it was created."""
        if self._run([self.docker, "network", "inspect", name], check=False).returncode == 0:
            logger.info("Docker network %s already exists", name)
            return False

        logger.info("Creating Docker network %s", name)
        self._run([self.docker, "network", "create", name])
        return True

    def is_running(self, container: str) -> bool:
        result = self._run([self.docker, "ps", "-q", "-f", f"name=^{container}$"], check=False)
        return result.returncode == 0 and bool(result.stdout.strip())

    def remove_container(self, container: str) -> bool:
        """Stop and remove an existing container. Returns True if one existed."""
        if self._run([self.docker, "container", "inspect", container], check=False).returncode != 0:
            return False

        if self.is_running(container):
            logger.info("Stopping existing container %s", container)
            self._run([self.docker, "stop", container])

        logger.info("Removing existing container %s", container)
        self._run([self.docker, "rm", container])
        return True

    def compose_up(self, compose_file: str) -> None:
        logger.info("Starting containers from %s", compose_file)
        self._run([*self.compose_command(), "-f", compose_file, "up", "-d"])

    def is_ready(self, container: str, password: str) -> bool:
        """Ping the database inside the container."""
        args = [self.docker, "exec", container, "mysqladmin", "ping", "-h", "localhost", f"-p{password}", "--silent"]
        return self._run(args, check=False).returncode == 0

    def wait_until_ready(self, container: str, password: str, interval: float = 2.0, max_attempts: int = 60) -> int:
        """Poll until the database answers, at a fixed interval.

        Returns:
            Number of attempts it took

        Raises:
            BootstrapError: If the database is not ready after max_attempts
        """
        for attempt in range(1, max_attempts + 1):
            if self.is_ready(container, password):
                logger.info("Database in %s is ready after %d attempt(s)", container, attempt)
                return attempt
            if attempt < max_attempts:
                self._sleep(interval)

        raise BootstrapError(f"Database in {container} not ready after {max_attempts} attempts")
