"""Host port allocation."""

import logging
import socket

from schemaseed.bootstrap import BootstrapError

logger = logging.getLogger(__name__)

MAX_PORT = 65535


def is_port_in_use(port: int, host: str = "localhost") -> bool:
    """Check whether something is listening on host:port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.settimeout(0.5)
        return sock.connect_ex((host, port)) == 0


def find_available_port(start: int = 3306, host: str = "localhost") -> int:
    """Find the first port from start upward that nothing listens on.

    Raises:
        BootstrapError: If every port up to 65535 is taken
    """
    port = start
    while port <= MAX_PORT:
        if not is_port_in_use(port, host):
            logger.info("Found available port: %d", port)
            return port
        port += 1

    raise BootstrapError(f"No available ports found between {start} and {MAX_PORT}")
