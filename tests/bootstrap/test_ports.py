"""Tests for host port allocation."""

import socket

import pytest

from schemaseed.bootstrap import BootstrapError
from schemaseed.bootstrap import ports
from schemaseed.bootstrap.ports import find_available_port, is_port_in_use


@pytest.fixture
def listening_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


def test_listening_port_is_in_use(listening_port):
    assert is_port_in_use(listening_port, "127.0.0.1")


def test_skips_taken_ports(monkeypatch):
    taken = {3306, 3307}
    monkeypatch.setattr(ports, "is_port_in_use", lambda port, host="localhost": port in taken)

    assert find_available_port(3306) == 3308


def test_returns_start_when_free(monkeypatch):
    monkeypatch.setattr(ports, "is_port_in_use", lambda port, host="localhost": False)

    assert find_available_port(4000) == 4000


def test_exhausted_range(monkeypatch):
    monkeypatch.setattr(ports, "is_port_in_use", lambda port, host="localhost": True)

    with pytest.raises(BootstrapError) as exc_info:
        find_available_port(65530)

    assert "No available ports found between 65530 and 65535" in str(exc_info.value)
