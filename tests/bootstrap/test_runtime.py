"""Tests for docker CLI wrapper."""

import subprocess

import pytest

from schemaseed.bootstrap import BootstrapError
from schemaseed.bootstrap import runtime as runtime_module
from schemaseed.bootstrap.runtime import DockerRuntime


class FakeRun:
    """Records commands and answers with scripted return codes."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def __call__(self, args, capture_output, text, check):
        self.calls.append(list(args))
        key = " ".join(args)
        for prefix, (returncode, stdout) in self.responses.items():
            if key.startswith(prefix):
                return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="boom" if returncode else "")
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(runtime_module.subprocess, "run", fake)
    return fake


def test_check_installed(monkeypatch):
    monkeypatch.setattr(runtime_module.shutil, "which", lambda name: None)

    with pytest.raises(BootstrapError) as exc_info:
        DockerRuntime().check_installed()

    assert "Docker is not installed" in str(exc_info.value)


def test_compose_plugin_preferred(fake_run):
    runtime = DockerRuntime()

    assert runtime.compose_command() == ["docker", "compose"]
    assert runtime.compose_command() == ["docker", "compose"]
    assert fake_run.calls == [["docker", "compose", "version"]]


def test_compose_falls_back_to_standalone(fake_run, monkeypatch):
    fake_run.responses["docker compose version"] = (1, "")
    monkeypatch.setattr(runtime_module.shutil, "which", lambda name: "/usr/bin/docker-compose")

    assert DockerRuntime().compose_command() == ["docker-compose"]


def test_compose_missing(fake_run, monkeypatch):
    fake_run.responses["docker compose version"] = (1, "")
    monkeypatch.setattr(runtime_module.shutil, "which", lambda name: None)

    with pytest.raises(BootstrapError) as exc_info:
        DockerRuntime().compose_command()

    assert "Docker Compose is not available" in str(exc_info.value)


def test_ensure_network_existing(fake_run):
    assert DockerRuntime().ensure_network("mysql_network") is False
    assert fake_run.calls == [["docker", "network", "inspect", "mysql_network"]]


def test_ensure_network_creates(fake_run):
    fake_run.responses["docker network inspect"] = (1, "")

    assert DockerRuntime().ensure_network("mysql_network") is True
    assert fake_run.calls[-1] == ["docker", "network", "create", "mysql_network"]


def test_remove_running_container(fake_run):
    fake_run.responses["docker ps"] = (0, "abc123\n")

    assert DockerRuntime().remove_container("mysql_db") is True
    assert ["docker", "stop", "mysql_db"] in fake_run.calls
    assert fake_run.calls[-1] == ["docker", "rm", "mysql_db"]


def test_remove_stopped_container(fake_run):
    assert DockerRuntime().remove_container("mysql_db") is True
    assert ["docker", "stop", "mysql_db"] not in fake_run.calls


def test_remove_missing_container(fake_run):
    fake_run.responses["docker container inspect"] = (1, "")

    assert DockerRuntime().remove_container("mysql_db") is False
    assert len(fake_run.calls) == 1


def test_failed_command_raises(fake_run):
    fake_run.responses["docker compose -f"] = (1, "")

    with pytest.raises(BootstrapError) as exc_info:
        DockerRuntime().compose_up("docker-compose.yml")

    assert "Command failed (1): docker compose -f docker-compose.yml up -d" in str(exc_info.value)
    assert "boom" in str(exc_info.value)


def test_command_not_found(monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError("docker")

    monkeypatch.setattr(runtime_module.subprocess, "run", missing)

    with pytest.raises(BootstrapError) as exc_info:
        DockerRuntime().is_ready("mysql_db", "pw")

    assert "Command not found: docker" in str(exc_info.value)


def test_wait_until_ready_polls_at_interval(monkeypatch):
    returncodes = iter([1, 1, 0])
    calls = []

    def scripted(args, capture_output, text, check):
        calls.append(list(args))
        return subprocess.CompletedProcess(args, next(returncodes), stdout="", stderr="")

    monkeypatch.setattr(runtime_module.subprocess, "run", scripted)
    sleeps = []

    assert DockerRuntime(sleep=sleeps.append).wait_until_ready("mysql_db", "pw", interval=2.0, max_attempts=5) == 3
    assert sleeps == [2.0, 2.0]
    assert calls[0][:4] == ["docker", "exec", "mysql_db", "mysqladmin"]
    assert "-ppw" in calls[0]


def test_wait_until_ready_gives_up(fake_run):
    fake_run.responses["docker exec"] = (1, "")
    sleeps = []

    with pytest.raises(BootstrapError) as exc_info:
        DockerRuntime(sleep=sleeps.append).wait_until_ready("mysql_db", "pw", interval=0.5, max_attempts=3)

    assert "not ready after 3 attempts" in str(exc_info.value)
    assert sleeps == [0.5, 0.5]
