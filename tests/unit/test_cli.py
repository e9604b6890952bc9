"""Tests for the rscloud command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rscloud import __version__
from rscloud.api.client import CloudClient
from rscloud.cli.main import app
from rscloud.config import ConfigManager, ProfileConfig

runner = CliRunner()


@pytest.fixture
def cli_api(fake_api, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """A default profile under a temporary HOME and clients wired to the fake API."""
    monkeypatch.setenv("HOME", str(tmp_path))
    manager = ConfigManager(config_dir=tmp_path / ".config" / "rscloud")
    manager.add_profile("default", ProfileConfig(user="user", api_key="secret-key"))

    original = CloudClient.from_profile.__func__

    def from_profile(cls, profile, transport=None):
        return original(cls, profile, transport=fake_api.transport)

    monkeypatch.setattr(CloudClient, "from_profile", classmethod(from_profile))
    return fake_api


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_limits_json(cli_api) -> None:
    cli_api.queue(200, json={"limits": {"rate": [], "absolute": {"maxTotalRAMSize": 51200}}})

    result = runner.invoke(app, ["limits", "--json"])

    assert result.exit_code == 0, result.output
    assert "maxTotalRAMSize" in result.output
    assert cli_api.auth_count == 1


def test_limits_unavailable(cli_api) -> None:
    cli_api.queue(404)

    result = runner.invoke(app, ["limits"])

    assert result.exit_code == 1
    assert "Limits are not available" in result.output


def test_server_list(cli_api) -> None:
    cli_api.queue(
        200,
        json={"servers": [{"id": 7, "name": "web01", "status": "ACTIVE", "addresses": {"public": ["1.2.3.4"]}}]},
    )

    result = runner.invoke(app, ["server", "list"])

    assert result.exit_code == 0, result.output
    assert "web01" in result.output
    assert "1.2.3.4" in result.output


def test_server_delete_with_yes(cli_api) -> None:
    cli_api.queue(202)

    result = runner.invoke(app, ["server", "delete", "7", "--yes"])

    assert result.exit_code == 0, result.output
    request = cli_api.api_requests[0]
    assert request.method == "DELETE"
    assert request.url.path.endswith("/servers/7")


def test_api_error_exits_non_zero(cli_api) -> None:
    cli_api.queue(403)

    result = runner.invoke(app, ["server", "show", "7"])

    assert result.exit_code == 1
    assert "Access is denied" in result.output


def test_lb_create_rejects_bad_node(cli_api) -> None:
    result = runner.invoke(app, ["lb", "create", "web", "--node", "10.0.0.1"])

    assert result.exit_code == 1
    assert "expected address:port" in result.output
    assert cli_api.requests == []


def test_lb_create(cli_api) -> None:
    cli_api.queue(202, json={"loadBalancer": {"id": 71, "name": "web", "status": "BUILD"}})

    result = runner.invoke(app, ["lb", "create", "web", "--node", "10.0.0.1:8080"])

    assert result.exit_code == 0, result.output
    assert "(71)" in result.output
    assert cli_api.api_requests[0].url.path == "/v1.0/998877/loadbalancers"


def test_config_list(cli_api) -> None:
    result = runner.invoke(app, ["config", "list"])

    assert result.exit_code == 0, result.output
    assert "default" in result.output
    assert "secret-key" not in result.output


def test_config_add_non_interactive(cli_api, tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["config", "add", "uk", "-u", "bob", "-k", "k2", "-r", "UK", "-l", "DFW", "--yes"],
    )

    assert result.exit_code == 0, result.output
    profile = ConfigManager(config_dir=tmp_path / ".config" / "rscloud").get_profile("uk")
    assert profile.user == "bob"
    assert profile.api_key == "k2"
    assert profile.region.value == "UK"


def test_config_test_shows_endpoints(cli_api) -> None:
    result = runner.invoke(app, ["config", "test"])

    assert result.exit_code == 0, result.output
    assert "998877" in result.output
    assert cli_api.auth_count == 1
