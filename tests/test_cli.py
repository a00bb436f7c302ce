"""
Tests for the command line interface.
"""

import subprocess
import sys
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from frpulse import __version__, ui
from frpulse.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping long lines."""
    monkeypatch.setattr(ui.console, "width", 200)


@pytest.fixture
def client(frpulse_home):
    """An initialised client named 'myclient'."""
    result = runner.invoke(app, ["client", "init", "myclient", "-s", "1.2.3.4", "--token", "secret"])
    assert result.exit_code == 0, result.output
    return frpulse_home / "frpulse" / "frpc-myclient.toml"


def invoke(*args):
    return runner.invoke(app, list(args))


class TestVersion:

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output


class TestClientCommands:
    """Tests for client init and list."""

    def test_init_writes_artifact(self, client):
        """init writes the common block with the connection settings."""
        text = client.read_text()
        assert text.startswith("# frpc-myclient.toml\n")
        assert 'server_addr = "1.2.3.4"' in text
        assert "server_port = 7000" in text
        assert 'token = "secret"' in text
        assert "tls_enable = true" in text
        assert 'log_file = "/var/log/frpc-myclient.log"' in text

    def test_init_existing(self, client):
        """An existing client is not overwritten without --force."""
        result = invoke("client", "init", "myclient", "-s", "5.6.7.8", "--token", "x")
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert '"1.2.3.4"' in client.read_text()

        result = invoke("client", "init", "myclient", "-s", "5.6.7.8", "--token", "x", "--force", "--no-tls")
        assert result.exit_code == 0
        assert "tls_enable = false" in client.read_text()

    def test_init_invalid_server(self, frpulse_home):
        result = invoke("client", "init", "c", "-s", "not a host", "--token", "x")
        assert result.exit_code == 1
        assert "Invalid server address" in result.output

    def test_list(self, client):
        result = invoke("client", "list")
        assert result.exit_code == 0
        assert "myclient" in result.output
        assert "1.2.3.4:7000" in result.output

    def test_list_empty(self, frpulse_home):
        result = invoke("client", "list")
        assert result.exit_code == 0
        assert "No clients configured" in result.output


class TestProxyCommands:
    """Tests for proxy list, add, edit and delete."""

    def test_add_and_list(self, client):
        """Added proxies show up in the list."""
        result = invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222", "--no-restart")
        assert result.exit_code == 0, result.output
        assert "Tunnel service not restarted" in result.output
        assert "[tcp_myclient_1]" in client.read_text()

        result = invoke(
            "proxy", "add", "myclient", "-t", "http", "-l", "8081", "-r", "8081",
            "-d", "a.example.com", "--no-restart",
        )
        assert result.exit_code == 0, result.output

        result = invoke("proxy", "list", "myclient")
        assert result.exit_code == 0
        assert "tcp_myclient_1" in result.output
        assert "127.0.0.1:22" in result.output
        assert "http_myclient_2" in result.output
        assert "a.example.com" in result.output

    def test_list_empty(self, client):
        result = invoke("proxy", "list", "myclient")
        assert result.exit_code == 0
        assert "No tunneled ports" in result.output

    def test_add_duplicate(self, client):
        """A duplicate name fails and leaves the file alone."""
        invoke("proxy", "add", "myclient", "-n", "ssh", "-l", "22", "-r", "2222", "--no-restart")
        before = client.read_text()

        result = invoke("proxy", "add", "myclient", "-n", "ssh", "-l", "23", "-r", "2323", "--no-restart")

        assert result.exit_code == 1
        assert "Proxy already exists: ssh" in result.output
        assert client.read_text() == before

    def test_add_reserved_name(self, client):
        """A proxy named after the common block is refused."""
        before = client.read_text()

        result = invoke("proxy", "add", "myclient", "-n", "common", "-l", "22", "-r", "2222", "--no-restart")

        assert result.exit_code == 1
        assert "invalid_proxy" in result.output
        assert client.read_text() == before

    def test_list_shows_names_verbatim(self, client):
        """Hand-edited names with brackets are shown as written."""
        with client.open("a") as f:
            f.write(
                '\n[[proxies]]\nname = "[red]web"\ntype = "http"\nlocal_port = 80\nremote_port = 8080\n'
                'custom_domains = ["[b]x.example.com"]\n'
            )

        result = invoke("proxy", "list", "myclient")

        assert result.exit_code == 0, result.output
        assert "[red]web" in result.output
        assert "[b]x.example.com" in result.output

    def test_add_invalid_port(self, client):
        result = invoke("proxy", "add", "myclient", "-l", "0", "-r", "80", "--no-restart")
        assert result.exit_code == 1
        assert "Invalid local_port" in result.output

    def test_unknown_client(self, frpulse_home):
        result = invoke("proxy", "add", "ghost", "-l", "22", "-r", "2222")
        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_edit(self, client):
        invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222", "--no-restart")

        result = invoke("proxy", "edit", "myclient", "tcp_myclient_1", "-r", "2200", "--no-restart")

        assert result.exit_code == 0, result.output
        assert "remote_port = 2200" in client.read_text()

    def test_edit_nothing(self, client):
        result = invoke("proxy", "edit", "myclient", "tcp_myclient_1")
        assert result.exit_code == 0
        assert "Nothing to change" in result.output

    def test_edit_missing(self, client):
        result = invoke("proxy", "edit", "myclient", "missing", "-l", "1", "--no-restart")
        assert result.exit_code == 1
        assert "not_found" in result.output

    def test_delete(self, client):
        invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222", "--no-restart")

        result = invoke("proxy", "delete", "myclient", "tcp_myclient_1", "--yes", "--no-restart")

        assert result.exit_code == 0, result.output
        assert "tcp_myclient_1" not in client.read_text()

    def test_delete_declined(self, client):
        """Declining the prompt changes nothing."""
        invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222", "--no-restart")
        before = client.read_text()

        result = runner.invoke(app, ["proxy", "delete", "myclient", "tcp_myclient_1"], input="n\n")

        assert result.exit_code == 1
        assert client.read_text() == before

    def test_restart_after_change(self, client):
        """Without --no-restart the client unit is restarted."""
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("frpulse.supervisor.subprocess.run", return_value=completed) as mock_run:
            result = invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222")

        assert result.exit_code == 0, result.output
        assert mock_run.call_args[0][0] == ["systemctl", "restart", "frpulse-client-myclient"]
        assert "Tunnel service restarted" in result.output

    def test_restart_failure_keeps_change(self, client):
        """A failed restart is a warning; the change stays on disk."""
        failed = subprocess.CompletedProcess(args=[], returncode=5, stdout="", stderr="Unit not found.")
        with patch("frpulse.supervisor.subprocess.run", return_value=failed):
            result = invoke("proxy", "add", "myclient", "-l", "22", "-r", "2222")

        assert result.exit_code == 0, result.output
        assert "restart failed" in result.output
        assert "frpulse service restart myclient" in result.output
        assert "[tcp_myclient_1]" in client.read_text()


@pytest.mark.skipif(sys.platform != "linux", reason="systemd services are Linux only")
class TestServiceCommands:
    """Tests for service commands."""

    def test_restart(self, frpulse_home):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("frpulse.supervisor.subprocess.run", return_value=completed) as mock_run:
            result = invoke("service", "restart", "myclient")

        assert result.exit_code == 0
        assert mock_run.call_args[0][0] == ["systemctl", "restart", "frpulse-client-myclient"]

    def test_restart_server(self, frpulse_home):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("frpulse.supervisor.subprocess.run", return_value=completed) as mock_run:
            result = invoke("service", "restart", "myserver", "--server")

        assert result.exit_code == 0
        assert mock_run.call_args[0][0][-1] == "frpulse-server-myserver"

    def test_restart_failure(self, frpulse_home):
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="Access denied")
        with patch("frpulse.supervisor.subprocess.run", return_value=failed):
            result = invoke("service", "restart", "myclient")

        assert result.exit_code == 1
        assert "Access denied" in result.output
