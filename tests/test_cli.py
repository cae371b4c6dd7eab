"""Tests for CLI subcommands."""

import json
from unittest.mock import MagicMock, patch

import pytest

from ethserver.blockchain.checker import FailureKind, ValidationResult
from ethserver.cli import (
    CLIContext,
    cmd_check,
    cmd_info,
    cmd_networks_list,
    cmd_networks_show,
    create_parser,
    run_cli,
)
from ethserver.config import EthServerConfig


@pytest.fixture
def config(monkeypatch):
    """Config with a default server."""
    monkeypatch.setenv("ETHSERVER_RPC_URL", "http://node:8545")
    monkeypatch.setenv("ETHSERVER_NETWORK_ID", "1")
    monkeypatch.setenv("ETHSERVER_DEFAULT_SERVER", "main")
    return EthServerConfig()


@pytest.fixture
def ctx(config):
    """CLI context with a mocked checker and JSON output."""
    context = CLIContext(config, json_output=True)
    context._checker = MagicMock()
    return context


def server_args(*argv):
    """Parse server options the way the check subcommand does."""
    return create_parser().parse_args(["check", *argv])


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_check_options(self):
        """check accepts server options."""
        args = create_parser().parse_args(
            ["check", "--url", "http://x:8545", "--network-id", "3", "--id", "rop", "--label", "R"]
        )

        assert args.command == "check"
        assert args.url == "http://x:8545"
        assert args.network_id == "3"
        assert args.server_id == "rop"
        assert args.label == "R"

    def test_networks_subcommands(self):
        """networks has list and show subcommands."""
        parser = create_parser()

        assert parser.parse_args(["networks", "list"]).networks_command == "list"
        args = parser.parse_args(["networks", "show", "42"])
        assert args.networks_command == "show"
        assert args.network_id == "42"

    def test_json_flag(self):
        """--json is a global flag."""
        assert create_parser().parse_args(["--json", "networks", "list"]).json is True


class TestCLIContext:
    """Tests for CLIContext."""

    def test_server_from_config(self, config):
        """Server options fall back to config."""
        record = CLIContext(config).server_from_args(server_args())

        assert record.id == "main"
        assert record.url == "http://node:8545"
        assert record.network_id == "1"

    def test_server_from_args(self, config):
        """Explicit options override config."""
        record = CLIContext(config).server_from_args(
            server_args("--url", "http://other:8545", "--network-id", "*", "--id", "dev")
        )

        assert record.id == "dev"
        assert record.url == "http://other:8545"
        assert record.is_wildcard is True

    def test_server_without_url(self):
        """A URL is required from options or config."""
        with pytest.raises(ValueError, match="ETHSERVER_RPC_URL"):
            CLIContext(EthServerConfig()).server_from_args(server_args())

    def test_registry_from_file(self, monkeypatch, tmp_path):
        """Registry is loaded from ETHSERVER_NETWORKS_FILE when set."""
        path = tmp_path / "networks.json"
        path.write_text(json.dumps([{"id": 1337, "label": "Local dev"}]))
        monkeypatch.setenv("ETHSERVER_NETWORKS_FILE", str(path))

        registry = CLIContext(EthServerConfig()).registry

        assert len(registry) == 1
        assert registry.lookup("1337").label == "Local dev"

    def test_checker_uses_config_timeout(self, monkeypatch):
        """Checker timeout comes from config."""
        monkeypatch.setenv("ETHSERVER_RPC_TIMEOUT", "3")
        assert CLIContext(EthServerConfig()).checker.timeout == 3.0


class TestServerCommands:
    """Tests for check and info commands."""

    def test_check_passes(self, ctx, capsys):
        """check exits 0 when the server passes."""
        ctx.checker.validate.return_value = ValidationResult(
            error=False,
            message="main (http://node:8545) is up and listening on network 1",
            reported_network_id="1",
        )

        assert cmd_check(ctx, server_args()) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["error"] is False
        assert output["reported_network_id"] == "1"
        record = ctx.checker.validate.call_args.args[0]
        assert record.id == "main"

    def test_check_fails(self, ctx, capsys):
        """check exits 1 and reports the failure kind."""
        ctx.checker.validate.return_value = ValidationResult(
            error=True,
            message="Unable to connect to server Default server. refused",
            failure=FailureKind.CONNECTION,
        )

        assert cmd_check(ctx, server_args()) == 1

        output = json.loads(capsys.readouterr().out)
        assert output["error"] is True
        assert output["failure"] == "connection"

    def test_check_without_url(self, capsys):
        """check reports a missing URL."""
        context = CLIContext(EthServerConfig(), json_output=True)

        assert cmd_check(context, server_args()) == 1
        assert "ETHSERVER_RPC_URL" in json.loads(capsys.readouterr().out)["error"]

    def test_info_json(self, ctx, capsys):
        """info prints the descriptive field set."""
        assert cmd_info(ctx, server_args()) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["network"] == "Ethereum Mainnet (Ethereum Network Id: 1)"
        assert output["is_default"] is True

    def test_info_text(self, config, capsys):
        """Text output uses the row labels."""
        context = CLIContext(config)

        assert cmd_info(context, server_args()) == 0

        output = capsys.readouterr().out
        assert "RPC Url: http://node:8545" in output
        assert "Config name: main" in output


class TestNetworkCommands:
    """Tests for networks commands."""

    def test_list(self, ctx, capsys):
        """list prints every network."""
        assert cmd_networks_list(ctx) == 0

        networks = json.loads(capsys.readouterr().out)["networks"]
        assert networks["1"] == "Ethereum Mainnet"
        assert networks["*"] == "Private network"

    def test_show(self, ctx, capsys):
        """show prints one network."""
        assert cmd_networks_show(ctx, "11155111") == 0

        output = json.loads(capsys.readouterr().out)
        assert output["label"] == "Sepolia"
        assert output["explorer"] == "https://sepolia.etherscan.io"

    def test_show_unknown(self, ctx, capsys):
        """show fails for unknown networks."""
        assert cmd_networks_show(ctx, "999999") == 1
        assert "Unknown network" in json.loads(capsys.readouterr().out)["error"]


class TestRunCli:
    """Tests for command routing."""

    def test_routes_check(self, config):
        """check is routed to cmd_check."""
        args = create_parser().parse_args(["check"])
        with patch("ethserver.cli.cmd_check", return_value=0) as mock_cmd:
            assert run_cli(args) == 0
        mock_cmd.assert_called_once()

    def test_networks_without_subcommand(self, capsys):
        """networks without a subcommand prints usage."""
        args = create_parser().parse_args(["networks"])

        assert run_cli(args) == 1
        assert "Usage" in capsys.readouterr().err

    def test_no_command(self):
        """No command signals the caller to show help."""
        args = create_parser().parse_args([])
        assert run_cli(args) == -1

    def test_configuration_error(self, monkeypatch, capsys):
        """Invalid configuration is reported."""
        monkeypatch.setenv("ETHSERVER_RPC_TIMEOUT", "-1")
        args = create_parser().parse_args(["--json", "networks", "list"])

        assert run_cli(args) == 1
        assert "Configuration error" in json.loads(capsys.readouterr().out)["error"]
