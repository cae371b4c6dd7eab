"""CLI subcommands for ethserver.

Provides command-line interface for:
- Server operations (check, info)
- Network registry operations (list, show)
"""

import argparse
import json
import sys

from ethserver.blockchain.checker import ConnectivityChecker
from ethserver.blockchain.networks import NetworkEntry, NetworkRegistry
from ethserver.config import EthServerConfig
from ethserver.core.info import describe_server
from ethserver.core.server import ServerRecord


def _add_server_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options describing a server record."""
    parser.add_argument("--url", help="RPC endpoint URL (default: ETHSERVER_RPC_URL)")
    parser.add_argument(
        "--network-id",
        help="Expected network ID, or '*' for any (default: ETHSERVER_NETWORK_ID)",
    )
    parser.add_argument("--id", dest="server_id", help="Server id (default: ETHSERVER_DEFAULT_SERVER)")
    parser.add_argument("--label", help="Server label (default: ETHSERVER_SERVER_LABEL)")
    parser.add_argument("--description", default="", help="Server description")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ethserver",
        description="ethserver - Ethereum server registry and connectivity checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Check that a server is up on its network")
    _add_server_arguments(check_parser)

    info_parser = subparsers.add_parser("info", help="Show server info")
    _add_server_arguments(info_parser)

    networks_parser = subparsers.add_parser("networks", help="Network registry operations")
    networks_sub = networks_parser.add_subparsers(dest="networks_command")

    networks_sub.add_parser("list", help="List known networks")
    show_parser = networks_sub.add_parser("show", help="Show one network")
    show_parser.add_argument("network_id", type=str, help="Network ID")

    subparsers.add_parser("run", help="Start the health service")

    return parser


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(self, config: EthServerConfig, json_output: bool = False):
        self.config = config
        self.json_output = json_output
        self._registry: NetworkRegistry | None = None
        self._checker: ConnectivityChecker | None = None

    @property
    def registry(self) -> NetworkRegistry:
        """Get the network registry (lazy loaded)."""
        if self._registry is None:
            if self.config.networks_file:
                self._registry = NetworkRegistry.from_file(self.config.networks_file)
            else:
                self._registry = NetworkRegistry.default()
        return self._registry

    @property
    def checker(self) -> ConnectivityChecker:
        """Get the connectivity checker (lazy loaded)."""
        if self._checker is None:
            self._checker = ConnectivityChecker(timeout=self.config.rpc_timeout)
        return self._checker

    def server_from_args(self, args: argparse.Namespace) -> ServerRecord:
        """Build a server record from CLI options, falling back to config."""
        url = args.url or self.config.rpc_url
        if not url:
            raise ValueError("No server URL given. Pass --url or set ETHSERVER_RPC_URL")
        return ServerRecord(
            id=args.server_id or self.config.default_server,
            label=args.label or self.config.server_label,
            url=url,
            network_id=args.network_id or self.config.network_id,
            description=args.description,
        )

    def output(self, data: dict) -> None:
        """Output data in the appropriate format."""
        if self.json_output:
            print(json.dumps(data, indent=2))
        else:
            self._print_formatted(data)

    def _print_formatted(self, data: dict, indent: int = 0) -> None:
        """Print data in human-readable format."""
        prefix = "  " * indent
        for key, value in data.items():
            if isinstance(value, dict):
                print(f"{prefix}{key}:")
                self._print_formatted(value, indent + 1)
            else:
                print(f"{prefix}{key}: {value}")


def _network_to_dict(entry: NetworkEntry) -> dict:
    return {
        "id": entry.id,
        "label": entry.label,
        "description": entry.description,
        "explorer": entry.explorer_link,
    }


# Server commands


def cmd_check(ctx: CLIContext, args: argparse.Namespace) -> int:
    """Check server connectivity."""
    try:
        record = ctx.server_from_args(args)
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1

    result = ctx.checker.validate(record)
    data = result.to_dict()
    if result.failure is not None:
        data["failure"] = result.failure.value
    if result.reported_network_id is not None:
        data["reported_network_id"] = result.reported_network_id
    ctx.output(data)
    return 1 if result.error else 0


def cmd_info(ctx: CLIContext, args: argparse.Namespace) -> int:
    """Show server info."""
    try:
        record = ctx.server_from_args(args)
        info = describe_server(record, ctx.registry, ctx.config.default_server)
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1

    if ctx.json_output:
        ctx.output(info.to_dict())
    else:
        ctx.output({label: content.replace("\n", " - ") for label, content in info.rows()})
    return 0


# Network commands


def cmd_networks_list(ctx: CLIContext) -> int:
    """List known networks."""
    try:
        networks = {entry.id: entry.label for entry in ctx.registry}
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1

    ctx.output({"networks": networks})
    return 0


def cmd_networks_show(ctx: CLIContext, network_id: str) -> int:
    """Show one network."""
    try:
        entry = ctx.registry.lookup(network_id)
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1

    if entry is None:
        ctx.output({"error": f"Unknown network: {network_id}"})
        return 1
    ctx.output(_network_to_dict(entry))
    return 0


def run_cli(args: argparse.Namespace) -> int:
    """Execute CLI command based on parsed arguments.

    Returns
    -------
    int
        Exit code: 0 for success, positive for error, -1 signals caller
        to show help (no CLI command specified).
    """
    try:
        config = EthServerConfig()
    except Exception as e:
        if args.json:
            print(json.dumps({"error": f"Configuration error: {e}"}))
        else:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    ctx = CLIContext(config, json_output=args.json)

    if args.command == "check":
        return cmd_check(ctx, args)

    elif args.command == "info":
        return cmd_info(ctx, args)

    elif args.command == "networks":
        if args.networks_command == "list":
            return cmd_networks_list(ctx)
        elif args.networks_command == "show":
            return cmd_networks_show(ctx, args.network_id)
        else:
            print("Usage: ethserver networks [list|show]", file=sys.stderr)
            return 1

    else:
        return -1
