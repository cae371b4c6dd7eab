#!/usr/bin/env python3
"""ethserver - Ethereum server registry and connectivity checks.

Entry point for the ethserver CLI and health service.
"""

import asyncio
import logging
import signal
import sys

from ethserver.blockchain.checker import ConnectivityChecker
from ethserver.blockchain.networks import NetworkRegistry
from ethserver.cli import create_parser, run_cli
from ethserver.config import EthServerConfig
from ethserver.core.info import describe_server
from ethserver.core.server import ServerRecord
from ethserver.observability.health import HealthServer, ServerConnectivityCheck
from ethserver.observability.logging import configure_logging, redact_url


def parse_args():
    """Parse command line arguments."""
    return create_parser().parse_args()


async def run_service() -> None:
    """Run the ethserver health service (long-running mode).

    Serves liveness, readiness and metrics endpoints. Readiness checks the
    configured default server, when one is set.
    """
    config = EthServerConfig()
    configure_logging(level=config.log_level, log_format=config.log_format.value)

    logger = logging.getLogger(__name__)
    logger.info("ethserver starting")

    if config.networks_file:
        registry = NetworkRegistry.from_file(config.networks_file)
    else:
        registry = NetworkRegistry.default()
    logger.info("Network registry: %d networks", len(registry))

    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()

    def on_shutdown_signal(sig_name: str) -> None:
        logger.info("Received signal %s, initiating shutdown", sig_name)
        shutdown_event.set()

    loop.add_signal_handler(signal.SIGTERM, lambda: on_shutdown_signal("SIGTERM"))
    loop.add_signal_handler(signal.SIGINT, lambda: on_shutdown_signal("SIGINT"))

    health_server = HealthServer(port=config.metrics_port)

    if config.rpc_url:
        server = ServerRecord(
            id=config.default_server,
            label=config.server_label,
            url=config.rpc_url,
            network_id=config.network_id,
        )
        info = describe_server(server, registry, config.default_server)
        logger.info("Default server: %s (%s)", server.id, redact_url(server.url))
        logger.info("Network: %s", info.network_label)
        health_server.add_check(
            ServerConnectivityCheck(server, ConnectivityChecker(timeout=config.rpc_timeout))
        )
    else:
        logger.warning("No default server configured. Set ETHSERVER_RPC_URL")

    await health_server.start()
    logger.info("Health server started on port %d", config.metrics_port)

    await shutdown_event.wait()

    logger.info("ethserver shutting down...")
    await health_server.stop()
    logger.info("ethserver shutdown complete")


async def main() -> None:
    """Main entry point for ethserver."""
    args = parse_args()

    if args.command and args.command != "run":
        exit_code = run_cli(args)
        if exit_code >= 0:
            sys.exit(exit_code)
        create_parser().print_help()
        sys.exit(0)

    await run_service()


def cli() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
