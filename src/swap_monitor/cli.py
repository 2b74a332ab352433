#!/usr/bin/env python3
"""
Command-line interface for the swap price monitor.

Usage:
    swap-monitor --pools 0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640
    swap-monitor --pools 0x88e6...,0xCBCdF9626bC03E24f779434178A73a0B4bad62eD --rpc-url wss://...
    python -m swap_monitor --skip-undecodable

Pools and the websocket endpoint default to the POOLS and RPC_URL
environment variables (a .env file is loaded when present).
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from .config import ConfigError, ConfigManager, get_config
from .errors import TransportError
from .monitor import DecodeFailurePolicy, MonitorResult, Supervisor
from .transport import Web3Transport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MONITOR_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stream Uniswap V3 Swap events and log the implied pool prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # USDC/WETH 0.05% pool on mainnet
  %(prog)s --pools 0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640

  # Keep streaming past logs that fail to decode
  %(prog)s --skip-undecodable
        """,
    )
    parser.add_argument(
        "--pools",
        help="Comma-separated pool addresses (default: $POOLS)",
    )
    parser.add_argument(
        "--rpc-url",
        help="Websocket RPC endpoint (default: $RPC_URL)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $LOG_LEVEL)",
    )
    parser.add_argument(
        "--skip-undecodable",
        action="store_true",
        help="Skip logs that cannot be decoded instead of stopping that pool's monitor",
    )
    return parser


def load_config(args: argparse.Namespace) -> ConfigManager:
    """Build configuration from the environment, with CLI overrides applied."""
    config = get_config(force_reload=True, validate=False)
    if args.pools:
        config.monitor.POOLS = [pool.strip() for pool in args.pools.split(",") if pool.strip()]
    if args.rpc_url:
        config.chains.RPC_URL = args.rpc_url
        config.chains._validate_config()
    if args.skip_undecodable:
        config.monitor.DECODE_FAILURE_POLICY = DecodeFailurePolicy.SKIP.value
    config.validate_configuration()
    return config


def summarize(results: Dict[str, MonitorResult]) -> int:
    """Log a per-pool summary and pick the process exit code."""
    logger.info("=" * 60)
    for pool, result in results.items():
        if result.success:
            logger.info(f"✅ {pool}: stream closed, {result.observations} observations")
        else:
            logger.error(f"❌ {pool}: {result.error.kind} after {result.observations} observations")
    logger.info("=" * 60)

    if all(result.success for result in results.values()):
        return EXIT_OK
    return EXIT_MONITOR_FAILED


async def main(argv: Optional[List[str]] = None) -> int:
    """Run the monitor; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    if args.log_level:
        logging.getLogger().setLevel(args.log_level)
    logger.debug(f"Effective configuration: {config.to_dict()}")

    pools = config.monitor.pool_addresses
    decode_policy = (
        DecodeFailurePolicy.SKIP if config.monitor.skip_undecodable else DecodeFailurePolicy.TERMINATE
    )
    logger.info(f"Loaded {len(pools)} pools (decode failure policy: {decode_policy.value})")

    try:
        transport = await Web3Transport.connect(config.chains.RPC_URL, config.chains.websocket_kwargs)
    except TransportError as e:
        logger.error(f"Failed to connect: {e}")
        return EXIT_MONITOR_FAILED

    async with transport:
        supervisor = Supervisor(transport, decode_policy=decode_policy)
        results = await supervisor.run(pools)

    return summarize(results)


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
