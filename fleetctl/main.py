"""
fleetctl - command line entry point.
Parses arguments, configures logging and dispatches to commands.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from fleetctl.commands import device
from fleetctl.core.config import Settings, settings
from fleetctl.core.dependencies import create_http_client
from fleetctl.core.exceptions import FleetError

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fleetctl",
        description="Inspect devices managed by a fleet-management API.",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {settings.APP_VERSION}"
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    device_parser = subparsers.add_parser(
        "device",
        help="Show info about a single device",
        description="Show information about a single device.",
        usage="%(prog)s [--v13] <uuid>",
        epilog="example:\n  $ fleetctl device 7cf02a6",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    device_parser.add_argument(
        "uuid", type=device.try_as_integer,
        help="the device uuid (full or short) or numeric id"
    )
    device_parser.add_argument(
        "--v13", action="store_true",
        help='Use "fleet" instead of "application" in output headings'
    )

    return parser


async def _device_command(args: argparse.Namespace, settings: Settings) -> None:
    async with create_http_client(settings) as client:
        await device.run(client, args.uuid, v13=args.v13, v13_env=settings.V13)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run fleetctl.

    Returns:
        Process exit code: 0 on success, 1 on API/auth errors
    """
    args = build_parser(settings).parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, settings.LOG_LEVEL.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.debug(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}: {args.command}")

    try:
        if args.command == "device":
            asyncio.run(_device_command(args, settings))
    except FleetError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
