"""Command-line entry point for am-clock."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import SyncConfig
from .exceptions import AmClockError
from .session import sync_time
from .transport.serial_connection import list_matching_ports

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="am-clock",
        description=(
            "am-clock updates the time of a USB-connected Angry Miao "
            "Cyberboard to the local PC time"
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print status and error information (default is silent)",
    )
    parser.add_argument(
        "-a", "--am-pm", dest="use_12hour_display", action="store_true",
        help="Use fake AM / PM mode (needs to be called at midday and midnight)",
    )
    parser.add_argument(
        "--list", dest="list_ports", action="store_true",
        help="List matching serial ports and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr in verbose mode, drop them otherwise."""
    handler = logging.StreamHandler() if verbose else logging.NullHandler()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
    )


def run(args: argparse.Namespace) -> int:
    config = SyncConfig(use_12hour_display=args.use_12hour_display)

    try:
        if args.list_ports:
            ports = list_matching_ports(config.vendor_id, config.product_id)
            for name in ports:
                print(name)
            return 0 if ports else 1

        result = sync_time(config)
    except AmClockError as e:
        logger.error("Error: %s", e)
        return 1

    return result.exit_code


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
