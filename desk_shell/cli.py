"""
Command-line entry point: `order-desk broker` or `order-desk market`.
"""

from __future__ import annotations

import argparse
import logging
import sys

from order_desk.config import DeskConfig, Role

from desk_shell.shell import DeskShell

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Log to stderr so it does not interleave with the screen on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _role(text: str) -> Role:
    try:
        return Role.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="order-desk",
        description="Stock order entry and browsing terminal",
    )
    parser.add_argument(
        "role",
        type=_role,
        metavar="{broker,market}",
        help="broker: enter and browse orders; market: browse and submit pending orders",
    )
    parser.add_argument(
        "--store",
        default=None,
        help="Path to the record store (default: $ORDER_DESK_STORE or ./transactions.dat)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        config = DeskConfig.from_env(args.role, store_path=args.store)
    except ValueError as exc:
        parser.error(str(exc))
    return DeskShell(config).run()
