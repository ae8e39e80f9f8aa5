# src/rideem/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds a RideemClient from settings, then runs one
operation:

    rideem from APP [--promo PROMO] [--key KEY] [--async]
    rideem request APP
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Sequence

from ..api.client import RideemClient
from ..config import Settings, get_settings
from ..core.models import Code
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], RideemClient]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rideem",
        description="Redeem promo codes and post requests against a rideem server.",
    )
    parser.add_argument("--host", default=None, help="Server URL including scheme (default: $RIDEEM_HOST)")
    parser.add_argument("--log-level", "-l", default=None, help="Console log level (default: $RIDEEM_LOG_LEVEL)")

    sub = parser.add_subparsers(dest="command", required=True)

    p_from = sub.add_parser("from", help="Redeem a code from an app")
    p_from.add_argument("app", help="App name")
    p_from.add_argument("--promo", "-p", default=None, help="Promotion name")
    p_from.add_argument("--key", "-k", default=None, help="Key for a private promotion")
    p_from.add_argument(
        "--async",
        dest="use_pool",
        action="store_true",
        help="Run through the worker pool and report errors instead of defaults",
    )

    p_req = sub.add_parser("request", help="Post a request for an app")
    p_req.add_argument("app", help="App name")

    return parser


def format_code(code: Code) -> str:
    if code.empty():
        return f"No code available, retry in {code.delay} seconds."
    return code.code or ""


def _run_from(client: RideemClient, args: argparse.Namespace) -> int:
    task = client.from_(args.app, args.promo, args.key)

    if not args.use_pool:
        print(format_code(task.get()))
        return 0

    future = client.submit(task)
    try:
        code = future.result()
    except Exception as e:
        logger.error("Redeem failed for app=%s: %s", args.app, e)
        return 1
    print(format_code(code))
    return 0


def _run_request(client: RideemClient, args: argparse.Namespace) -> int:
    count = client.request(args.app).get()
    print(f"{args.app}: {count} request(s)")
    return 0


def main(argv: Sequence[str] | None = None, *, client_factory: ClientFactory | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(args.log_level or settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    if client_factory is None:
        client_factory = RideemClient.from_settings

    with client_factory(settings) as client:
        if args.host:
            client.with_host(args.host)
        logger.debug("Running %s against %s", args.command, client.host)

        if args.command == "from":
            return _run_from(client, args)
        return _run_request(client, args)


if __name__ == "__main__":
    raise SystemExit(main())
