"""Command line entry point for querying QuadrigaCX."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from quadriga.data.clients import ClientConfig
from quadriga.data.models import to_dict
from quadriga.data.quadriga_client import ExchangeClient
from quadriga.infra.config import config_from_env, load_config
from quadriga.infra.errors import ConfigError, QuadrigaError
from quadriga.infra.logging import configure_logging

DEFAULT_CONFIG_PATH = Path(os.getenv("QUADRIGA_CONFIG", "config/quadriga.yaml"))


def _render(result: Any) -> Any:
    if isinstance(result, list):
        return [_render(item) for item in result]
    if hasattr(result, "__dataclass_fields__"):
        return to_dict(result)
    return result


COMMANDS: Dict[str, Callable[[ExchangeClient, argparse.Namespace], Any]] = {
    "ticker": lambda client, args: client.get_ticker(book=args.book),
    "order-book": lambda client, args: client.get_order_book(book=args.book),
    "transactions": lambda client, args: client.get_transactions(book=args.book, time=args.time),
    "balance": lambda client, args: client.get_account_balance(),
    "open-orders": lambda client, args: client.get_open_orders(book=args.book),
    "lookup": lambda client, args: client.lookup_order(args.order_id),
    "cancel": lambda client, args: client.cancel_order(args.order_id),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quadriga", description="QuadrigaCX REST client")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML file with credentials")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("ticker", "order-book", "open-orders"):
        cmd = sub.add_parser(name)
        cmd.add_argument("--book", help="Order book such as btc_cad")

    transactions = sub.add_parser("transactions")
    transactions.add_argument("--book", help="Order book such as btc_cad")
    transactions.add_argument("--time", choices=("minute", "hour"), help="Time frame")

    sub.add_parser("balance")

    for name in ("lookup", "cancel"):
        cmd = sub.add_parser(name)
        cmd.add_argument("order_id")
    return parser


def resolve_config(path: Path) -> ClientConfig:
    """Load ``path`` when it exists, otherwise read the environment."""

    if path.exists():
        return load_config(path)
    logging.getLogger(__name__).debug("Config file %s not found, using environment", path)
    return config_from_env()


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(default_level="WARNING")
    args = build_parser().parse_args(argv)
    logger = logging.getLogger("quadriga.cli")

    try:
        config = resolve_config(args.config)
    except ConfigError as exc:
        logger.error("Could not load configuration: %s", exc, extra={"event": "config_failed"})
        return 1

    with ExchangeClient.from_config(config, logger=logger.getChild("client")) as client:
        try:
            result = COMMANDS[args.command](client, args)
        except QuadrigaError as exc:
            logger.error("%s failed: %s", args.command, exc, extra={"event": "command_failed", "command": args.command})
            return 1

    json.dump(_render(result), sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
