"""
Command line entry point for the OKX client.

Usage:
    okx-client balance
    okx-client positions
    okx-client price BTCUSDT
    okx-client format BTCUSDT 0.127
    okx-client cancel BTCUSDT --simulated

Credentials are read from OKX_API_KEY, OKX_API_SECRET and OKX_PASSPHRASE
(a .env file in the working directory is honoured).
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Optional

from .account_client import OkxClient
from .exceptions import OkxClientError
from .http_client import HttpClientError


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="okx-client", description="OKX perpetual-swap trading client")
    parser.add_argument("--simulated", action="store_true", help="Use the demo trading environment")
    parser.add_argument("--log_level", default="WARNING")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("balance", help="Show the USDT balance")
    commands.add_parser("positions", help="List open positions")

    price = commands.add_parser("price", help="Show the last traded price")
    price.add_argument("symbol")

    fmt = commands.add_parser("format", help="Align a quantity to the lot size")
    fmt.add_argument("symbol")
    fmt.add_argument("quantity")

    cancel = commands.add_parser("cancel", help="Cancel every resting order of a symbol")
    cancel.add_argument("symbol")
    return parser


async def run(args: argparse.Namespace) -> Any:
    async with OkxClient.from_env(simulated=args.simulated or None) as client:
        if args.command == "balance":
            return await client.get_balance()
        if args.command == "positions":
            return await client.get_positions()
        if args.command == "price":
            return await client.get_market_price(args.symbol)
        if args.command == "format":
            return await client.format_quantity(args.symbol, Decimal(args.quantity))
        if args.command == "cancel":
            return await client.cancel_all_orders(args.symbol)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = asyncio.run(run(args))
    except (HttpClientError, OkxClientError, InvalidOperation, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
