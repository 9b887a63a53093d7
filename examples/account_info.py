#!/usr/bin/env python3
"""
Example: Fetch and display account balance and open positions.

This example demonstrates how to:
1. Create an authenticated client using environment variables
2. Fetch the USDT balance (equity, wallet, available margin)
3. Retrieve and display all open positions with P&L details
4. Show client performance statistics

Prerequisites:
- Set OKX_API_KEY, OKX_API_SECRET and OKX_PASSPHRASE environment variables
- Install dependencies with Poetry (recommended): poetry install
- OR install okx-client in development mode: pip install -e .

Usage:
    python examples/account_info.py

Environment Variables:
    OKX_API_KEY=your_api_key_here
    OKX_API_SECRET=your_api_secret_here
    OKX_PASSPHRASE=your_passphrase_here
    OKX_SIMULATED=1   # optional, demo trading
"""

import asyncio
import logging
import os
from decimal import Decimal

from dotenv import load_dotenv

from okx_client import OkxClient

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_currency(amount: Decimal, currency: str = "USDT") -> str:
    """Format amount as currency."""
    return f"{amount:,.2f} {currency}"


def print_section_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f" {title.upper()} ".center(70, "="))
    print("=" * 70)


def print_balance(balance):
    print_section_header("Account Balance")
    print(f"  Total Equity:       {format_currency(balance.total_equity)}")
    print(f"  Wallet Balance:     {format_currency(balance.wallet_balance)}")
    print(f"  Available:          {format_currency(balance.available_balance)}")
    print(f"  Unrealized P&L:     {format_currency(balance.unrealized_pnl)}")


def print_positions(positions):
    """Print formatted positions table."""
    print_section_header(f"Open Positions ({len(positions)} total)")

    if not positions:
        print("No open positions found.")
        return

    print(f"{'Symbol':<12} {'Side':<6} {'Quantity':<12} {'Entry':<12} "
          f"{'Mark':<12} {'P&L':<12} {'Lev':<5} {'Margin':<9}")
    print("-" * 84)

    for position in sorted(positions, key=lambda p: p.symbol):
        margin = position.margin_mode.value if position.margin_mode else "N/A"
        print(f"{position.symbol:<12} {position.side.value:<6} {str(position.quantity):<12} "
              f"{str(position.entry_price):<12} {str(position.mark_price):<12} "
              f"{position.unrealized_pnl:<12,.2f} {str(position.leverage):<5} {margin:<9}")


async def main():
    try:
        client = OkxClient.from_env()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        logger.error("Please check your API credentials and environment variables")
        return

    async with client:
        logger.info("Fetching account information...")
        print_balance(await client.get_balance())
        print_positions(await client.get_positions())

        stats = client.get_statistics()
        print_section_header("Client Statistics")
        print(f"  Operations:         {stats.operations} "
              f"({stats.failures} failed, avg {stats.average_ms:.1f} ms)")

        logger.info("✅ Account information fetched successfully!")


if __name__ == "__main__":
    if not all(os.getenv(name) for name in ("OKX_API_KEY", "OKX_API_SECRET", "OKX_PASSPHRASE")):
        logger.warning("⚠️  OKX_API_KEY, OKX_API_SECRET and/or OKX_PASSPHRASE not set!")

    asyncio.run(main())
