"""
Position Lifecycle Example - open, protect and close one position.

This example demonstrates how to:
1. Switch the account to hedge mode and pick a margin mode
2. Open a long position with a market order
3. Attach stop-loss and take-profit trigger orders
4. Close the whole position (resting trigger orders are cancelled)

Prerequisites:
- Set OKX_API_KEY, OKX_API_SECRET and OKX_PASSPHRASE in .env file
- Use OKX_SIMULATED=1 to run against demo trading first
"""

import asyncio
import logging
from decimal import Decimal

from okx_client import MarginMode, OkxClient

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


async def main():
    symbol = "ETHUSDT"
    quantity = Decimal("0.1")
    leverage = 3
    sl_percent = Decimal("0.5")
    tp_percent = Decimal("1.0")

    async with OkxClient.from_env() as client:
        client.subscribe_events(lambda event: logger.warning(f"⚠️ {event.operation}: {event.message}"))

        await client.set_margin_mode(symbol, MarginMode.CROSS)

        price = await client.get_market_price(symbol)
        logger.info(f"📊 {symbol} last price: {price}")

        entry = await client.open_long(symbol, quantity, leverage)
        logger.info(f"📥 Entry order {entry.order_id} ({entry.status})")

        stop_price = price * (1 - sl_percent / 100)
        take_price = price * (1 + tp_percent / 100)
        stop = await client.set_stop_loss(symbol, "long", quantity, stop_price)
        take = await client.set_take_profit(symbol, "long", quantity, take_price)
        logger.info(f"📉 Stop-loss {stop.algo_id} at {stop.trigger_price}")
        logger.info(f"📈 Take-profit {take.algo_id} at {take.trigger_price}")

        await asyncio.sleep(5)

        exit_order = await client.close_long(symbol)
        logger.info(f"📤 Exit order {exit_order.order_id} ({exit_order.status})")


if __name__ == "__main__":
    asyncio.run(main())
