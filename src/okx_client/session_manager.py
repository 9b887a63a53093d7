"""
aiohttp session lifecycle for OKX client.

One ClientSession is shared by every request of a client. Its timeout is the
per-request deadline from ConnectionConfig.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from .constants import API_PREFIX
from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

USER_AGENT = "okx-client/1.0"


class SessionManager:
    """Creates the shared ClientSession lazily and closes it on demand."""

    def __init__(self, config: ConnectionConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    def _is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, creating it on first use or after close."""
        if self._is_open():
            return self._session

        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=20, ttl_dns_cache=300),
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        logger.debug(f"Opened HTTP session to {self._config.base_url} (timeout {self._config.timeout}s)")
        return self._session

    async def close_session(self) -> None:
        if self._is_open():
            await self._session.close()
        self._session = None

    async def health_check(self) -> bool:
        """Ping the public server-time endpoint."""
        if not self._is_open():
            return False

        url = f"{self._config.base_url}{API_PREFIX}/public/time"
        try:
            async with self._session.get(url, timeout=aiohttp.ClientTimeout(total=5.0)) as response:
                return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Health check request failed: {e}")
            return False
