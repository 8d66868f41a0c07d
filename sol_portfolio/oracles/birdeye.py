"""Birdeye price API — USD spot price of SOL."""
from __future__ import annotations

import asyncio
import logging
import ssl

import aiohttp
import certifi

from ..config import BirdeyeConfig
from ..errors import FetchError

logger = logging.getLogger(__name__)


class BirdeyeOracle:
    """Fetch the native currency spot price from Birdeye."""

    def __init__(self, config: BirdeyeConfig) -> None:
        self.price_url = config.price_url
        self.api_key = config.api_key
        self.native_mint = config.native_mint
        self.timeout = config.timeout

    async def fetch_spot_price(self) -> float:
        """Fetch the current SOL price in USD.

        Raises:
            FetchError: on HTTP errors or a payload without a usable price.
        """
        headers = {"X-API-KEY": self.api_key, "x-chain": "solana"}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    self.price_url,
                    params={"address": self.native_mint},
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise FetchError(
                            f"Error fetching price from Birdeye: HTTP {response.status}"
                        )
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Error fetching price from Birdeye: {e}") from e

        if not data.get("success", False):
            raise FetchError(f"Birdeye returned an unsuccessful response: {data}")

        try:
            price = float((data.get("data") or {})["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(f"Birdeye response has no price: {data}") from e

        logger.info("Fetched SOL spot price from Birdeye: $%.4f", price)
        return price
