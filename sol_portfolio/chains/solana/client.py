"""Solana RPC client backed by Helius (DAS + standard JSON-RPC)."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import HeliusConfig
from ...errors import FetchError
from ...models import TokenPage
from ...portfolio.normalizer import parse_token_items

logger = logging.getLogger(__name__)

STAKE_PROGRAM_ID = "Stake11111111111111111111111111111111111111"
# Byte offset of the staker authority inside a stake account.
STAKER_AUTHORITY_OFFSET = 12


class HeliusClient:
    """Fetch balances, stake accounts and fungible assets for an address.

    Any transport or RPC failure raises FetchError; nothing is retried.
    """

    def __init__(self, config: HeliusConfig) -> None:
        self.rpc_url = config.rpc_url
        self.api_key = config.api_key
        self.timeout = config.rpc_timeout
        self.page_limit = config.page_limit

    async def rpc_call(self, method: str, params: Any) -> Any:
        """Make a single JSON-RPC call and return its ``result``."""
        payload = {"jsonrpc": "2.0", "id": method, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.rpc_url,
                    params={"api-key": self.api_key},
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise FetchError(f"{method}: HTTP {response.status}")

                    result = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"{method} failed: {e}") from e

        if "error" in result:
            raise FetchError(f"{method}: RPC Error: {result['error']}")
        if "result" not in result:
            raise FetchError(f"{method}: response has no result")

        return result["result"]

    async def get_token_page(self, address: str) -> TokenPage:
        """Get the first page of priced fungible assets owned by ``address``."""
        result = await self.rpc_call(
            "getAssetsByOwner",
            {
                "ownerAddress": address,
                "page": 1,
                "limit": self.page_limit,
                "displayOptions": {"showFungible": True},
            },
        )

        raw_items = result.get("items", [])
        total = int(result.get("total", len(raw_items)))
        items = parse_token_items(raw_items)
        logger.debug(
            "%s: %d assets, %d priced fungible", address, len(raw_items), len(items)
        )

        # The reported total counts every asset the owner holds.
        truncated = total > self.page_limit
        return TokenPage(items=tuple(items), total=total, truncated=truncated)

    async def get_balance_lamports(self, address: str) -> int:
        """Get the unstaked SOL balance of ``address`` in lamports."""
        result = await self.rpc_call("getBalance", [address])
        return int(result.get("value", 0))

    async def get_stake_accounts(self, address: str) -> list[dict[str, Any]]:
        """Get jsonParsed stake accounts whose staker authority is ``address``."""
        result = await self.rpc_call(
            "getProgramAccounts",
            [
                STAKE_PROGRAM_ID,
                {
                    "encoding": "jsonParsed",
                    "filters": [
                        {
                            "memcmp": {
                                "offset": STAKER_AUTHORITY_OFFSET,
                                "bytes": address,
                            }
                        }
                    ],
                },
            ],
        )
        return list(result or [])
