"""Price oracle protocol — native currency spot price abstraction."""
from typing import Protocol


class SpotPriceOracle(Protocol):
    """Abstract interface for fetching the USD spot price of SOL."""

    async def fetch_spot_price(self) -> float: ...
