"""Asset source protocol — on-chain holdings abstraction."""
from typing import Any, Protocol

from ..models import TokenPage


class AssetSource(Protocol):
    """Abstract interface for fetching an address's holdings."""

    async def get_token_page(self, address: str) -> TokenPage: ...

    async def get_balance_lamports(self, address: str) -> int: ...

    async def get_stake_accounts(self, address: str) -> list[dict[str, Any]]: ...
