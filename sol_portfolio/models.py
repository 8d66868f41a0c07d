"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssetKind(Enum):
    """Asset class a holding was fetched as."""

    TOKEN = "token"
    NATIVE = "native"
    STAKED = "staked"


@dataclass(frozen=True)
class TokenItem:
    """Priced fungible token as returned by getAssetsByOwner."""

    id: str
    symbol: str
    total_price: float


@dataclass(frozen=True)
class TokenPage:
    """First page of an owner's fungible assets."""

    items: tuple[TokenItem, ...] = ()
    total: int = 0
    truncated: bool = False


@dataclass(frozen=True)
class AssetRecord:
    """Canonical holding: one asset identity and its USD value."""

    id: str
    symbol: str
    value_usd: float


@dataclass(frozen=True)
class DisplayRecord:
    """Holding with its share of the portfolio, ready for a chart."""

    id: str
    symbol: str
    value_usd: float
    percent: float
    tooltip: str


@dataclass(frozen=True)
class PortfolioResult:
    """Outcome of one submission."""

    records: tuple[DisplayRecord, ...] = ()
    total_value_usd: float = 0.0
    warnings: tuple[str, ...] = ()
    rendered: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.records
