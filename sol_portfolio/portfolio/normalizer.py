"""Pure normalization of fetched holdings into AssetRecords — no I/O."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models import AssetKind, AssetRecord, TokenItem

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000

FUNGIBLE_INTERFACES = frozenset({"FungibleToken", "FungibleAsset"})

# Base58 asset ids never contain ':' so these cannot collide with real ids.
UNSTAKED_SOL_ID = "native:SOL:unstaked"
STAKED_SOL_ID = "native:SOL:staked"
UNSTAKED_SOL_SYMBOL = "SOL (unstaked)"
STAKED_SOL_SYMBOL = "SOL (staked)"


def lamports_to_sol(lamports: int) -> float:
    """Convert a lamport amount to SOL.

    Examples:
        2_500_000_000 → 2.5
    """
    return lamports / LAMPORTS_PER_SOL


def is_eligible(raw: dict[str, Any]) -> bool:
    """True for fungible items that carry a USD price."""
    if raw.get("interface") not in FUNGIBLE_INTERFACES:
        return False
    token_info = raw.get("token_info") or {}
    price_info = token_info.get("price_info") or {}
    return "total_price" in price_info


def parse_token_item(raw: dict[str, Any]) -> TokenItem | None:
    """Build a TokenItem from a raw DAS asset, or None if it is unusable."""
    if not is_eligible(raw):
        return None

    asset_id = raw.get("id")
    token_info = raw["token_info"]
    symbol = token_info.get("symbol")
    if not asset_id or not symbol:
        logger.debug("Skipping asset without id/symbol: %s", asset_id)
        return None

    try:
        total_price = float(token_info["price_info"]["total_price"])
    except (TypeError, ValueError):
        logger.debug("Skipping asset %s with unparseable price", asset_id)
        return None

    return TokenItem(id=str(asset_id), symbol=str(symbol), total_price=total_price)


def parse_token_items(raw_items: Iterable[dict[str, Any]]) -> list[TokenItem]:
    """Parse every eligible item, dropping the rest."""
    items: list[TokenItem] = []
    for raw in raw_items:
        item = parse_token_item(raw)
        if item is not None:
            items.append(item)
    return items


def delegated_lamports(stake_account: dict[str, Any]) -> int:
    """Delegated stake of one jsonParsed stake account; 0 when undelegated."""
    delegation = (
        stake_account.get("account", {})
        .get("data", {})
        .get("parsed", {})
        .get("info", {})
        .get("stake", {})
    )
    if not delegation:
        return 0
    try:
        return int(delegation.get("delegation", {}).get("stake", 0))
    except (TypeError, ValueError):
        return 0


def sum_delegated_lamports(stake_accounts: Iterable[dict[str, Any]]) -> int:
    return sum(delegated_lamports(entry) for entry in stake_accounts)


def normalize_token(item: TokenItem) -> AssetRecord:
    return AssetRecord(id=item.id, symbol=item.symbol, value_usd=item.total_price)


def normalize_native(lamports: int, spot_price: float) -> AssetRecord:
    return AssetRecord(
        id=UNSTAKED_SOL_ID,
        symbol=UNSTAKED_SOL_SYMBOL,
        value_usd=lamports_to_sol(lamports) * spot_price,
    )


def normalize_staked(
    stake_accounts: Iterable[dict[str, Any]], spot_price: float
) -> AssetRecord:
    """Sum delegated stake across accounts and price it.

    Each entry's ``delegation.stake`` is a string-encoded lamport amount.
    """
    lamports = sum_delegated_lamports(stake_accounts)
    return AssetRecord(
        id=STAKED_SOL_ID,
        symbol=STAKED_SOL_SYMBOL,
        value_usd=lamports_to_sol(lamports) * spot_price,
    )


def normalize(kind: AssetKind, payload: Any, spot_price: float = 0.0) -> AssetRecord:
    """Dispatch on asset kind.

    ``payload`` is a TokenItem for TOKEN, a lamport int for NATIVE and a
    list of stake accounts for STAKED.
    """
    if kind is AssetKind.TOKEN:
        return normalize_token(payload)
    if kind is AssetKind.NATIVE:
        return normalize_native(payload, spot_price)
    if kind is AssetKind.STAKED:
        return normalize_staked(payload, spot_price)
    raise ValueError(f"Unknown asset kind: {kind}")
