"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from sol_portfolio.config import (
    AppConfig,
    BirdeyeConfig,
    ChartConfig,
    HeliusConfig,
    PortfolioConfig,
    PriceConfig,
)
from sol_portfolio.models import AssetRecord, DisplayRecord

WALLET_A = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
WALLET_B = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_helius_config() -> HeliusConfig:
    return HeliusConfig(
        rpc_url="https://rpc.example.com/",
        api_key="helius-key",
        rpc_timeout=5,
        page_limit=1000,
    )


@pytest.fixture()
def sample_birdeye_config() -> BirdeyeConfig:
    return BirdeyeConfig(
        price_url="https://price.example.com/defi/price",
        api_key="birdeye-key",
    )


@pytest.fixture()
def sample_app_config(
    sample_helius_config: HeliusConfig,
    sample_birdeye_config: BirdeyeConfig,
    tmp_path: Path,
) -> AppConfig:
    return AppConfig(
        portfolio=PortfolioConfig(
            addresses=(WALLET_A, WALLET_B),
            include_unstaked=True,
            include_staked=True,
            min_percent=0.5,
        ),
        helius=sample_helius_config,
        price=PriceConfig(provider="birdeye", birdeye=sample_birdeye_config),
        chart=ChartConfig(output_path=str(tmp_path / "chart.html"), title="Test"),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent(f"""\
    portfolio:
      addresses: ["{WALLET_A}", "{WALLET_B}"]
      include_unstaked: true
      include_staked: false
      min_percent: 1.0
    helius:
      rpc_url: "https://rpc.example.com/"
      api_key: "helius-key"
      rpc_timeout: 10
    price:
      provider: birdeye
      birdeye:
        api_key: "birdeye-key"
    chart:
      output_path: "out/portfolio.html"
      title: "My holdings"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample on-chain data
# ---------------------------------------------------------------------------


def make_raw_asset(
    asset_id: str,
    symbol: str,
    total_price: float | None,
    interface: str = "FungibleToken",
) -> dict[str, Any]:
    """Build a getAssetsByOwner item; total_price=None omits price_info."""
    token_info: dict[str, Any] = {"symbol": symbol, "balance": 1000, "decimals": 6}
    if total_price is not None:
        token_info["price_info"] = {
            "price_per_token": 1.0,
            "total_price": total_price,
            "currency": "USDC",
        }
    return {"interface": interface, "id": asset_id, "token_info": token_info}


def make_stake_account(lamports: str | None) -> dict[str, Any]:
    """Build a jsonParsed stake account; lamports=None means undelegated."""
    info: dict[str, Any] = {"meta": {"rentExemptReserve": "2282880"}}
    if lamports is not None:
        info["stake"] = {"delegation": {"stake": lamports, "voter": "Vote111"}}
    return {
        "pubkey": "StakeAcct111",
        "account": {"data": {"parsed": {"info": info, "type": "delegated"}}},
    }


@pytest.fixture()
def sample_raw_assets() -> list[dict[str, Any]]:
    return [
        make_raw_asset("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", "USDC", 250.0),
        make_raw_asset("JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN", "JUP", 50.0, "FungibleAsset"),
        make_raw_asset("NoPrice1111111111111111111111111111111111", "NOPE", None),
        {"interface": "V1_NFT", "id": "Nft111", "content": {"metadata": {"name": "x"}}},
    ]


@pytest.fixture()
def sample_records() -> list[AssetRecord]:
    return [
        AssetRecord(id="A", symbol="FOO", value_usd=60.0),
        AssetRecord(id="A", symbol="FOO", value_usd=40.0),
        AssetRecord(id="B", symbol="BAR", value_usd=900.0),
    ]


@pytest.fixture()
def sample_display_records() -> list[DisplayRecord]:
    return [
        DisplayRecord(id="A", symbol="FOO", value_usd=100.0, percent=10.0, tooltip="FOO: 10.0%"),
        DisplayRecord(id="B", symbol="BAR", value_usd=900.0, percent=90.0, tooltip="BAR: 90.0%"),
    ]


@pytest.fixture()
def raw_asset():
    """Factory for getAssetsByOwner items."""
    return make_raw_asset


@pytest.fixture()
def stake_account():
    """Factory for jsonParsed stake accounts."""
    return make_stake_account
