"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ValidationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PortfolioConfig:
    addresses: tuple[str, ...] = ()
    include_unstaked: bool = True
    include_staked: bool = True
    min_percent: float = 0.5


@dataclass(frozen=True)
class HeliusConfig:
    rpc_url: str = "https://mainnet.helius-rpc.com/"
    api_key: str = ""
    rpc_timeout: int = 30
    page_limit: int = 1000


@dataclass(frozen=True)
class BirdeyeConfig:
    price_url: str = "https://public-api.birdeye.so/defi/price"
    api_key: str = ""
    native_mint: str = "So11111111111111111111111111111111111111112"
    timeout: int = 30


@dataclass(frozen=True)
class PriceConfig:
    provider: str = "birdeye"
    birdeye: BirdeyeConfig = field(default_factory=BirdeyeConfig)


@dataclass(frozen=True)
class ChartConfig:
    output_path: str = "portfolio.html"
    title: str = "Portfolio breakdown"
    hole: float = 0.4


@dataclass(frozen=True)
class AppConfig:
    portfolio: PortfolioConfig = field(default_factory=PortfolioConfig)
    helius: HeliusConfig = field(default_factory=HeliusConfig)
    price: PriceConfig = field(default_factory=PriceConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_portfolio(raw: dict[str, Any]) -> PortfolioConfig:
    addresses = [str(a).strip() for a in raw.get("addresses") or []]
    addresses = [a for a in addresses if a]
    return PortfolioConfig(
        addresses=tuple(addresses),
        include_unstaked=bool(raw.get("include_unstaked", True)),
        include_staked=bool(raw.get("include_staked", True)),
        min_percent=float(raw.get("min_percent", 0.5)),
    )


def _build_helius(raw: dict[str, Any]) -> HeliusConfig:
    return HeliusConfig(
        rpc_url=raw.get("rpc_url", HeliusConfig.rpc_url),
        api_key=raw.get("api_key", ""),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        page_limit=int(raw.get("page_limit", 1000)),
    )


def _build_price(raw: dict[str, Any]) -> PriceConfig:
    be = raw.get("birdeye") or {}
    return PriceConfig(
        provider=raw.get("provider", "birdeye"),
        birdeye=BirdeyeConfig(
            price_url=be.get("price_url", BirdeyeConfig.price_url),
            api_key=be.get("api_key", ""),
            native_mint=be.get("native_mint", BirdeyeConfig.native_mint),
            timeout=int(be.get("timeout", 30)),
        ),
    )


def _build_chart(raw: dict[str, Any]) -> ChartConfig:
    return ChartConfig(
        output_path=raw.get("output_path", ChartConfig.output_path),
        title=raw.get("title", ChartConfig.title),
        hole=float(raw.get("hole", 0.4)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        portfolio=_build_portfolio(raw.get("portfolio") or {}),
        helius=_build_helius(raw.get("helius") or {}),
        price=_build_price(raw.get("price") or {}),
        chart=_build_chart(raw.get("chart") or {}),
    )

    logger.info("Configuration loaded from %s", config_path)
    return cfg


def collect_errors(cfg: AppConfig) -> list[str]:
    """Return every reason the submission cannot run (empty when valid)."""
    errors: list[str] = []
    portfolio = cfg.portfolio

    if not portfolio.addresses:
        errors.append("At least one address must be supplied")
    if not cfg.helius.api_key:
        errors.append("Helius API key is required")
    if cfg.price.provider != "birdeye":
        errors.append(f"Unknown price provider '{cfg.price.provider}'")
    elif (portfolio.include_unstaked or portfolio.include_staked) and not (
        cfg.price.birdeye.api_key
    ):
        errors.append("Birdeye API key is required to include SOL balances")

    return errors


def validate_request(cfg: AppConfig) -> None:
    """Raise ValidationError listing all problems with the submission."""
    errors = collect_errors(cfg)
    if errors:
        raise ValidationError(errors)
