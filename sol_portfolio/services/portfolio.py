"""Portfolio orchestration — fans out fetches per address, aggregates, renders."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from ..chains.solana import HeliusClient
from ..config import AppConfig
from ..interfaces.chain import AssetSource
from ..interfaces.chart_sink import ChartSink
from ..interfaces.price_oracle import SpotPriceOracle
from ..models import AssetKind, AssetRecord, PortfolioResult
from ..oracles import BirdeyeOracle
from ..portfolio import aggregate, make_displayable, normalize
from ..portfolio.aggregator import total_value
from ..render import PlotlyPieChart

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def join_all(tasks: Sequence[asyncio.Task[Any]]) -> list[Any]:
    """Wait for every task; the first failure cancels the rest and is re-raised."""
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        raise


async def fan_out(
    fetch: Callable[[str], Awaitable[T]], addresses: Sequence[str]
) -> list[T]:
    """Run ``fetch`` for every address concurrently and wait for all of them."""
    return await join_all([asyncio.create_task(fetch(a)) for a in addresses])


class PortfolioService:
    """Builds the cross-address portfolio breakdown for one submission."""

    def __init__(self, config: AppConfig, sink: ChartSink | None = None) -> None:
        self._config = config
        self._source: AssetSource = HeliusClient(config.helius)
        self._oracle: SpotPriceOracle = BirdeyeOracle(config.price.birdeye)
        self._sink: ChartSink = sink or PlotlyPieChart(config.chart)
        self._min_percent = config.portfolio.min_percent

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _format_wallet(address: str) -> str:
        if len(address) > 16:
            return f"{address[:6]}...{address[-4:]}"
        return address

    def _truncation_warning(self, address: str, total: int) -> str:
        return (
            f"{self._format_wallet(address)} holds {total} assets; only the first "
            f"page was fetched, results may be incomplete"
        )

    # ------------------------------------------------------------------
    # Per asset class fetches
    # ------------------------------------------------------------------

    async def _fetch_token_records(
        self, addresses: Sequence[str]
    ) -> tuple[list[AssetRecord], list[str]]:
        pages = await fan_out(self._source.get_token_page, addresses)

        records: list[AssetRecord] = []
        warnings: list[str] = []
        for address, page in zip(addresses, pages):
            if page.truncated:
                message = self._truncation_warning(address, page.total)
                logger.warning("Pagination not implemented: %s", message)
                warnings.append(message)
            records.extend(normalize(AssetKind.TOKEN, item) for item in page.items)
        return records, warnings

    async def _fetch_unstaked_record(
        self, addresses: Sequence[str], spot_price: float
    ) -> AssetRecord:
        balances = await fan_out(self._source.get_balance_lamports, addresses)
        return normalize(AssetKind.NATIVE, sum(balances), spot_price)

    async def _fetch_staked_record(
        self, addresses: Sequence[str], spot_price: float
    ) -> AssetRecord:
        per_address = await fan_out(self._source.get_stake_accounts, addresses)
        accounts: list[dict[str, Any]] = [a for accts in per_address for a in accts]
        return normalize(AssetKind.STAKED, accounts, spot_price)

    # ------------------------------------------------------------------
    # Core workflows
    # ------------------------------------------------------------------

    async def build_portfolio(
        self,
        addresses: Sequence[str],
        include_unstaked: bool,
        include_staked: bool,
    ) -> PortfolioResult:
        """Fetch, aggregate and weight holdings across ``addresses``.

        Raises FetchError if any remote call fails; no partial result is built.
        """
        logger.info(
            "Building portfolio for %d address(es) (unstaked=%s, staked=%s)",
            len(addresses), include_unstaked, include_staked,
        )

        token_task = asyncio.create_task(self._fetch_token_records(addresses))

        if include_unstaked or include_staked:
            # Spot price and token lists share one barrier.
            price_task = asyncio.create_task(self._oracle.fetch_spot_price())
            (token_records, warnings), spot_price = await join_all(
                [token_task, price_task]
            )
        else:
            token_records, warnings = await token_task

        records = aggregate(token_records)

        if include_unstaked:
            unstaked = await self._fetch_unstaked_record(addresses, spot_price)
            records.insert(0, unstaked)
        if include_staked:
            staked = await self._fetch_staked_record(addresses, spot_price)
            records.insert(0, staked)

        total = total_value(records)
        displayable = make_displayable(records, self._min_percent)

        logger.info("=" * 60)
        logger.info("PORTFOLIO SUMMARY")
        logger.info("=" * 60)
        logger.info("  Distinct assets:  %d", len(records))
        logger.info("  Shown (>= %.1f%%): %d", self._min_percent, len(displayable))
        for d in displayable:
            logger.info("    - %s: $%.2f (%.1f%%)", d.symbol, d.value_usd, d.percent)
        logger.info("  Total value:      $%.2f", total)
        logger.info("=" * 60)

        return PortfolioResult(
            records=tuple(displayable),
            total_value_usd=total,
            warnings=tuple(warnings),
        )

    async def render_for_addresses(
        self,
        addresses: Sequence[str],
        include_unstaked: bool,
        include_staked: bool,
    ) -> PortfolioResult:
        """Build the portfolio and hand it to the chart sink."""
        result = await self.build_portfolio(addresses, include_unstaked, include_staked)
        title = self._config.chart.title

        if result.is_empty:
            logger.info("No holdings found for the supplied addresses")
            rendered = self._sink.render_empty(title)
        else:
            rendered = self._sink.render(result.records, title)

        return replace(result, rendered=rendered)

    async def run(self) -> PortfolioResult:
        """Render using the addresses and flags from the loaded config."""
        portfolio = self._config.portfolio
        return await self.render_for_addresses(
            portfolio.addresses, portfolio.include_unstaked, portfolio.include_staked
        )
