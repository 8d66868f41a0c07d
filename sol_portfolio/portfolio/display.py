"""Turn aggregated holdings into chart-ready records — no I/O."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ..models import AssetRecord, DisplayRecord
from .aggregator import total_value

DEFAULT_MIN_PERCENT = 0.5

_ONE_DECIMAL = Decimal("0.1")


def round_percent(value: float) -> float:
    """Round to the nearest 0.1, ties away from zero.

    Goes through the shortest decimal repr so 0.05 rounds to 0.1 rather
    than to 0.0 as binary float rounding would.
    """
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def percent_of(value: float, total: float) -> float:
    return round_percent(value / total * 100)


def format_tooltip(symbol: str, percent: float) -> str:
    return f"{symbol}: {percent}%"


def make_displayable(
    records: Sequence[AssetRecord],
    min_percent: float = DEFAULT_MIN_PERCENT,
) -> list[DisplayRecord]:
    """Attach percent and tooltip, then drop holdings below ``min_percent``.

    Percentages are taken against the total of every input record, so the
    survivors are not renormalized after filtering. An empty or zero-valued
    portfolio yields an empty list.
    """
    total = total_value(records)
    if not records or total <= 0:
        return []

    displayable: list[DisplayRecord] = []
    for record in records:
        percent = percent_of(record.value_usd, total)
        displayable.append(
            DisplayRecord(
                id=record.id,
                symbol=record.symbol,
                value_usd=record.value_usd,
                percent=percent,
                tooltip=format_tooltip(record.symbol, percent),
            )
        )

    return [d for d in displayable if d.percent >= min_percent]
