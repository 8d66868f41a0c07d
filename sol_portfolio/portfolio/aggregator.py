"""Merge holdings from many addresses by asset identity."""
from __future__ import annotations

from typing import Iterable

from ..models import AssetRecord


def aggregate(records: Iterable[AssetRecord]) -> list[AssetRecord]:
    """Sum ``value_usd`` per ``id``; the first symbol seen for an id wins."""
    merged: dict[str, AssetRecord] = {}
    for record in records:
        existing = merged.get(record.id)
        if existing is None:
            merged[record.id] = record
        else:
            merged[record.id] = AssetRecord(
                id=existing.id,
                symbol=existing.symbol,
                value_usd=existing.value_usd + record.value_usd,
            )
    return list(merged.values())


def total_value(records: Iterable[AssetRecord]) -> float:
    return sum(r.value_usd for r in records)
