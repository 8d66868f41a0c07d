"""Plain-text breakdown sink for terminals."""
from __future__ import annotations

from typing import Sequence

from ..models import DisplayRecord
from .chart import sort_for_display


class TextBreakdown:
    """Format holdings as an aligned table."""

    def render(self, records: Sequence[DisplayRecord], title: str) -> str:
        ordered = sort_for_display(records)
        lines = [title, "-" * len(title)]
        for r in ordered:
            lines.append(f"{r.symbol:<20} ${r.value_usd:>14,.2f} {r.percent:>6.1f}%")
        total = sum(r.value_usd for r in ordered)
        lines.append(f"{'Total shown':<20} ${total:>14,.2f}")
        return "\n".join(lines)

    def render_empty(self, title: str) -> str:
        return f"{title}\n{'-' * len(title)}\nNo holdings"
