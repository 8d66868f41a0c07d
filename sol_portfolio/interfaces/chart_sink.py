"""Chart sink protocol — where display records end up."""
from typing import Protocol, Sequence

from ..models import DisplayRecord


class ChartSink(Protocol):
    """Abstract interface for presenting a portfolio breakdown."""

    def render(self, records: Sequence[DisplayRecord], title: str) -> str: ...

    def render_empty(self, title: str) -> str: ...
