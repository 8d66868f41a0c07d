"""Plotly pie chart sink."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import plotly.graph_objects as go

from ..config import ChartConfig
from ..models import DisplayRecord

logger = logging.getLogger(__name__)


def sort_for_display(records: Sequence[DisplayRecord]) -> list[DisplayRecord]:
    """Largest holdings first so slice order is stable between runs."""
    return sorted(records, key=lambda r: r.value_usd, reverse=True)


class PlotlyPieChart:
    """Write the portfolio breakdown as a standalone HTML pie chart."""

    def __init__(self, config: ChartConfig) -> None:
        self.output_path = Path(config.output_path)
        self.hole = config.hole

    def build_figure(self, records: Sequence[DisplayRecord], title: str) -> go.Figure:
        ordered = sort_for_display(records)
        fig = go.Figure(
            go.Pie(
                labels=[r.symbol for r in ordered],
                values=[r.value_usd for r in ordered],
                hovertext=[r.tooltip for r in ordered],
                hoverinfo="text",
                text=[f"{r.percent}%" for r in ordered],
                textinfo="label+text",
                sort=False,
                hole=self.hole,
            )
        )
        total = sum(r.value_usd for r in ordered)
        fig.update_layout(title_text=f"{title} · ${total:,.2f}")
        return fig

    def build_empty_figure(self, title: str) -> go.Figure:
        fig = go.Figure()
        fig.add_annotation(text="No holdings", showarrow=False, font={"size": 20})
        fig.update_layout(
            title_text=title,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig

    def _write(self, fig: go.Figure) -> str:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(str(self.output_path), include_plotlyjs="cdn")
        logger.info("Chart written to %s", self.output_path)
        return str(self.output_path)

    def render(self, records: Sequence[DisplayRecord], title: str) -> str:
        return self._write(self.build_figure(records, title))

    def render_empty(self, title: str) -> str:
        return self._write(self.build_empty_figure(title))
