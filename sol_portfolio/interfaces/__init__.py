"""Protocol interfaces for the portfolio pipeline."""
from .chain import AssetSource
from .chart_sink import ChartSink
from .price_oracle import SpotPriceOracle

__all__ = ["AssetSource", "ChartSink", "SpotPriceOracle"]
