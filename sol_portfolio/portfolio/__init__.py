"""Aggregation and display pipeline."""
from .aggregator import aggregate
from .display import make_displayable
from .normalizer import normalize

__all__ = ["aggregate", "make_displayable", "normalize"]
