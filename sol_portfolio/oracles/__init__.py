"""Price oracles."""
from .birdeye import BirdeyeOracle

__all__ = ["BirdeyeOracle"]
