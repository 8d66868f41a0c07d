"""Service modules"""
from .portfolio import PortfolioService, fan_out

__all__ = ["PortfolioService", "fan_out"]
