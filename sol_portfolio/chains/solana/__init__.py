"""Solana chain client."""
from .client import HeliusClient

__all__ = ["HeliusClient"]
