"""Solana portfolio breakdown across addresses."""

__version__ = "0.1.0"
