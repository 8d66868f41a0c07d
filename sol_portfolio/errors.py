"""Exceptions raised across the portfolio pipeline."""
from __future__ import annotations


class FetchError(RuntimeError):
    """A remote call (RPC or price API) failed. Aborts the whole submission."""


class ValidationError(ValueError):
    """A submission was rejected before any network call was made."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
