"""Exception types raised by :mod:`egp_rates`."""

from __future__ import annotations


class EGPRatesError(Exception):
    """Base class for every error raised by the package."""


class UnrecognizedCurrency(EGPRatesError, ValueError):
    """Raised when a currency label matches none of the known symbols."""

    def __init__(self, label: object) -> None:
        self.label = label
        super().__init__(f"Unknown currency {label}")


class ResponseError(EGPRatesError, RuntimeError):
    """Raised when a bank page answers with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        location = f" for {url}" if url else ""
        super().__init__(f"Bank responded with HTTP {status_code}{location}")


__all__ = ["EGPRatesError", "ResponseError", "UnrecognizedCurrency"]
