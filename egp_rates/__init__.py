"""Public interface for the egp_rates package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Any

from egp_rates.exceptions import EGPRatesError, ResponseError, UnrecognizedCurrency
from egp_rates.ingestion.models import (
    CurrencyCode,
    RateTable,
    RateTableResult,
    RawRow,
    SymbolResult,
)
from egp_rates.ingestion.rate_table import build_rate_table, try_build_rate_table
from egp_rates.ingestion.symbols import resolve_currency_symbol, try_resolve_currency_symbol

__all__ = [
    "__version__",
    "Bank",
    "CurrencyCode",
    "EGPRatesError",
    "HTMLTableBank",
    "RateTable",
    "RateTableResult",
    "RawRow",
    "ResponseError",
    "SymbolResult",
    "UnrecognizedCurrency",
    "build_rate_table",
    "extract_table_rows",
    "fetch",
    "resolve_currency_symbol",
    "try_build_rate_table",
    "try_resolve_currency_symbol",
]

try:
    __version__ = importlib_metadata.version("egp-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def __getattr__(name: str) -> Any:
    """Lazily import the bank clients so parsing works without the network stack."""

    if name in {"Bank", "HTMLTableBank", "fetch"}:
        from egp_rates.ingestion import bank as _bank

        return getattr(_bank, name)
    if name == "extract_table_rows":
        from egp_rates.ingestion.html_table import extract_table_rows as _extract

        return _extract
    raise AttributeError(f"module 'egp_rates' has no attribute {name}")
