"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Sequence

from egp_rates.exceptions import UnrecognizedCurrency

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    import pandas as pd

# One scraped table row: ``[label, buy_rate, sell_rate, *ignored]``.
RawRow = Sequence[Any]


class CurrencyCode(str, Enum):
    """ISO codes of the currencies quoted by the supported banks."""

    AED = "AED"
    AUD = "AUD"
    BHD = "BHD"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    JOD = "JOD"
    JPY = "JPY"
    KWD = "KWD"
    NOK = "NOK"
    OMR = "OMR"
    QAR = "QAR"
    SAR = "SAR"
    SEK = "SEK"
    USD = "USD"

    def __str__(self) -> str:
        return self.value


def _frozen(mapping: Mapping[CurrencyCode, float] | None = None) -> Mapping[CurrencyCode, float]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class RateTable:
    """Sell and buy rates of a single bank keyed by ISO currency code.

    Tables compare by value but are unhashable, since the rates live in
    mappings. A table is always truthy, even when it holds no currencies.
    """

    sell: Mapping[CurrencyCode, float] = field(default_factory=_frozen)
    buy: Mapping[CurrencyCode, float] = field(default_factory=_frozen)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # Copy into read-only views so callers cannot mutate the table later.
        object.__setattr__(self, "sell", _frozen(self.sell))
        object.__setattr__(self, "buy", _frozen(self.buy))

    @property
    def currencies(self) -> tuple[CurrencyCode, ...]:
        """Resolved currency codes in the order they were first seen."""

        return tuple(self.sell)

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        """Return ``{"sell": {...}, "buy": {...}}`` with plain string keys."""

        return {
            "sell": {code.value: rate for code, rate in self.sell.items()},
            "buy": {code.value: rate for code, rate in self.buy.items()},
        }

    def to_frame(self) -> "pd.DataFrame":
        """Return a ``DataFrame`` indexed by ISO code with buy/sell columns."""

        import pandas as pd

        codes = [code.value for code in self.currencies]
        frame = pd.DataFrame(
            {
                "buy": [self.buy[code] for code in self.currencies],
                "sell": [self.sell[code] for code in self.currencies],
            },
            index=pd.Index(codes, name="currency"),
            dtype=float,
        )
        return frame


def _require_one_outcome(result: Any, success_field: str) -> None:
    has_value = getattr(result, success_field) is not None
    has_error = result.error is not None
    if has_value == has_error:
        raise ValueError(
            f"{type(result).__name__} needs exactly one of {success_field!r} or 'error'"
        )


@dataclass(frozen=True, slots=True)
class SymbolResult:
    """Outcome of resolving a label without raising."""

    value: CurrencyCode | None = None
    error: UnrecognizedCurrency | None = None

    def __post_init__(self) -> None:
        _require_one_outcome(self, "value")

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class RateTableResult:
    """Outcome of building a rate table without raising."""

    table: RateTable | None = None
    error: UnrecognizedCurrency | None = None

    def __post_init__(self) -> None:
        _require_one_outcome(self, "table")

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "CurrencyCode",
    "RateTable",
    "RateTableResult",
    "RawRow",
    "SymbolResult",
]
