"""Map free-text currency labels scraped from bank pages to ISO codes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from egp_rates.exceptions import UnrecognizedCurrency
from egp_rates.ingestion.models import CurrencyCode, SymbolResult


@dataclass(frozen=True, slots=True)
class CurrencyRule:
    """A label pattern and the ISO code it stands for."""

    pattern: re.Pattern[str]
    code: CurrencyCode

    def matches(self, label: str) -> bool:
        return self.pattern.search(label) is not None


def _rule(pattern: str, code: CurrencyCode, *, ignore_case: bool = True) -> CurrencyRule:
    flags = re.IGNORECASE if ignore_case else 0
    return CurrencyRule(pattern=re.compile(pattern, flags), code=code)


# Evaluated top to bottom and the first hit wins, so a label matching several
# patterns resolves to the earliest one. Keep the order as is.
CURRENCY_RULES: tuple[CurrencyRule, ...] = (
    _rule(r"UAE|EMIRATES|Dirham|AED", CurrencyCode.AED),
    _rule(r"Australian", CurrencyCode.AUD),
    _rule(r"Bahrain|BHD", CurrencyCode.BHD),
    _rule(r"Canadian|CANAD\. Dollar", CurrencyCode.CAD),
    _rule(r"Swiss|CHF", CurrencyCode.CHF),
    _rule(r"Chinese", CurrencyCode.CNY, ignore_case=False),
    _rule(r"Danish", CurrencyCode.DKK),
    _rule(r"Euro|EUR", CurrencyCode.EUR),
    _rule(r"British|Sterl.|GBP", CurrencyCode.GBP),
    _rule(r"Jordanian", CurrencyCode.JOD),
    _rule(r"Japanese|JPY|YEN", CurrencyCode.JPY),
    _rule(r"Kuwait", CurrencyCode.KWD),
    _rule(r"Norwegian|NORWEG\.", CurrencyCode.NOK),
    _rule(r"Omani", CurrencyCode.OMR),
    _rule(r"Qatar", CurrencyCode.QAR),
    _rule(r"SAR|Saudi", CurrencyCode.SAR),
    _rule(r"Swidish|Swedish", CurrencyCode.SEK),
    _rule(r"U(\.)?S(\.)? Dollar|USD", CurrencyCode.USD),
)


def resolve_currency_symbol(label: object) -> CurrencyCode:
    """Convert a currency label such as ``"US Dollar"`` to its ISO code.

    Matching is a substring search, so labels like ``"1 U.S. Dollar (USD)"``
    resolve as well. Raises :class:`UnrecognizedCurrency` when no rule fits.
    """

    text = label if isinstance(label, str) else str(label)
    for rule in CURRENCY_RULES:
        if rule.matches(text):
            return rule.code
    raise UnrecognizedCurrency(label)


def try_resolve_currency_symbol(label: object) -> SymbolResult:
    """Like :func:`resolve_currency_symbol` but return the outcome instead of raising."""

    try:
        return SymbolResult(value=resolve_currency_symbol(label))
    except UnrecognizedCurrency as exc:
        return SymbolResult(error=exc)


__all__ = [
    "CURRENCY_RULES",
    "CurrencyRule",
    "resolve_currency_symbol",
    "try_resolve_currency_symbol",
]
