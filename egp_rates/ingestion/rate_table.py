"""Turn raw scraped rows into a :class:`RateTable`."""

from __future__ import annotations

import re
from typing import Iterable

from egp_rates.exceptions import UnrecognizedCurrency
from egp_rates.ingestion.models import CurrencyCode, RateTable, RateTableResult, RawRow
from egp_rates.ingestion.symbols import resolve_currency_symbol
from egp_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

LABEL_FIELD = 0
BUY_FIELD = 1
SELL_FIELD = 2

_NUMBER_PREFIX = re.compile(
    r"""
    [+-]?
    (?:
        \d+(?:_\d+)*(?:\.\d+(?:_\d+)*)?   # 12, 1_000, 12.5
        |\.\d+(?:_\d+)*                   # .5
    )
    (?:[eE][+-]?\d+(?:_\d+)*)?
    """,
    re.VERBOSE,
)


def _parse_float(value: object | None) -> float:
    """Parse the leading number of ``value``; anything unparseable becomes ``0.0``."""

    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_PREFIX.match(str(value).lstrip())
    if not match:
        return 0.0
    return float(match.group(0).replace("_", ""))


def _field(row: RawRow, index: int) -> object | None:
    return row[index] if len(row) > index else None


def build_rate_table(rows: Iterable[RawRow]) -> RateTable:
    """Parse scraped rows of ``[label, buy, sell, ...]`` into sell/buy mappings.

    Later rows overwrite earlier ones for the same currency. A single label
    that cannot be resolved aborts the whole table with
    :class:`UnrecognizedCurrency`.
    """

    sell: dict[CurrencyCode, float] = {}
    buy: dict[CurrencyCode, float] = {}
    count = 0
    for row in rows:
        if not row:
            raise UnrecognizedCurrency(None)
        sell_rate = _parse_float(_field(row, SELL_FIELD))
        buy_rate = _parse_float(_field(row, BUY_FIELD))
        currency = resolve_currency_symbol(row[LABEL_FIELD])

        sell[currency] = sell_rate
        buy[currency] = buy_rate
        count += 1
    LOGGER.debug("Parsed %s rows into %s currencies", count, len(sell))
    return RateTable(sell=sell, buy=buy)


def try_build_rate_table(rows: Iterable[RawRow]) -> RateTableResult:
    """Like :func:`build_rate_table` but return the outcome instead of raising."""

    try:
        return RateTableResult(table=build_rate_table(rows))
    except UnrecognizedCurrency as exc:
        return RateTableResult(error=exc)


__all__ = ["build_rate_table", "try_build_rate_table"]
