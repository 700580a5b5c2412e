"""Bank clients that download a rates page and hand rows to the parser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

import requests

from egp_rates.exceptions import ResponseError
from egp_rates.ingestion.html_table import extract_table_rows
from egp_rates.ingestion.models import RateTable, RawRow
from egp_rates.ingestion.rate_table import build_rate_table
from egp_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "egp-rates/0.1 (+https://pypi.org/project/egp-rates/)"


def _raise_for_status(response: requests.Response, url: str) -> None:
    if not 200 <= response.status_code < 300:
        raise ResponseError(response.status_code, url)


def fetch(
    uri: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> requests.Response:
    """GET ``uri`` following at most one redirect.

    Raises :class:`ResponseError` when the final response is not a 2xx. A
    session created here is closed before returning; a caller's ``session``
    is left open.
    """

    if session is None:
        with requests.Session() as own_session:
            return _get_following_one_redirect(own_session, uri, timeout)
    return _get_following_one_redirect(session, uri, timeout)


def _get_following_one_redirect(
    sess: requests.Session, uri: str, timeout: int
) -> requests.Response:
    sess.headers.setdefault("User-Agent", DEFAULT_USER_AGENT)
    response = sess.get(uri, timeout=timeout, allow_redirects=False)
    if response.is_redirect:
        location = requests.compat.urljoin(uri, response.headers["location"])
        LOGGER.debug("Following redirect from %s to %s", uri, location)
        uri = location
        response = sess.get(uri, timeout=timeout, allow_redirects=False)
    _raise_for_status(response, uri)
    LOGGER.info("Fetched rates page from %s", uri)
    return response


class Bank(ABC):
    """A bank publishing buy/sell rates on a web page.

    Subclasses implement :meth:`raw_exchange_rates` and return rows shaped
    ``[currency_label, buy_rate, sell_rate, ...]``.
    """

    sym: str = ""
    uri: str = ""

    def __init__(
        self,
        *,
        uri: str | None = None,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        if uri is not None:
            self.uri = uri
        if not self.uri:
            raise ValueError(f"{type(self).__name__} requires a uri")
        self.session = session
        self.timeout = timeout

    @abstractmethod
    def raw_exchange_rates(self) -> Iterable[RawRow]:
        """Return the scraped rows of the bank's rates page."""

    def exchange_rates(self) -> RateTable:
        """Return the bank's sell and buy rates keyed by ISO currency code."""

        return build_rate_table(self.raw_exchange_rates())

    def _response(self) -> requests.Response:
        return fetch(self.uri, session=self.session, timeout=self.timeout)


class HTMLTableBank(Bank):
    """Bank whose rates page lists one currency per ``<tr>`` of a table.

    ``columns`` gives the positions of the label, buy and sell cells, which
    lets pages with extra leading columns (flags, codes) reuse this class.
    Rows with too few cells, such as section captions, are skipped.
    """

    table_selector: str = "table"
    columns: Sequence[int] = (0, 1, 2)

    def __init__(
        self,
        *,
        uri: str | None = None,
        table_selector: str | None = None,
        columns: Sequence[int] | None = None,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(uri=uri, session=session, timeout=timeout)
        if table_selector is not None:
            self.table_selector = table_selector
        if columns is not None:
            self.columns = tuple(columns)
        if len(self.columns) != 3:
            raise ValueError("columns must list the label, buy and sell positions")

    def raw_exchange_rates(self) -> list[list[str]]:
        html = self._response().text
        rows: list[list[str]] = []
        for cells in extract_table_rows(html, self.table_selector):
            if len(cells) <= max(self.columns):
                continue
            rows.append([cells[index] for index in self.columns])
        return rows


__all__ = ["DEFAULT_TIMEOUT", "DEFAULT_USER_AGENT", "Bank", "HTMLTableBank", "fetch"]
