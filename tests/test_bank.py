from __future__ import annotations

from types import SimpleNamespace

import pytest

from egp_rates.exceptions import ResponseError, UnrecognizedCurrency
from egp_rates.ingestion import bank as bank_module
from egp_rates.ingestion.bank import DEFAULT_USER_AGENT, Bank, HTMLTableBank, fetch
from egp_rates.ingestion.models import CurrencyCode

RATES_HTML = """
<table class="rates">
    <tr><th>Currency</th><th>Code</th><th>Buy</th><th>Sell</th></tr>
    <tr><td>US Dollar</td><td>USD</td><td>47.55</td><td>47.65</td></tr>
    <tr><td colspan="4">Gulf currencies</td></tr>
    <tr><td>Saudi Riyal</td><td>SAR</td><td>12.63</td><td>12.70</td></tr>
</table>
"""


def _response(status_code: int, *, location: str | None = None, text: str = ""):
    headers = {"location": location} if location else {}
    return SimpleNamespace(
        status_code=status_code,
        headers=headers,
        is_redirect=location is not None and status_code in {301, 302, 303, 307, 308},
        text=text,
    )


class _DummySession:
    def __init__(self, responses: dict[str, SimpleNamespace]) -> None:
        self.responses = responses
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        return self.responses[url]


def test_fetch_returns_successful_response() -> None:
    session = _DummySession({"https://bank.example/rates": _response(200, text="ok")})

    response = fetch("https://bank.example/rates", session=session, timeout=5)

    assert response.text == "ok"
    assert session.calls == [
        ("https://bank.example/rates", {"timeout": 5, "allow_redirects": False})
    ]
    assert session.headers["User-Agent"] == DEFAULT_USER_AGENT


def test_fetch_follows_one_relative_redirect() -> None:
    session = _DummySession(
        {
            "https://bank.example/old": _response(302, location="/rates"),
            "https://bank.example/rates": _response(200, text="moved"),
        }
    )

    response = fetch("https://bank.example/old", session=session)

    assert response.text == "moved"
    assert [url for url, _ in session.calls] == [
        "https://bank.example/old",
        "https://bank.example/rates",
    ]


def test_fetch_does_not_follow_second_redirect() -> None:
    session = _DummySession(
        {
            "https://bank.example/a": _response(301, location="https://bank.example/b"),
            "https://bank.example/b": _response(301, location="https://bank.example/c"),
        }
    )

    with pytest.raises(ResponseError) as excinfo:
        fetch("https://bank.example/a", session=session)

    assert excinfo.value.status_code == 301
    assert excinfo.value.url == "https://bank.example/b"
    assert len(session.calls) == 2


@pytest.mark.parametrize("status", [404, 500, 503])
def test_fetch_raises_on_error_status(status: int) -> None:
    session = _DummySession({"https://bank.example/rates": _response(status)})

    with pytest.raises(ResponseError) as excinfo:
        fetch("https://bank.example/rates", session=session)

    assert excinfo.value.status_code == status
    assert str(status) in str(excinfo.value)


def test_fetch_keeps_caller_user_agent() -> None:
    session = _DummySession({"https://bank.example/rates": _response(200)})
    session.headers["User-Agent"] = "custom"

    fetch("https://bank.example/rates", session=session)

    assert session.headers["User-Agent"] == "custom"


class _StaticBank(Bank):
    sym = "STATIC"
    uri = "https://static.example/rates"

    def __init__(self, rows, **kwargs) -> None:
        super().__init__(**kwargs)
        self.rows = rows

    def raw_exchange_rates(self):
        return self.rows


def test_bank_exchange_rates_builds_table() -> None:
    bank = _StaticBank([["Euro", "51.20", "51.60"], ["British Pound", "60.10", "60.55"]])

    table = bank.exchange_rates()

    assert table.sell == {CurrencyCode.EUR: 51.60, CurrencyCode.GBP: 60.55}
    assert table.buy == {CurrencyCode.EUR: 51.20, CurrencyCode.GBP: 60.10}


def test_bank_exchange_rates_propagates_unknown_currency() -> None:
    bank = _StaticBank([["Euro", "51.20", "51.60"], ["Mystery Coin", "1", "1"]])

    with pytest.raises(UnrecognizedCurrency):
        bank.exchange_rates()


def test_bank_requires_uri() -> None:
    class _NoUriBank(Bank):
        def raw_exchange_rates(self):
            return []

    with pytest.raises(ValueError):
        _NoUriBank()
    assert _NoUriBank(uri="https://x.example").uri == "https://x.example"


def test_html_table_bank_reorders_columns() -> None:
    session = _DummySession({"https://bank.example/rates": _response(200, text=RATES_HTML)})
    bank = HTMLTableBank(
        uri="https://bank.example/rates",
        table_selector="table.rates",
        columns=(0, 2, 3),
        session=session,
    )

    assert bank.raw_exchange_rates() == [
        ["US Dollar", "47.55", "47.65"],
        ["Saudi Riyal", "12.63", "12.70"],
    ]
    table = bank.exchange_rates()
    assert table.as_dict() == {
        "sell": {"USD": 47.65, "SAR": 12.70},
        "buy": {"USD": 47.55, "SAR": 12.63},
    }


def test_html_table_bank_surfaces_http_errors() -> None:
    session = _DummySession({"https://bank.example/rates": _response(403)})
    bank = HTMLTableBank(uri="https://bank.example/rates", session=session)

    with pytest.raises(ResponseError):
        bank.exchange_rates()


def test_html_table_bank_validates_columns() -> None:
    with pytest.raises(ValueError):
        HTMLTableBank(uri="https://bank.example/rates", columns=(0, 1))


class _ClosingSession(_DummySession):
    def __init__(self, responses: dict[str, SimpleNamespace]) -> None:
        super().__init__(responses)
        self.closed = False

    def __enter__(self) -> "_ClosingSession":
        return self

    def __exit__(self, *_exc) -> None:
        self.closed = True


def test_fetch_closes_session_it_creates(monkeypatch) -> None:
    created: list[_ClosingSession] = []

    def _session_factory() -> _ClosingSession:
        session = _ClosingSession({"https://bank.example/rates": _response(200, text="ok")})
        created.append(session)
        return session

    monkeypatch.setattr(bank_module.requests, "Session", _session_factory)

    response = fetch("https://bank.example/rates")

    assert response.text == "ok"
    assert len(created) == 1
    assert created[0].closed


def test_fetch_closes_own_session_on_error(monkeypatch) -> None:
    created: list[_ClosingSession] = []

    def _session_factory() -> _ClosingSession:
        session = _ClosingSession({"https://bank.example/rates": _response(500)})
        created.append(session)
        return session

    monkeypatch.setattr(bank_module.requests, "Session", _session_factory)

    with pytest.raises(ResponseError):
        fetch("https://bank.example/rates")
    assert created[0].closed


def test_fetch_leaves_caller_session_open() -> None:
    session = _ClosingSession({"https://bank.example/rates": _response(200)})

    fetch("https://bank.example/rates", session=session)

    assert not session.closed
