"""Shared test fixtures."""

from __future__ import annotations

import pytest
import respx

from finnhub_client import FinnhubClient
from tools.dispatcher import ToolDispatcher

BASE = "https://finnhub.io/api/v1"


@pytest.fixture
def finnhub_client():
    """Create a FinnhubClient with a test API key."""
    return FinnhubClient(api_key="test_key")


@pytest.fixture
def dispatcher(finnhub_client):
    return ToolDispatcher(finnhub_client)


@pytest.fixture
def mock_api():
    """Start respx mock for Finnhub API calls. Unmatched requests raise."""
    with respx.mock(assert_all_called=False) as api:
        yield api


# --- Sample response data ---

EARNINGS_CALENDAR = {
    "earningsCalendar": [
        {
            "date": "2024-01-30",
            "epsActual": 2.18,
            "epsEstimate": 2.1,
            "hour": "amc",
            "quarter": 1,
            "revenueActual": 119575000000,
            "revenueEstimate": 117910000000,
            "symbol": "AAPL",
            "year": 2024,
        },
        {
            "date": "2024-02-01",
            "epsActual": None,
            "epsEstimate": 0,
            "hour": "",
            "quarter": 4,
            "revenueActual": None,
            "revenueEstimate": None,
            "symbol": "ZERO",
            "year": 2023,
        },
    ]
}

AAPL_QUOTE = {
    "c": 189.84,
    "d": 2.34,
    "dp": 1.248,
    "h": 190.5,
    "l": 188.5,
    "o": 188.9,
    "pc": 187.5,
    "t": 1706644800,
}

MSFT_QUOTE = {
    "c": 402.56,
    "d": None,
    "dp": None,
    "h": 404.0,
    "l": 399.1,
    "o": 400.0,
    "pc": 400.0,
    "t": 1706644800,
}

EMPTY_QUOTE = {"c": 0, "d": None, "dp": None, "h": 0, "l": 0, "o": 0, "pc": 0, "t": 0}

AAPL_NEWS = [
    {
        "category": "company",
        "datetime": 1706644800,
        "headine": "Apple beats first-quarter estimates",
        "id": 125823001,
        "image": "https://example.com/apple.jpg",
        "related": "AAPL",
        "source": "Reuters",
        "summary": "Apple reported revenue of $119.6 billion.",
        "url": "https://example.com/apple-q1",
    },
    {
        "category": "company",
        "datetime": 1706558400,
        "headline": "Apple Vision Pro pre-orders open",
        "id": 125823002,
        "image": "",
        "related": "AAPL",
        "source": "Bloomberg",
        "summary": "",
        "url": "https://example.com/vision-pro",
    },
]

AAPL_PROFILE = {
    "country": "US",
    "currency": "USD",
    "exchange": "NASDAQ NMS - GLOBAL MARKET",
    "finnhubIndustry": "Technology",
    "industry": "Consumer Electronics",
    "ipo": "1980-12-12",
    "logo": "https://static.finnhub.io/logo/87cb30d8-80df-11ea-8951-00000000092a.png",
    "marketCapitalization": 2950000,
    "name": "Apple Inc",
    "phone": "14089961010",
    "shareOutstanding": 15441.88,
    "ticker": "AAPL",
    "weburl": "https://www.apple.com/",
}


def _contract(name: str, strike: float, **overrides) -> dict:
    contract = {
        "contractName": name,
        "contractSize": "REGULAR",
        "currency": "USD",
        "expirationDate": "2024-02-16",
        "strike": strike,
        "lastPrice": 4.1,
        "bid": 4.0,
        "ask": 4.2,
        "change": 0.3,
        "changePercent": 7.89,
        "volume": 1200,
        "openInterest": 15000,
        "impliedVolatility": 24.5,
        "inTheMoney": "TRUE",
        "delta": 0.55,
        "gamma": 0.04,
        "theta": -0.12,
        "vega": 0.18,
        "rho": 0.02,
    }
    contract.update(overrides)
    return contract


OPTION_CHAIN = {
    "code": "AAPL",
    "exchange": "US",
    "lastTradeDate": "2024-02-02",
    "lastTradePrice": 185.85,
    "data": [
        {
            "expirationDate": "2024-02-16",
            "impliedVolatility": 21.7,
            "putVolume": 52000,
            "callVolume": 98000,
            "putCallVolumeRatio": 0.53,
            "putOpenInterest": 310000,
            "callOpenInterest": 420000,
            "putCallOpenInterestRatio": 0.74,
            "options": {
                "CALL": [
                    _contract("AAPL240216C00180000", 180.0),
                    _contract("AAPL240216C00185000", 185.0, bid=0, ask=0),
                ],
                "PUT": [
                    _contract("AAPL240216P00180000", 180.0, inTheMoney="FALSE", delta=-0.3, gamma=None),
                    _contract("AAPL240216P00185000", 185.0, inTheMoney="FALSE", delta=-0.48),
                    _contract("AAPL240216P00190000", 190.0, vega=None),
                ],
            },
        },
        {
            "expirationDate": "2024-02-23",
            "impliedVolatility": 22.9,
            "putVolume": 12000,
            "callVolume": 31000,
            "putCallVolumeRatio": 0.39,
            "putOpenInterest": 95000,
            "callOpenInterest": 140000,
            "putCallOpenInterestRatio": 0.68,
            "optionsCount": 40,
            "options": {
                "CALL": [
                    _contract("AAPL240223C00180000", 180.0, expirationDate="2024-02-23"),
                    _contract("AAPL240223C00185000", 185.0, expirationDate="2024-02-23"),
                ],
                "PUT": [
                    _contract("AAPL240223P00180000", 180.0, expirationDate="2024-02-23"),
                ],
            },
        },
    ],
}
