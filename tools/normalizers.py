"""Map raw Finnhub records into the stable output shapes returned by the tools.

Every function here is pure. Raw fields may be missing or null, and fields
the functions do not know about are ignored.
"""

from __future__ import annotations

from typing import Any

from tools._helpers import _as_dict, _as_list, _first_present, _num_or_none

# Output field -> raw fields in order of preference. Finnhub has renamed a
# few profile2 fields over time; the first non-empty value wins.
PROFILE_FIELD_PREFERENCES: dict[str, tuple[str, ...]] = {
    "industry": ("finnhubIndustry", "industry"),
    "logo": ("logo", "logoUrl"),
    "ipoDate": ("ipo", "ipoDate"),
    "phone": ("phone", "phoneNumber"),
    "weburl": ("weburl", "website"),
}

# The company-news payload spells the title field "headine".
NEWS_HEADLINE_FIELDS = ("headine", "headline")

OPTION_PERCENT_CHANGE_FIELDS = ("changePercent", "percentChange")

GREEKS = ("delta", "gamma", "theta", "vega", "rho")

OPTION_SIDES = (("CALL", "call"), ("PUT", "put"))


def _surprise(actual: Any, estimate: Any) -> tuple[float | None, float | None]:
    actual = _num_or_none(actual)
    estimate = _num_or_none(estimate)
    if actual is None or estimate is None:
        return None, None
    surprise = actual - estimate
    surprise_pct = surprise / estimate * 100 if estimate != 0 else None
    return surprise, surprise_pct


def normalize_earnings(raw: dict) -> dict:
    """Normalize one /calendar/earnings entry, deriving EPS and revenue surprise."""
    eps_surprise, eps_surprise_pct = _surprise(raw.get("epsActual"), raw.get("epsEstimate"))
    rev_surprise, rev_surprise_pct = _surprise(raw.get("revenueActual"), raw.get("revenueEstimate"))
    quarter = raw.get("quarter")

    return {
        "date": raw.get("date"),
        "symbol": raw.get("symbol"),
        "quarter": f"Q{quarter}" if quarter is not None else None,
        "fiscalYear": raw.get("year"),
        "time": raw.get("hour") or "unknown",
        "eps": {
            "estimate": _num_or_none(raw.get("epsEstimate")),
            "actual": _num_or_none(raw.get("epsActual")),
            "surprise": eps_surprise,
            "surprisePercent": eps_surprise_pct,
        },
        "revenue": {
            "estimate": _num_or_none(raw.get("revenueEstimate")),
            "actual": _num_or_none(raw.get("revenueActual")),
            "surprise": rev_surprise,
            "surprisePercent": rev_surprise_pct,
        },
    }


def quote_has_data(raw: dict) -> bool:
    """Finnhub answers unknown symbols with an all-zero quote instead of an error."""
    return (raw.get("pc") or 0) != 0 or (raw.get("c") or 0) != 0


def normalize_quote(symbol: str, raw: dict) -> dict:
    return {
        "symbol": symbol,
        "currentPrice": _num_or_none(raw.get("c")),
        "change": _num_or_none(raw.get("d")) or 0,
        "percentChange": _num_or_none(raw.get("dp")) or 0,
        "high": _num_or_none(raw.get("h")),
        "low": _num_or_none(raw.get("l")),
        "open": _num_or_none(raw.get("o")),
        "previousClose": _num_or_none(raw.get("pc")),
        "timestamp": raw.get("t"),
    }


def normalize_news(raw: dict) -> dict:
    return {
        "id": raw.get("id"),
        "category": raw.get("category"),
        "datetime": raw.get("datetime"),
        "headline": _first_present(raw, NEWS_HEADLINE_FIELDS),
        "image": raw.get("image"),
        "related": raw.get("related"),
        "source": raw.get("source"),
        "summary": raw.get("summary"),
        "url": raw.get("url"),
    }


def normalize_profile(raw: Any) -> dict | None:
    """Normalize a /stock/profile2 payload.

    Finnhub returns an empty object for unknown symbols, so an empty ticker
    means "not found" and yields None rather than an error.
    """
    raw = _as_dict(raw)
    if not raw.get("ticker"):
        return None

    def pick(field: str) -> str:
        return _first_present(raw, PROFILE_FIELD_PREFERENCES[field], default="")

    return {
        "ticker": raw.get("ticker") or "",
        "name": raw.get("name") or "",
        "country": raw.get("country") or "",
        "currency": raw.get("currency") or "",
        "exchange": raw.get("exchange") or "",
        "industry": pick("industry"),
        "ipoDate": pick("ipoDate"),
        "logo": pick("logo"),
        "marketCapitalization": _num_or_none(raw.get("marketCapitalization")) or 0,
        "shareOutstanding": _num_or_none(raw.get("shareOutstanding")) or 0,
        "phone": pick("phone"),
        "weburl": pick("weburl"),
    }


def _in_the_money(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.upper() in ("TRUE", "FALSE"):
        return value.upper() == "TRUE"
    return None


def normalize_option(raw: dict, option_type: str) -> dict:
    """Normalize one contract. ``option_type`` comes from the CALL/PUT bucket it sat in."""
    contract = {
        "contractName": raw.get("contractName"),
        "type": option_type,
        "strike": _num_or_none(raw.get("strike")),
        "expirationDate": raw.get("expirationDate"),
        "lastPrice": _num_or_none(raw.get("lastPrice")),
        # zero bid/ask means no quote
        "bid": raw.get("bid") or None,
        "ask": raw.get("ask") or None,
        "change": _num_or_none(raw.get("change")),
        "percentChange": _num_or_none(_first_present(raw, OPTION_PERCENT_CHANGE_FIELDS)),
        "volume": _num_or_none(raw.get("volume")),
        "openInterest": _num_or_none(raw.get("openInterest")),
        "impliedVolatility": _num_or_none(raw.get("impliedVolatility")),
        "inTheMoney": _in_the_money(raw.get("inTheMoney")),
    }
    for greek in GREEKS:
        contract[greek] = _num_or_none(raw.get(greek))
    return contract


def flatten_option_bucket(bucket: dict) -> list[dict]:
    """All contracts of one expiration bucket, calls first, each tagged with its side."""
    options = _as_dict(bucket.get("options"))
    return [
        normalize_option(contract, option_type)
        for raw_side, option_type in OPTION_SIDES
        for contract in _as_list(options.get(raw_side))
        if isinstance(contract, dict)
    ]


def summarize_expiration(bucket: dict) -> dict:
    """Reduce one expiration bucket to its aggregate metadata."""
    options = _as_dict(bucket.get("options"))
    call_count = len(_as_list(options.get("CALL")))
    put_count = len(_as_list(options.get("PUT")))

    def agg(field: str) -> float | int:
        return _num_or_none(bucket.get(field)) or 0

    options_count = _num_or_none(bucket.get("optionsCount"))
    return {
        "expirationDate": bucket.get("expirationDate"),
        "impliedVolatility": agg("impliedVolatility"),
        "callVolume": agg("callVolume"),
        "putVolume": agg("putVolume"),
        "putCallVolumeRatio": agg("putCallVolumeRatio"),
        "callOpenInterest": agg("callOpenInterest"),
        "putOpenInterest": agg("putOpenInterest"),
        "putCallOpenInterestRatio": agg("putCallOpenInterestRatio"),
        "callCount": call_count,
        "putCount": put_count,
        "optionsCount": options_count if options_count is not None else call_count + put_count,
    }
