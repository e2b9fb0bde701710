"""Shared helpers for the Finnhub tool modules."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone
from typing import Any


def _to_date(value: Any) -> date | None:
    """Coerce date-like values (date/datetime/ISO string) to date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value_str = str(value)
    if "T" in value_str:
        value_str = value_str.split("T", 1)[0]
    else:
        value_str = value_str.split(" ", 1)[0]
    try:
        return date.fromisoformat(value_str)
    except ValueError:
        return None


def _today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def _add_days(value: str, days: int) -> str:
    """Calendar-add ``days`` to a YYYY-MM-DD string."""
    start = _to_date(value)
    if start is None:
        raise ValueError(f"Invalid date '{value}'. Expected YYYY-MM-DD.")
    return (start + timedelta(days=days)).isoformat()


def _first_present(raw: dict, keys: Iterable[str], default: Any = None) -> Any:
    """Return the first value under ``keys`` that is neither None nor empty."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return default


def _num_or_none(value: Any) -> float | int | None:
    """Pass numbers through, map everything else (None, strings, bools) to None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _as_list(value: Any, *, list_key: str | None = None) -> list:
    """Normalize a raw payload into a list of records."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        if list_key is not None:
            nested = value.get(list_key)
            return nested if isinstance(nested, list) else []
        return [value]
    return []


def _as_dict(value: Any) -> dict:
    """Normalize a raw payload into a dict."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return value[0] if value and isinstance(value[0], dict) else {}
    return {}
