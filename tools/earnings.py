"""Earnings calendar tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from tools._helpers import _add_days, _as_list, _today
from tools.normalizers import normalize_earnings

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from finnhub_client import FinnhubClient
    from tools.dispatcher import ToolDispatcher
    from tools.schemas import EarningsCalendarArgs

NAME = "calendar.earnings"
DEFAULT_WINDOW_DAYS = 7


async def get_earnings_calendar(client: FinnhubClient, args: EarningsCalendarArgs) -> dict:
    """Fetch and normalize earnings announcements.

    ``from`` defaults to today and ``to`` to seven calendar days after ``from``.
    """
    from_date = args.from_date or _today()
    to_date = args.to_date or _add_days(from_date, DEFAULT_WINDOW_DAYS)

    params = {"from": from_date, "to": to_date}
    if args.symbol:
        params["symbol"] = args.symbol.upper().strip()

    data = await client.get("/calendar/earnings", params=params)

    entries = _as_list(data, list_key="earningsCalendar")
    normalized = [normalize_earnings(e) for e in entries if isinstance(e, dict)]

    return {
        "data": normalized,
        "count": len(normalized),
        "dateRange": {"from": from_date, "to": to_date},
    }


def register(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    @mcp.tool(
        name=f"finnhub.{NAME}",
        annotations={
            "title": "Earnings Calendar",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def earnings_calendar(
        from_date: Annotated[
            str | None,
            Field(alias="from", description="Start date in YYYY-MM-DD format (defaults to today)"),
        ] = None,
        to_date: Annotated[
            str | None,
            Field(alias="to", description="End date in YYYY-MM-DD format (defaults to 7 days from start)"),
        ] = None,
        symbol: str | None = None,
    ) -> dict:
        """Get earnings calendar for a specific date range.

        Returns earnings announcements with EPS and revenue estimates, actuals,
        and surprise figures.

        Args:
            from: Start date in YYYY-MM-DD format (defaults to today)
            to: End date in YYYY-MM-DD format (defaults to 7 days from start)
            symbol: Optional stock symbol to filter by (e.g. "AAPL")
        """
        return await dispatcher.call(NAME, {"from": from_date, "to": to_date, "symbol": symbol})
