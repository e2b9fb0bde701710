"""Company news tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from tools._helpers import _as_list
from tools.normalizers import normalize_news

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from finnhub_client import FinnhubClient
    from tools.dispatcher import ToolDispatcher
    from tools.schemas import NewsArgs

NAME = "news"


async def get_company_news(client: FinnhubClient, args: NewsArgs) -> dict:
    data = await client.get(
        "/company-news",
        params={
            "symbol": args.symbol.upper().strip(),
            "from": args.from_date,
            "to": args.to_date,
        },
    )

    articles = [normalize_news(n) for n in _as_list(data) if isinstance(n, dict)]
    return {"news": articles, "count": len(articles)}


def register(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    @mcp.tool(
        name=f"finnhub.{NAME}",
        annotations={
            "title": "Company News",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def company_news(
        symbol: str,
        from_date: Annotated[str, Field(alias="from", description="Start date in YYYY-MM-DD format")],
        to_date: Annotated[str, Field(alias="to", description="End date in YYYY-MM-DD format")],
    ) -> dict:
        """Get company news for a stock symbol within a date range.

        Returns news articles with headlines, summaries, and URLs.

        Args:
            symbol: Stock ticker symbol (e.g. "AAPL")
            from: Start date in YYYY-MM-DD format
            to: End date in YYYY-MM-DD format
        """
        return await dispatcher.call(NAME, {"symbol": symbol, "from": from_date, "to": to_date})
