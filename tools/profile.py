"""Company profile tool."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tools.normalizers import normalize_profile

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from finnhub_client import FinnhubClient
    from tools.dispatcher import ToolDispatcher
    from tools.schemas import StockProfileArgs

NAME = "stock.profile"


async def get_stock_profile(client: FinnhubClient, args: StockProfileArgs) -> dict:
    data = await client.get("/stock/profile2", params={"symbol": args.symbol.upper().strip()})
    return {"profile": normalize_profile(data)}


def register(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    @mcp.tool(
        name=f"finnhub.{NAME}",
        annotations={
            "title": "Company Profile",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def stock_profile(symbol: str) -> dict:
        """Get company profile and fundamentals for a stock symbol.

        Returns name, industry, weburl, logo, market cap, and shares
        outstanding. profile is null when Finnhub has no data for the symbol.

        Args:
            symbol: Stock ticker symbol (e.g. "AAPL")
        """
        return await dispatcher.call(NAME, {"symbol": symbol})
