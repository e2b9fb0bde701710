"""Real-time quote tool."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from tools._helpers import _as_dict
from tools.normalizers import normalize_quote, quote_has_data

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from finnhub_client import FinnhubClient
    from tools.dispatcher import ToolDispatcher
    from tools.schemas import QuoteArgs

NAME = "quote"


async def get_quotes(client: FinnhubClient, args: QuoteArgs) -> dict:
    """One /quote request per symbol, issued concurrently.

    Results keep the requested order. Symbols Finnhub answers with an all-zero
    quote are dropped. The first failed request cancels the others and fails
    the whole call.
    """
    symbols = [s.upper().strip() for s in args.symbols]

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(client.get("/quote", params={"symbol": symbol})) for symbol in symbols]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None

    quotes = []
    for symbol, task in zip(symbols, tasks):
        raw = _as_dict(task.result())
        if quote_has_data(raw):
            quotes.append(normalize_quote(symbol, raw))

    return {"quotes": quotes}


def register(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    @mcp.tool(
        name=f"finnhub.{NAME}",
        annotations={
            "title": "Stock Quotes",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def quote(symbols: list[str]) -> dict:
        """Get real-time quote data for multiple stock symbols.

        Returns current price, daily change, day range, open, and previous
        close. Symbols without data are omitted.

        Args:
            symbols: Stock symbols, 1 to 50 (e.g. ["AAPL", "GOOGL", "MSFT"])
        """
        return await dispatcher.call(NAME, {"symbols": symbols})
