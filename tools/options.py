"""Options chain tool.

One Finnhub endpoint, two output shapes: with an expiration date the tool
returns that date's contracts; without one it returns a summary per
available expiration so callers can discover dates first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from tools._helpers import _as_list
from tools.normalizers import flatten_option_bucket, summarize_expiration

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from finnhub_client import FinnhubClient
    from tools.dispatcher import ToolDispatcher
    from tools.schemas import OptionsChainArgs

NAME = "options.chain"

ENDPOINT = "/stock/option-chain"


def _buckets(data) -> list[dict]:
    return [b for b in _as_list(data, list_key="data") if isinstance(b, dict)]


async def get_options_chain(client: FinnhubClient, symbol: str, expiration_date: str) -> dict:
    """Contracts for one expiration, calls and puts flattened into a single list."""
    data = await client.get(
        ENDPOINT,
        params={"symbol": symbol.upper().strip(), "expiration": expiration_date},
    )

    options = []
    for bucket in _buckets(data):
        bucket_date = bucket.get("expirationDate")
        if bucket_date and bucket_date != expiration_date:
            continue
        options.extend(flatten_option_bucket(bucket))

    return {"chain": {"options": options, "expirationDate": expiration_date}}


async def get_available_expirations(client: FinnhubClient, symbol: str) -> dict:
    """Summary metadata for every expiration Finnhub lists for ``symbol``."""
    data = await client.get(ENDPOINT, params={"symbol": symbol.upper().strip()})

    expirations = [summarize_expiration(b) for b in _buckets(data)]
    return {
        "availableExpirationDates": expirations,
        "totalExpirations": len(expirations),
    }


async def options_chain(client: FinnhubClient, args: OptionsChainArgs) -> dict:
    if args.expiration_date:
        return await get_options_chain(client, args.symbol, args.expiration_date)
    return await get_available_expirations(client, args.symbol)


def register(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    @mcp.tool(
        name=f"finnhub.{NAME}",
        annotations={
            "title": "Options Chain",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def options_chain_tool(
        symbol: str,
        expiration_date: Annotated[
            str | None,
            Field(alias="expirationDate", description="Expiration date in YYYY-MM-DD format"),
        ] = None,
    ) -> dict:
        """Get options chain for a stock symbol.

        If expirationDate is provided, returns full option contracts (strikes,
        bid/ask, Greeks) for that date. If expirationDate is omitted, returns the
        list of all available expiration dates with summary metadata (volume,
        open interest, contract counts). Use without expirationDate first to
        discover available dates, then call again with a specific date.

        Args:
            symbol: Stock ticker symbol (e.g. "AAPL")
            expirationDate: Optional expiration date in YYYY-MM-DD format
        """
        return await dispatcher.call(NAME, {"symbol": symbol, "expirationDate": expiration_date})
