"""Finnhub MCP - earnings, quotes, news, profiles and options chains over MCP."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from pydantic import ValidationError

from finnhub_client import FinnhubClient
from tools import earnings, news, options, profile, quotes
from tools.dispatcher import TOOL_NAMES, TOOL_PREFIX, ToolDispatcher
from tools.schemas import validate_arguments

logger = logging.getLogger("finnhub_mcp")

API_KEY_ENV = "FINNHUB_API_KEY"
BASE_URL_ENV = "FINNHUB_BASE_URL"
LOG_LEVEL_ENV = "FINNHUB_LOG_LEVEL"

INSTRUCTIONS = (
    "Financial market data from Finnhub. Tools: finnhub.calendar.earnings, finnhub.quote, "
    "finnhub.news, finnhub.stock.profile, finnhub.options.chain. For options, call once "
    "without expirationDate to list available dates, then again with one of them."
)


class EnvelopeMiddleware(Middleware):
    """Answers tool calls the typed tool functions cannot take with the dispatcher's envelope.

    Unknown names and arguments that fail validation go straight to
    ``ToolDispatcher.call``. Valid calls reach the registered tool with only
    the arguments it declares.
    """

    def __init__(self, dispatcher: ToolDispatcher, tool_names: set[str]):
        self.dispatcher = dispatcher
        self.tool_names = tool_names

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        arguments = context.message.arguments

        if name not in self.tool_names:
            return ToolResult(structured_content=await self.dispatcher.call(name, arguments))

        try:
            args = validate_arguments(ToolDispatcher.resolve(name), arguments)
        except ValidationError:
            return ToolResult(structured_content=await self.dispatcher.call(name, arguments))

        message = context.message.model_copy(update={"arguments": args.model_dump(by_alias=True, exclude_none=True)})
        return await call_next(context.copy(message=message))


def create_server(client: FinnhubClient) -> FastMCP:
    """Build the MCP server with every tool bound to one shared client."""

    @asynccontextmanager
    async def lifespan(server):
        """Manage client lifecycle."""
        yield
        await client.close()

    mcp = FastMCP("Finnhub MCP", instructions=INSTRUCTIONS, lifespan=lifespan)
    dispatcher = ToolDispatcher(client)

    earnings.register(mcp, dispatcher)
    quotes.register(mcp, dispatcher)
    news.register(mcp, dispatcher)
    profile.register(mcp, dispatcher)
    options.register(mcp, dispatcher)

    mcp.add_middleware(EnvelopeMiddleware(dispatcher, {TOOL_PREFIX + name for name in TOOL_NAMES}))
    return mcp


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Finnhub MCP server (stdio transport)")
    parser.add_argument("--api-key", help=f"Finnhub API key (overrides {API_KEY_ENV})")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "INFO"),
        help=f"Logging level (default: INFO, or {LOG_LEVEL_ENV})",
    )
    return parser.parse_args(argv)


def resolve_api_key(cli_value: str | None) -> str:
    """--api-key wins over the environment; empty values count as missing."""
    if cli_value:
        return cli_value
    return os.environ.get(API_KEY_ENV, "")


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(args.log_level)

    api_key = resolve_api_key(args.api_key)
    if not api_key:
        print(
            "Error: Finnhub API key is required. Provide it via --api-key argument "
            f"or {API_KEY_ENV} environment variable.",
            file=sys.stderr,
        )
        sys.exit(1)

    client = FinnhubClient(api_key=api_key, base_url=os.environ.get(BASE_URL_ENV) or None)
    mcp = create_server(client)

    logger.info("Finnhub MCP Server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
