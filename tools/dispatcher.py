"""Route tool calls to their orchestrators and wrap every outcome in an envelope."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from finnhub_client import FinnhubError
from tools import earnings, news, options, profile, quotes
from tools.schemas import format_validation_error, validate_arguments

if TYPE_CHECKING:
    from finnhub_client import FinnhubClient

logger = logging.getLogger(__name__)

TOOL_PREFIX = "finnhub."

INVALID_ARGUMENT = "INVALID_ARGUMENT"
FINNHUB_API_ERROR = "FINNHUB_API_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"

Handler = Callable[["FinnhubClient", Any], Awaitable[dict]]

_HANDLERS: dict[str, Handler] = {
    earnings.NAME: earnings.get_earnings_calendar,
    quotes.NAME: quotes.get_quotes,
    news.NAME: news.get_company_news,
    profile.NAME: profile.get_stock_profile,
    options.NAME: options.options_chain,
}

TOOL_NAMES: tuple[str, ...] = tuple(_HANDLERS)


def _error(kind: str, message: str) -> dict:
    return {"error": kind, "message": message}


class ToolDispatcher:
    """Resolves a tool name, validates its arguments, and runs it against Finnhub.

    ``call`` always returns a dict: the tool's payload or an error envelope.
    Only cancellation propagates.
    """

    def __init__(self, client: FinnhubClient):
        self.client = client

    @staticmethod
    def resolve(name: str) -> str | None:
        """Canonical tool name for ``name`` (with or without the finnhub. prefix)."""
        if name.startswith(TOOL_PREFIX):
            name = name[len(TOOL_PREFIX):]
        return name if name in _HANDLERS else None

    async def call(self, name: str, arguments: Any = None) -> dict:
        tool = self.resolve(name)
        if tool is None:
            logger.info("Unknown tool requested: %s", name)
            return {"error": f"Unknown tool: {name}"}

        logger.debug("Calling %s with %s", tool, arguments)

        try:
            args = validate_arguments(tool, arguments)
            return await _HANDLERS[tool](self.client, args)
        except ValidationError as e:
            message = format_validation_error(e)
            logger.info("Invalid arguments for %s: %s", tool, message)
            return _error(INVALID_ARGUMENT, message)
        except FinnhubError as e:
            logger.warning("Finnhub request for %s failed: %s", tool, e)
            return _error(FINNHUB_API_ERROR, str(e))
        except Exception as e:
            logger.exception("Tool %s failed", tool)
            return _error(INTERNAL_ERROR, str(e) or type(e).__name__)
