"""Argument models for each tool."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_core import PydanticCustomError

DATE_YYYY_MM_DD_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
DATE_FORMAT_MESSAGE = "Date must be in YYYY-MM-DD format"

MAX_SYMBOLS = 50


def _calendar_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("invalid_date", "{value} is not a valid calendar date", {"value": value}) from None
    return value


DateStr = Annotated[str, Field(pattern=DATE_YYYY_MM_DD_PATTERN), AfterValidator(_calendar_date)]
Symbol = Annotated[str, Field(min_length=1, max_length=10)]


class ToolArgs(BaseModel):
    """Base for tool arguments: immutable, extra keys ignored, None means omitted."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_none(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class EarningsCalendarArgs(ToolArgs):
    from_date: DateStr | None = Field(default=None, alias="from")
    to_date: DateStr | None = Field(default=None, alias="to")
    symbol: Symbol | None = None


class QuoteArgs(ToolArgs):
    symbols: list[Symbol] = Field(min_length=1, max_length=MAX_SYMBOLS)


class NewsArgs(ToolArgs):
    symbol: Symbol
    from_date: DateStr = Field(alias="from")
    to_date: DateStr = Field(alias="to")


class StockProfileArgs(ToolArgs):
    symbol: Symbol


class OptionsChainArgs(ToolArgs):
    symbol: Symbol
    expiration_date: DateStr | None = Field(default=None, alias="expirationDate")


TOOL_MODELS: dict[str, type[ToolArgs]] = {
    "calendar.earnings": EarningsCalendarArgs,
    "quote": QuoteArgs,
    "news": NewsArgs,
    "stock.profile": StockProfileArgs,
    "options.chain": OptionsChainArgs,
}


def validate_arguments(tool: str, arguments: Any) -> ToolArgs:
    """Validate a raw argument bag against ``tool``'s model.

    Raises:
        pydantic.ValidationError: on any broken rule
        KeyError: if ``tool`` has no model
    """
    return TOOL_MODELS[tool].model_validate({} if arguments is None else arguments)


def format_validation_error(exc: ValidationError) -> str:
    """One "<field>: <message>" entry per violation, joined by "; "."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "arguments"
        message = DATE_FORMAT_MESSAGE if err["type"] == "string_pattern_mismatch" else err["msg"]
        problems.append(f"{field}: {message}")
    return "; ".join(problems)
