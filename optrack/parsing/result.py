"""Result types returned by the trade string parser.

Parsing is all-or-nothing: a call yields either a complete
:class:`~optrack.models.Trade` or a :class:`ParseFailure` describing which
extraction rule rejected the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping, Union

from optrack.models import Trade


class FailureReason(str, Enum):
    """Canonical causes for a rejected trade string."""

    EMPTY_INPUT = "EMPTY_INPUT"
    MISSING_ACTION = "MISSING_ACTION"
    MISSING_QUANTITY = "MISSING_QUANTITY"
    MISSING_PRICE = "MISSING_PRICE"
    MISSING_SYMBOL = "MISSING_SYMBOL"
    INVALID_DATE = "INVALID_DATE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_REASON_MESSAGES: Final[Mapping[FailureReason, str]] = {
    FailureReason.EMPTY_INPUT: "input is empty",
    FailureReason.MISSING_ACTION: "no BUY or SELL found",
    FailureReason.MISSING_QUANTITY: "no quantity after BUY/SELL",
    FailureReason.MISSING_PRICE: "no @price found",
    FailureReason.MISSING_SYMBOL: "no symbol found",
    FailureReason.INVALID_DATE: "unrecognised expiration date",
    FailureReason.INTERNAL_ERROR: "unexpected parser error",
}


@dataclass(frozen=True)
class ParseFailure:
    """A rejected trade string.

    Instances are falsy so callers written against a ``None`` result keep
    working with ``if not result``.
    """

    reason: FailureReason
    raw_input: str
    detail: str = ""

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        base = _REASON_MESSAGES.get(self.reason, self.reason.value)
        return f"{base}: {self.detail}" if self.detail else base


ParseResult = Union[Trade, ParseFailure]


def failure(reason: FailureReason, raw_input: str, detail: str = "") -> ParseFailure:
    """Construct a :class:`ParseFailure`."""
    return ParseFailure(reason=reason, raw_input=raw_input, detail=detail)


def is_failure(result: ParseResult) -> bool:
    """Return ``True`` when ``result`` is a :class:`ParseFailure`."""
    return isinstance(result, ParseFailure)


__all__ = ["FailureReason", "ParseFailure", "ParseResult", "failure", "is_failure"]
