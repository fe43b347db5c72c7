"""Trade string parsing."""

from .result import FailureReason, ParseFailure, ParseResult, is_failure
from .trade_parser import TradeParser, parse, parse_trade

__all__ = [
    "FailureReason",
    "ParseFailure",
    "ParseResult",
    "TradeParser",
    "is_failure",
    "parse",
    "parse_trade",
]
