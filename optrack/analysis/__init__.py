"""Analysis utilities."""

from .trade_metrics import (
    format_currency,
    nearest_expiration,
    total_contracts,
    trade_cost,
    trade_dte,
)

__all__ = [
    "format_currency",
    "nearest_expiration",
    "total_contracts",
    "trade_cost",
    "trade_dte",
]
