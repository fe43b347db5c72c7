"""Derived figures for a single parsed trade."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from optrack.config import get as cfg_get
from optrack.helpers.dateutils import days_to_expiration
from optrack.models import Trade, TradeAction


def trade_cost(trade: Trade) -> float:
    """Return the cash flow of ``trade`` in account currency.

    Buys pay the price and are negative, sells collect it and are positive.
    A negative broker price (net credit on a buy) flips the sign naturally.
    """
    sign = -1 if trade.action is TradeAction.BUY else 1
    return sign * trade.price * trade.total_quantity * trade.multiplier


def total_contracts(trade: Trade) -> int:
    """Return the number of option contracts across all legs."""
    return sum(abs(leg.quantity) for leg in trade.legs)


def nearest_expiration(trade: Trade) -> Optional[date]:
    if not trade.legs:
        return None
    return min(leg.expiration for leg in trade.legs)


def trade_dte(trade: Trade, today_fn: Callable[[], date] | None = None) -> Optional[int]:
    """Return days to the nearest expiration of ``trade``."""
    expiration = nearest_expiration(trade)
    if expiration is None:
        return None
    return days_to_expiration(expiration, today_fn)


def format_currency(amount: float, symbol: str | None = None) -> str:
    """Return ``amount`` rounded to whole units, e.g. ``-$1,052``."""
    prefix = symbol if symbol is not None else cfg_get("CURRENCY_SYMBOL", "$")
    sign = "-" if round(amount) < 0 else ""
    return f"{sign}{prefix}{abs(round(amount)):,.0f}"


__all__ = [
    "format_currency",
    "nearest_expiration",
    "total_contracts",
    "trade_cost",
    "trade_dte",
]
