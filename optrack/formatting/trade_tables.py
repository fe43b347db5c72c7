"""Pure helpers to translate parsed trades into table structures."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import math
from typing import Any, Callable

from tabulate import tabulate

from optrack.analysis.trade_metrics import format_currency, total_contracts, trade_cost, trade_dte
from optrack.config import get as cfg_get
from optrack.helpers.dateutils import days_to_expiration, format_expiry
from optrack.models import Trade

TableData = tuple[list[str], list[list[str]]]

PLACEHOLDER = "—"


def sanitize(value: Any, placeholder: str = PLACEHOLDER) -> str:
    """Return a safe string representation without NaN/Inf artifacts."""

    if value is None:
        return placeholder
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return placeholder
    return str(value)


def fmt_num(value: Any, decimals: int = 2) -> str:
    """Return a decimal formatted number or placeholder."""

    if value is None:
        return PLACEHOLDER
    try:
        decimal_value = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return PLACEHOLDER
    if not decimal_value.is_finite():
        return PLACEHOLDER
    quantize_expr = Decimal(1) if decimals == 0 else Decimal(f"1e-{decimals}")
    rounded = decimal_value.quantize(quantize_expr, rounding=ROUND_HALF_UP)
    return format(rounded, f".{decimals}f")


def fmt_strike(value: float) -> str:
    """Return ``value`` without a trailing ``.0`` for whole strikes."""
    if float(value).is_integer():
        return str(int(value))
    return fmt_num(value, 2).rstrip("0")


def fmt_signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def trade_table(trade: Trade) -> TableData:
    """Return a two column overview of ``trade``."""
    headers = ["Field", "Value"]
    rows = [
        ["Symbol", trade.symbol],
        ["Action", trade.action.value],
        ["Quantity", str(trade.total_quantity)],
        ["Structure", trade.spread_type.value],
        ["Price", fmt_num(trade.price)],
        ["Order", trade.order_type.value + (" GTC" if trade.is_gtc else "")],
        ["Multiplier", str(trade.multiplier)],
        ["Weekly", "yes" if trade.is_weekly else "no"],
        ["Contracts", str(total_contracts(trade))],
        ["Cost", format_currency(trade_cost(trade))],
        ["DTE", sanitize(trade_dte(trade))],
    ]
    return headers, rows


def legs_table(trade: Trade, today_fn: Callable[[], date] | None = None) -> TableData:
    """Return one row per leg of ``trade``."""
    headers = ["#", "Qty", "Expiry", "DTE", "Strike", "Type", "Open/Close"]
    rows = [
        [
            str(idx),
            fmt_signed(leg.quantity),
            format_expiry(leg.expiration),
            str(days_to_expiration(leg.expiration, today_fn)),
            fmt_strike(leg.strike),
            leg.option_type.value,
            leg.leg_action.value if leg.leg_action else PLACEHOLDER,
        ]
        for idx, leg in enumerate(trade.legs, start=1)
    ]
    return headers, rows


def render(table: TableData, tablefmt: str | None = None) -> str:
    """Render ``table`` with :func:`tabulate.tabulate`."""
    headers, rows = table
    return tabulate(
        rows,
        headers=headers,
        tablefmt=tablefmt or cfg_get("TABLE_FORMAT", "simple"),
        disable_numparse=True,
    )


__all__ = [
    "PLACEHOLDER",
    "TableData",
    "fmt_num",
    "fmt_signed",
    "fmt_strike",
    "legs_table",
    "render",
    "sanitize",
    "trade_table",
]
