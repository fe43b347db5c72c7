"""Pattern based extraction of the scalar fields in a broker order string.

Every extractor is independent: it receives the normalised order string and
returns the value it found, or ``None``/an empty tuple when the token is not
present. Dates, strikes and option types are returned in the order they
appear in the string.
"""

from __future__ import annotations

import re
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from optrack.models import OptionType, OrderType, TradeAction

MONTHS: Mapping[str, int] = MappingProxyType(
    {
        "JAN": 1,
        "FEB": 2,
        "MAR": 3,
        "APR": 4,
        "MAY": 5,
        "JUN": 6,
        "JUL": 7,
        "AUG": 8,
        "SEP": 9,
        "OCT": 10,
        "NOV": 11,
        "DEC": 12,
    }
)

# ``D[D] MMM YY``; the word boundaries keep "2 AMD 100" from reading as a date
DATE_PATTERN = r"\b\d{1,2}\s+[A-Z]{3}\s+\d{2}\b"

_ACTION_ANYWHERE_RE = re.compile(r"\b(BUY|SELL)\s+", re.IGNORECASE)
_ACTION_RE = re.compile(r"^(BUY|SELL)\s+", re.IGNORECASE)
_ESCAPED_SIGN_RE = re.compile(r"\\([+-])")
_QUANTITY_RE = re.compile(r"(?:BUY|SELL)\s+([+-]?\d+)", re.IGNORECASE)
_RATIO_RE = re.compile(
    r"(?:BUY|SELL)\s+[+-]?\d+\s+(-?\d{1,2}/-?\d{1,2}(?:/-?\d{1,2})*)\s+"
    r"~?(?:CUSTOM|BACKRATIO|RATIO|BUTTERFLY|FLY)",
    re.IGNORECASE,
)
_PRICE_RE = re.compile(r"@(-?\d*\.?\d+)")
_GTC_RE = re.compile(r"\bGTC\b", re.IGNORECASE)
_MKT_RE = re.compile(r"\bMKT\b", re.IGNORECASE)
_STP_LMT_RE = re.compile(r"\bSTP LMT\b", re.IGNORECASE)
_STP_RE = re.compile(r"\bSTP\b", re.IGNORECASE)
_WEEKLY_RE = re.compile(r"\(Weeklys?\)", re.IGNORECASE)
_FUTURES_MULTIPLIER_RE = re.compile(
    rf"\b(\d+)/(\d+)\s+(?:{DATE_PATTERN})", re.IGNORECASE
)
_EQUITY_MULTIPLIER_RE = re.compile(
    rf"\b(\d+)\s+(?:\(Weeklys?\)\s+)?(?:{DATE_PATTERN})", re.IGNORECASE
)
_DATE_RE = re.compile(r"\b(\d{1,2})\s+([A-Z]{3})\s+(\d{2})\b", re.IGNORECASE)
_STRIKES_RE = re.compile(
    r"\d{2}(?:\s+\[(?:AM|PM)\])?\s+(\d*\.?\d+(?:/\d*\.?\d+)*)\s+(?:CALL|PUT)",
    re.IGNORECASE,
)
_OPTION_TYPES_RE = re.compile(r"((?:CALL|PUT)(?:/(?:CALL|PUT))*)", re.IGNORECASE)


def strip_noise(raw: str) -> str:
    """Drop any annotation preceding the first ``BUY``/``SELL`` keyword.

    ``"(Replacing #1005300447572) SELL -4 ..."`` becomes ``"SELL -4 ..."``.
    Strings without an action keyword are returned unchanged.
    """
    match = _ACTION_ANYWHERE_RE.search(raw)
    if match and match.start() > 0:
        return raw[match.start():]
    return raw


def normalize(raw: str) -> str:
    """Replace backslash escaped signs (``\\+``/``\\-``) by the bare sign."""
    return _ESCAPED_SIGN_RE.sub(r"\1", raw)


def extract_action(text: str) -> Optional[TradeAction]:
    match = _ACTION_RE.match(text)
    if not match:
        return None
    return TradeAction(match.group(1).upper())


def extract_quantity(text: str) -> Optional[int]:
    """Return the absolute number of spread units after the action keyword."""
    match = _QUANTITY_RE.search(text)
    if not match:
        return None
    return abs(int(match.group(1)))


def extract_ratios(text: str) -> Optional[Tuple[int, ...]]:
    """Return the per-leg ratio block such as ``2/2/-1/-1`` if present.

    Ratios only count when they sit between the quantity and a ratio style
    spread keyword, so strike lists are never mistaken for ratios.
    """
    match = _RATIO_RE.search(text)
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("/"))


def extract_price(text: str) -> Optional[float]:
    match = _PRICE_RE.search(text)
    if not match:
        return None
    return float(match.group(1))


def extract_gtc(text: str) -> bool:
    return bool(_GTC_RE.search(text))


def extract_order_type(text: str) -> OrderType:
    """Return the order type; ``STP LMT`` is checked before the bare ``STP``."""
    if _MKT_RE.search(text):
        return OrderType.MKT
    if _STP_LMT_RE.search(text):
        return OrderType.STP_LMT
    if _STP_RE.search(text):
        return OrderType.STP
    return OrderType.LMT


def extract_weekly(text: str) -> bool:
    return bool(_WEEKLY_RE.search(text))


def extract_multiplier(text: str, default: int = 100) -> int:
    """Return the contract multiplier in front of the first expiration date.

    Futures strings carry ``1/50`` style pairs where the second number is the
    multiplier; equity and index strings carry a bare ``100``.
    """
    match = _FUTURES_MULTIPLIER_RE.search(text)
    if match:
        return int(match.group(2))
    match = _EQUITY_MULTIPLIER_RE.search(text)
    if match:
        return int(match.group(1))
    return default


def parse_date(day: str, month: str, year: str) -> Optional[date]:
    """Return the date for a ``D MMM YY`` triple or ``None`` when invalid."""
    month_num = MONTHS.get(month.upper())
    if month_num is None:
        return None
    year_num = int(year)
    if year_num < 100:
        year_num += 2000
    try:
        return date(year_num, month_num, int(day))
    except ValueError:
        return None


def extract_dates(text: str, start: int = 0) -> Optional[Tuple[date, ...]]:
    """Return all expiration dates from offset ``start`` left to right.

    Callers pass the offset past the symbol; a short quantity, a three letter
    ticker and a two digit multiplier (``1 XYZ 10``) otherwise read as a date.
    ``None`` signals that at least one date token could not be resolved,
    which fails the whole parse.
    """
    dates: list[date] = []
    for match in _DATE_RE.finditer(text, start):
        parsed = parse_date(match.group(1), match.group(2), match.group(3))
        if parsed is None:
            return None
        dates.append(parsed)
    return tuple(dates)


def extract_strikes(text: str) -> Tuple[float, ...]:
    """Return the ``/`` separated strikes between the last date and CALL/PUT."""
    match = _STRIKES_RE.search(text)
    if not match:
        return ()
    return tuple(float(part) for part in match.group(1).split("/"))


def extract_option_types(text: str) -> Tuple[OptionType, ...]:
    match = _OPTION_TYPES_RE.search(text)
    if not match:
        return ()
    return tuple(OptionType(part) for part in match.group(1).upper().split("/"))


__all__ = [
    "DATE_PATTERN",
    "MONTHS",
    "extract_action",
    "extract_dates",
    "extract_gtc",
    "extract_multiplier",
    "extract_option_types",
    "extract_order_type",
    "extract_price",
    "extract_quantity",
    "extract_ratios",
    "extract_strikes",
    "extract_weekly",
    "normalize",
    "parse_date",
    "strip_noise",
]
