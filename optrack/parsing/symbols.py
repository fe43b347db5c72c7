"""Underlying symbol extraction.

Order strings place the symbol between a structural token (spread keyword,
quantity or ratio block) and the contract multiplier. Their layout varies by
structure, so each layout gets its own matcher and the matchers are tried in
order; the first hit wins. A symbol is either a futures root (``/ES``,
``/ESZ25``) or one to five letters (``AAPL``).
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple, Optional, Tuple

SYMBOL_PATTERN = r"(/[A-Z]+[A-Z0-9]*|[A-Z]{1,5})"


class SymbolMatch(NamedTuple):
    symbol: str
    end: int


SymbolMatcher = Callable[[str], Optional[SymbolMatch]]


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern.format(symbol=SYMBOL_PATTERN), re.IGNORECASE)


# SELL -7 2/2/-1/-1 CUSTOM GOOGL 100 / BUY +2 1/-2/2 CUSTOM /ESZ25 1/50
_AFTER_KEYWORD_RE = _compile(
    r"~?(?:CUSTOM|VERT|VERTICAL|CALENDAR|DIAGONAL|BUTTERFLY|FLY|CONDOR|STRADDLE"
    r"|STRANGLE|BACKRATIO|RATIO|ROLL)\s+{symbol}\s+\d+"
)
# SELL -4 CALENDAR SHOP 100 / SELL -2 1/3 BACKRATIO AMZN 100
_AFTER_QUANTITY_AND_KEYWORD_RE = _compile(
    r"[+-]?\d+\s+(?:\d+/[\d/]+\s+)?~?(?:VERT(?:ICAL)?|CALENDAR|DIAGONAL|BUTTERFLY|FLY"
    r"|CONDOR|IC|STRADDLE|STRANGLE|BACKRATIO|RATIO)\s+(?:ROLL\s+)?{symbol}\s+\d+"
)
# SELL -20 VERT ROLL RUT 100
_AFTER_ROLL_RE = _compile(r"ROLL\s+{symbol}\s+\d+")
# BUY +2 BE 100 / BUY +2 /ESZ25 1/50
_AFTER_QUANTITY_RE = _compile(r"(?:BUY|SELL)\s+[+-]?\d+\s+{symbol}\s+\d+")
_FALLBACK_RE = _compile(r"[+-]?\d+\s+(?:\d+/\S+\s+)?(?:CUSTOM\s+)?{symbol}\s+\d+")


def _matcher(pattern: re.Pattern[str]) -> SymbolMatcher:
    def match(text: str) -> Optional[SymbolMatch]:
        found = pattern.search(text)
        if not found:
            return None
        return SymbolMatch(found.group(1).upper(), found.end(1))

    return match


match_after_keyword = _matcher(_AFTER_KEYWORD_RE)
match_after_quantity_and_keyword = _matcher(_AFTER_QUANTITY_AND_KEYWORD_RE)
match_after_roll = _matcher(_AFTER_ROLL_RE)
match_after_quantity = _matcher(_AFTER_QUANTITY_RE)
match_fallback = _matcher(_FALLBACK_RE)

SYMBOL_MATCHERS: Tuple[SymbolMatcher, ...] = (
    match_after_keyword,
    match_after_quantity_and_keyword,
    match_after_roll,
    match_after_quantity,
    match_fallback,
)


def find_symbol(
    text: str, matchers: Tuple[SymbolMatcher, ...] = SYMBOL_MATCHERS
) -> Optional[SymbolMatch]:
    """Return the first hit of ``matchers`` with the offset just past the symbol.

    Everything before that offset belongs to the order header, so the
    expiration date scan starts there.
    """
    for matcher in matchers:
        found = matcher(text)
        if found:
            return found
    return None


def extract_symbol(
    text: str, matchers: Tuple[SymbolMatcher, ...] = SYMBOL_MATCHERS
) -> Optional[str]:
    """Return the first symbol found by ``matchers`` or ``None``."""
    found = find_symbol(text, matchers)
    return found.symbol if found else None


__all__ = [
    "SYMBOL_MATCHERS",
    "SYMBOL_PATTERN",
    "SymbolMatch",
    "extract_symbol",
    "find_symbol",
    "match_after_keyword",
    "match_after_quantity",
    "match_after_quantity_and_keyword",
    "match_after_roll",
    "match_fallback",
]
