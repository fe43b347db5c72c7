"""Spread classification and per-leg direction rules.

Broker order strings name the combination and the overall action but not
the direction of each leg. The rules below recover the signed contracts per
spread unit from the spread type, the action and the leg position. Legs of
calendars, diagonals and rolls are listed far expiration first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Final, Mapping, Optional, Sequence, Tuple

from optrack.models import LegAction, SpreadType, TradeAction

_IC_TOKEN_RE = re.compile(r"\bIC\b")

# Checked in order, first hit wins
_KEYWORDS: Final[Tuple[Tuple[SpreadType, Tuple[str, ...]], ...]] = (
    (SpreadType.ROLL, ("ROLL",)),
    (SpreadType.CALENDAR, ("CALENDAR",)),
    (SpreadType.DIAGONAL, ("DIAGONAL",)),
    (SpreadType.VERTICAL, ("VERT",)),
    (SpreadType.BUTTERFLY, ("BUTTERFLY", "FLY")),
    (SpreadType.CONDOR, ("CONDOR",)),
)
_LATE_KEYWORDS: Final[Tuple[Tuple[SpreadType, str], ...]] = (
    (SpreadType.STRADDLE, "STRADDLE"),
    (SpreadType.STRANGLE, "STRANGLE"),
    (SpreadType.CUSTOM, "CUSTOM"),
    (SpreadType.BACKRATIO, "BACKRATIO"),
    (SpreadType.RATIO, "RATIO"),
)
_LEG_COUNT_FALLBACK: Final[Mapping[int, SpreadType]] = {
    1: SpreadType.SINGLE,
    2: SpreadType.VERTICAL,
    4: SpreadType.IRON_CONDOR,
}


def classify_spread(text: str, leg_count: int) -> SpreadType:
    """Return the spread type named in ``text`` or inferred from ``leg_count``."""
    upper = text.upper()
    for spread_type, keywords in _KEYWORDS:
        if any(keyword in upper for keyword in keywords):
            return spread_type
    if _IC_TOKEN_RE.search(upper):
        return SpreadType.IRON_CONDOR
    for spread_type, keyword in _LATE_KEYWORDS:
        if keyword in upper:
            return spread_type
    return _LEG_COUNT_FALLBACK.get(leg_count, SpreadType.CUSTOM)


@dataclass(frozen=True)
class LegContext:
    """Inputs shared by the per-leg rules of one trade."""

    spread_type: SpreadType
    action: TradeAction
    leg_count: int
    ratios: Optional[Tuple[int, ...]] = None

    @property
    def has_signed_ratios(self) -> bool:
        return bool(self.ratios) and any(r < 0 for r in self.ratios or ())


LegRule = Callable[[LegContext, int], int]


def _ratio_at(ctx: LegContext, index: int) -> int:
    ratios = ctx.ratios or (1,)
    return ratios[index % len(ratios)]


def _plain_ratio(ctx: LegContext, index: int) -> int:
    return _ratio_at(ctx, index) * ctx.action.sign


def _backratio_ratio(ctx: LegContext, index: int) -> int:
    ratio = _ratio_at(ctx, index)
    return (-ratio if index == 0 else ratio) * ctx.action.sign


def _butterfly_ratio(ctx: LegContext, index: int) -> int:
    ratio = _ratio_at(ctx, index)
    is_wing = index == 0 or index == len(ctx.ratios or ()) - 1
    return (ratio if is_wing else -ratio) * ctx.action.sign


_RATIO_RULES: Final[Mapping[SpreadType, LegRule]] = {
    SpreadType.BACKRATIO: _backratio_ratio,
    SpreadType.BUTTERFLY: _butterfly_ratio,
}


def _calendar(ctx: LegContext, index: int) -> int:
    # far leg follows the action, near leg goes the other way
    return ctx.action.sign if index == 0 else -ctx.action.sign


_ROLL_PATTERN: Final[Tuple[int, int, int, int]] = (1, -1, -1, 1)


def _roll(ctx: LegContext, index: int) -> int:
    return _ROLL_PATTERN[index % len(_ROLL_PATTERN)] * ctx.action.sign


def _butterfly(ctx: LegContext, index: int) -> int:
    if ctx.leg_count != 3:
        return ctx.action.sign
    return (1 if index in (0, 2) else -2) * ctx.action.sign


def _vertical(ctx: LegContext, index: int) -> int:
    if ctx.leg_count != 2:
        return ctx.action.sign
    return (1 if index == 0 else -1) * ctx.action.sign


def _default(ctx: LegContext, index: int) -> int:
    return ctx.action.sign


_UNIT_RULES: Final[Mapping[SpreadType, LegRule]] = {
    SpreadType.CALENDAR: _calendar,
    SpreadType.DIAGONAL: _calendar,
    SpreadType.ROLL: _roll,
    SpreadType.BUTTERFLY: _butterfly,
    SpreadType.VERTICAL: _vertical,
}


def leg_ratio(ctx: LegContext, index: int) -> int:
    """Return the signed contracts per spread unit for leg ``index``.

    Explicitly signed ratio blocks are taken as written and flipped for
    sells. Unsigned ratio blocks get the structure's conventional signs. Without
    a ratio block the spread type alone decides.
    """
    if ctx.ratios:
        if ctx.has_signed_ratios:
            return _plain_ratio(ctx, index)
        return _RATIO_RULES.get(ctx.spread_type, _plain_ratio)(ctx, index)
    return _UNIT_RULES.get(ctx.spread_type, _default)(ctx, index)


def leg_expiration(
    ctx: LegContext, index: int, dates: Sequence[date], fallback: date
) -> date:
    """Return the expiration for leg ``index``."""
    if not dates:
        return fallback
    if ctx.spread_type is SpreadType.ROLL and len(dates) == 2 and ctx.leg_count == 4:
        return dates[0] if index < 2 else dates[1]
    return dates[index % len(dates)]


def leg_action(ctx: LegContext, index: int) -> Optional[LegAction]:
    """Return whether leg ``index`` opens or closes, when that is known."""
    if ctx.spread_type is SpreadType.ROLL:
        return LegAction.OPEN if index < 2 else LegAction.CLOSE
    if (
        ctx.spread_type in (SpreadType.CALENDAR, SpreadType.DIAGONAL)
        and ctx.action is TradeAction.SELL
    ):
        return LegAction.OPEN if index == 0 else LegAction.CLOSE
    return None


__all__ = [
    "LegContext",
    "classify_spread",
    "leg_action",
    "leg_expiration",
    "leg_ratio",
]
