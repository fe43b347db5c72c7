"""Parse broker order-log strings into :class:`~optrack.models.Trade` records.

Example inputs::

    BUY +2 BE 100 15 JAN 27 50 CALL @52.60 LMT
    SELL -4 CALENDAR SHOP 100 (Weeklys) 13 FEB 26/16 JAN 26 160 PUT @6.75 LMT
    SELL -2 1/3 BACKRATIO AMZN 100 16 JAN 26 247.5/260 CALL @-1.49 LMT

The parser holds no mutable state; one instance can be shared between
threads.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime
from typing import Callable, Optional

from optrack.config import get as cfg_get
from optrack.logutils import logger
from optrack.models import OptionLeg, OptionType, Trade

from . import tokens
from .result import FailureReason, ParseFailure, ParseResult, failure
from .spreads import LegContext, classify_spread, leg_action, leg_expiration, leg_ratio
from .symbols import find_symbol

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def generate_id() -> str:
    """Return a unique trade id: epoch milliseconds plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"


class TradeParser:
    """Convert one order string into a trade.

    ``clock`` supplies the trade date and the expiration used for legs
    without a date; ``id_factory`` supplies trade ids. Both default to the
    wall clock and :func:`generate_id`.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
        default_multiplier: int | None = None,
    ) -> None:
        self.clock = clock or datetime.now
        self.id_factory = id_factory or generate_id
        if default_multiplier is None:
            default_multiplier = int(cfg_get("DEFAULT_MULTIPLIER", 100))
        self.default_multiplier = default_multiplier

    def parse(self, raw_input: str) -> ParseResult:
        """Return a :class:`Trade` or a :class:`ParseFailure`; never raises."""
        try:
            result = self._parse(raw_input)
        except Exception as exc:
            logger.warning(f"Failed to parse trade {raw_input!r}", exc_info=True)
            return failure(FailureReason.INTERNAL_ERROR, str(raw_input), str(exc))
        if isinstance(result, ParseFailure):
            logger.debug(f"Trade not parsed ({result.reason.value}): {raw_input!r}")
        return result

    def _parse(self, raw_input: str) -> ParseResult:
        raw = raw_input.strip() if isinstance(raw_input, str) else ""
        if not raw:
            return failure(FailureReason.EMPTY_INPUT, raw)

        raw = tokens.strip_noise(raw)
        text = tokens.normalize(raw)

        action = tokens.extract_action(text)
        if action is None:
            return failure(FailureReason.MISSING_ACTION, raw)

        total_quantity = tokens.extract_quantity(text)
        if total_quantity is None:
            return failure(FailureReason.MISSING_QUANTITY, raw)

        price = tokens.extract_price(text)
        if price is None:
            return failure(FailureReason.MISSING_PRICE, raw)

        found = find_symbol(text)
        if not found:
            return failure(FailureReason.MISSING_SYMBOL, raw)

        dates = tokens.extract_dates(text, found.end)
        if dates is None:
            return failure(FailureReason.INVALID_DATE, raw)

        ratios = tokens.extract_ratios(text)
        strikes = tokens.extract_strikes(text)
        option_types = tokens.extract_option_types(text)
        leg_count = max(
            len(dates), len(strikes), len(option_types), len(ratios) if ratios else 1
        )
        spread_type = classify_spread(text, leg_count)

        now = self.clock()
        ctx = LegContext(
            spread_type=spread_type, action=action, leg_count=leg_count, ratios=ratios
        )
        legs = tuple(
            OptionLeg(
                quantity=leg_ratio(ctx, i) * total_quantity,
                expiration=leg_expiration(ctx, i, dates, now.date()),
                strike=strikes[i % len(strikes)] if strikes else 0.0,
                # TODO: decide whether a missing CALL/PUT should reject the trade
                option_type=(
                    option_types[i % len(option_types)] if option_types else OptionType.CALL
                ),
                leg_action=leg_action(ctx, i),
            )
            for i in range(leg_count)
        )

        return Trade(
            id=self.id_factory(),
            raw_input=raw,
            action=action,
            total_quantity=total_quantity,
            symbol=found.symbol,
            multiplier=tokens.extract_multiplier(text, self.default_multiplier),
            is_weekly=tokens.extract_weekly(text),
            spread_type=spread_type,
            legs=legs,
            price=price,
            order_type=tokens.extract_order_type(text),
            is_gtc=tokens.extract_gtc(text),
            trade_date=now,
        )


def parse(raw_input: str, parser: Optional[TradeParser] = None) -> ParseResult:
    """Parse ``raw_input`` with ``parser`` or a default :class:`TradeParser`."""
    return (parser or TradeParser()).parse(raw_input)


def parse_trade(raw_input: str) -> Optional[Trade]:
    """Return the parsed trade or ``None`` when the string is not understood."""
    result = parse(raw_input)
    return None if isinstance(result, ParseFailure) else result


__all__ = ["TradeParser", "generate_id", "parse", "parse_trade"]
