"""Domain records produced by the trade string parser.

A :class:`Trade` is created once per parsed order string and never mutated.
Its legs carry signed quantities: positive for contracts bought, negative for
contracts sold, already scaled by the trade's total quantity.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class _StrEnum(str, Enum):
    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)

    def __format__(self, format_spec: str) -> str:  # pragma: no cover - trivial
        return format(str(self.value), format_spec)


class TradeAction(_StrEnum):
    BUY = "BUY"
    SELL = "SELL"

    @property
    def sign(self) -> int:
        """Return ``+1`` for buys and ``-1`` for sells."""
        return 1 if self is TradeAction.BUY else -1


class OptionType(_StrEnum):
    CALL = "CALL"
    PUT = "PUT"


class SpreadType(_StrEnum):
    """Combination structure of a trade.

    The member value is the canonical name stored with each trade record.
    """

    SINGLE = "SINGLE"
    VERTICAL = "VERTICAL"
    CALENDAR = "CALENDAR"
    DIAGONAL = "DIAGONAL"
    STRADDLE = "STRADDLE"
    STRANGLE = "STRANGLE"
    BUTTERFLY = "BUTTERFLY"
    CONDOR = "CONDOR"
    IRON_CONDOR = "IRON_CONDOR"
    RATIO = "RATIO"
    BACKRATIO = "BACKRATIO"
    CUSTOM = "CUSTOM"
    ROLL = "ROLL"


class OrderType(_StrEnum):
    LMT = "LMT"
    MKT = "MKT"
    STP = "STP"
    STP_LMT = "STP LMT"


class LegAction(_StrEnum):
    OPEN = "OPEN"
    CLOSE = "CLOSE"


def _parse_iso_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ValueError(f"invalid {field_name}: {value!r}") from exc


def _parse_iso_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"invalid tradeDate: {value!r}") from exc


def _enum_value(enum_cls: type[Enum], value: Any, field_name: str) -> Any:
    try:
        return enum_cls(str(value).upper())
    except ValueError as exc:
        raise ValueError(f"invalid {field_name}: {value!r}") from exc


@dataclass(frozen=True)
class OptionLeg:
    """One contract line within a trade."""

    quantity: int
    expiration: date
    strike: float
    option_type: OptionType
    leg_action: Optional[LegAction] = None

    @property
    def is_long(self) -> bool:
        return self.quantity > 0

    def to_dict(self) -> dict[str, Any]:
        """Return this leg as a plain dictionary."""
        return {
            "quantity": self.quantity,
            "expiration": self.expiration.isoformat(),
            "strike": self.strike,
            "optionType": self.option_type.value,
            "legAction": self.leg_action.value if self.leg_action else "",
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OptionLeg":
        """Create an ``OptionLeg`` from a mapping produced by :meth:`to_dict`."""
        raw_action = data.get("legAction") or None
        try:
            quantity = int(data["quantity"])
            strike = float(data.get("strike") or 0)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid leg record: {dict(data)!r}") from exc
        return cls(
            quantity=quantity,
            expiration=_parse_iso_date(data.get("expiration"), "expiration"),
            strike=strike,
            option_type=_enum_value(OptionType, data.get("optionType"), "optionType"),
            leg_action=(
                _enum_value(LegAction, raw_action, "legAction") if raw_action else None
            ),
        )


@dataclass(frozen=True)
class Trade:
    """A single parsed broker order."""

    id: str
    raw_input: str
    action: TradeAction
    total_quantity: int
    symbol: str
    multiplier: int
    is_weekly: bool
    spread_type: SpreadType
    legs: Tuple[OptionLeg, ...]
    price: float
    order_type: OrderType
    is_gtc: bool
    trade_date: datetime = field(default_factory=datetime.now)

    @property
    def is_futures(self) -> bool:
        return self.symbol.startswith("/")

    def with_trade_date(self, trade_date: datetime) -> "Trade":
        """Return a copy of this trade with ``trade_date`` overridden."""
        return replace(self, trade_date=trade_date)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON serialisable record of this trade."""
        return {
            "id": self.id,
            "rawInput": self.raw_input,
            "action": self.action.value,
            "totalQuantity": self.total_quantity,
            "symbol": self.symbol,
            "multiplier": self.multiplier,
            "isWeekly": self.is_weekly,
            "spreadType": self.spread_type.value,
            "legs": [leg.to_dict() for leg in self.legs],
            "price": self.price,
            "orderType": self.order_type.value,
            "isGTC": self.is_gtc,
            "tradeDate": self.trade_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Trade":
        """Rebuild a ``Trade`` from a record produced by :meth:`to_dict`.

        Raises :class:`ValueError` when a required field is missing or
        malformed.
        """
        try:
            legs = tuple(OptionLeg.from_dict(leg) for leg in data.get("legs") or [])
            return cls(
                id=str(data["id"]),
                raw_input=str(data.get("rawInput", "")),
                action=_enum_value(TradeAction, data["action"], "action"),
                total_quantity=int(data["totalQuantity"]),
                symbol=str(data["symbol"]).upper(),
                multiplier=int(data.get("multiplier") or 100),
                is_weekly=bool(data.get("isWeekly", False)),
                spread_type=_enum_value(SpreadType, data["spreadType"], "spreadType"),
                legs=legs,
                price=float(data["price"]),
                order_type=_enum_value(OrderType, data.get("orderType") or "LMT", "orderType"),
                is_gtc=bool(data.get("isGTC", False)),
                trade_date=_parse_iso_datetime(data.get("tradeDate") or datetime.now()),
            )
        except KeyError as exc:
            raise ValueError(f"missing trade field: {exc.args[0]}") from exc
        except TypeError as exc:
            raise ValueError(f"invalid trade record: {exc}") from exc


__all__ = [
    "LegAction",
    "OptionLeg",
    "OptionType",
    "OrderType",
    "SpreadType",
    "Trade",
    "TradeAction",
]
