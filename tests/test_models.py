import json
from datetime import date, datetime

import pytest

from optrack.models import LegAction, OptionLeg, OptionType, OrderType, SpreadType, Trade, TradeAction


def _calendar(parser):
    return parser.parse(
        "SELL -4 CALENDAR SHOP 100 (Weeklys) 13 FEB 26/16 JAN 26 160 PUT @6.75 LMT"
    )


def test_trade_to_dict_is_json_serialisable(parser):
    record = _calendar(parser).to_dict()

    assert json.loads(json.dumps(record)) == record
    assert record["rawInput"].startswith("SELL -4 CALENDAR")
    assert record["spreadType"] == "CALENDAR"
    assert record["tradeDate"] == "2026-01-05T14:30:00"
    assert record["legs"][0] == {
        "quantity": -4,
        "expiration": "2026-02-13",
        "strike": 160.0,
        "optionType": "PUT",
        "legAction": "OPEN",
    }


def test_unset_leg_action_serialises_as_empty_string(parser):
    trade = parser.parse("BUY +2 BE 100 15 JAN 27 50 CALL @52.60 LMT")
    assert trade.to_dict()["legs"][0]["legAction"] == ""


def test_trade_from_dict_restores_trade(parser):
    trade = _calendar(parser)
    assert Trade.from_dict(trade.to_dict()) == trade


def test_from_dict_rejects_missing_fields():
    with pytest.raises(ValueError, match="symbol"):
        Trade.from_dict({"id": "1", "action": "BUY", "totalQuantity": 1, "spreadType": "SINGLE", "price": 1})


def test_from_dict_rejects_unknown_enum_values():
    with pytest.raises(ValueError, match="optionType"):
        OptionLeg.from_dict({"quantity": 1, "expiration": "2026-01-16", "optionType": "FOO"})


def test_with_trade_date_returns_copy(parser):
    trade = _calendar(parser)
    moved = trade.with_trade_date(datetime(2025, 12, 1))

    assert moved.trade_date == datetime(2025, 12, 1)
    assert trade.trade_date == datetime(2026, 1, 5, 14, 30)
    assert moved.legs == trade.legs


def test_trade_is_immutable(parser):
    trade = _calendar(parser)
    with pytest.raises(AttributeError):
        trade.price = 1.0  # type: ignore[misc]


def test_enum_values():
    assert TradeAction.SELL.sign == -1
    assert OrderType("STP LMT") is OrderType.STP_LMT
    assert str(SpreadType.IRON_CONDOR) == "IRON_CONDOR"
    leg = OptionLeg(1, date(2026, 1, 16), 100.0, OptionType.CALL, LegAction.OPEN)
    assert leg.is_long
