from datetime import date

import pytest

from optrack.models import OptionType, OrderType, TradeAction
from optrack.parsing import tokens


def test_strip_noise_drops_annotation():
    raw = "(Replacing #1005300447572) SELL -4 CALENDAR SHOP 100"
    assert tokens.strip_noise(raw) == "SELL -4 CALENDAR SHOP 100"


def test_strip_noise_keeps_strings_without_action():
    assert tokens.strip_noise("hello world") == "hello world"


def test_normalize_unescapes_signs():
    assert tokens.normalize(r"BUY \+2 1/\-2/2") == "BUY +2 1/-2/2"


def test_extract_action_is_case_insensitive():
    assert tokens.extract_action("sell -1 SPY") is TradeAction.SELL
    assert tokens.extract_action("BUYING 1 SPY") is None


def test_extract_quantity_is_absolute():
    assert tokens.extract_quantity("SELL -20 VERT ROLL RUT") == 20
    assert tokens.extract_quantity("BUY +2 BE") == 2
    assert tokens.extract_quantity("BUY BE") is None


def test_extract_ratios_requires_ratio_keyword():
    assert tokens.extract_ratios("SELL -7 2/2/-1/-1 CUSTOM GOOGL 100") == (2, 2, -1, -1)
    assert tokens.extract_ratios("BUY +1 1/3/2 ~BUTTERFLY SPX 100") == (1, 3, 2)
    assert tokens.extract_ratios("SELL -1 SPY 100 16 JAN 26 580/570 PUT") is None


def test_extract_price_handles_credit_and_leading_dot():
    assert tokens.extract_price("@-1.49 LMT") == pytest.approx(-1.49)
    assert tokens.extract_price("@.40 LMT") == pytest.approx(0.40)
    assert tokens.extract_price("no price") is None


def test_order_type_checks_stop_limit_before_stop():
    assert tokens.extract_order_type("@1.00 STP LMT") is OrderType.STP_LMT
    assert tokens.extract_order_type("@1.00 STP") is OrderType.STP
    assert tokens.extract_order_type("@1.00 MKT") is OrderType.MKT
    assert tokens.extract_order_type("@1.00") is OrderType.LMT


def test_flags():
    assert tokens.extract_gtc("@11.99 LMT GTC")
    assert not tokens.extract_gtc("@11.99 LMT GTCX")
    assert tokens.extract_weekly("SHOP 100 (Weeklys) 13 FEB 26")
    assert tokens.extract_weekly("SHOP 100 (weekly) 13 FEB 26")
    assert not tokens.extract_weekly("SHOP 100 Weeklys 13 FEB 26")


def test_extract_multiplier_variants():
    assert tokens.extract_multiplier("BUY +2 /ESZ25 1/50 19 DEC 25 6000 CALL") == 50
    assert tokens.extract_multiplier("SELL -4 CALENDAR SHOP 100 (Weeklys) 13 FEB 26") == 100
    assert tokens.extract_multiplier("BUY +1 XYZ 10 20 MAR 26 5 CALL") == 10
    assert tokens.extract_multiplier("BUY +1 XYZ 50 CALL", default=25) == 25


def test_months_table_is_read_only():
    assert tokens.MONTHS["DEC"] == 12
    with pytest.raises(TypeError):
        tokens.MONTHS["FOO"] = 13  # type: ignore[index]


def test_parse_date():
    assert tokens.parse_date("6", "feb", "26") == date(2026, 2, 6)
    assert tokens.parse_date("6", "XXX", "26") is None
    assert tokens.parse_date("30", "FEB", "26") is None


def test_extract_dates_in_order():
    text = "6 FEB 26/6 FEB 26/30 JAN 26/30 JAN 26 355/295/355/295"
    assert tokens.extract_dates(text) == (
        date(2026, 2, 6),
        date(2026, 2, 6),
        date(2026, 1, 30),
        date(2026, 1, 30),
    )


def test_extract_dates_ignores_three_letter_symbols():
    assert tokens.extract_dates("BUY +2 AMD 100 15 JAN 27 50 CALL") == (date(2027, 1, 15),)


def test_extract_dates_rejects_unknown_month():
    assert tokens.extract_dates("BUY +1 XYZ 100 5 XXX 26 50 CALL") is None
    assert tokens.extract_dates("BUY +1 XYZ 50 CALL", 10) == ()


def test_extract_dates_scans_from_offset():
    text = "BUY +1 XYZ 10 20 MAR 26 50 CALL"

    assert tokens.extract_dates(text) is None
    assert tokens.extract_dates(text, text.index("XYZ") + 3) == (date(2026, 3, 20),)


def test_extract_strikes():
    assert tokens.extract_strikes("16 JAN 26 247.5/260 CALL") == (247.5, 260.0)
    assert tokens.extract_strikes("18 JUN 26 [PM] 6000 PUT") == (6000.0,)
    assert tokens.extract_strikes("16 JAN 26 @1.00") == ()


def test_extract_option_types():
    assert tokens.extract_option_types("355/295 call/PUT @1") == (OptionType.CALL, OptionType.PUT)
    assert tokens.extract_option_types("no types") == ()
