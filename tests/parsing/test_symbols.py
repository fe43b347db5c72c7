import pytest

from optrack.parsing import symbols


@pytest.mark.parametrize(
    "text,expected",
    [
        ("SELL -7 2/2/-1/-1 CUSTOM GOOGL 100 (Weeklys)", "GOOGL"),
        ("BUY +2 1/-2/2 CUSTOM /ESZ25 1/50 19 DEC 25", "/ESZ25"),
        ("SELL -4 CALENDAR SHOP 100", "SHOP"),
        ("SELL -20 VERT ROLL RUT 100", "RUT"),
        ("BUY +5 VERTICAL AAPL 100", "AAPL"),
        ("SELL -2 1/3 BACKRATIO AMZN 100", "AMZN"),
        ("SELL -2 IC SPX 100", "SPX"),
        ("BUY +2 BE 100 15 JAN 27", "BE"),
        ("buy +2 be 100 15 jan 27", "BE"),
    ],
)
def test_extract_symbol(text, expected):
    assert symbols.extract_symbol(text) == expected


def test_matchers_are_tried_in_order():
    text = "SELL -20 VERT ROLL RUT 100"
    assert symbols.match_after_quantity(text) is None
    assert symbols.match_after_keyword(text).symbol == "RUT"
    assert symbols.match_after_roll(text).symbol == "RUT"


def test_quantity_and_keyword_matcher_knows_iron_condor_token():
    assert symbols.match_after_keyword("SELL -2 IC SPX 100") is None
    assert symbols.match_after_quantity_and_keyword("SELL -2 IC SPX 100").symbol == "SPX"


def test_fallback_matcher():
    assert symbols.match_fallback("+3 7/8 XYZ 100") == ("XYZ", 10)


def test_extract_symbol_returns_none_when_nothing_matches():
    assert symbols.extract_symbol("BUY +1 @1.00 LMT") is None


def test_extract_symbol_accepts_custom_matchers():
    matchers = (lambda _t: None, lambda _t: symbols.SymbolMatch("ZZ", 2))
    assert symbols.extract_symbol("anything", matchers=matchers) == "ZZ"


def test_find_symbol_reports_offset_past_symbol():
    text = "BUY +1 XYZ 10 20 MAR 26 50 CALL"
    assert symbols.find_symbol(text) == symbols.SymbolMatch("XYZ", 10)
    assert symbols.find_symbol("BUY +2 1/-2/2 CUSTOM /ESZ25 1/50 19 DEC 25").symbol == "/ESZ25"
