from datetime import datetime
from itertools import count

import pytest

from optrack.parsing.trade_parser import TradeParser

FIXED_NOW = datetime(2026, 1, 5, 14, 30)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant trade date."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory():
    counter = count(1)
    return lambda: f"trade-{next(counter)}"


@pytest.fixture
def parser(fixed_clock, id_factory):
    return TradeParser(clock=fixed_clock, id_factory=id_factory, default_multiplier=100)
