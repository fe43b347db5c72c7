"""optrack: parse broker order strings into structured options trades.

Importing :mod:`optrack` exposes the parser entry points::

    from optrack import parse
    trade = parse("BUY +2 BE 100 15 JAN 27 50 CALL @52.60 LMT")
"""

from .parsing import ParseFailure, TradeParser, parse, parse_trade

__all__ = ["ParseFailure", "TradeParser", "parse", "parse_trade"]
