from datetime import date, datetime
from typing import Callable, Optional, Union

from optrack.config import get as cfg_get

DateLike = Union[str, date]


def today() -> date:
    """Return the current local date."""
    return date.today()


def parse_date(d: DateLike) -> Optional[date]:
    """Return ``d`` parsed as :class:`datetime.date`.

    Accepts ``date``/``datetime`` objects and strings in ``YYYY-MM-DD`` or
    ``YYYYMMDD`` format.
    """
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(str(d)[:10], fmt).date()
        except ValueError:
            continue
    return None


def days_to_expiration(
    expiration: DateLike, today_fn: Callable[[], date] | None = None
) -> int:
    """Return calendar days from today until ``expiration``.

    Expired contracts give a negative count; unparseable input gives ``0``.
    """
    exp = parse_date(expiration)
    if exp is None:
        return 0
    return (exp - (today_fn or today)()).days


def format_expiry(value: DateLike, fmt: str | None = None) -> str:
    """Return ``value`` formatted for display, e.g. ``16 Jan 26``."""
    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date"
    return parsed.strftime(fmt or cfg_get("DATE_DISPLAY_FORMAT", "%d %b %y"))
