"""Helper utilities."""

from .dateutils import days_to_expiration, format_expiry, parse_date, today

__all__ = ["days_to_expiration", "format_expiry", "parse_date", "today"]
