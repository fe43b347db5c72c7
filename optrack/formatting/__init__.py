"""Formatting helpers that expose table builders for the CLI."""

from .trade_tables import TableData, legs_table, render, trade_table

__all__ = ["TableData", "legs_table", "render", "trade_table"]
