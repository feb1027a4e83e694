"""Utility functions for moneysaver."""

from moneysaver.utils.date_parser import parse_date
from moneysaver.utils.amount_parser import parse_amount
from moneysaver.utils.currency import format_currency

__all__ = ["parse_date", "parse_amount", "format_currency"]
