"""Utility functions for txrules."""

from txrules.utils.date_parser import parse_date, to_naive_utc
from txrules.utils.amount_parser import parse_amount, split_signed_amount

__all__ = ["parse_date", "to_naive_utc", "parse_amount", "split_signed_amount"]
