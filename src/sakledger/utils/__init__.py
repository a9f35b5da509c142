"""Utility functions for sakledger."""

from sakledger.utils.date_parser import parse_date, get_date_range
from sakledger.utils.amount_parser import parse_amount, format_rupiah

__all__ = ["parse_date", "get_date_range", "parse_amount", "format_rupiah"]
