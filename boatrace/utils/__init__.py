"""Utility helpers for boatrace data collection."""

from boatrace.utils.date_parser import parse_race_date
from boatrace.utils.text import normalize_text, to_float, to_int

__all__ = [
    "normalize_text",
    "parse_race_date",
    "to_float",
    "to_int",
]
