"""boatrace.jp race data scraper."""

from boatrace.core import OPERATIONS, BoatraceScraper, Operation
from boatrace.exceptions import (
    BoatraceError,
    FetchError,
    InvalidDateError,
    InvalidOperationError,
    InvalidRaceNumberError,
    InvalidStadiumCodeError,
    ValidationError,
)
from boatrace.scrapers.extract import OddsRange

__all__ = [
    "OPERATIONS",
    "BoatraceError",
    "BoatraceScraper",
    "FetchError",
    "InvalidDateError",
    "InvalidOperationError",
    "InvalidRaceNumberError",
    "InvalidStadiumCodeError",
    "OddsRange",
    "Operation",
    "ValidationError",
]
