"""Scraper modules for boatrace data collection."""

from boatrace.scrapers.base import BaseScraper
from boatrace.scrapers.extract import (
    OddsRange,
    extract_class_token,
    extract_number,
    extract_range,
    extract_text,
)
from boatrace.scrapers.odds import OddsScraper
from boatrace.scrapers.preview import PreviewScraper
from boatrace.scrapers.program import ProgramScraper
from boatrace.scrapers.result import ResultScraper
from boatrace.scrapers.stadium import StadiumScraper

__all__ = [
    "BaseScraper",
    "OddsRange",
    "OddsScraper",
    "PreviewScraper",
    "ProgramScraper",
    "ResultScraper",
    "StadiumScraper",
    "extract_class_token",
    "extract_number",
    "extract_range",
    "extract_text",
]
