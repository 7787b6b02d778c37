"""Preview (before-race information) scraper module for boatrace.jp.

This module provides functionality to scrape the 直前情報 page: weather,
exhibition times, tilt and the start exhibition.
"""

from datetime import date

from bs4 import BeautifulSoup, Tag

from boatrace.scrapers.base import BaseScraper
from boatrace.scrapers.extract import extract_number, extract_text
from boatrace.scrapers.race_conditions import (
    extract_measure,
    parse_start_diagram,
    parse_weather,
)
from boatrace.utils.text import to_int


class PreviewScraper(BaseScraper):
    """Scraper for boatrace.jp before-race information pages.

    Example:
        >>> scraper = PreviewScraper()
        >>> record = scraper.scrape(date(2024, 1, 15), 12, 1)
        >>> record["wind_direction"]
        14
    """

    PATH = "/owpc/pc/race/beforeinfo"

    def scrape(self, race_date: date, stadium_code: int, race_number: int) -> dict:
        """Fetch the before-race information for a race."""
        url = self.build_url(self.PATH, race_date, stadium_code, race_number)
        soup = self.fetch_soup(url)
        return self.parse(soup, race_date, stadium_code, race_number)

    def parse(
        self,
        soup: BeautifulSoup,
        race_date: date,
        stadium_code: int,
        race_number: int,
    ) -> dict:
        """Parse the before-race information page.

        Args:
            soup: BeautifulSoup object of the page.
            race_date: Race date.
            stadium_code: Stadium code (1-24).
            race_number: Race number (1-12).

        Returns:
            Dictionary of weather fields plus "boats" keyed by boat number.
        """
        record = self.base_record(race_date, stadium_code, race_number)
        record.update(parse_weather(soup))

        boats = self._parse_boats(soup)
        starts = parse_start_diagram(soup)
        for boat_number, boat in boats.items():
            boat.update(
                starts.get(
                    boat_number,
                    {"racer_start_course": None, "racer_start_timing": None},
                )
            )
        record["boats"] = boats

        return record

    def _parse_boats(self, soup: BeautifulSoup) -> dict[int, dict]:
        boats: dict[int, dict] = {}

        for tbody in soup.select("div.table1 table.is-w748 tbody"):
            boat = self._parse_boat(tbody)
            if boat["racer_boat_number"] is not None:
                boats[boat["racer_boat_number"]] = boat

        return boats

    def _parse_boat(self, tbody: Tag) -> dict:
        """Parse a single boat's rows.

        First row: 1 boat number, 3 racer name, 4 weight, 5 exhibition
        time, 6 tilt. Third row, first cell: weight adjustment.
        """
        row = "tr:nth-of-type(1) > td:nth-of-type({})"
        return {
            "racer_boat_number": to_int(extract_text(tbody, row.format(1))),
            "racer_name": extract_text(tbody, row.format(3)),
            "racer_weight": extract_measure(tbody, row.format(4)),
            "racer_weight_adjustment": extract_number(
                tbody, "tr:nth-of-type(3) > td:nth-of-type(1)"
            ),
            "racer_exhibition_time": extract_number(tbody, row.format(5)),
            "racer_tilt_adjustment": extract_number(tbody, row.format(6)),
        }
