"""Result scraper module for boatrace.jp.

This module provides functionality to scrape race results: finishing
order, start timings, winning technique and payouts.
"""

import logging
import re
from datetime import date

from bs4 import BeautifulSoup, Tag

from boatrace.scrapers.base import BaseScraper
from boatrace.scrapers.extract import extract_text, node_text
from boatrace.scrapers.race_conditions import parse_start_diagram, parse_weather
from boatrace.utils.text import to_int

logger = logging.getLogger(__name__)

# 勝式名から払戻金のキーへのマッピング
BET_TYPES: dict[str, str] = {
    "3連単": "trifecta",
    "3連複": "trio",
    "2連単": "exacta",
    "2連複": "quinella",
    "拡連複": "quinella_place",
    "単勝": "win",
    "複勝": "place",
}


class ResultScraper(BaseScraper):
    """Scraper for boatrace.jp race result pages.

    Example:
        >>> scraper = ResultScraper()
        >>> record = scraper.scrape(date(2024, 1, 15), 12, 1)
        >>> record["payouts"]["trifecta"]
        [{'combination': '1-2-3', 'payout': 1230, 'popularity': 4}]
    """

    PATH = "/owpc/pc/race/raceresult"

    def scrape(self, race_date: date, stadium_code: int, race_number: int) -> dict:
        """Fetch the result for a race."""
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
        """Parse the result page.

        Args:
            soup: BeautifulSoup object of the result page.
            race_date: Race date.
            stadium_code: Stadium code (1-24).
            race_number: Race number (1-12).

        Returns:
            Dictionary with weather fields, race_technique, "boats" and "payouts".
            Before the race is run every result field is None or empty.
        """
        record = self.base_record(race_date, stadium_code, race_number)
        record.update(parse_weather(soup))
        record["race_technique"] = self._parse_technique(soup)

        boats = self._parse_boats(soup)
        for boat_number, start in parse_start_diagram(soup).items():
            boats.setdefault(boat_number, self._empty_boat(boat_number)).update(start)
        record["boats"] = dict(sorted(boats.items()))

        record["payouts"] = self._parse_payouts(soup)
        return record

    @staticmethod
    def _empty_boat(boat_number: int) -> dict:
        return {
            "racer_boat_number": boat_number,
            "racer_place": None,
            "racer_number": None,
            "racer_name": None,
            "race_time": None,
            "racer_start_course": None,
            "racer_start_timing": None,
        }

    def _parse_technique(self, soup: BeautifulSoup) -> str | None:
        table = _find_table(soup, "決まり手")
        if table is None:
            return None
        return extract_text(table, "tbody td") or None

    def _parse_boats(self, soup: BeautifulSoup) -> dict[int, dict]:
        """Parse the finishing order table.

        Row cells: place, boat number, racer (number and name), race time.
        Irregular places such as "F" or "欠" give racer_place None.
        """
        boats: dict[int, dict] = {}

        table = _find_table(soup, "レースタイム")
        if table is None:
            return boats

        for row in table.select("tbody tr"):
            boat_number = to_int(extract_text(row, "td:nth-of-type(2)"))
            if boat_number is None:
                continue

            boat = self._empty_boat(boat_number)
            boat["racer_place"] = to_int(extract_text(row, "td:nth-of-type(1)"))
            boat["racer_number"] = to_int(extract_text(row, "td:nth-of-type(3) span.is-fs12"))
            boat["racer_name"] = extract_text(row, "td:nth-of-type(3) span.is-fs18")
            boat["race_time"] = extract_text(row, "td:nth-of-type(4)") or None
            boats[boat_number] = boat

        return boats

    def _parse_payouts(self, soup: BeautifulSoup) -> dict[str, list[dict]]:
        """Parse the payout table.

        Each bet type is one tbody; its first cell names the bet type and
        every row with boat numbers is one paid combination.
        """
        payouts: dict[str, list[dict]] = {key: [] for key in BET_TYPES.values()}

        table = _find_table(soup, "勝式")
        if table is None:
            return payouts

        for tbody in table.select("tbody"):
            bet_name = extract_text(tbody, "td")
            key = BET_TYPES.get(bet_name or "")
            if key is None:
                logger.warning("Unknown bet type in payout table: %s", bet_name)
                continue

            for row in tbody.select("tr"):
                payout = self._parse_payout_row(row)
                if payout is not None:
                    payouts[key].append(payout)

        return payouts

    def _parse_payout_row(self, row: Tag) -> dict | None:
        numbers = [node_text(span) for span in row.select("span.numberSet1_number")]
        if not numbers:
            return None

        separator = extract_text(row, "span.numberSet1_text") or "-"
        payout_text = extract_text(row, "span.is-payout1") or ""
        cells = row.find_all("td")

        return {
            "combination": separator.join(numbers),
            "payout": to_int(re.sub(r"\D", "", payout_text)),
            "popularity": to_int(node_text(cells[-1])) if cells else None,
        }


def _find_table(soup: BeautifulSoup, header: str) -> Tag | None:
    """Return the table whose header row contains ``header``."""
    for th in soup.select("table th"):
        if header in node_text(th):
            return th.find_parent("table")
    return None
