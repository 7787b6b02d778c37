"""Program (race card) scraper module for boatrace.jp.

This module provides functionality to scrape the race card (出走表):
race title, distance, deadline and per-boat racer, motor and boat data.
"""

import re
from datetime import date

from bs4 import BeautifulSoup, Tag

from boatrace.scrapers.base import BaseScraper
from boatrace.scrapers.extract import extract_text, node_text
from boatrace.utils.text import to_float, to_int

_CELL = "tr:nth-of-type(1) > td:nth-of-type({})"


class ProgramScraper(BaseScraper):
    """Scraper for boatrace.jp race card pages.

    Example:
        >>> scraper = ProgramScraper()
        >>> record = scraper.scrape(date(2024, 1, 15), 12, 1)
        >>> record["boats"][1]["racer_name"]
        '峰 竜太'
    """

    PATH = "/owpc/pc/race/racelist"

    def scrape(self, race_date: date, stadium_code: int, race_number: int) -> dict:
        """Fetch the race card for a race.

        Args:
            race_date: Race date.
            stadium_code: Stadium code (1-24).
            race_number: Race number (1-12).

        Returns:
            Race card record.
        """
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
        """Parse the race card page.

        Args:
            soup: BeautifulSoup object of the race card page.
            race_date: Race date.
            stadium_code: Stadium code (1-24).
            race_number: Race number (1-12).

        Returns:
            Dictionary of race fields plus "boats" keyed by boat number.
        """
        record = self.base_record(race_date, stadium_code, race_number)
        record.update(self._parse_race_info(soup, race_number))
        record["boats"] = self._parse_boats(soup)
        return record

    def _parse_race_info(self, soup: BeautifulSoup, race_number: int) -> dict:
        """Parse title, subtitle, distance and deadline.

        The title detail reads like "予選 1800m".
        """
        race_info = {
            "race_title": extract_text(soup, "div.heading2_title h2"),
            "race_subtitle": None,
            "race_distance": None,
            "race_closed_at": self._parse_closed_at(soup, race_number),
        }

        detail = extract_text(soup, "span.heading2_titleDetail")
        if detail:
            match = re.search(r"(\d+)m", detail)
            if match:
                race_info["race_distance"] = int(match.group(1))
                detail = detail[: match.start()]
            race_info["race_subtitle"] = detail.strip() or None

        return race_info

    def _parse_closed_at(self, soup: BeautifulSoup, race_number: int) -> str | None:
        """Find this race's deadline in the "締切予定時刻" row.

        The row holds one cell per race, 1R first.
        """
        label = soup.find("td", string=re.compile("締切予定時刻"))
        if label is None:
            return None

        cells = label.find_next_siblings("td")
        if len(cells) < race_number:
            return None

        match = re.search(r"\d{1,2}:\d{2}", node_text(cells[race_number - 1]))
        return match.group(0) if match else None

    def _parse_boats(self, soup: BeautifulSoup) -> dict[int, dict]:
        """Parse one tbody per boat from the race card table."""
        boats: dict[int, dict] = {}

        for tbody in soup.select("div.table1 tbody.is-fs12"):
            boat = self._parse_boat(tbody)
            if boat["racer_boat_number"] is not None:
                boats[boat["racer_boat_number"]] = boat

        return boats

    def _parse_boat(self, tbody: Tag) -> dict:
        """Parse a single boat's rows.

        Cell layout of the first row:
            1: boat number, 3: racer profile, 4: F/L/average ST,
            5: national rates, 6: local rates, 7: motor, 8: boat.
        """
        boat = {
            "racer_boat_number": to_int(extract_text(tbody, _CELL.format(1))),
        }

        # 登録番号 / 級別: "4320 / A1"
        profile = extract_text(tbody, f"{_CELL.format(3)} > div:nth-of-type(1)")
        number, racer_class = _split_pair(profile, "/")
        boat["racer_number"] = to_int(number)
        boat["racer_class"] = racer_class
        boat["racer_name"] = extract_text(tbody, f"{_CELL.format(3)} > div:nth-of-type(2)")

        # 支部/出身地 年齢/体重: "佐賀/佐賀 38歳/52.0kg"
        origin = extract_text(tbody, f"{_CELL.format(3)} > div:nth-of-type(3)") or ""
        origin_match = re.search(r"(\S+)/(\S+) (\d+)歳/([\d.]+)kg", origin)
        boat["racer_branch"] = origin_match.group(1) if origin_match else None
        boat["racer_birthplace"] = origin_match.group(2) if origin_match else None
        boat["racer_age"] = to_int(origin_match.group(3)) if origin_match else None
        boat["racer_weight"] = to_float(origin_match.group(4)) if origin_match else None

        # F数 L数 平均ST: "F0 L0 0.15"
        flying, late, start_timing = _split_values(extract_text(tbody, _CELL.format(4)), 3)
        boat["racer_flying_count"] = to_int(flying[1:]) if flying else None
        boat["racer_late_count"] = to_int(late[1:]) if late else None
        boat["racer_average_start_timing"] = to_float(start_timing)

        for prefix, column in (("racer_national", 5), ("racer_local", 6)):
            top_1, top_2, top_3 = _split_values(extract_text(tbody, _CELL.format(column)), 3)
            boat[f"{prefix}_top_1_percent"] = to_float(top_1)
            boat[f"{prefix}_top_2_percent"] = to_float(top_2)
            boat[f"{prefix}_top_3_percent"] = to_float(top_3)

        for prefix, column in (("racer_assigned_motor", 7), ("racer_assigned_boat", 8)):
            number, top_2, top_3 = _split_values(extract_text(tbody, _CELL.format(column)), 3)
            boat[f"{prefix}_number"] = to_int(number)
            boat[f"{prefix}_top_2_percent"] = to_float(top_2)
            boat[f"{prefix}_top_3_percent"] = to_float(top_3)

        return boat


def _split_pair(text: str | None, separator: str) -> tuple[str | None, str | None]:
    if not text or separator not in text:
        return None, None
    first, second = text.split(separator, 1)
    return first.strip() or None, second.strip() or None


def _split_values(text: str | None, count: int) -> list[str | None]:
    """Split a space-separated cell into exactly ``count`` values."""
    values = text.split(" ") if text else []
    if len(values) != count:
        return [None] * count
    return values
