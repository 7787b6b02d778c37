"""Stadium list scraper module for boatrace.jp.

This module provides functionality to scrape the stadiums holding
races on a specific date from the race index page.
"""

import re
from datetime import date

from bs4 import BeautifulSoup

from boatrace.constants import STADIUMS
from boatrace.scrapers.base import BaseScraper
from boatrace.utils.text import normalize_text


class StadiumScraper(BaseScraper):
    """Scraper for the boatrace.jp race index page.

    Each stadium holding races on the date has its own row in the index
    table, linking to ``raceindex?jcd=NN&hd=YYYYMMDD``.

    Example:
        >>> scraper = StadiumScraper()
        >>> scraper.scrape_ids(date(2024, 1, 15))
        [1, 2, 4, 12]
        >>> scraper.scrape_names(date(2024, 1, 15))
        ['桐生', '戸田', '平和島', '住之江']
    """

    PATH = "/owpc/pc/race/index"

    # Pattern to match stadium codes in row links: raceindex?jcd=01&hd=...
    STADIUM_CODE_PATTERN = re.compile(r"[?&]jcd=(\d{2})")

    def parse(self, soup: BeautifulSoup) -> list[dict]:
        """Parse the index page and extract stadiums in page order.

        Args:
            soup: BeautifulSoup object of the index page.

        Returns:
            List of dictionaries with stadium_id and stadium_name.
        """
        stadiums: list[dict] = []
        seen: set[int] = set()

        for tbody in soup.select("div.table1 table tbody"):
            link = tbody.select_one("td.is-arrow1 a[href*='jcd=']")
            if link is None:
                continue

            match = self.STADIUM_CODE_PATTERN.search(link["href"])
            if not match:
                continue

            stadium_id = int(match.group(1))
            if stadium_id not in STADIUMS or stadium_id in seen:
                continue
            seen.add(stadium_id)

            image = link.find("img")
            name = normalize_text(image.get("alt")) if image else None
            # alt には "桐生>" のような装飾が付くことがある
            name = name.rstrip(">").strip() if name else STADIUMS[stadium_id]

            stadiums.append({"stadium_id": stadium_id, "stadium_name": name})

        return stadiums

    def scrape(self, race_date: date) -> list[dict]:
        """Fetch the stadiums holding races on a date.

        Args:
            race_date: Race date.

        Returns:
            List of dictionaries with stadium_id and stadium_name.
        """
        url = self.build_url(self.PATH, race_date)
        soup = self.fetch_soup(url)
        return self.parse(soup)

    def scrape_ids(self, race_date: date) -> list[int]:
        """Fetch the codes of the stadiums holding races on a date."""
        return [stadium["stadium_id"] for stadium in self.scrape(race_date)]

    def scrape_names(self, race_date: date) -> list[str]:
        """Fetch the names of the stadiums holding races on a date."""
        return [stadium["stadium_name"] for stadium in self.scrape(race_date)]
