"""Odds scraper module for boatrace.jp.

This module provides functionality to scrape odds for a race. Each bet
type group lives on its own page, so one race costs one request per
configured page.

Odds grids list one column per first boat. Cells are read in document
(row-major) order and mapped back to combinations by position.
"""

import logging
from datetime import date

from bs4 import BeautifulSoup

from boatrace.constants import BOAT_NUMBERS
from boatrace.scrapers.base import BaseScraper
from boatrace.scrapers.extract import node_text, parse_range
from boatrace.utils.text import to_float

logger = logging.getLogger(__name__)

# ページ種別ごとのパス
PAGES: dict[str, str] = {
    "trifecta": "/owpc/pc/race/odds3t",
    "trio": "/owpc/pc/race/odds3f",
    "exacta_quinella": "/owpc/pc/race/odds2tf",
    "quinella_place": "/owpc/pc/race/oddsk",
    "win_place": "/owpc/pc/race/oddstf",
}


def _column_major_to_rows(columns: list[list]) -> list:
    """Reorder per-column lists into row-major document order.

    Shorter columns simply end early, as in the triangular grids.
    """
    depth = max(len(column) for column in columns)
    return [column[row] for row in range(depth) for column in columns if row < len(column)]


def trifecta_combinations() -> list[str]:
    """3連単: 20 rows x 6 columns, column f lists (second, third) ascending."""
    columns = [
        [
            f"{first}-{second}-{third}"
            for second in BOAT_NUMBERS
            if second != first
            for third in BOAT_NUMBERS
            if third not in (first, second)
        ]
        for first in BOAT_NUMBERS
    ]
    return _column_major_to_rows(columns)


def exacta_combinations() -> list[str]:
    """2連単: 5 rows x 6 columns, column f lists the second boat ascending."""
    columns = [
        [f"{first}-{second}" for second in BOAT_NUMBERS if second != first]
        for first in BOAT_NUMBERS
    ]
    return _column_major_to_rows(columns)


def quinella_combinations() -> list[str]:
    """2連複 / 拡連複: triangular grid, column f lists the second boat above f."""
    columns = [
        [f"{first}={second}" for second in BOAT_NUMBERS if second > first]
        for first in BOAT_NUMBERS
    ]
    return _column_major_to_rows([column for column in columns if column])


def trio_combinations() -> list[str]:
    """3連複: 20 combinations, column f lists (second, third) above f ascending."""
    columns = [
        [
            f"{first}={second}={third}"
            for second in BOAT_NUMBERS
            if second > first
            for third in BOAT_NUMBERS
            if third > second
        ]
        for first in BOAT_NUMBERS
    ]
    return _column_major_to_rows([column for column in columns if column])


class OddsScraper(BaseScraper):
    """Scraper for boatrace.jp odds pages.

    Attributes:
        bet_types: Page keys (see PAGES) fetched for each race.

    Example:
        >>> scraper = OddsScraper(bet_types=("win_place",))
        >>> record = scraper.scrape(date(2024, 1, 15), 12, 1)
        >>> record["place"][1]
        OddsRange(low=1.0, high=1.2)
    """

    def __init__(
        self,
        session=None,
        delay: float = BaseScraper.DEFAULT_DELAY,
        bet_types: tuple[str, ...] = tuple(PAGES),
    ) -> None:
        unknown = [bet_type for bet_type in bet_types if bet_type not in PAGES]
        if unknown:
            raise ValueError(f"Unknown odds page: {', '.join(unknown)}")

        super().__init__(session=session, delay=delay)
        self.bet_types = tuple(bet_types)

    def scrape(self, race_date: date, stadium_code: int, race_number: int) -> dict:
        """Fetch the configured odds pages for a race.

        Args:
            race_date: Race date.
            stadium_code: Stadium code (1-24).
            race_number: Race number (1-12).

        Returns:
            Record with one mapping per bet type (trifecta, trio, exacta,
            quinella, quinella_place, win, place), limited to the configured pages.
        """
        record = self.base_record(race_date, stadium_code, race_number)

        for bet_type in self.bet_types:
            url = self.build_url(PAGES[bet_type], race_date, stadium_code, race_number)
            soup = self.fetch_soup(url)
            record.update(self.parse(soup, bet_type))

        return record

    def parse(self, soup: BeautifulSoup, bet_type: str) -> dict:
        """Parse one odds page.

        Args:
            soup: BeautifulSoup object of the odds page.
            bet_type: Page key the soup was fetched for.

        Returns:
            Dictionary of bet type name to odds mapping.
        """
        cells = [node_text(cell) for cell in soup.select("td.oddsPoint")]

        if bet_type == "trifecta":
            return {"trifecta": self._map_cells(cells, trifecta_combinations(), to_float)}

        if bet_type == "trio":
            return {"trio": self._map_cells(cells, trio_combinations(), to_float)}

        if bet_type == "exacta_quinella":
            exacta = exacta_combinations()
            quinella = quinella_combinations()
            if len(cells) != len(exacta) + len(quinella):
                cells = self._discard(cells, bet_type)
            return {
                "exacta": self._map_cells(cells[: len(exacta)], exacta, to_float),
                "quinella": self._map_cells(cells[len(exacta):], quinella, to_float),
            }

        if bet_type == "quinella_place":
            return {
                "quinella_place": self._map_cells(cells, quinella_combinations(), parse_range)
            }

        # win_place: 単勝6艇のあとに複勝6艇
        boats = list(BOAT_NUMBERS)
        if len(cells) != len(boats) * 2:
            cells = self._discard(cells, bet_type)
        return {
            "win": self._map_cells(cells[: len(boats)], boats, to_float),
            "place": self._map_cells(cells[len(boats):], boats, parse_range),
        }

    def _map_cells(self, cells: list[str], keys: list, convert) -> dict:
        """Map grid cells onto keys; a size mismatch leaves every key empty."""
        if len(cells) != len(keys):
            if cells:
                logger.warning(
                    "Unexpected odds grid size: %d cells for %d combinations",
                    len(cells),
                    len(keys),
                )
            return {key: convert(None) for key in keys}
        return {key: convert(cell) for key, cell in zip(keys, cells)}

    @staticmethod
    def _discard(cells: list[str], bet_type: str) -> list[str]:
        if cells:
            logger.warning("Unexpected odds grid size on %s page: %d cells", bet_type, len(cells))
        return []

