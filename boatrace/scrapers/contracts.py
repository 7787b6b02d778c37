"""Capabilities the dispatcher expects from page scrapers."""

from datetime import date
from typing import Protocol


class RaceScraper(Protocol):
    """1レース単位のページを取得してレコードを返すスクレイパー"""

    def scrape(self, race_date: date, stadium_code: int, race_number: int) -> dict:
        """Fetch one race page and return its record."""
        ...

    def close(self) -> None: ...


class StadiumListScraper(Protocol):
    """開催日ごとのレース場一覧を返すスクレイパー"""

    def scrape(self, race_date: date) -> list[dict]: ...

    def scrape_ids(self, race_date: date) -> list[int]: ...

    def scrape_names(self, race_date: date) -> list[str]: ...

    def close(self) -> None: ...
