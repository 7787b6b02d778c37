"""Base scraper module for boatrace.jp data collection."""

import logging
import time
from datetime import date

import requests
from bs4 import BeautifulSoup

from boatrace.constants import BASE_URL
from boatrace.exceptions import FetchError

logger = logging.getLogger(__name__)


class BaseScraper:
    """Base class for boatrace.jp page scrapers.

    Owns the HTTP session and request pacing. Field extraction is left to
    the functions in ``boatrace.scrapers.extract``.

    Attributes:
        DEFAULT_USER_AGENT: Default User-Agent string for HTTP requests.
        DEFAULT_DELAY: Default delay in seconds between consecutive requests.
        TIMEOUT: Request timeout in seconds.
        delay: Delay in seconds between consecutive requests.
        session: The requests session owned by this scraper.
        _global_last_request_time: Class-level timestamp shared across all instances.

    Example:
        >>> class TitleScraper(BaseScraper):
        ...     def scrape(self, race_date):
        ...         soup = self.fetch_soup(self.build_url("/owpc/pc/race/index", race_date))
        ...         return {"title": soup.title.get_text(strip=True)}
        >>> scraper = TitleScraper(delay=1.0)
    """

    BASE_URL = BASE_URL

    DEFAULT_USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )

    DEFAULT_DELAY = 1.0

    TIMEOUT = 10

    # グローバルレートリミッタ: 全インスタンス間で共有
    _global_last_request_time: float | None = None

    def __init__(
        self, session: requests.Session | None = None, delay: float = DEFAULT_DELAY
    ) -> None:
        """Initialize BaseScraper.

        Args:
            session: HTTP session to use. A new one is created when omitted.
            delay: Delay in seconds between consecutive HTTP requests.
                   Default is 1.0 second.
        """
        self.delay = delay
        self._last_request_time: float | None = None
        self.session = session if session is not None else requests.Session()

    def build_url(
        self,
        path: str,
        race_date: date,
        stadium_code: int | None = None,
        race_number: int | None = None,
    ) -> str:
        """Build a page URL for the given date, stadium and race.

        Args:
            path: Page path (e.g., "/owpc/pc/race/racelist").
            race_date: Race date.
            stadium_code: Stadium code (1-24), zero-padded to two digits.
            race_number: Race number (1-12).

        Returns:
            Full URL with query parameters.
        """
        params = []
        if race_number is not None:
            params.append(f"rno={race_number}")
        if stadium_code is not None:
            params.append(f"jcd={stadium_code:02d}")
        params.append(f"hd={race_date:%Y%m%d}")
        return f"{self.BASE_URL}{path}?{'&'.join(params)}"

    @staticmethod
    def base_record(race_date: date, stadium_code: int, race_number: int) -> dict:
        """Return the identifying fields every race record starts with."""
        return {
            "race_date": race_date.isoformat(),
            "race_stadium_number": stadium_code,
            "race_number": race_number,
        }

    def fetch(self, url: str) -> str:
        """Fetch HTML content from the specified URL.

        Applies delay between consecutive requests to avoid overloading
        the target server. Failed requests are not retried.

        Args:
            url: The URL to fetch.

        Returns:
            The HTML content as a string.

        Raises:
            FetchError: If the HTTP request fails.
        """
        self._apply_delay()

        headers = {
            "User-Agent": self.DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
            "Referer": f"{self.BASE_URL}/",
        }
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, headers=headers, timeout=self.TIMEOUT)
            response.encoding = "utf-8"
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.warning("Request failed: %s (%s)", url, e)
            raise FetchError(url, str(e)) from e
        finally:
            # グローバルタイマーとインスタンスタイマーの両方を更新
            current_time = time.time()
            self._last_request_time = current_time
            BaseScraper._global_last_request_time = current_time

    def _apply_delay(self) -> None:
        """Apply delay if needed based on global last request time.

        Uses class-level _global_last_request_time to enforce rate limiting
        across all BaseScraper instances.
        """
        if BaseScraper._global_last_request_time is None:
            return

        elapsed = time.time() - BaseScraper._global_last_request_time
        if elapsed < self.delay:
            time.sleep(self.delay - elapsed)

    def get_soup(self, html: str) -> BeautifulSoup:
        """Parse HTML string into a BeautifulSoup object.

        Args:
            html: The HTML content to parse.

        Returns:
            A BeautifulSoup object representing the parsed HTML.
        """
        return BeautifulSoup(html, "lxml")

    def fetch_soup(self, url: str) -> BeautifulSoup:
        """Fetch a page and parse it."""
        return self.get_soup(self.fetch(url))

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
