"""Scraper dispatcher.

Maps operation names to page scrapers, keeps one scraper (and one HTTP
session) per operation, expands stadium/race filters and assembles the
per-race records into a stadium -> race -> record tree.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

import requests

from boatrace.exceptions import InvalidOperationError
from boatrace.scrapers import (
    BaseScraper,
    OddsScraper,
    PreviewScraper,
    ProgramScraper,
    ResultScraper,
    StadiumScraper,
)
from boatrace.scrapers.contracts import RaceScraper, StadiumListScraper
from boatrace.utils.date_parser import parse_race_date
from boatrace.validators import resolve_race_numbers, validate_stadium_code

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Operations the dispatcher can run."""

    SCRAPE_ODDS = "scrape_odds"
    SCRAPE_PREVIEWS = "scrape_previews"
    SCRAPE_PROGRAMS = "scrape_programs"
    SCRAPE_RESULTS = "scrape_results"
    SCRAPE_STADIUM_IDS = "scrape_stadium_ids"
    SCRAPE_STADIUM_NAMES = "scrape_stadium_names"
    SCRAPE_STADIUMS = "scrape_stadiums"


@dataclass(frozen=True)
class OperationSpec:
    """How an operation is carried out.

    Attributes:
        scraper_class: Scraper type instantiated for the operation.
        method_name: Scraper method called for each page.
        stadium_list: True when the operation returns a flat stadium list
            instead of a stadium -> race -> record tree.
    """

    scraper_class: type[BaseScraper]
    method_name: str = "scrape"
    stadium_list: bool = False


OPERATIONS: dict[Operation, OperationSpec] = {
    Operation.SCRAPE_ODDS: OperationSpec(OddsScraper),
    Operation.SCRAPE_PREVIEWS: OperationSpec(PreviewScraper),
    Operation.SCRAPE_PROGRAMS: OperationSpec(ProgramScraper),
    Operation.SCRAPE_RESULTS: OperationSpec(ResultScraper),
    Operation.SCRAPE_STADIUM_IDS: OperationSpec(StadiumScraper, "scrape_ids", True),
    Operation.SCRAPE_STADIUM_NAMES: OperationSpec(StadiumScraper, "scrape_names", True),
    Operation.SCRAPE_STADIUMS: OperationSpec(StadiumScraper, "scrape", True),
}


def resolve_operation(operation: Operation | str) -> Operation:
    """Convert an operation name to an Operation.

    Raises:
        InvalidOperationError: If the name is not registered.
    """
    try:
        resolved = Operation(operation)
    except ValueError as e:
        raise InvalidOperationError(operation) from e
    return resolved


class BoatraceScraper:
    """Entry point for scraping boatrace.jp.

    Scrapers are created on first use and cached per operation, so two
    operations backed by the same scraper class still get separate
    sessions. Requests run sequentially; a failed request aborts the
    whole call.

    Attributes:
        delay: Delay in seconds between consecutive requests.

    Example:
        >>> with BoatraceScraper() as scraper:
        ...     tree = scraper.scrape_results("2024-01-15", stadium_code=12, race_number=1)
        >>> tree[12][1]["race_technique"]
        '逃げ'
    """

    def __init__(
        self,
        delay: float = BaseScraper.DEFAULT_DELAY,
        session_factory: Callable[[], requests.Session] = requests.Session,
        scraper_classes: dict[Operation, type] | None = None,
    ) -> None:
        """Initialize BoatraceScraper.

        Args:
            delay: Delay in seconds between consecutive requests.
            session_factory: Creates the HTTP session handed to each new scraper.
            scraper_classes: Per-operation overrides of the scraper class.
        """
        self.delay = delay
        self._session_factory = session_factory
        self._scraper_classes = dict(scraper_classes or {})
        self._instances: dict[Operation, RaceScraper | StadiumListScraper] = {}

    def __enter__(self) -> "BoatraceScraper":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close every cached scraper's session and empty the cache."""
        for scraper in self._instances.values():
            scraper.close()
        self._instances.clear()

    def invoke(
        self,
        operation: Operation | str,
        race_date: date | datetime | str,
        stadium_code: str | int | None = None,
        race_number: str | int | None = None,
    ) -> dict[int, dict[int, dict]] | list:
        """Run an operation.

        Args:
            operation: Operation or its name (e.g., "scrape_results").
            race_date: Race date as a date or string ("2024-01-15", "20240115", ...).
            stadium_code: Stadium code (1-24). All stadiums open on the date
                when omitted. Ignored by stadium list operations.
            race_number: Race number (1-12). All races when omitted.
                Ignored by stadium list operations.

        Returns:
            For race operations, a mapping of stadium code to race number to
            record. For stadium list operations, the scraper's list as-is.

        Raises:
            InvalidOperationError: Unknown operation.
            InvalidDateError: Unparseable date.
            InvalidStadiumCodeError: Malformed or out-of-range stadium code.
            InvalidRaceNumberError: Malformed or out-of-range race number.
            FetchError: A request failed. Remaining races are not fetched.
        """
        resolved = resolve_operation(operation)
        spec = OPERATIONS[resolved]
        scraper = self.get_scraper(resolved)
        parsed_date = parse_race_date(race_date)

        if spec.stadium_list:
            return getattr(scraper, spec.method_name)(parsed_date)

        # 通信前にすべての入力を検証する
        race_numbers = resolve_race_numbers(race_number)
        stadium_codes = self.resolve_stadium_codes(parsed_date, stadium_code)

        method = getattr(scraper, spec.method_name)
        response: dict[int, dict[int, dict]] = {}
        for code in stadium_codes:
            for number in race_numbers:
                logger.debug(
                    "%s: %s stadium=%02d race=%d", resolved.value, parsed_date, code, number
                )
                response.setdefault(code, {})[number] = method(parsed_date, code, number)

        return response

    def get_scraper(self, operation: Operation | str) -> RaceScraper | StadiumListScraper:
        """Return the cached scraper for an operation, creating it on first use.

        Raises:
            InvalidOperationError: If the name is not registered.
        """
        operation = resolve_operation(operation)
        if operation in self._instances:
            return self._instances[operation]

        scraper_class = self._scraper_classes.get(
            operation, OPERATIONS[operation].scraper_class
        )
        logger.debug("Creating %s for %s", scraper_class.__name__, operation.value)
        scraper = scraper_class(session=self._session_factory(), delay=self.delay)
        self._instances[operation] = scraper
        return scraper

    def resolve_stadium_codes(
        self, race_date: date, stadium_code: str | int | None
    ) -> list[int]:
        """Return the stadium codes to fetch.

        Args:
            race_date: Race date.
            stadium_code: Stadium code, or None for every stadium open on the date.

        Returns:
            A single validated code, or the live stadium list in page order.
        """
        if stadium_code is None:
            stadium_scraper: StadiumListScraper = self.get_scraper(Operation.SCRAPE_STADIUMS)
            return stadium_scraper.scrape_ids(race_date)
        return [validate_stadium_code(stadium_code)]

    def scrape_odds(self, race_date, stadium_code=None, race_number=None):
        """Fetch odds. See invoke()."""
        return self.invoke(Operation.SCRAPE_ODDS, race_date, stadium_code, race_number)

    def scrape_previews(self, race_date, stadium_code=None, race_number=None):
        """Fetch before-race information. See invoke()."""
        return self.invoke(Operation.SCRAPE_PREVIEWS, race_date, stadium_code, race_number)

    def scrape_programs(self, race_date, stadium_code=None, race_number=None):
        """Fetch race cards. See invoke()."""
        return self.invoke(Operation.SCRAPE_PROGRAMS, race_date, stadium_code, race_number)

    def scrape_results(self, race_date, stadium_code=None, race_number=None):
        """Fetch race results. See invoke()."""
        return self.invoke(Operation.SCRAPE_RESULTS, race_date, stadium_code, race_number)

    def scrape_stadium_ids(self, race_date) -> list[int]:
        """Fetch codes of stadiums open on a date."""
        return self.invoke(Operation.SCRAPE_STADIUM_IDS, race_date)

    def scrape_stadium_names(self, race_date) -> list[str]:
        """Fetch names of stadiums open on a date."""
        return self.invoke(Operation.SCRAPE_STADIUM_NAMES, race_date)

    def scrape_stadiums(self, race_date) -> list[dict]:
        """Fetch stadium id/name pairs for a date."""
        return self.invoke(Operation.SCRAPE_STADIUMS, race_date)
