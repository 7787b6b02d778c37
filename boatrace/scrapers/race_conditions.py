"""Parsers for blocks shared by the preview and result pages.

Both pages show the same weather panel and the same start diagram
(boats drawn in course order with their start timing).
"""

import re

from bs4 import BeautifulSoup, Tag

from boatrace.scrapers.extract import extract_class_token, extract_text
from boatrace.utils.text import to_float, to_int

_MEASURE_PATTERN = re.compile(r"^([+-]?\d+(?:\.\d+)?)")
_WIND_DIRECTION_PATTERN = re.compile(r"\bis-wind(\d+)\b")

WEATHER_UNIT = "div.weather1_bodyUnit"


def extract_measure(node: Tag, query: str) -> float | None:
    """Return the leading number of a value with a unit (e.g. "7.0℃", "3m")."""
    text = extract_text(node, query)
    if not text:
        return None

    match = _MEASURE_PATTERN.match(text)
    if not match:
        return None
    return to_float(match.group(1))


def parse_wind_direction(token: str | None) -> int | None:
    """Convert a wind icon class ("weather1_bodyUnitImage is-wind14") to 14."""
    if not token:
        return None

    match = _WIND_DIRECTION_PATTERN.search(token)
    if not match:
        return None
    return int(match.group(1))


def parse_weather(soup: BeautifulSoup) -> dict:
    """Parse the weather panel.

    Args:
        soup: BeautifulSoup object of a preview or result page.

    Returns:
        Dictionary with weather, temperature, wind_speed, wind_direction,
        water_temperature and wave_height. Missing values are None.
    """
    wind_token = extract_class_token(
        soup, f"{WEATHER_UNIT}.is-windDirection p.weather1_bodyUnitImage"
    )
    return {
        "weather": extract_text(
            soup, f"{WEATHER_UNIT}.is-weather span.weather1_bodyUnitLabelTitle"
        ),
        "temperature": extract_measure(
            soup, f"{WEATHER_UNIT}.is-direction span.weather1_bodyUnitLabelData"
        ),
        "wind_speed": extract_measure(
            soup, f"{WEATHER_UNIT}.is-wind span.weather1_bodyUnitLabelData"
        ),
        "wind_direction": parse_wind_direction(wind_token),
        "water_temperature": extract_measure(
            soup, f"{WEATHER_UNIT}.is-waterTemperature span.weather1_bodyUnitLabelData"
        ),
        "wave_height": extract_measure(
            soup, f"{WEATHER_UNIT}.is-wave span.weather1_bodyUnitLabelData"
        ),
    }


def parse_start_timing(text: str | None) -> float | None:
    """Convert a start timing label to seconds.

    Flying starts ("F.05") become negative values. Labels without a
    timing (e.g. "L", "欠") give None.
    """
    if not text:
        return None

    token = text.split(" ")[0]
    if token.startswith("F"):
        value = to_float(token[1:])
        return -value if value is not None else None
    return to_float(token)


def parse_start_diagram(soup: BeautifulSoup) -> dict[int, dict]:
    """Parse the start diagram into start course and timing per boat.

    Args:
        soup: BeautifulSoup object of a preview or result page.

    Returns:
        Mapping of boat number to racer_start_course and racer_start_timing.
    """
    starts: dict[int, dict] = {}

    for course, unit in enumerate(soup.select("div.table1_boatImage1"), start=1):
        boat_number = to_int(extract_text(unit, "span.table1_boatImage1Number"))
        if boat_number is None:
            continue
        starts[boat_number] = {
            "racer_start_course": course,
            "racer_start_timing": parse_start_timing(
                extract_text(unit, "span.table1_boatImage1Time")
            ),
        }

    return starts
