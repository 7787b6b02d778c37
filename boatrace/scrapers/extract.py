"""Field extraction helpers shared by all page scrapers.

Every function takes a parsed node and a CSS selector and looks at the
first match only. Missing nodes and malformed values come back as None
rather than raising: race pages routinely omit fields (odds not yet
posted, races not yet run) and callers treat None as "not available yet".
"""

from dataclasses import dataclass

from bs4 import Tag

from boatrace.utils.text import normalize_text, to_float


@dataclass(frozen=True)
class OddsRange:
    """Odds shown as a "lower-upper" pair (place, quinella place).

    Attributes:
        low: Lower limit, or None.
        high: Upper limit, or None.
    """

    low: float | None = None
    high: float | None = None


def node_text(element: Tag) -> str:
    """Return the text of an element with ``<br>``-separated parts kept apart."""
    return normalize_text(element.get_text(" "))


def parse_range(text: str | None) -> OddsRange:
    """Split a "lower-upper" text into an OddsRange.

    Example:
        >>> parse_range("1.1-99.9")
        OddsRange(low=1.1, high=99.9)
        >>> parse_range("1.1")
        OddsRange(low=None, high=None)
    """
    if text is None:
        return OddsRange()

    parts = text.split("-")
    if len(parts) != 2:
        return OddsRange()

    return OddsRange(low=to_float(parts[0]), high=to_float(parts[1]))


def extract_text(node: Tag, query: str) -> str | None:
    """Return the normalized text of the first node matching ``query``."""
    element = node.select_one(query)
    if element is None:
        return None
    return node_text(element)


def extract_class_token(node: Tag, query: str) -> str | None:
    """Return the normalized ``class`` attribute of the first match.

    Used for values the site encodes as CSS classes, such as the wind
    direction icon (``is-wind5``).
    """
    element = node.select_one(query)
    if element is None:
        return None

    value = element.get("class", "")
    if isinstance(value, list):
        value = " ".join(value)
    return normalize_text(value)


def extract_number(node: Tag, query: str) -> float | None:
    """Return the first match's text as a float, or None."""
    return to_float(extract_text(node, query))


def extract_range(node: Tag, query: str) -> OddsRange:
    """Return the first match's "lower-upper" text as an OddsRange.

    Both limits are None when nothing matches or the text does not split
    into exactly two parts on ``-``.
    """
    return parse_range(extract_text(node, query))
