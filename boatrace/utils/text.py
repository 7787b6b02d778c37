"""Text normalization and numeric coercion helpers.

Pages on boatrace.jp mix full-width digits, full-width spaces and
line breaks inside table cells. Everything scraped goes through
``normalize_text`` first so callers can compare plain ASCII.
"""

import re
import unicodedata

_WHITESPACE_PATTERN = re.compile(r"\s+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_INT_PATTERN = re.compile(r"[+-]?\d+")


def normalize_text(value: object) -> str | None:
    """Normalize a scraped value into trimmed single-spaced text.

    Args:
        value: Any value; ``None`` passes through.

    Returns:
        NFKC-normalized text with whitespace runs collapsed, or None.

    Example:
        >>> normalize_text("\\u3000Ａ１\\n  級 ")
        'A1 級'
    """
    if value is None:
        return None

    text = unicodedata.normalize("NFKC", str(value))
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def _numeric_text(value: object) -> str | None:
    text = normalize_text(value)
    if text is None:
        return None
    # 桁区切りのカンマは除去する（例: "1,234.5"）
    return text.replace(",", "")


def to_float(value: object) -> float | None:
    """Convert a scraped value to float.

    Only plain decimal notation is accepted. Anything else, including
    placeholders such as ``"---"`` and values like ``"nan"``, gives None.

    Args:
        value: Raw value (text, number or None).

    Returns:
        The parsed float or None.
    """
    text = _numeric_text(value)
    if text is None or not _FLOAT_PATTERN.fullmatch(text):
        return None
    return float(text)


def to_int(value: object) -> int | None:
    """Convert a scraped value to int, returning None when it is not integral."""
    text = _numeric_text(value)
    if text is None or not _INT_PATTERN.fullmatch(text):
        return None
    return int(text)
