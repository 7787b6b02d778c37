"""日付解析ユーティリティ"""

import re
from datetime import date, datetime

from boatrace.exceptions import InvalidDateError

_DATE_PATTERNS = (
    # 日本語形式: "2024年1月1日"
    re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日"),
    # ISO形式 / スラッシュ区切り: "2024-01-01", "2024/1/1"
    re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})"),
    # URLのhdパラメータ形式: "20240101"
    re.compile(r"(\d{4})(\d{2})(\d{2})"),
)


def parse_race_date(value: date | datetime | str) -> date:
    """レース日付をdateオブジェクトに変換する

    対応形式:
        - date / datetime オブジェクト（時刻は切り捨て）
        - "2024年1月1日"（日本語形式）
        - "2024-01-01" / "2024/01/01"（ISO形式）
        - "20240101"（YYYYMMDD形式）
        - "2024-01-01T10:30:00+09:00" などのISO 8601日時（時刻は切り捨て）

    Args:
        value: 日付またはその文字列表現

    Returns:
        dateオブジェクト

    Raises:
        InvalidDateError: 解析できない場合
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)

    text = value.strip()
    for pattern in _DATE_PATTERNS:
        match = pattern.fullmatch(text)
        if not match:
            continue
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError as e:
            # 2024-02-30 のような存在しない日付
            raise InvalidDateError(value) from e

    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDateError(value) from e
