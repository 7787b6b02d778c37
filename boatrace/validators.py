"""レース場コード・レース番号の検証

入力は文字列・整数のどちらでも受け付けるが、範囲外や不正な形式は
補正せずにエラーとする。
"""

import re

from boatrace.constants import RACE_NUMBERS
from boatrace.exceptions import InvalidRaceNumberError, InvalidStadiumCodeError

# 1〜24（先頭ゼロ可）
STADIUM_CODE_PATTERN = re.compile(r"0?[1-9]|1[0-9]|2[0-4]")

# 1〜12（先頭ゼロ可）
RACE_NUMBER_PATTERN = re.compile(r"0?[1-9]|1[0-2]")


def validate_stadium_code(value: str | int) -> int:
    """レース場コードを検証して整数で返す

    Args:
        value: レース場コード（例: 5, "5", "05"）

    Returns:
        1〜24の整数

    Raises:
        InvalidStadiumCodeError: 形式不正または範囲外の場合
    """
    if isinstance(value, bool) or not STADIUM_CODE_PATTERN.fullmatch(str(value)):
        raise InvalidStadiumCodeError(value)
    return int(value)


def validate_race_number(value: str | int) -> int:
    """レース番号を検証して整数で返す

    Args:
        value: レース番号（例: 3, "3", "03"）

    Returns:
        1〜12の整数

    Raises:
        InvalidRaceNumberError: 形式不正または範囲外の場合
    """
    if isinstance(value, bool) or not RACE_NUMBER_PATTERN.fullmatch(str(value)):
        raise InvalidRaceNumberError(value)
    return int(value)


def resolve_race_numbers(value: str | int | None) -> list[int]:
    """取得対象のレース番号リストを返す

    未指定の場合は1R〜12Rすべてを返す。
    """
    if value is None:
        return list(RACE_NUMBERS)
    return [validate_race_number(value)]
