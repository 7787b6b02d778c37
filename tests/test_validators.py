"""Tests for boatrace.validators module."""

import pytest

from boatrace.exceptions import InvalidRaceNumberError, InvalidStadiumCodeError
from boatrace.validators import (
    resolve_race_numbers,
    validate_race_number,
    validate_stadium_code,
)


class TestValidateStadiumCode:
    """validate_stadium_code() のテスト"""

    @pytest.mark.parametrize("code", range(1, 25))
    def test_accepts_plain_codes(self, code):
        """"1"〜"24" を受け付ける"""
        assert validate_stadium_code(str(code)) == code

    @pytest.mark.parametrize("code", range(1, 25))
    def test_accepts_zero_padded_codes(self, code):
        """"01"〜"24" を受け付ける"""
        assert validate_stadium_code(f"{code:02d}") == code

    def test_accepts_int(self):
        """整数も受け付ける"""
        assert validate_stadium_code(5) == 5

    @pytest.mark.parametrize("value", ["0", "25", "abc", "", "00", "001", " 5", "5 6", 0, 25, True])
    def test_rejects_invalid_codes(self, value):
        """範囲外・不正な形式はエラーになる"""
        with pytest.raises(InvalidStadiumCodeError) as exc_info:
            validate_stadium_code(value)
        assert exc_info.value.value == value

    def test_error_is_value_error(self):
        """ValueErrorとしても捕捉できる"""
        with pytest.raises(ValueError):
            validate_stadium_code("25")


class TestValidateRaceNumber:
    """validate_race_number() のテスト"""

    @pytest.mark.parametrize("number", range(1, 13))
    def test_accepts_plain_numbers(self, number):
        """"1"〜"12" を受け付ける"""
        assert validate_race_number(str(number)) == number

    @pytest.mark.parametrize("number", range(1, 13))
    def test_accepts_zero_padded_numbers(self, number):
        """"01"〜"12" を受け付ける"""
        assert validate_race_number(f"{number:02d}") == number

    @pytest.mark.parametrize("value", ["0", "13", "", "1R", "-1", 13, False])
    def test_rejects_invalid_numbers(self, value):
        """範囲外・不正な形式はエラーになる"""
        with pytest.raises(InvalidRaceNumberError) as exc_info:
            validate_race_number(value)
        assert exc_info.value.value == value


class TestResolveRaceNumbers:
    """resolve_race_numbers() のテスト"""

    def test_none_returns_all_races_in_order(self):
        """未指定の場合は1R〜12Rを昇順で返す"""
        assert resolve_race_numbers(None) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]

    def test_single_race(self):
        """指定した場合はそのレースのみ返す"""
        assert resolve_race_numbers("03") == [3]

    def test_invalid_race_raises(self):
        """不正な値はエラーになる"""
        with pytest.raises(InvalidRaceNumberError):
            resolve_race_numbers("13")
