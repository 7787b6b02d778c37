"""Tests for boatrace.cli.commands.scrape module."""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from boatrace.cli import main
from boatrace.core import Operation
from boatrace.exceptions import FetchError, InvalidStadiumCodeError
from boatrace.scrapers.extract import OddsRange


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_scraper():
    """BoatraceScraper をモックに差し替える"""
    with patch("boatrace.cli.commands.scrape.BoatraceScraper") as mock_class:
        instance = MagicMock()
        mock_class.return_value.__enter__.return_value = instance
        yield mock_class, instance


class TestScrapeCommand:
    """scrape コマンドのテスト"""

    def test_outputs_json(self, runner, mock_scraper):
        """取得結果をJSONで出力する"""
        mock_class, instance = mock_scraper
        instance.invoke.return_value = {12: {1: {"race_technique": "逃げ"}}}

        result = runner.invoke(
            main, ["scrape", "results", "--date", "2024-01-15", "--stadium", "12", "--race", "1"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"12": {"1": {"race_technique": "逃げ"}}}
        assert "逃げ" in result.output
        instance.invoke.assert_called_once_with(Operation.SCRAPE_RESULTS, "2024-01-15", "12", "1")

    def test_alias_resolution(self, runner, mock_scraper):
        """短縮名を操作に変換する"""
        _, instance = mock_scraper
        instance.invoke.return_value = {}

        runner.invoke(main, ["scrape", "odds", "--date", "2024-01-15"])

        assert instance.invoke.call_args[0][0] is Operation.SCRAPE_ODDS

    def test_operation_name_passed_through(self, runner, mock_scraper):
        """操作名はそのまま渡す"""
        _, instance = mock_scraper
        instance.invoke.return_value = [1, 12]

        result = runner.invoke(main, ["scrape", "scrape_stadium_ids", "--date", "2024-01-15"])

        assert result.exit_code == 0
        assert instance.invoke.call_args[0][0] == "scrape_stadium_ids"
        assert json.loads(result.output) == [1, 12]

    def test_stadium_name(self, runner, mock_scraper):
        """--stadium に場名を指定するとコードに変換する"""
        _, instance = mock_scraper
        instance.invoke.return_value = {}

        runner.invoke(main, ["scrape", "programs", "--date", "2024-01-15", "--stadium", "住之江"])

        instance.invoke.assert_called_once_with(Operation.SCRAPE_PROGRAMS, "2024-01-15", "12", None)

    def test_delay_option(self, runner, mock_scraper):
        """--delay がスクレイパーに渡される"""
        mock_class, instance = mock_scraper
        instance.invoke.return_value = {}

        runner.invoke(main, ["scrape", "odds", "--date", "2024-01-15", "--delay", "2.5"])

        mock_class.assert_called_once_with(delay=2.5)

    def test_odds_range_serialized(self, runner, mock_scraper):
        """オッズ範囲はオブジェクトとして出力する"""
        _, instance = mock_scraper
        instance.invoke.return_value = {12: {1: {"place": {1: OddsRange(1.0, 1.2)}}}}

        result = runner.invoke(main, ["scrape", "odds", "--date", "2024-01-15"])

        data = json.loads(result.output)
        assert data["12"]["1"]["place"]["1"] == {"low": 1.0, "high": 1.2}

    def test_output_file(self, runner, mock_scraper, tmp_path):
        """--output 指定時はファイルに保存する"""
        _, instance = mock_scraper
        instance.invoke.return_value = ["桐生"]
        output = tmp_path / "names.json"

        result = runner.invoke(
            main, ["scrape", "stadium-names", "--date", "2024-01-15", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8")) == ["桐生"]

    def test_missing_date(self, runner, mock_scraper):
        """--date は必須"""
        result = runner.invoke(main, ["scrape", "results"])
        assert result.exit_code == 2

    def test_validation_error_is_usage_error(self, runner, mock_scraper):
        """入力エラーは終了コード2"""
        _, instance = mock_scraper
        instance.invoke.side_effect = InvalidStadiumCodeError("99")

        result = runner.invoke(main, ["scrape", "results", "--date", "2024-01-15", "--stadium", "99"])

        assert result.exit_code == 2
        assert "99" in result.output

    def test_fetch_error_exits_with_one(self, runner, mock_scraper):
        """取得エラーは終了コード1"""
        _, instance = mock_scraper
        instance.invoke.side_effect = FetchError("https://www.boatrace.jp/x", "timeout")

        result = runner.invoke(main, ["scrape", "results", "--date", "2024-01-15"])

        assert result.exit_code == 1
        assert "timeout" in result.output


class TestStadiumsCommand:
    """stadiums コマンドのテスト"""

    def test_lists_all_stadiums(self, runner):
        """24場をコード順に表示する"""
        result = runner.invoke(main, ["stadiums"])

        lines = result.output.strip().splitlines()
        assert result.exit_code == 0
        assert len(lines) == 24
        assert lines[0] == "01 桐生"
        assert lines[11] == "12 住之江"
        assert lines[-1] == "24 大村"
