"""Tests for boatrace.scrapers.base module."""

import time
from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests
from bs4 import BeautifulSoup

from boatrace.exceptions import FetchError
from boatrace.scrapers.base import BaseScraper


def make_response(text="<html></html>"):
    response = Mock()
    response.text = text
    response.raise_for_status = Mock()
    return response


class TestBaseScraperInit:
    """BaseScraper初期化のテスト"""

    def test_default_delay(self):
        """デフォルトのdelay値は1.0秒"""
        scraper = BaseScraper()
        assert scraper.delay == 1.0

    def test_custom_delay(self):
        """カスタムdelay値を設定できる"""
        scraper = BaseScraper(delay=2.5)
        assert scraper.delay == 2.5

    def test_creates_session_when_omitted(self):
        """sessionを省略するとrequests.Sessionを作成する"""
        scraper = BaseScraper()
        assert isinstance(scraper.session, requests.Session)

    def test_uses_given_session(self):
        """渡したsessionをそのまま使う"""
        session = Mock()
        scraper = BaseScraper(session=session)
        assert scraper.session is session

    def test_has_default_user_agent(self):
        """DEFAULT_USER_AGENTクラス属性が存在する"""
        assert "Mozilla" in BaseScraper.DEFAULT_USER_AGENT


class TestBaseScraperBuildUrl:
    """BaseScraper.build_url()のテスト"""

    def test_race_url(self):
        """レース単位のURLを組み立てる"""
        scraper = BaseScraper(delay=0)
        url = scraper.build_url("/owpc/pc/race/racelist", date(2024, 1, 5), 3, 12)
        assert url == "https://www.boatrace.jp/owpc/pc/race/racelist?rno=12&jcd=03&hd=20240105"

    def test_date_only_url(self):
        """日付のみのURLを組み立てる"""
        scraper = BaseScraper(delay=0)
        url = scraper.build_url("/owpc/pc/race/index", date(2024, 1, 15))
        assert url == "https://www.boatrace.jp/owpc/pc/race/index?hd=20240115"

    def test_base_record(self):
        """レコードの識別項目を返す"""
        assert BaseScraper.base_record(date(2024, 1, 15), 12, 1) == {
            "race_date": "2024-01-15",
            "race_stadium_number": 12,
            "race_number": 1,
        }


class TestBaseScraperFetch:
    """BaseScraper.fetch()のテスト"""

    def setup_method(self):
        """各テスト前にグローバルタイマーをリセット"""
        BaseScraper._global_last_request_time = None

    def test_fetch_returns_html_text(self):
        """fetch()はHTMLテキストを返す"""
        session = Mock()
        session.get.return_value = make_response("<html><body>Test</body></html>")

        scraper = BaseScraper(session=session, delay=0)

        assert scraper.fetch("https://example.com") == "<html><body>Test</body></html>"

    def test_fetch_uses_user_agent_and_timeout(self):
        """fetch()はUser-Agentヘッダーとタイムアウトを設定する"""
        session = Mock()
        session.get.return_value = make_response()

        scraper = BaseScraper(session=session, delay=0)
        scraper.fetch("https://example.com")

        call_kwargs = session.get.call_args[1]
        assert call_kwargs["headers"]["User-Agent"] == BaseScraper.DEFAULT_USER_AGENT
        assert call_kwargs["timeout"] == BaseScraper.TIMEOUT

    def test_fetch_sets_utf8_encoding(self):
        """レスポンスのエンコーディングをUTF-8にする"""
        session = Mock()
        response = make_response()
        session.get.return_value = response

        BaseScraper(session=session, delay=0).fetch("https://example.com")

        assert response.encoding == "utf-8"

    def test_http_error_raises_fetch_error_without_retry(self):
        """HTTPエラーはリトライせずFetchErrorになる"""
        session = Mock()
        response = make_response()
        response.raise_for_status.side_effect = requests.HTTPError("503 Service Unavailable")
        session.get.return_value = response

        scraper = BaseScraper(session=session, delay=0)

        with pytest.raises(FetchError) as exc_info:
            scraper.fetch("https://example.com/error")

        assert session.get.call_count == 1
        assert exc_info.value.url == "https://example.com/error"
        assert isinstance(exc_info.value.__cause__, requests.HTTPError)

    def test_connection_error_raises_fetch_error(self):
        """通信エラーはFetchErrorになる"""
        session = Mock()
        session.get.side_effect = requests.ConnectionError("connection refused")

        scraper = BaseScraper(session=session, delay=0)

        with pytest.raises(FetchError):
            scraper.fetch("https://example.com")

    def test_timer_updated_on_error(self):
        """エラー時もタイマーが更新される"""
        session = Mock()
        session.get.side_effect = requests.Timeout("timed out")

        scraper = BaseScraper(session=session, delay=0)
        with pytest.raises(FetchError):
            scraper.fetch("https://example.com")

        assert scraper._last_request_time is not None
        assert BaseScraper._global_last_request_time is not None

    @patch("boatrace.scrapers.base.requests.Session.get")
    def test_default_session_is_used(self, mock_get):
        """sessionを省略した場合はrequests.Session.getで取得する"""
        mock_get.return_value = make_response("<html>ok</html>")

        assert BaseScraper(delay=0).fetch("https://example.com") == "<html>ok</html>"
        mock_get.assert_called_once()


class TestBaseScraperRateLimit:
    """リクエスト間隔のテスト"""

    def setup_method(self):
        """各テスト前にグローバルタイマーをリセット"""
        BaseScraper._global_last_request_time = None

    @patch("boatrace.scrapers.base.time.sleep")
    def test_first_request_not_delayed(self, mock_sleep):
        """最初のリクエストは待機しない"""
        session = Mock()
        session.get.return_value = make_response()

        BaseScraper(session=session, delay=1.0).fetch("https://example.com")

        mock_sleep.assert_not_called()

    @patch("boatrace.scrapers.base.time.sleep")
    def test_global_delay_between_different_instances(self, mock_sleep):
        """異なるインスタンス間でもdelay秒以上の間隔が空く"""
        session = Mock()
        session.get.return_value = make_response()

        scraper1 = BaseScraper(session=session, delay=1.0)
        scraper2 = BaseScraper(session=Mock(get=Mock(return_value=make_response())), delay=1.0)

        scraper1.fetch("https://example.com/page1")
        assert mock_sleep.call_count == 0

        # グローバルタイマーを0.3秒前に設定（残り0.7秒必要）
        BaseScraper._global_last_request_time = time.time() - 0.3

        scraper2.fetch("https://example.com/page2")

        assert mock_sleep.call_count == 1
        sleep_duration = mock_sleep.call_args[0][0]
        assert 0.6 <= sleep_duration <= 0.8

    @patch("boatrace.scrapers.base.time.sleep")
    def test_no_delay_if_enough_time_passed(self, mock_sleep):
        """十分な時間が経過していれば待機しない"""
        session = Mock()
        session.get.return_value = make_response()

        BaseScraper._global_last_request_time = time.time() - 2.0
        BaseScraper(session=session, delay=1.0).fetch("https://example.com")

        mock_sleep.assert_not_called()


class TestBaseScraperSoup:
    """get_soup() / close() のテスト"""

    def test_get_soup_returns_beautiful_soup(self):
        """get_soup()はBeautifulSoupオブジェクトを返す"""
        soup = BaseScraper(delay=0).get_soup("<html><title>t</title></html>")
        assert isinstance(soup, BeautifulSoup)
        assert soup.title.get_text() == "t"

    def test_close_closes_session(self):
        """close()はsessionを閉じる"""
        session = Mock()
        BaseScraper(session=session).close()
        session.close.assert_called_once()
