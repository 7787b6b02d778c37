"""スクレイピングコマンド

boatrace.jp から各種データを取得してJSONで出力するCLIコマンドを提供する。
"""

import logging
from pathlib import Path

import click

from boatrace.cli.formatters.serialize import dump_json
from boatrace.constants import STADIUM_CODE_MAP, STADIUMS
from boatrace.core import BoatraceScraper, Operation
from boatrace.exceptions import BoatraceError, ValidationError

logger = logging.getLogger(__name__)

# コマンドライン用の短縮名
OPERATION_ALIASES: dict[str, Operation] = {
    "odds": Operation.SCRAPE_ODDS,
    "previews": Operation.SCRAPE_PREVIEWS,
    "programs": Operation.SCRAPE_PROGRAMS,
    "results": Operation.SCRAPE_RESULTS,
    "stadium-ids": Operation.SCRAPE_STADIUM_IDS,
    "stadium-names": Operation.SCRAPE_STADIUM_NAMES,
    "stadiums": Operation.SCRAPE_STADIUMS,
}


@click.command()
@click.argument("operation")
@click.option("--date", "race_date", required=True, type=str, help="開催日（YYYY-MM-DD形式）")
@click.option("--stadium", default=None, type=str, help="レース場コードまたは場名（例: 12, 住之江）")
@click.option("--race", default=None, type=str, help="レース番号（1-12）")
@click.option("--delay", default=1.0, type=float, help="リクエスト間隔（秒、デフォルト: 1.0）")
@click.option("--output", "-o", default=None, type=click.Path(), help="出力先JSONファイル")
def scrape(
    operation: str,
    race_date: str,
    stadium: str | None,
    race: str | None,
    delay: float,
    output: str | None,
):
    """指定した開催日のデータを取得してJSONで出力

    OPERATION には odds / previews / programs / results / stadium-ids /
    stadium-names / stadiums、または scrape_odds などの操作名を指定する。
    """
    resolved = OPERATION_ALIASES.get(operation, operation)
    # 場名はコードに変換する
    if stadium in STADIUM_CODE_MAP:
        stadium = str(STADIUM_CODE_MAP[stadium])

    try:
        with BoatraceScraper(delay=delay) as scraper:
            data = scraper.invoke(resolved, race_date, stadium, race)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e
    except BoatraceError as e:
        logger.error("Scraping failed: %s", e)
        raise click.ClickException(str(e)) from e

    text = dump_json(data)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"保存: {output}", err=True)
    else:
        click.echo(text)


@click.command()
def stadiums():
    """レース場コードの一覧を表示"""
    for code, name in STADIUMS.items():
        click.echo(f"{code:02d} {name}")
