"""Click CLIメインモジュール"""

import logging

import click

from boatrace.cli.commands.scrape import scrape, stadiums


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="詳細ログを出力")
def main(verbose: bool):
    """ボートレースデータ収集CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


main.add_command(scrape)
main.add_command(stadiums)


__all__ = ["main"]
