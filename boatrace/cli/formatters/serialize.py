"""JSON出力フォーマッタ"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date


def to_jsonable(value):
    """スクレイピング結果をJSONに変換可能な値に変換する

    OddsRange などの dataclass は辞書に、日付はISO形式の文字列に、
    辞書のキーは文字列に変換する。
    """
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def dump_json(value, indent: int | None = 2) -> str:
    """スクレイピング結果をJSON文字列にする"""
    return json.dumps(to_jsonable(value), ensure_ascii=False, indent=indent)
