"""Constants for boatrace data collection."""

BASE_URL = "https://www.boatrace.jp"

# ボートレース場コード（jcd パラメータ）
STADIUMS: dict[int, str] = {
    1: "桐生",
    2: "戸田",
    3: "江戸川",
    4: "平和島",
    5: "多摩川",
    6: "浜名湖",
    7: "蒲郡",
    8: "常滑",
    9: "津",
    10: "三国",
    11: "びわこ",
    12: "住之江",
    13: "尼崎",
    14: "鳴門",
    15: "丸亀",
    16: "児島",
    17: "宮島",
    18: "徳山",
    19: "下関",
    20: "若松",
    21: "芦屋",
    22: "福岡",
    23: "唐津",
    24: "大村",
}

# 場名からコードへのマッピング
STADIUM_CODE_MAP: dict[str, int] = {name: code for code, name in STADIUMS.items()}

# 1開催日あたりのレース番号（1R〜12R）
RACE_NUMBERS = range(1, 13)

# 1レースの艇数
BOAT_NUMBERS = range(1, 7)
