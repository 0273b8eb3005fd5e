"""月份期間工具"""

from datetime import date


def compute_month_label(d: date) -> str:
    """
    計算月份標籤

    格式：{YYYY}-{MM}
    例：2024-03（2024 年 3 月）
    """
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_label(label: str) -> tuple[int, int]:
    """
    解析月份標籤

    "2024-03" -> (2024, 3)
    "202403"  -> (2024, 3)
    """
    digits = label.replace("-", "").strip()
    if len(digits) != 6 or not digits.isdigit():
        raise ValueError(f"Invalid month label: {label!r}")

    year = int(digits[:4])
    month = int(digits[4:])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in label: {label!r}")
    return year, month


def month_sort_key(label: str) -> tuple[int, int, str]:
    """
    月份排序鍵（時間順序）

    無法解析的標籤排在最後，彼此依字串排序
    """
    try:
        year, month = parse_month_label(label)
    except ValueError:
        return 9999, 99, label
    return year, month, label


def get_month_start(label: str) -> date:
    """從月份標籤取得該月第一天"""
    year, month = parse_month_label(label)
    return date(year, month, 1)


def normalize_month_label(label: str) -> str:
    """
    統一月份標籤為 YYYY-MM

    "202403" -> "2024-03"；無法解析時原樣返回
    """
    try:
        return compute_month_label(get_month_start(label))
    except ValueError:
        return label
