"""
數值格式化工具

API 回傳的金額可能是字串或 None，統一在此轉換與格式化。
百分比參數一律為「已乘 100」的形式（22.5 代表 22.5%）。
"""

import math

from portfolio_analytics.shared.constants import (
    CHART_PALETTE,
    CURRENCY_SYMBOLS,
    DEFAULT_DECIMALS,
    LOSS_COLOR,
    PROFIT_COLOR,
    ZERO_DECIMAL_CURRENCIES,
    ZERO_EPSILON,
)

_COMPACT_SUFFIXES = (
    (1e3, "K"),
    (1e6, "M"),
    (1e9, "B"),
    (1e12, "T"),
)


def normalize_amount(amount: str | float | int | None) -> float:
    """
    正規化金額

    - 字串轉數值，無法解析視為 0
    - None / NaN 視為 0
    - 絕對值極小（< 1e-8）視為 0
    """
    if amount is None:
        return 0.0
    if isinstance(amount, str):
        try:
            value = float(amount)
        except ValueError:
            return 0.0
    else:
        value = float(amount)

    if math.isnan(value):
        return 0.0
    return 0.0 if abs(value) < ZERO_EPSILON else value


def round_value(value: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """四捨五入；NaN / inf 原樣返回"""
    if not math.isfinite(value):
        return value
    rounded = round(value, decimals)
    # 避免 -0.0
    return 0.0 if rounded == 0 else rounded


def format_number(
    value: str | float | int | None,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """千分位數值，例：1234.5 -> "1,234.50" """
    return f"{normalize_amount(value):,.{decimals}f}"


def format_percentage(
    value: str | float | int | None,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """百分比，例：22.5 -> "22.50%" """
    return f"{normalize_amount(value):,.{decimals}f}%"


def _trim_zeros(text: str) -> str:
    """移除小數尾端的 0"""
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def format_compact_number(
    value: str | float | int | None,
    decimals: int = 1,
) -> str:
    """
    精簡數值（K/M/B/T）

    1234 -> "1.2K"，2500000 -> "2.5M"，999 -> "999"，999.96 -> "1K"
    """
    num = normalize_amount(value)

    # 以四捨五入後的數值判斷是否進位到下一個單位
    scaled = round(num, decimals)
    suffix = ""
    for threshold, candidate in _COMPACT_SUFFIXES:
        if abs(scaled) < 1000:
            break
        scaled = round(num / threshold, decimals)
        suffix = candidate

    text = _trim_zeros(f"{scaled:.{decimals}f}")
    if text in ("", "-0"):
        text = "0"
    return f"{text}{suffix}"


def format_currency(
    amount: str | float | int | None,
    currency: str = "USD",
    decimals: int | None = None,
) -> str:
    """
    金額格式化

    負號置於幣別符號之前：-1234.5 USD -> "-$1,234.50"
    VND / JPY 等無小數幣別預設 0 位小數
    未知幣別以代碼加空白作為前綴
    """
    code = currency.upper()
    if decimals is None:
        decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else DEFAULT_DECIMALS

    value = normalize_amount(amount)
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    body = f"{abs(value):,.{decimals}f}"

    # 四捨五入後為 0 則不顯示負號
    sign = "-" if value < 0 and float(body.replace(",", "")) != 0 else ""
    return f"{sign}{symbol}{body}"


def palette_color(index: int) -> str:
    """依排名取調色盤顏色（循環使用）"""
    return CHART_PALETTE[index % len(CHART_PALETTE)]


def pnl_color(value: float) -> str:
    """損益配色：>= 0 獲利色，< 0 虧損色"""
    return PROFIT_COLOR if value >= 0 else LOSS_COLOR
