"""績效分析相關常數"""

# === 圖表配色 ===

# 圓餅圖 / 長條圖調色盤（依排名取色，不依資產身分）
CHART_PALETTE = (
    "#0088FE",  # Blue
    "#00C49F",  # Teal
    "#FFBB28",  # Yellow
    "#FF8042",  # Orange
    "#8884D8",  # Purple
    "#82CA9D",  # Light Green
    "#FFC658",  # Gold
    "#FF7C7C",  # Pink
    "#8DD1E1",  # Light Blue
    "#D084D0",  # Light Purple
    "#FFB347",  # Peach
    "#87CEEB",  # Sky Blue
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#98FB98",  # Pale Green
    "#F4A460",  # Sandy Brown
    "#20B2AA",  # Light Sea Green
    "#FF6347",  # Tomato
    "#4682B4",  # Steel Blue
    "#D2691E",  # Chocolate
)
PALETTE_SIZE = len(CHART_PALETTE)  # 20

PROFIT_COLOR = "#00C49F"  # 獲利（含 0）
LOSS_COLOR = "#FF8042"  # 虧損

# === 數值處理 ===

ZERO_EPSILON = 1e-8  # 絕對值小於此數視為 0
DEFAULT_DECIMALS = 2  # 一般數值 / 百分比小數位數
WIN_RATE_DECIMALS = 1  # 勝率顯示小數位數

# === 幣別 ===

CURRENCY_SYMBOLS = {
    "USD": "$",
    "VND": "₫",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "KRW": "₩",
    "SGD": "S$",
    "THB": "฿",
    "IDR": "Rp",
    "MYR": "RM",
    "PHP": "₱",
    "INR": "₹",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "NZD": "NZ$",
    "TWD": "NT$",
}

ZERO_DECIMAL_CURRENCIES = frozenset({"VND", "JPY", "KRW", "IDR"})
