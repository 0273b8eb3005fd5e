"""
共用工具測試
"""

import math
from datetime import date

import pytest

from portfolio_analytics.shared.constants import LOSS_COLOR, PROFIT_COLOR
from portfolio_analytics.shared.format_utils import (
    format_compact_number,
    format_currency,
    format_number,
    format_percentage,
    normalize_amount,
    palette_color,
    pnl_color,
    round_value,
)
from portfolio_analytics.shared.period_utils import (
    compute_month_label,
    get_month_start,
    month_sort_key,
    normalize_month_label,
    parse_month_label,
)


class TestPeriodUtils:
    """月份工具測試"""

    def test_compute_month_label(self):
        assert compute_month_label(date(2024, 3, 31)) == "2024-03"

    def test_parse_month_label(self):
        assert parse_month_label("2024-03") == (2024, 3)
        assert parse_month_label("202411") == (2024, 11)

    @pytest.mark.parametrize("label", ["2024-13", "March", "2024-3", ""])
    def test_parse_invalid(self, label):
        with pytest.raises(ValueError):
            parse_month_label(label)

    def test_sort_key(self):
        """測試跨年排序，無效標籤排最後"""
        labels = ["2024-02", "bogus", "2023-12", "2024-10"]
        assert sorted(labels, key=month_sort_key) == ["2023-12", "2024-02", "2024-10", "bogus"]

    def test_month_start(self):
        assert get_month_start("2024-02") == date(2024, 2, 1)

    def test_normalize_month_label(self):
        assert normalize_month_label("202403") == "2024-03"
        assert normalize_month_label("2024-03") == "2024-03"
        assert normalize_month_label("bogus") == "bogus"


class TestFormatUtils:
    """格式化工具測試"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 0.0),
            ("12.5", 12.5),
            ("abc", 0.0),
            (math.nan, 0.0),
            (1e-9, 0.0),
            (-3, -3.0),
        ],
    )
    def test_normalize_amount(self, raw, expected):
        assert normalize_amount(raw) == expected

    def test_round_value(self):
        assert round_value(18.18181818) == 18.18
        assert round_value(-0.001) == 0.0
        assert math.isnan(round_value(math.nan))

    def test_format_number(self):
        assert format_number(1234.5) == "1,234.50"
        assert format_number(None) == "0.00"

    def test_format_percentage(self):
        assert format_percentage(22.5) == "22.50%"
        assert format_percentage("-3.14159", 1) == "-3.1%"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (999, "999"),
            (1234, "1.2K"),
            (2500000, "2.5M"),
            (-3000000000, "-3B"),
            (100, "100"),
            (0, "0"),
            (999.96, "1K"),
            (999_960, "1M"),
            (-999_960, "-1M"),
        ],
    )
    def test_format_compact_number(self, value, expected):
        assert format_compact_number(value) == expected

    def test_format_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-1234.5, "usd") == "-$1,234.50"
        assert format_currency(1500000, "VND") == "₫1,500,000"
        assert format_currency(10, "XYZ") == "XYZ 10.00"
        assert format_currency(-0.001) == "$0.00"

    def test_colors(self):
        assert palette_color(0) == palette_color(20)
        assert pnl_color(0) == PROFIT_COLOR
        assert pnl_color(-1) == LOSS_COLOR
