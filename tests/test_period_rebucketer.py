"""
月度重新分組測試
"""

from datetime import date

import pytest

from portfolio_analytics.services.period_rebucketer import aggregate_monthly, from_monthly_rows, month_key
from portfolio_analytics.shared.types import MonthlyRow, TradeRecord


def trade(pnl: float, trade_date: date | None = None, period: str = "", won: bool | None = None):
    return TradeRecord(
        asset_key="2330",
        pnl=pnl,
        volume=100.0,
        won=pnl > 0 if won is None else won,
        period_key=period,
        trade_date=trade_date,
    )


class TestMonthKey:
    """month_key 測試"""

    def test_from_trade_date(self):
        """測試由交易日期取月份"""
        assert month_key(trade(1, date(2024, 3, 15), period="ignored")) == "2024-03"

    def test_fallback_period_key(self):
        """測試無日期時使用 period_key"""
        assert month_key(trade(1, period="2024-07")) == "2024-07"

    def test_compact_period_key_normalized(self):
        """測試 YYYYMM 格式的 period_key 統一為 YYYY-MM"""
        assert month_key(trade(1, period="202407")) == "2024-07"

    def test_unparseable_period_key_kept(self):
        """測試無法解析的 period_key 原樣保留"""
        assert month_key(trade(1, period="Q1")) == "Q1"


class TestAggregateMonthly:
    """aggregate_monthly 測試"""

    def test_chronological_with_counts(self):
        """測試依時間排序與獲利 / 虧損筆數"""
        records = [
            trade(30, date(2024, 3, 5)),
            trade(-10, date(2024, 1, 20)),
            trade(20, date(2024, 1, 3)),
            trade(-5, date(2024, 3, 28)),
            trade(15, date(2023, 12, 29)),
        ]
        rows = aggregate_monthly(records)

        assert [r.key for r in rows] == ["2023-12", "2024-01", "2024-03"]

        jan = rows[1]
        assert jan.total_pnl == 10
        assert jan.count == 2
        assert jan.winning_count == 1
        assert jan.losing_count == 1
        assert jan.win_rate == 50

    def test_cumulative_pnl(self):
        """測試累積損益"""
        records = [
            trade(10, date(2024, 2, 1)),
            trade(-4, date(2024, 1, 1)),
            trade(7, date(2024, 3, 1)),
        ]
        rows = aggregate_monthly(records)

        assert [r.cumulative_pnl for r in rows] == pytest.approx([-4, 6, 13])

    def test_totals_conserved(self):
        """測試總和不變"""
        records = [trade(p, date(2024, m, 1)) for m, p in [(1, 1.5), (2, -2.25), (1, 3.0), (5, 0.0)]]
        rows = aggregate_monthly(records)

        assert sum(r.total_pnl for r in rows) == pytest.approx(sum(r.pnl for r in records))
        assert rows[-1].cumulative_pnl == pytest.approx(2.25)

    def test_mixed_label_formats_share_one_month(self):
        """測試有日期與 YYYYMM 標籤的同月交易合併為一筆"""
        records = [
            trade(10, date(2024, 3, 5)),
            trade(-4, period="202403"),
        ]
        rows = aggregate_monthly(records)

        assert len(rows) == 1
        assert rows[0].key == "2024-03"
        assert rows[0].total_pnl == 6
        assert rows[0].winning_count == 1
        assert rows[0].losing_count == 1

    def test_empty(self):
        """測試空輸入"""
        assert aggregate_monthly([]) == []


class TestFromMonthlyRows:
    """from_monthly_rows 測試"""

    def test_remap_and_sort(self):
        """測試轉換並依時間排序"""
        rows = [
            MonthlyRow(month="2024-02", total_pnl=-50, trades_count=4, win_rate=25,
                       total_volume=1000, winning_trades=1, losing_trades=3),
            MonthlyRow(month="2024-01", total_pnl=120, trades_count=5, win_rate=80,
                       total_volume=2000, winning_trades=4, losing_trades=1),
        ]
        result = from_monthly_rows(rows)

        assert [r.key for r in result] == ["2024-01", "2024-02"]
        assert result[0].count == 5
        assert result[0].win_rate == 80
        assert result[1].losing_count == 3
        assert [r.cumulative_pnl for r in result] == pytest.approx([120, 70])

    def test_month_label_normalized(self):
        """測試月份標籤統一為 YYYY-MM"""
        result = from_monthly_rows([MonthlyRow(month="202405", total_pnl=1)])
        assert result[0].key == "2024-05"

    def test_missing_values_default_zero(self):
        """測試缺漏數值視為 0"""
        result = from_monthly_rows([MonthlyRow(month="2024-04")])

        assert result[0].total_pnl == 0
        assert result[0].count == 0
        assert result[0].win_rate == 0
        assert result[0].cumulative_pnl == 0

    def test_none_rejected(self):
        """測試 None 輸入"""
        with pytest.raises(ValueError):
            from_monthly_rows(None)
