"""
月度重新分組服務

兩種輸入皆產出相同形狀（依時間排序的 MonthlySummary）：
1. aggregate_monthly：由原始交易記錄重新聚合
2. from_monthly_rows：後端已預先聚合的月度資料，只做欄位轉換
"""

import logging

from portfolio_analytics.services.aggregator import accumulate
from portfolio_analytics.shared.period_utils import (
    compute_month_label,
    month_sort_key,
    normalize_month_label,
)
from portfolio_analytics.shared.types import MonthlyRow, MonthlySummary, TradeRecord

logger = logging.getLogger(__name__)


def month_key(record: TradeRecord) -> str:
    """有交易日期時取 YYYY-MM，否則將 period_key 統一為 YYYY-MM"""
    if record.trade_date is not None:
        return compute_month_label(record.trade_date)
    return normalize_month_label(record.period_key)


def _with_cumulative(rows: list[MonthlySummary]) -> list[MonthlySummary]:
    """依時間排序並填入累積損益"""
    ordered = sorted(rows, key=lambda r: month_sort_key(r.key))
    running = 0.0
    for row in ordered:
        running += row.total_pnl
        row.cumulative_pnl = running
    return ordered


def aggregate_monthly(records: list[TradeRecord]) -> list[MonthlySummary]:
    """
    由交易記錄計算月度統計

    除勝率外另外保留獲利 / 虧損筆數，供月對月趨勢圖使用
    """
    buckets = accumulate(records, month_key)

    rows = [
        MonthlySummary(
            key=acc.key,
            total_pnl=acc.sum_pnl,
            count=acc.count,
            win_rate=acc.win_rate,
            total_volume=acc.sum_volume,
            winning_count=acc.won_count,
            losing_count=acc.lost_count,
            cumulative_pnl=0.0,
        )
        for acc in buckets.values()
    ]

    logger.debug(f"Rebucketed {len(records)} records into {len(rows)} months")
    return _with_cumulative(rows)


def from_monthly_rows(rows: list[MonthlyRow]) -> list[MonthlySummary]:
    """
    轉換後端預先聚合的月度資料

    不重新聚合；缺漏數值視為 0，同月多筆時各自保留
    """
    if rows is None:
        raise ValueError("rows must not be None")

    summaries = [
        MonthlySummary(
            key=normalize_month_label(row.month),
            total_pnl=row.total_pnl or 0.0,
            count=row.trades_count or 0,
            win_rate=row.win_rate or 0.0,
            total_volume=row.total_volume or 0.0,
            winning_count=row.winning_trades or 0,
            losing_count=row.losing_trades or 0,
            cumulative_pnl=0.0,
        )
        for row in rows
    ]
    return _with_cumulative(summaries)
