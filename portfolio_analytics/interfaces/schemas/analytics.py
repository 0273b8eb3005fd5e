"""
績效分析 Schema
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

GroupBy = Literal["asset", "period"]


# === 請求 ===

class ObservationIn(BaseModel):
    """觀測值"""

    date: date
    value: float


class NormalizeRequest(BaseModel):
    """序列正規化請求"""

    observations: list[ObservationIn] = Field(description="依日期遞增排序的觀測值")


class BenchmarkRequest(BaseModel):
    """大盤比較請求"""

    portfolio: list[ObservationIn] = Field(description="投組 NAV 序列")
    benchmark: list[ObservationIn] = Field(description="大盤指數序列")


class TradeRecordIn(BaseModel):
    """交易記錄"""

    asset_key: str
    pnl: float
    volume: float = 0.0
    won: bool
    period_key: str = ""
    trade_date: date | None = None


class TradesRequest(BaseModel):
    """交易聚合請求"""

    records: list[TradeRecordIn]


class MonthlyRowIn(BaseModel):
    """後端預先聚合的月度資料"""

    month: str = Field(description="月份，例：2024-03")
    total_pnl: float | None = None
    trades_count: int | None = Field(default=None, ge=0)
    win_rate: float | None = Field(default=None, ge=0, le=100)
    total_volume: float | None = None
    winning_trades: int | None = Field(default=None, ge=0)
    losing_trades: int | None = Field(default=None, ge=0)


class MonthlyRowsRequest(BaseModel):
    """月度資料轉換請求"""

    rows: list[MonthlyRowIn]


# === 回應 ===

class NormalizedPointOut(BaseModel):
    """正規化序列點"""

    date: date
    value: float
    cumulative_return_pct: float
    running_peak: float
    drawdown_pct: float


class SeriesSummaryOut(BaseModel):
    """序列摘要"""

    first_value: float
    current_value: float
    total_return_pct: float
    peak: float
    max_drawdown_pct: float
    min_value: float
    max_value: float
    domain_min: float
    domain_max: float
    formatted_current_value: str
    formatted_total_return: str
    formatted_max_drawdown: str


class NormalizeResponse(BaseModel):
    """序列正規化回應"""

    data: list[NormalizedPointOut]
    summary: SeriesSummaryOut


class BenchmarkPointOut(BaseModel):
    """大盤比較點"""

    date: date
    portfolio: float
    benchmark: float
    difference: float


class BenchmarkSummaryOut(BaseModel):
    """大盤比較摘要"""

    portfolio_return: float
    benchmark_return: float
    excess_return: float
    tracking_error: float


class BenchmarkResponse(BaseModel):
    """大盤比較回應"""

    data: list[BenchmarkPointOut]
    summary: BenchmarkSummaryOut


class GroupSummaryOut(BaseModel):
    """分組統計"""

    key: str
    total_pnl: float
    count: int
    win_rate: float
    total_volume: float
    formatted_pnl: str
    formatted_volume: str
    formatted_win_rate: str


class GroupSummaryResponse(BaseModel):
    """分組統計回應"""

    group_by: GroupBy
    data: list[GroupSummaryOut]


class ChartSliceOut(GroupSummaryOut):
    """圓餅圖切片"""

    magnitude: float
    color_index: int
    color: str
    share_pct: float
    is_profit: bool
    formatted_share: str


class ChartSliceResponse(BaseModel):
    """圓餅圖回應"""

    data: list[ChartSliceOut]
    total_pnl: float


class MonthlySummaryOut(GroupSummaryOut):
    """月度統計"""

    winning_count: int
    losing_count: int
    cumulative_pnl: float
    color: str


class MonthlySummaryResponse(BaseModel):
    """月度統計回應"""

    data: list[MonthlySummaryOut]
