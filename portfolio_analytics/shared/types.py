from dataclasses import dataclass
from datetime import date

from portfolio_analytics.shared.format_utils import palette_color


# === 時間序列 ===

@dataclass(frozen=True)
class Observation:
    """單點觀測值（NAV、指數或損益）"""
    date: date
    value: float


@dataclass
class NormalizedPoint:
    """正規化後的序列點"""
    date: date
    value: float
    cumulative_return_pct: float  # 相對第一點的累積報酬 %
    running_peak: float           # 至此點（含）的最高值
    drawdown_pct: float           # 距最高點回撤 %（<= 0）


@dataclass
class SeriesSummary:
    """序列摘要（NAV 走勢卡片）"""
    first_value: float
    current_value: float
    total_return_pct: float
    peak: float
    max_drawdown_pct: float
    min_value: float
    max_value: float
    domain_min: float  # 圖表 Y 軸下界
    domain_max: float  # 圖表 Y 軸上界


@dataclass
class BenchmarkPoint:
    """投組 vs 大盤（累積報酬 %）"""
    date: date
    portfolio: float
    benchmark: float
    difference: float


@dataclass
class BenchmarkSummary:
    """大盤比較摘要"""
    portfolio_return: float
    benchmark_return: float
    excess_return: float
    tracking_error: float


# === 交易聚合 ===

@dataclass(frozen=True)
class TradeRecord:
    """單筆交易對績效的貢獻"""
    asset_key: str
    pnl: float
    volume: float
    won: bool
    period_key: str
    trade_date: date | None = None


@dataclass
class GroupSummary:
    """分組統計"""
    key: str
    total_pnl: float
    count: int
    win_rate: float  # 0 ~ 100
    total_volume: float


@dataclass
class ChartSlice(GroupSummary):
    """圓餅圖切片"""
    magnitude: float    # abs(total_pnl)，僅用於尺寸
    color_index: int    # 依排名取色
    share_pct: float    # 佔全部 magnitude 的比例 %

    @property
    def color(self) -> str:
        return palette_color(self.color_index)

    @property
    def is_profit(self) -> bool:
        return self.total_pnl >= 0


@dataclass
class MonthlySummary(GroupSummary):
    """月度統計"""
    winning_count: int
    losing_count: int
    cumulative_pnl: float  # 至本月（含）的累積損益


@dataclass
class MonthlyRow:
    """後端預先聚合的月度資料"""
    month: str  # "2024-03"
    total_pnl: float = 0.0
    trades_count: int = 0
    win_rate: float = 0.0
    total_volume: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0
