"""
交易聚合服務

將平面的交易記錄依 key（資產代號、期間）分組，
並將每組歸約為損益、筆數、勝率、成交量等統計。
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable

from portfolio_analytics.shared.constants import PALETTE_SIZE
from portfolio_analytics.shared.types import ChartSlice, GroupSummary, TradeRecord

logger = logging.getLogger(__name__)

KeyFn = Callable[[TradeRecord], str]


@dataclass
class GroupAccumulator:
    """單一分組的累加器（依輸入順序累加）"""

    key: str
    sum_pnl: float = 0.0
    count: int = 0
    won_count: int = 0
    sum_volume: float = 0.0

    def add(self, record: TradeRecord) -> None:
        self.sum_pnl += record.pnl
        self.count += 1
        if record.won:
            self.won_count += 1
        self.sum_volume += record.volume

    @property
    def lost_count(self) -> int:
        return self.count - self.won_count

    @property
    def win_rate(self) -> float:
        if self.count == 0:
            return 0.0
        return self.won_count / self.count * 100

    def to_summary(self) -> GroupSummary:
        return GroupSummary(
            key=self.key,
            total_pnl=self.sum_pnl,
            count=self.count,
            win_rate=self.win_rate,
            total_volume=self.sum_volume,
        )


def by_asset(record: TradeRecord) -> str:
    """依資產代號分組"""
    return record.asset_key


def by_period(record: TradeRecord) -> str:
    """依期間標籤分組"""
    return record.period_key


def accumulate(
    records: list[TradeRecord],
    key_fn: KeyFn,
) -> dict[str, GroupAccumulator]:
    """
    單次掃描建立 key -> 累加器

    dict 保留首次出現的 key 順序；每筆記錄只計入一個分組
    """
    if records is None:
        raise ValueError("records must not be None")

    buckets: dict[str, GroupAccumulator] = {}
    for record in records:
        key = key_fn(record)
        acc = buckets.get(key)
        if acc is None:
            acc = GroupAccumulator(key=key)
            buckets[key] = acc
        acc.add(record)
    return buckets


def aggregate(records: list[TradeRecord], key_fn: KeyFn) -> list[GroupSummary]:
    """
    分組聚合

    Args:
        records: 交易記錄（不需排序）
        key_fn: 分組鍵函式，例如 by_asset / by_period

    Returns:
        每個 key 一筆 GroupSummary，依 key 首次出現順序
    """
    buckets = accumulate(records, key_fn)
    summaries = [acc.to_summary() for acc in buckets.values()]

    logger.debug(f"Aggregated {len(records)} records into {len(summaries)} groups")
    return summaries


def _slice_rank_key(summary: GroupSummary) -> tuple[bool, float]:
    """非有限數值排最後，其餘依 magnitude 降序"""
    magnitude = abs(summary.total_pnl)
    if not math.isfinite(magnitude):
        return True, 0.0
    return False, -magnitude


def to_chart_slices(
    summaries: list[GroupSummary],
    palette_size: int = PALETTE_SIZE,
) -> list[ChartSlice]:
    """
    轉為圓餅圖切片

    1. 依 abs(total_pnl) 降序排序（穩定排序，同值保留原順序；NaN / inf 排最後）
    2. magnitude = abs(total_pnl)，僅用於尺寸；total_pnl 保留正負號供配色
    3. color_index = 排名 % palette_size（排名變動時顏色會跟著變）

    全部損益為 0 時，magnitude 皆為 0、順序與輸入相同
    share_pct 只以有限數值的 magnitude 加總為分母
    """
    if summaries is None:
        raise ValueError("summaries must not be None")
    if palette_size <= 0:
        raise ValueError(f"palette_size must be positive, got {palette_size}")

    ranked = sorted(summaries, key=_slice_rank_key)
    total_magnitude = sum(
        abs(s.total_pnl) for s in ranked if math.isfinite(s.total_pnl)
    )

    slices: list[ChartSlice] = []
    for rank, summary in enumerate(ranked):
        magnitude = abs(summary.total_pnl)
        share_pct = magnitude / total_magnitude * 100 if total_magnitude > 0 else 0.0
        slices.append(ChartSlice(
            key=summary.key,
            total_pnl=summary.total_pnl,
            count=summary.count,
            win_rate=summary.win_rate,
            total_volume=summary.total_volume,
            magnitude=magnitude,
            color_index=rank % palette_size,
            share_pct=share_pct,
        ))

    if slices and total_magnitude == 0:
        logger.info(f"All {len(slices)} slices have zero P&L")
    return slices
