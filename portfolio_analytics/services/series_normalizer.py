"""
時間序列正規化服務

將依日期遞增排序的觀測值（NAV、價格或損益）轉為圖表用的衍生序列：
1. 相對第一點的累積報酬 %
2. 至該點（含）的最高值
3. 距最高值的回撤 %

單次由左至右掃描，每次輸入更新都重新計算，不做增量維護。
"""

import logging
import math

from portfolio_analytics.shared.types import NormalizedPoint, Observation, SeriesSummary

logger = logging.getLogger(__name__)


def _pct_change(value: float, base: float) -> float:
    """(value - base) / base * 100；base <= 0 時返回 0"""
    if base <= 0:
        return 0.0
    return (value - base) / base * 100


def normalize(observations: list[Observation]) -> list[NormalizedPoint]:
    """
    正規化時間序列

    - 輸出長度與順序與輸入相同
    - 第一點數值 <= 0 時，所有點的累積報酬皆為 0
    - 最高值包含當前點，創新高當下回撤為 0
    - 非有限數值（NaN）只影響對應欄位，不會拋出例外

    Args:
        observations: 依日期遞增排序的觀測值（呼叫端負責排序與去重）

    Returns:
        list[NormalizedPoint]
    """
    if observations is None:
        raise ValueError("observations must not be None")

    if not observations:
        return []

    first_value = observations[0].value
    peak = first_value

    if first_value <= 0:
        logger.warning(
            f"Non-positive base value {first_value}, cumulative return falls back to 0"
        )

    points: list[NormalizedPoint] = []
    for obs in observations:
        value = obs.value
        # NaN 不會成為新高
        if value > peak:
            peak = value

        points.append(NormalizedPoint(
            date=obs.date,
            value=value,
            cumulative_return_pct=_pct_change(value, first_value),
            running_peak=peak,
            drawdown_pct=_pct_change(value, peak),
        ))

    logger.debug(f"Normalized {len(points)} observations (peak={peak})")
    return points


def summarize_series(observations: list[Observation]) -> SeriesSummary:
    """
    計算序列摘要

    total_return_pct 採與 normalize 相同的 0 fallback；
    max_drawdown_pct 為整段期間最深回撤（<= 0）；
    domain_min / domain_max 為上下各留 range/2 的 Y 軸範圍。
    空序列返回全 0。
    """
    if observations is None:
        raise ValueError("observations must not be None")

    if not observations:
        return SeriesSummary(
            first_value=0.0,
            current_value=0.0,
            total_return_pct=0.0,
            peak=0.0,
            max_drawdown_pct=0.0,
            min_value=0.0,
            max_value=0.0,
            domain_min=0.0,
            domain_max=0.0,
        )

    points = normalize(observations)

    max_drawdown = 0.0
    for p in points:
        if p.drawdown_pct < max_drawdown:
            max_drawdown = p.drawdown_pct

    finite_values = [p.value for p in points if math.isfinite(p.value)]
    if finite_values:
        min_value = min(finite_values)
        max_value = max(finite_values)
    else:
        min_value = max_value = math.nan
    value_range = max_value - min_value

    return SeriesSummary(
        first_value=points[0].value,
        current_value=points[-1].value,
        total_return_pct=points[-1].cumulative_return_pct,
        peak=points[-1].running_peak,
        max_drawdown_pct=max_drawdown,
        min_value=min_value,
        max_value=max_value,
        domain_min=min_value - value_range / 2,
        domain_max=max_value + value_range / 2,
    )
