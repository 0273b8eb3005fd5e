"""
大盤比較服務

將投組與大盤兩條序列各自轉為累積報酬 %，依日期對齊後計算差異：
- 期間報酬：最後一點 - 第一點（累積報酬 % 的差）
- 超額報酬：投組報酬 - 大盤報酬
- 追蹤誤差：sqrt(mean(difference²))
"""

import logging
from dataclasses import dataclass

import numpy as np

from portfolio_analytics.services.series_normalizer import normalize
from portfolio_analytics.shared.types import BenchmarkPoint, BenchmarkSummary, Observation

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkComparisonResult:
    """大盤比較結果"""

    points: list[BenchmarkPoint]
    summary: BenchmarkSummary


def align_series(
    portfolio: list[Observation],
    benchmark: list[Observation],
) -> list[BenchmarkPoint]:
    """
    依日期對齊（inner join，保留投組順序）

    兩條序列各自以自己的第一點為基準計算累積報酬
    """
    if portfolio is None or benchmark is None:
        raise ValueError("portfolio and benchmark must not be None")

    benchmark_by_date = {
        p.date: p.cumulative_return_pct for p in normalize(benchmark)
    }

    points: list[BenchmarkPoint] = []
    for p in normalize(portfolio):
        bench = benchmark_by_date.get(p.date)
        if bench is None:
            continue
        points.append(BenchmarkPoint(
            date=p.date,
            portfolio=p.cumulative_return_pct,
            benchmark=bench,
            difference=p.cumulative_return_pct - bench,
        ))

    if (portfolio and benchmark) and not points:
        logger.warning("Portfolio and benchmark series have no overlapping dates")
    return points


def summarize_comparison(points: list[BenchmarkPoint]) -> BenchmarkSummary:
    """計算比較摘要（無資料時全為 0）"""
    if not points:
        return BenchmarkSummary(
            portfolio_return=0.0,
            benchmark_return=0.0,
            excess_return=0.0,
            tracking_error=0.0,
        )

    portfolio_return = points[-1].portfolio - points[0].portfolio
    benchmark_return = points[-1].benchmark - points[0].benchmark
    differences = np.array([p.difference for p in points], dtype=float)
    tracking_error = float(np.sqrt(np.mean(differences ** 2)))

    return BenchmarkSummary(
        portfolio_return=portfolio_return,
        benchmark_return=benchmark_return,
        excess_return=portfolio_return - benchmark_return,
        tracking_error=tracking_error,
    )


def compare_to_benchmark(
    portfolio: list[Observation],
    benchmark: list[Observation],
) -> BenchmarkComparisonResult:
    """對齊並計算摘要"""
    points = align_series(portfolio, benchmark)
    summary = summarize_comparison(points)

    logger.info(
        f"Benchmark comparison: {len(points)} aligned points, "
        f"excess={summary.excess_return:.2f}, tracking_error={summary.tracking_error:.2f}"
    )
    return BenchmarkComparisonResult(points=points, summary=summary)
