"""
績效分析 API

將前端已取得的序列 / 交易資料轉為圖表與表格用的衍生資料。
計算本身都在 services 層（純函式），此處只負責輸入檢查與輸出格式。
"""

import logging

from fastapi import APIRouter, Query

from portfolio_analytics.interfaces.exceptions import UnsortedSeriesError, ValidationError
from portfolio_analytics.interfaces.schemas import ErrorResponse
from portfolio_analytics.interfaces.schemas.analytics import (
    BenchmarkPointOut,
    BenchmarkRequest,
    BenchmarkResponse,
    BenchmarkSummaryOut,
    ChartSliceOut,
    ChartSliceResponse,
    GroupBy,
    GroupSummaryOut,
    GroupSummaryResponse,
    MonthlyRowsRequest,
    MonthlySummaryOut,
    MonthlySummaryResponse,
    NormalizedPointOut,
    NormalizeRequest,
    NormalizeResponse,
    ObservationIn,
    SeriesSummaryOut,
    TradesRequest,
)
from portfolio_analytics.services.aggregator import aggregate, by_asset, by_period, to_chart_slices
from portfolio_analytics.services.benchmark_comparison import compare_to_benchmark
from portfolio_analytics.services.period_rebucketer import aggregate_monthly, from_monthly_rows
from portfolio_analytics.services.series_normalizer import normalize, summarize_series
from portfolio_analytics.shared.constants import WIN_RATE_DECIMALS
from portfolio_analytics.shared.format_utils import (
    format_compact_number,
    format_currency,
    format_number,
    format_percentage,
    pnl_color,
    round_value,
)
from portfolio_analytics.shared.period_utils import parse_month_label
from portfolio_analytics.shared.types import (
    GroupSummary,
    MonthlyRow,
    MonthlySummary,
    Observation,
    TradeRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}}

KEY_FUNCTIONS = {
    "asset": by_asset,
    "period": by_period,
}


def _to_observations(series: str, items: list[ObservationIn]) -> list[Observation]:
    """轉為 Observation，並檢查日期遞增"""
    observations = [Observation(date=item.date, value=item.value) for item in items]
    for i in range(1, len(observations)):
        if observations[i].date < observations[i - 1].date:
            raise UnsortedSeriesError(series, i)
    return observations


def _to_records(request: TradesRequest) -> list[TradeRecord]:
    return [
        TradeRecord(
            asset_key=r.asset_key,
            pnl=r.pnl,
            volume=r.volume,
            won=r.won,
            period_key=r.period_key,
            trade_date=r.trade_date,
        )
        for r in request.records
    ]


def _group_display(summary: GroupSummary, currency: str) -> dict[str, str]:
    """表格 / tooltip 用的顯示字串"""
    return {
        "formatted_pnl": format_currency(summary.total_pnl, currency),
        "formatted_volume": format_compact_number(summary.total_volume),
        "formatted_win_rate": format_percentage(summary.win_rate, WIN_RATE_DECIMALS),
    }


def _monthly_out(row: MonthlySummary, currency: str) -> MonthlySummaryOut:
    return MonthlySummaryOut(
        key=row.key,
        total_pnl=round_value(row.total_pnl),
        count=row.count,
        win_rate=round_value(row.win_rate, WIN_RATE_DECIMALS),
        total_volume=round_value(row.total_volume),
        winning_count=row.winning_count,
        losing_count=row.losing_count,
        cumulative_pnl=round_value(row.cumulative_pnl),
        color=pnl_color(row.total_pnl),
        **_group_display(row, currency),
    )


@router.post("/series/normalize", response_model=NormalizeResponse, responses=ERROR_RESPONSES)
async def normalize_series(request: NormalizeRequest):
    """NAV / 價格序列正規化（累積報酬、最高值、回撤）"""
    observations = _to_observations("observations", request.observations)
    points = normalize(observations)
    summary = summarize_series(observations)

    return NormalizeResponse(
        data=[
            NormalizedPointOut(
                date=p.date,
                value=p.value,
                cumulative_return_pct=round_value(p.cumulative_return_pct),
                running_peak=p.running_peak,
                drawdown_pct=round_value(p.drawdown_pct),
            )
            for p in points
        ],
        summary=SeriesSummaryOut(
            first_value=summary.first_value,
            current_value=summary.current_value,
            total_return_pct=round_value(summary.total_return_pct),
            peak=summary.peak,
            max_drawdown_pct=round_value(summary.max_drawdown_pct),
            min_value=summary.min_value,
            max_value=summary.max_value,
            domain_min=summary.domain_min,
            domain_max=summary.domain_max,
            formatted_current_value=format_number(summary.current_value),
            formatted_total_return=format_percentage(summary.total_return_pct),
            formatted_max_drawdown=format_percentage(summary.max_drawdown_pct),
        ),
    )


@router.post("/benchmark", response_model=BenchmarkResponse, responses=ERROR_RESPONSES)
async def benchmark_comparison(request: BenchmarkRequest):
    """投組 vs 大盤累積報酬比較"""
    portfolio = _to_observations("portfolio", request.portfolio)
    benchmark = _to_observations("benchmark", request.benchmark)
    result = compare_to_benchmark(portfolio, benchmark)

    return BenchmarkResponse(
        data=[
            BenchmarkPointOut(
                date=p.date,
                portfolio=round_value(p.portfolio),
                benchmark=round_value(p.benchmark),
                difference=round_value(p.difference),
            )
            for p in result.points
        ],
        summary=BenchmarkSummaryOut(
            portfolio_return=round_value(result.summary.portfolio_return),
            benchmark_return=round_value(result.summary.benchmark_return),
            excess_return=round_value(result.summary.excess_return),
            tracking_error=round_value(result.summary.tracking_error),
        ),
    )


@router.post("/trades/summary", response_model=GroupSummaryResponse)
async def trade_summary(
    request: TradesRequest,
    group_by: GroupBy = Query("asset", description="分組方式"),
    currency: str = Query("USD", description="幣別"),
):
    """依資產或期間分組的交易統計"""
    summaries = aggregate(_to_records(request), KEY_FUNCTIONS[group_by])

    return GroupSummaryResponse(
        group_by=group_by,
        data=[
            GroupSummaryOut(
                key=s.key,
                total_pnl=round_value(s.total_pnl),
                count=s.count,
                win_rate=round_value(s.win_rate, WIN_RATE_DECIMALS),
                total_volume=round_value(s.total_volume),
                **_group_display(s, currency),
            )
            for s in summaries
        ],
    )


@router.post("/trades/slices", response_model=ChartSliceResponse)
async def trade_slices(
    request: TradesRequest,
    currency: str = Query("USD", description="幣別"),
):
    """資產損益圓餅圖資料"""
    records = _to_records(request)
    slices = to_chart_slices(aggregate(records, by_asset))

    return ChartSliceResponse(
        data=[
            ChartSliceOut(
                key=s.key,
                total_pnl=round_value(s.total_pnl),
                count=s.count,
                win_rate=round_value(s.win_rate, WIN_RATE_DECIMALS),
                total_volume=round_value(s.total_volume),
                magnitude=round_value(s.magnitude),
                color_index=s.color_index,
                color=s.color,
                share_pct=round_value(s.share_pct),
                is_profit=s.is_profit,
                formatted_share=format_percentage(s.share_pct),
                **_group_display(s, currency),
            )
            for s in slices
        ],
        total_pnl=round_value(sum(s.total_pnl for s in slices)),
    )


@router.post("/trades/monthly", response_model=MonthlySummaryResponse)
async def trade_monthly(
    request: TradesRequest,
    currency: str = Query("USD", description="幣別"),
):
    """由交易記錄計算月度統計"""
    rows = aggregate_monthly(_to_records(request))
    return MonthlySummaryResponse(data=[_monthly_out(r, currency) for r in rows])


@router.post("/trades/monthly-rows", response_model=MonthlySummaryResponse, responses=ERROR_RESPONSES)
async def trade_monthly_rows(
    request: MonthlyRowsRequest,
    currency: str = Query("USD", description="幣別"),
):
    """轉換後端預先聚合的月度資料"""
    rows: list[MonthlyRow] = []
    for item in request.rows:
        try:
            parse_month_label(item.month)
        except ValueError:
            raise ValidationError(f"無效的月份: {item.month}")

        rows.append(MonthlyRow(
            month=item.month,
            total_pnl=item.total_pnl or 0.0,
            trades_count=item.trades_count or 0,
            win_rate=item.win_rate or 0.0,
            total_volume=item.total_volume or 0.0,
            winning_trades=item.winning_trades or 0,
            losing_trades=item.losing_trades or 0,
        ))

    logger.info(f"Re-mapping {len(rows)} pre-aggregated monthly rows")
    return MonthlySummaryResponse(data=[_monthly_out(r, currency) for r in from_monthly_rows(rows)])
