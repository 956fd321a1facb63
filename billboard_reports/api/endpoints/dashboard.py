"""Dashboard API Routes - aggregate views for the reviewer map and counters."""

from typing import List

from fastapi import APIRouter

from billboard_reports.api.deps import ReportStoreDep, SettingsDep
from billboard_reports.schemas.report import HeatmapPoint, ReportStats
from billboard_reports.services.aggregation import compute_heatmap, compute_report_stats

router = APIRouter(tags=["Dashboard"])


@router.get(
    "/heatmap",
    response_model=List[HeatmapPoint],
    summary="Heatmap Data",
    description="Report density per rounded coordinate bucket.",
)
async def get_heatmap(store: ReportStoreDep, settings: SettingsDep) -> List[HeatmapPoint]:
    return compute_heatmap(store.all_reports(), precision=settings.HEATMAP_PRECISION)


@router.get(
    "/stats",
    response_model=ReportStats,
    summary="Dashboard Statistics",
    description="Total, pending and resolved report counts plus distinct locations.",
)
async def get_stats(store: ReportStoreDep) -> ReportStats:
    return compute_report_stats(store.all_reports())
