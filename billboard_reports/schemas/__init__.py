from billboard_reports.schemas.report import (
    HeatmapPoint,
    Report,
    ReportCreate,
    ReportStats,
    ReportStatus,
    StatusUpdate,
    ViolationType,
)

__all__ = [
    "HeatmapPoint",
    "Report",
    "ReportCreate",
    "ReportStats",
    "ReportStatus",
    "StatusUpdate",
    "ViolationType",
]
