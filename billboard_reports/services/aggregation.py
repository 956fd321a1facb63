"""Derived views over the report set: dashboard stats and heatmap buckets.

Both functions are pure and single-pass. They are recomputed from the full
report list on every request, so they always reflect the latest writes.
"""

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from billboard_reports.schemas.report import HeatmapPoint, Report, ReportStats, ReportStatus

OPEN_STATUSES = frozenset({ReportStatus.PENDING, ReportStatus.UNDER_REVIEW})


def compute_report_stats(reports: Iterable[Report]) -> ReportStats:
    """Count reports by review state and distinct coordinates.

    Pending and Under Review both count as pending. Locations are compared as
    exact ``(latitude, longitude)`` pairs, without rounding.
    """
    total = 0
    pending = 0
    resolved = 0
    locations = set()

    for report in reports:
        total += 1
        if report.status in OPEN_STATUSES:
            pending += 1
        elif report.status == ReportStatus.RESOLVED:
            resolved += 1
        locations.add((report.latitude, report.longitude))

    return ReportStats(
        total_reports=total,
        pending_reports=pending,
        resolved_reports=resolved,
        unique_locations=len(locations),
    )


def round_coordinate(value: float, precision: int = 4) -> str:
    """Round a coordinate to ``precision`` decimals, ties away from zero.

    ``Decimal(value)`` is the exact binary value of the float, so only values
    that are exactly halfway (e.g. 37.03125) round up in magnitude. A result
    of zero is always unsigned, so -0.00001 and 0.00001 share ``"0.0000"``.
    """
    rounded = Decimal(value).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:f}"


def bucket_key(latitude: float, longitude: float, precision: int = 4) -> str:
    """Heatmap bucket for a coordinate pair, e.g. ``"37.7749,-122.4194"``."""
    return f"{round_coordinate(latitude, precision)},{round_coordinate(longitude, precision)}"


def compute_heatmap(reports: Iterable[Report], precision: int = 4) -> List[HeatmapPoint]:
    """Group reports into rounded-coordinate buckets with normalized intensity.

    Args:
        reports: Reports to aggregate.
        precision: Decimal places kept when bucketing latitude and longitude.

    Returns:
        One point per bucket with ``intensity = count / max_count``. The
        densest bucket gets intensity 1.0. No reports gives an empty list.
        Point order is not meaningful.
    """
    counts = Counter(bucket_key(r.latitude, r.longitude, precision) for r in reports)

    max_count = max(counts.values(), default=1)

    points = []
    for key, count in counts.items():
        lat, lng = (float(part) for part in key.split(","))
        points.append(
            HeatmapPoint(lat=lat, lng=lng, intensity=count / max_count, count=count)
        )
    return points
