"""In-memory report store.

Reports live in a dictionary keyed by id for the lifetime of the process;
nothing is persisted. One store is created per application instance and
handed to the request handlers through FastAPI dependencies.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from billboard_reports.schemas.report import (
    Report,
    ReportCreate,
    ReportStatus,
    ViolationType,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportStore:
    """Holds all submitted reports and owns their creation and status changes.

    Every access to the mapping, read or write, holds one lock because
    FastAPI runs synchronous work on a thread pool. Stored ``Report`` objects are immutable; a status
    update swaps in a copy with only ``status`` replaced.

    Args:
        clock: Returns the current timezone-aware time. Injected so tests can
            control ``created_at`` ordering.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._reports: Dict[str, Report] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _new_id(self) -> str:
        report_id = str(uuid.uuid4())
        while report_id in self._reports:
            report_id = str(uuid.uuid4())
        return report_id

    def create_report(self, data: ReportCreate) -> Report:
        """Insert a new report with status Pending.

        Args:
            data: Validated submission.

        Returns:
            The stored report, including its assigned id and creation time.
        """
        with self._lock:
            report = Report(
                **data.model_dump(),
                id=self._new_id(),
                status=ReportStatus.PENDING,
                created_at=self._clock(),
            )
            self._reports[report.id] = report

        logger.info(f"Report {report.id} created ({report.violation_type.value})")
        return report

    def get_reports(
        self,
        status: Optional[ReportStatus] = None,
        violation_type: Optional[ViolationType] = None,
        search: Optional[str] = None,
    ) -> List[Report]:
        """Return reports newest first, optionally filtered.

        Args:
            status: Keep only reports in this status.
            violation_type: Keep only reports of this category.
            search: Case-insensitive term matched against the location and
                the violation type label.

        Returns:
            Reports ordered by ``created_at`` descending. Reports sharing a
            timestamp keep their insertion order.
        """
        reports = self.all_reports()

        if status is not None:
            reports = [r for r in reports if r.status == status]
        if violation_type is not None:
            reports = [r for r in reports if r.violation_type == violation_type]
        if search:
            term = search.strip().lower()
            reports = [
                r
                for r in reports
                if term in r.location.lower() or term in r.violation_type.value.lower()
            ]

        return sorted(reports, key=lambda r: r.created_at, reverse=True)

    def all_reports(self) -> List[Report]:
        """Snapshot of every stored report in insertion order."""
        with self._lock:
            return list(self._reports.values())

    def get_report_by_id(self, report_id: str) -> Optional[Report]:
        with self._lock:
            return self._reports.get(report_id)

    def update_report_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Replace the status of a report.

        Args:
            report_id: Id of the report to update.
            status: New status; any value may follow any other.

        Returns:
            The updated report, or None if no report has this id. The store
            is left untouched in that case.
        """
        with self._lock:
            current = self._reports.get(report_id)
            if current is None:
                return None
            updated = current.model_copy(update={"status": status})
            self._reports[report_id] = updated

        logger.info(f"Report {report_id} status {current.status.value} -> {status.value}")
        return updated

    def count(self) -> int:
        with self._lock:
            return len(self._reports)
