"""Pydantic schemas for billboard violation reports.

Attributes are snake_case in Python and camelCase on the wire
(``violation_type`` <-> ``violationType``). Stored reports are frozen so a
record handed out by the store can never be changed behind its back.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ViolationType(str, Enum):
    """Categories of alleged billboard violations."""

    UNAUTHORIZED_CONTENT = "Unauthorized Content"
    ILLEGAL_PLACEMENT = "Illegal Placement"
    SIZE_VIOLATION = "Size Violation"
    PERMIT_EXPIRED = "Permit Expired"


class ReportStatus(str, Enum):
    """Review state of a report. Any status may follow any other."""

    PENDING = "Pending"
    UNDER_REVIEW = "Under Review"
    RESOLVED = "Resolved"


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ReportCreate(CamelModel):
    """Validated submission data, before the store assigns identity.

    Attributes:
        image_url: Data URL (or object-storage URL) of the billboard photo.
        location: Human-readable location of the billboard.
        latitude: WGS 84 latitude in degrees.
        longitude: WGS 84 longitude in degrees.
        violation_type: Category of the alleged violation.
        description: Optional free-text notes from the reporter.
        user_id: Caller-supplied identifier of the reporter.
        timestamp: Time the upload was accepted by the server.
        ai_analysis: Optional annotation from the content analyzer.
    """

    image_url: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    violation_type: ViolationType
    description: Optional[str] = None
    user_id: str = Field(..., min_length=1)
    timestamp: datetime
    ai_analysis: Optional[str] = None


class Report(ReportCreate):
    """A stored report.

    ``id`` and ``created_at`` are assigned once by the store and never change;
    ``status`` is replaced only through a status update.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime


class StatusUpdate(CamelModel):
    """Body of ``PATCH /reports/{id}/status``.

    ``status`` is left as a plain string so an unknown value can be answered
    with a specific message instead of a generic schema error.
    """

    status: Optional[str] = None


class HeatmapPoint(CamelModel):
    """One heatmap bucket: rounded coordinates with normalized density."""

    lat: float
    lng: float
    intensity: float = Field(..., gt=0, le=1)
    count: int = Field(..., ge=1)


class ReportStats(CamelModel):
    """Dashboard summary counters."""

    total_reports: int
    pending_reports: int
    resolved_reports: int
    unique_locations: int
