"""
Report API Routes - submit billboard violations and track their review.

Photos arrive as multipart form data next to the text fields. The accepted
image is embedded in the report as a data URL, so the store needs no
external blob storage; a deployment with object storage would put the
object URL in ``imageUrl`` instead.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, Query, UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from billboard_reports.api.deps import ContentAnalyzerDep, ReportStoreDep, SettingsDep
from billboard_reports.core.exceptions import (
    BadRequestException,
    ContentAnalysisError,
    NotFoundException,
    PayloadTooLargeException,
    ValidationException,
    format_validation_errors,
)
from billboard_reports.schemas.report import (
    Report,
    ReportCreate,
    ReportStatus,
    StatusUpdate,
    ViolationType,
)
from billboard_reports.services.content_analysis import ContentAnalyzer
from billboard_reports.services.image_encoding import encode_data_url, is_image_content_type
from billboard_reports.services.report_store import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


async def describe_image(analyzer: ContentAnalyzer, content: bytes, content_type: str) -> Optional[str]:
    """Run the content analyzer; a failing analyzer yields no annotation."""
    try:
        return await run_in_threadpool(analyzer.analyze, content, content_type)
    except ContentAnalysisError as exc:
        logger.warning(f"Content analysis failed: {exc}")
    except Exception:
        logger.exception("Content analyzer raised an unexpected error")
    return None


@router.post(
    "/reports",
    response_model=Report,
    summary="Submit Report",
    description="Submit a billboard violation with a photo and its location.",
)
async def create_report(
    store: ReportStoreDep,
    analyzer: ContentAnalyzerDep,
    settings: SettingsDep,
    image: Optional[UploadFile] = File(None, description="Photo of the billboard"),
    location: Optional[str] = Form(None),
    latitude: Optional[str] = Form(None),
    longitude: Optional[str] = Form(None),
    violation_type: Optional[str] = Form(None, alias="violationType"),
    description: Optional[str] = Form(None),
    user_id: Optional[str] = Form(None, alias="userId"),
) -> Report:
    """Validate a submission, annotate its photo and store it.

    Raises:
        400: Missing image, non-image upload or invalid fields
        413: Image larger than MAX_IMAGE_SIZE_BYTES
    """
    if image is None:
        raise BadRequestException("Image file is required")

    if not is_image_content_type(image.content_type):
        raise BadRequestException(
            "Only image files are allowed",
            details={"content_type": image.content_type},
        )

    contents = await image.read()
    if len(contents) > settings.MAX_IMAGE_SIZE_BYTES:
        raise PayloadTooLargeException(
            f"Image too large. Maximum size: {settings.MAX_IMAGE_SIZE_BYTES} bytes",
            details={"max_bytes": settings.MAX_IMAGE_SIZE_BYTES, "size": len(contents)},
        )

    fields = {
        "imageUrl": encode_data_url(contents, image.content_type),
        "location": location,
        "latitude": latitude,
        "longitude": longitude,
        "violationType": violation_type,
        "description": description,
        "userId": user_id,
        "timestamp": utc_now(),
    }
    try:
        data = ReportCreate.model_validate({k: v for k, v in fields.items() if v is not None})
    except ValidationError as exc:
        raise ValidationException(errors=format_validation_errors(exc.errors()))

    ai_analysis = await describe_image(analyzer, contents, image.content_type)
    data = data.model_copy(update={"ai_analysis": ai_analysis})

    return store.create_report(data)


@router.get(
    "/reports",
    response_model=List[Report],
    summary="List Reports",
    description="All reports, newest first, optionally filtered.",
)
async def list_reports(
    store: ReportStoreDep,
    status: Optional[ReportStatus] = Query(None),
    violation_type: Optional[ViolationType] = Query(None, alias="violationType"),
    search: Optional[str] = Query(None, max_length=200),
) -> List[Report]:
    return store.get_reports(status=status, violation_type=violation_type, search=search)


@router.get("/reports/{report_id}", response_model=Report, summary="Get Report")
async def get_report(report_id: str, store: ReportStoreDep) -> Report:
    report = store.get_report_by_id(report_id)
    if report is None:
        raise NotFoundException("Report not found", details={"id": report_id})
    return report


@router.patch(
    "/reports/{report_id}/status",
    response_model=Report,
    summary="Update Report Status",
)
async def update_report_status(
    report_id: str,
    body: StatusUpdate,
    store: ReportStoreDep,
) -> Report:
    """Move a report to another review status.

    Raises:
        400: Status is not one of Pending, Under Review, Resolved
        404: No report with this id
    """
    try:
        status = ReportStatus(body.status)
    except ValueError:
        raise BadRequestException(
            "Invalid status value",
            details={"allowed": [s.value for s in ReportStatus]},
        )

    updated = store.update_report_status(report_id, status)
    if updated is None:
        raise NotFoundException("Report not found", details={"id": report_id})
    return updated
