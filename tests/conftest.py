"""
Pytest conftest.py - Shared fixtures and configuration

Every API test gets its own application instance with a fresh in-memory
store, a deterministic clock and a stub content analyzer.
"""

import base64
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from billboard_reports.core.config import Settings
from billboard_reports.main import create_application
from billboard_reports.schemas.report import ReportCreate, ViolationType
from billboard_reports.services.content_analysis import ContentAnalyzer
from billboard_reports.services.report_store import ReportStore


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on file name."""
    for item in items:
        if "test_api" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# STORE FIXTURES
# =============================================================================

class TickingClock:
    """Clock that advances one second per call, so every insert is distinct."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(clock) -> ReportStore:
    """Fresh in-memory store for each test."""
    return ReportStore(clock=clock)


@pytest.fixture
def make_report_data() -> Callable[..., ReportCreate]:
    """
    Factory for validated submissions.

    Usage:
        data = make_report_data(latitude=10.0, violation_type=ViolationType.SIZE_VIOLATION)
    """

    def _make(**overrides: Any) -> ReportCreate:
        fields: Dict[str, Any] = {
            "image_url": "data:image/jpeg;base64,AAAA",
            "location": "Market St & 5th St, San Francisco",
            "latitude": 37.7749,
            "longitude": -122.4194,
            "violation_type": ViolationType.ILLEGAL_PLACEMENT,
            "description": "Sign blocks the crosswalk view",
            "user_id": "user-123",
            "timestamp": datetime(2024, 1, 15, 11, 59, 0, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return ReportCreate(**fields)

    return _make


# =============================================================================
# API FIXTURES
# =============================================================================

class StubAnalyzer(ContentAnalyzer):
    """Analyzer returning a fixed description and recording its inputs."""

    def __init__(self, result: Optional[str] = "Large format outdoor advertising sign", error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls = []

    def analyze(self, content: bytes, content_type: str) -> Optional[str]:
        self.calls.append((content, content_type))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="testing",
        MAX_IMAGE_SIZE_BYTES=4 * 1024 * 1024,
        HEATMAP_PRECISION=4,
    )


@pytest.fixture
def analyzer() -> StubAnalyzer:
    return StubAnalyzer()


@pytest.fixture
def app(settings, store, analyzer):
    return create_application(settings=settings, store=store, analyzer=analyzer)


@pytest.fixture
def client(app):
    """
    FastAPI TestClient

    Simulates HTTP requests against the application without a running server.
    """
    with TestClient(app) as c:
        yield c


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_image_bytes() -> bytes:
    """Minimal 1x1 JPEG file."""
    jpeg_b64 = (
        "/9j/4AAQSkZJRgABAQEASABIAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRof"
        "Hh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/2wBDAQkJCQwLDBgNDRgyIRwh"
        "MjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjL/wAAR"
        "CAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAn/xAAUEAEAAAAAAAAAAAAAAAAA"
        "AAAA/8QAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMB"
        "AAIRAxEAPwCwAB//2Q=="
    )
    return base64.b64decode(jpeg_b64)


@pytest.fixture
def report_form() -> Dict[str, str]:
    """Text fields of a valid multipart submission."""
    return {
        "location": "Market St & 5th St, San Francisco",
        "latitude": "37.7749",
        "longitude": "-122.4194",
        "violationType": "Illegal Placement",
        "description": "Sign blocks the crosswalk view",
        "userId": "user-123",
    }


@pytest.fixture
def submit_report(client, report_form, sample_image_bytes):
    """
    Post a report through the API.

    Usage:
        response = submit_report(latitude="10.0")
    """

    def _submit(image: Optional[bytes] = None, content_type: str = "image/jpeg", **overrides: str):
        data = {**report_form, **overrides}
        files = {"image": ("billboard.jpg", image if image is not None else sample_image_bytes, content_type)}
        return client.post("/api/reports", data=data, files=files)

    return _submit
