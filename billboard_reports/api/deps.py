"""Dependency injection utilities for API endpoints.

The store, the content analyzer and the settings are attached to
``app.state`` by ``create_application``; these dependencies hand them to
the routes so no handler reaches for module-level state.
"""

from typing import Annotated

from fastapi import Depends, Request

from billboard_reports.core.config import Settings
from billboard_reports.services.content_analysis import ContentAnalyzer
from billboard_reports.services.report_store import ReportStore


def get_report_store(request: Request) -> ReportStore:
    return request.app.state.report_store


def get_content_analyzer(request: Request) -> ContentAnalyzer:
    return request.app.state.content_analyzer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# Type aliases for route signatures
ReportStoreDep = Annotated[ReportStore, Depends(get_report_store)]
ContentAnalyzerDep = Annotated[ContentAnalyzer, Depends(get_content_analyzer)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
