from fastapi import APIRouter

from billboard_reports.api.endpoints import dashboard, reports

api_router = APIRouter()

api_router.include_router(reports.router)
api_router.include_router(dashboard.router)
