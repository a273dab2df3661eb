from fastapi import APIRouter, Depends, Query
from typing import Dict

from apps.dashboard.services import DashboardService, get_dashboard_service
from apps.jobs.models import JobStatus
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[Dict[str, int]], summary="Job counts by status")
def get_stats(
    service: DashboardService = Depends(get_dashboard_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.get_stats())


@router.get("/jobs", summary="Jobs in one status", description="Job board for the given status with spare parts")
def get_jobs_by_status(
    status_filter: JobStatus = Query(..., alias="status"),
    service: DashboardService = Depends(get_dashboard_service),
    current_user: UserModel = Depends(get_current_user)
):
    return {"success": True, "data": service.get_jobs(status_filter)}
