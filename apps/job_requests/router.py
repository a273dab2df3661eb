from fastapi import APIRouter, Depends, status, Query
from typing import Optional
from datetime import date
import math

from apps.job_requests.schemas import (
    JobRequestGenerate, JobRequestDetail, JobRequestListResponse
)
from apps.job_requests.services import JobRequestService, get_job_request_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse, Pagination

router = APIRouter()


@router.get(
    "",
    response_model=JobRequestListResponse,
    summary="Get job requests",
    description="Search by number, customer or type and filter by date range"
)
def get_job_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=1000),
    search: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    service: JobRequestService = Depends(get_job_request_service),
    current_user: UserModel = Depends(get_current_user)
):
    job_requests, total = service.get_job_requests(page, limit, search, date_from, date_to)
    return JobRequestListResponse(
        data=job_requests,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            totalPages=math.ceil(total / limit),
        ),
    )


@router.post(
    "/generate",
    response_model=ApiResponse[JobRequestDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Generate a job request number"
)
def generate_job_request(
    request: JobRequestGenerate,
    service: JobRequestService = Depends(get_job_request_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.generate(request, created_by=current_user))


@router.get("/{job_request_id}", response_model=ApiResponse[JobRequestDetail], summary="Get job request by ID")
def get_job_request(
    job_request_id: int,
    service: JobRequestService = Depends(get_job_request_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.get_job_request(job_request_id))
