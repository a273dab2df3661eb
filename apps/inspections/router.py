from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from apps.inspections.schemas import (
    InspectionCreate, InspectionResponse, InspectionSubmitted, SparePartResponse
)
from apps.inspections.services import InspectionService, get_inspection_service
from apps.jobs.models import JobStatus
from apps.jobs.views import JobBoardView
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.database import get_db
from core.exceptions import NotFoundError
from core.schemas import ApiResponse

# Mounted under the jobs resource: /api/v1/jobs/inspections
ROUTE_PREFIX = "jobs/inspections"

router = APIRouter()


@router.get(
    "",
    summary="Jobs pending inspection",
    description="List jobs waiting for inspection, or fetch the inspection of one job with ?job_id="
)
def get_inspections(
    job_id: Optional[int] = Query(None, description="Return the inspection recorded for this job"),
    service: InspectionService = Depends(get_inspection_service),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    if job_id is not None:
        inspection = service.get_inspection_for_job(job_id)
        if inspection is None:
            raise NotFoundError("Inspection")
        return ApiResponse(data=InspectionResponse.model_validate(inspection))

    jobs = JobBoardView(db).list_summary(JobStatus.PENDING_INSPECTION)
    return {"success": True, "data": jobs, "count": len(jobs)}


@router.post(
    "",
    response_model=ApiResponse[InspectionSubmitted],
    status_code=status.HTTP_201_CREATED,
    summary="Submit inspection",
    description="Record inspection results and spare parts; moves the job to pending_quotation"
)
def submit_inspection(
    inspection: InspectionCreate,
    service: InspectionService = Depends(get_inspection_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_inspection = service.submit_inspection(inspection)
    return ApiResponse(
        data=InspectionSubmitted(inspection_id=db_inspection.id),
        message="Inspection submitted successfully",
    )


@router.get(
    "/{inspection_id}/spare-parts",
    response_model=ApiResponse[List[SparePartResponse]],
    summary="Spare parts of an inspection"
)
def get_spare_parts(
    inspection_id: int,
    service: InspectionService = Depends(get_inspection_service),
    current_user: UserModel = Depends(get_current_user)
):
    parts = service.get_spare_parts(inspection_id)
    return ApiResponse(data=[SparePartResponse.model_validate(part) for part in parts])
