from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from apps.jobs.schemas import (
    JobCreate, JobUpdate, JobResponse, JobStatusUpdate, JobCreateResponse, JobListResponse
)
from apps.jobs.services import JobService, get_job_service
from apps.jobs.models import JobStatus
from apps.deliveries.schemas import DeliveryRecord, DeliveryResponse
from apps.deliveries.services import DeliveryService, get_delivery_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.post(
    "",
    response_model=JobCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new job",
    description="Take in a scale; the job starts in pending_inspection"
)
def create_job(
    job: JobCreate,
    service: JobService = Depends(get_job_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_job = service.create_job(job)
    return JobCreateResponse(jobId=db_job.id, jobNumber=db_job.job_number, status=db_job.status)


@router.get(
    "",
    response_model=JobListResponse,
    summary="Get all jobs",
    description="Jobs with customer details, optionally filtered by status"
)
def get_jobs(
    status_filter: Optional[JobStatus] = Query(None, alias="status", description="Filter by status"),
    service: JobService = Depends(get_job_service),
    current_user: UserModel = Depends(get_current_user)
):
    jobs = service.get_jobs(status_filter)
    return JobListResponse(data=jobs, count=len(jobs))


@router.get("/{job_id}", response_model=ApiResponse[JobResponse], summary="Get job by ID")
def get_job(
    job_id: int,
    service: JobService = Depends(get_job_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.get_job(job_id))


@router.put("/{job_id}", response_model=ApiResponse[JobResponse], summary="Update job details")
def update_job(
    job_id: int,
    job_update: JobUpdate,
    service: JobService = Depends(get_job_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.update_job(job_id, job_update)
    return ApiResponse(data=service.get_job(job_id), message="Job updated successfully")


@router.patch(
    "/{job_id}/status",
    response_model=ApiResponse[JobResponse],
    summary="Change job status",
    description="Only cancellation is accepted here; every other stage has its own endpoint"
)
def update_job_status(
    job_id: int,
    status_update: JobStatusUpdate,
    service: JobService = Depends(get_job_service),
    current_user: UserModel = Depends(get_current_user)
):
    service.update_job_status(job_id, status_update.status)
    return ApiResponse(data=service.get_job(job_id), message="Job status updated successfully")


@router.put(
    "/{job_id}/delivery",
    response_model=ApiResponse[DeliveryResponse],
    summary="Record delivery",
    description="Create or overwrite the job's delivery and invoice details"
)
def record_delivery(
    job_id: int,
    delivery: DeliveryRecord,
    service: DeliveryService = Depends(get_delivery_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_delivery = service.record_delivery(job_id, delivery)
    return ApiResponse(
        data=DeliveryResponse.model_validate(db_delivery),
        message="Delivery details updated successfully",
    )
