from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import Optional

from apps.approvals.schemas import ApprovalCreate, ApprovalUpdate, ApprovalResponse, ReadyForDelivery
from apps.approvals.services import ApprovalService, get_approval_service
from apps.jobs.models import JobStatus
from apps.jobs.views import JobBoardView
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.database import get_db
from core.schemas import ApiResponse

router = APIRouter()


@router.get(
    "",
    summary="Approved jobs",
    description="Approved jobs with quotation, approval, inspection and spare parts"
)
def get_approved_jobs(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return {"success": True, "data": JobBoardView(db).list_by_status(JobStatus.APPROVED)}


@router.post(
    "",
    response_model=ApiResponse[ApprovalResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Approve a job",
    description="Record the customer's LPO; moves the job to approved"
)
def create_approval(
    approval: ApprovalCreate,
    service: ApprovalService = Depends(get_approval_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_approval = service.create_approval(approval, current_user)
    return ApiResponse(data=service.approval_to_response(db_approval))


@router.put(
    "/{job_id}/ready",
    response_model=ApiResponse[dict],
    summary="Mark job ready for delivery (by job id)",
    description="Takes the job id, not an approval id. Moves an approved job to "
                "ready_for_delivery and opens its delivery record"
)
def mark_ready_for_delivery(
    job_id: int = Path(..., description="Job id of the approved job"),
    body: Optional[ReadyForDelivery] = None,
    service: ApprovalService = Depends(get_approval_service),
    current_user: UserModel = Depends(get_current_user)
):
    prepared_by = (body.prepared_by if body else None) or current_user.name
    job = service.mark_ready(job_id, prepared_by)
    return ApiResponse(
        data={"job_id": job.id, "status": job.status},
        message="Job marked as ready for delivery",
    )


@router.put(
    "/{approval_id}",
    response_model=ApiResponse[ApprovalResponse],
    summary="Update approval record (by approval id)"
)
def update_approval(
    approval_id: int,
    approval_update: ApprovalUpdate,
    service: ApprovalService = Depends(get_approval_service),
    current_user: UserModel = Depends(get_current_user)
):
    db_approval = service.update_approval(approval_id, approval_update)
    return ApiResponse(
        data=service.approval_to_response(db_approval),
        message="Approval updated successfully",
    )
