from fastapi import APIRouter, Depends, Query

from apps.deliveries.schemas import DeliveryRecord, DeliveryResponse
from apps.deliveries.services import DeliveryService, get_delivery_service
from apps.jobs.models import JobStatus
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.get(
    "",
    summary="Delivery board",
    description="Jobs in the given status (default ready_for_delivery) with delivery and invoice details"
)
def get_delivery_board(
    status_filter: JobStatus = Query(JobStatus.READY_FOR_DELIVERY, alias="status"),
    service: DeliveryService = Depends(get_delivery_service),
    current_user: UserModel = Depends(get_current_user)
):
    return {"success": True, "data": service.get_board(status_filter)}


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
