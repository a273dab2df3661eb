from fastapi import APIRouter, Depends, status, Query
from typing import Optional
import math

from apps.quotations.schemas import (
    QuotationCreate, QuotationUpdate, QuotationResponse, QuotationDetail, QuotationListResponse
)
from apps.quotations.services import QuotationService, get_quotation_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse, Pagination

router = APIRouter()


@router.get(
    "",
    response_model=QuotationListResponse,
    summary="Get all quotations",
    description="Quotations with their job and customer, filtered and paginated"
)
def get_quotations(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by quotation status"),
    job_id: Optional[int] = Query(None, description="Filter by job"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    service: QuotationService = Depends(get_quotation_service),
    current_user: UserModel = Depends(get_current_user)
):
    quotations, total = service.get_quotations(status_filter, job_id, page, limit)
    return QuotationListResponse(
        data=quotations,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            totalPages=math.ceil(total / limit),
        ),
    )


@router.get(
    "/{quotation_id}",
    response_model=ApiResponse[QuotationDetail],
    summary="Get quotation by ID"
)
def get_quotation(
    quotation_id: int,
    service: QuotationService = Depends(get_quotation_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.get_quotation(quotation_id))


@router.post(
    "",
    response_model=ApiResponse[QuotationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a quotation",
    description="Send a quotation for a job; moves the job to pending_approval"
)
def create_quotation(
    quotation: QuotationCreate,
    service: QuotationService = Depends(get_quotation_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=QuotationResponse.model_validate(service.create_quotation(quotation)))


@router.patch(
    "/{quotation_id}",
    response_model=ApiResponse[QuotationResponse],
    summary="Update a quotation",
    description="Edit a quotation; status=approved also approves the job"
)
def update_quotation(
    quotation_id: int,
    quotation_update: QuotationUpdate,
    service: QuotationService = Depends(get_quotation_service),
    current_user: UserModel = Depends(get_current_user)
):
    quotation = service.update_quotation(quotation_id, quotation_update)
    return ApiResponse(data=QuotationResponse.model_validate(quotation))
