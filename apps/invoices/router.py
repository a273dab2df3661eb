from fastapi import APIRouter, Depends, status
from typing import List

from apps.invoices.schemas import InvoiceCreate, InvoiceResponse, InvoiceListItem
from apps.invoices.services import InvoiceService, get_invoice_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[List[InvoiceListItem]], summary="Get all invoices")
def get_invoices(
    service: InvoiceService = Depends(get_invoice_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=service.get_invoices())


@router.post(
    "",
    response_model=ApiResponse[InvoiceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
    description="Invoice a job that is ready for delivery; the job becomes completed"
)
def create_invoice(
    invoice: InvoiceCreate,
    service: InvoiceService = Depends(get_invoice_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=InvoiceResponse.model_validate(service.create_invoice(invoice)))
