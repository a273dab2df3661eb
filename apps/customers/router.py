from fastapi import APIRouter, Depends, status
from typing import List

from apps.customers.schemas import CustomerCreate, CustomerResponse
from apps.customers.services import CustomerService, get_customer_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[List[CustomerResponse]], summary="Get all customers")
def get_customers(
    service: CustomerService = Depends(get_customer_service),
    current_user: UserModel = Depends(get_current_user)
):
    customers = service.get_customers()
    return ApiResponse(data=[CustomerResponse.model_validate(c) for c in customers])


@router.post(
    "",
    response_model=ApiResponse[CustomerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer"
)
def create_customer(
    customer: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=CustomerResponse.model_validate(service.create_customer(customer)))
