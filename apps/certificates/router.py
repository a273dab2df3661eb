from fastapi import APIRouter, Depends, status, Query
from typing import List

from apps.certificates.schemas import CertificateCreate, CertificateUpdate, CertificateResponse
from apps.certificates.services import CertificateService, get_certificate_service
from apps.auth.services import get_current_user
from apps.auth.models import UserModel
from core.schemas import ApiResponse

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[List[CertificateResponse]],
    summary="Get certificates of a job request"
)
def get_certificates(
    job_request_id: int = Query(..., ge=1),
    service: CertificateService = Depends(get_certificate_service),
    current_user: UserModel = Depends(get_current_user)
):
    certificates = service.get_certificates(job_request_id)
    return ApiResponse(data=[CertificateResponse.model_validate(c) for c in certificates])


@router.post(
    "",
    response_model=ApiResponse[CertificateResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Issue a certificate",
    description="The certificate number is allocated from the job request's counter"
)
def create_certificate(
    certificate: CertificateCreate,
    service: CertificateService = Depends(get_certificate_service),
    current_user: UserModel = Depends(get_current_user)
):
    return ApiResponse(data=CertificateResponse.model_validate(service.create_certificate(certificate)))


@router.put("/{certificate_id}", response_model=ApiResponse[CertificateResponse], summary="Update a certificate")
def update_certificate(
    certificate_id: int,
    certificate: CertificateUpdate,
    service: CertificateService = Depends(get_certificate_service),
    current_user: UserModel = Depends(get_current_user)
):
    updated = service.update_certificate(certificate_id, certificate)
    return ApiResponse(data=CertificateResponse.model_validate(updated))
