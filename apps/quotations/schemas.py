from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from apps.jobs.models import JobStatus
from apps.quotations.models import QuotationStatus
from core.schemas import Pagination


class QuotationCreate(BaseModel):
    job_id: int
    quotation_number: str = Field(..., min_length=1, max_length=100)
    quotation_date: date
    amount: float = Field(..., ge=0)


class QuotationUpdate(BaseModel):
    quotation_number: Optional[str] = Field(None, min_length=1, max_length=100)
    quotation_date: Optional[date] = None
    amount: Optional[float] = Field(None, ge=0)
    status: Optional[QuotationStatus] = None


class QuotationResponse(BaseModel):
    id: int
    job_id: int
    quotation_number: str
    quotation_date: date
    amount: float
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class QuotationSummary(BaseModel):
    id: int
    quotation_number: str
    quotation_date: date
    amount: float
    status: str
    job_id: int
    job_number: str
    job_status: JobStatus
    customer_id: int
    customer_name: str


class QuotationDetail(QuotationResponse):
    job_number: str
    job_status: JobStatus
    scale_make: Optional[str]
    scale_model: Optional[str]
    scale_serial: Optional[str]
    customer_name: str
    customer_phone: Optional[str]


class QuotationListResponse(BaseModel):
    success: bool = True
    data: List[QuotationSummary]
    pagination: Pagination
