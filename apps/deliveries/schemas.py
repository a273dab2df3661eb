from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from apps.jobs.models import JobStatus


class DeliveryRecord(BaseModel):
    invoice_number: str = Field(..., min_length=1, max_length=100)
    invoice_amount: float = Field(..., gt=0)
    invoice_date: date
    delivered_by: str = Field(..., min_length=1, max_length=255)
    delivery_date: date
    status: Optional[JobStatus] = Field(None, description="Job status to apply, usually completed")


class DeliveryResponse(BaseModel):
    id: int
    job_id: int
    prepared_by: Optional[str]
    invoice_number: Optional[str]
    invoice_amount: Optional[float]
    invoice_date: Optional[date]
    delivered_by: Optional[str]
    delivery_date: Optional[date]

    class Config:
        from_attributes = True
