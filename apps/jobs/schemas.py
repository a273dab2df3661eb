from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from apps.jobs.models import JobStatus


class JobCreate(BaseModel):
    customer_id: int
    taken_by: str = Field(..., min_length=1, max_length=255)
    remark: Optional[str] = None
    make: Optional[str] = Field(None, max_length=255)
    model: Optional[str] = Field(None, max_length=255)
    serial_number: Optional[str] = Field(None, max_length=255)


class JobUpdate(BaseModel):
    remark: Optional[str] = None
    scale_make: Optional[str] = Field(None, max_length=255)
    scale_model: Optional[str] = Field(None, max_length=255)
    scale_serial: Optional[str] = Field(None, max_length=255)


class JobStatusUpdate(BaseModel):
    status: JobStatus


class JobResponse(BaseModel):
    id: int
    job_number: str
    customer_id: int
    customer_name: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    taken_by: str
    scale_make: Optional[str]
    scale_model: Optional[str]
    scale_serial: Optional[str]
    remark: Optional[str]
    lpo_number: Optional[str]
    status: JobStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JobCreateResponse(BaseModel):
    success: bool = True
    jobId: int
    jobNumber: str
    status: JobStatus


class JobListResponse(BaseModel):
    success: bool = True
    data: List[JobResponse]
    count: int
