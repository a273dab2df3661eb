from pydantic import BaseModel
from typing import List, Optional
from datetime import date as date_type, datetime

from apps.job_requests.models import JobType
from core.schemas import Pagination


class JobRequestGenerate(BaseModel):
    jobType: JobType
    date: date_type
    customerId: int


class JobRequestResponse(BaseModel):
    id: int
    job_number: str
    date: date_type
    job_type: str
    customer_id: int
    created_by: Optional[int] = None
    notifications_enabled: bool
    created_at: datetime
    customer_name: str


class JobRequestDetail(JobRequestResponse):
    address: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class JobRequestListResponse(BaseModel):
    success: bool = True
    data: List[JobRequestResponse]
    pagination: Pagination
