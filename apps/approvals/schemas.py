from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class ApprovalCreate(BaseModel):
    job_id: int
    lpo_number: str = Field(..., min_length=1, max_length=100)
    approval_date: date
    notes: Optional[str] = None


class ApprovalUpdate(BaseModel):
    lpoNumber: Optional[str] = Field(None, max_length=100)
    approvedBy: Optional[str] = Field(None, max_length=255)
    approvalDate: Optional[date] = None
    notes: Optional[str] = None


class ReadyForDelivery(BaseModel):
    prepared_by: Optional[str] = Field(None, max_length=255)


class ApprovalResponse(BaseModel):
    id: int
    job_id: int
    lpo_number: str
    approval_date: date
    approved_by: Optional[str]
    prepared_by: Optional[int]
    prepared_by_name: Optional[str] = None
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
