from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class CertificateBase(BaseModel):
    date_of_calibration: date
    calibration_due_date: date
    equipment_details: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    make: Optional[str] = Field(None, max_length=255)
    model: Optional[str] = Field(None, max_length=255)
    capacity: Optional[str] = Field(None, max_length=100)
    serial_no: Optional[str] = Field(None, max_length=100)
    asset_no: Optional[str] = Field(None, max_length=100)


class CertificateCreate(CertificateBase):
    job_request_id: int
    customer_name: Optional[str] = Field(None, max_length=255)
    notification_sent: bool = False


class CertificateUpdate(CertificateBase):
    pass


class CertificateResponse(CertificateBase):
    id: int
    job_request_id: int
    certificate_number: str
    customer_name: Optional[str] = None
    notification_sent: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
