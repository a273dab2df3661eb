from pydantic import BaseModel, Field
from datetime import date, datetime


class InvoiceCreate(BaseModel):
    jobId: int
    invoiceNumber: str = Field(..., min_length=1, max_length=100)
    invoiceDate: date
    amount: float = Field(..., gt=0)


class InvoiceResponse(BaseModel):
    id: int
    job_id: int
    invoice_number: str
    invoice_date: date
    amount: float
    created_at: datetime

    class Config:
        from_attributes = True


class InvoiceListItem(InvoiceResponse):
    job_number: str
    customer_name: str
