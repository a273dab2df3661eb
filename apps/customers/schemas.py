from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    contact_person: str = Field(..., min_length=1, max_length=255, alias="contactPerson")
    phone: str = Field(..., min_length=1, max_length=50)
    email: Optional[EmailStr] = None

    class Config:
        populate_by_name = True


class CustomerResponse(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    contact_person: str
    phone: str
    email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
