from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date


class SparePartIn(BaseModel):
    part_name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(1, ge=1)
    unit_price: float = Field(0.0, ge=0)


class SparePartResponse(SparePartIn):
    id: int

    class Config:
        from_attributes = True


class InspectionCreate(BaseModel):
    job_id: int
    problems_found: str = Field(..., min_length=1)
    inspected_by: str = Field(..., min_length=1, max_length=255)
    inspection_date: date
    total_cost: Optional[float] = Field(None, ge=0)
    spare_parts: List[SparePartIn] = []
    notes: Optional[str] = None


class InspectionResponse(BaseModel):
    id: int
    job_id: int
    problems_found: str
    inspected_by: str
    inspection_date: date
    total_cost: Optional[float]
    notes: Optional[str]
    spare_parts: List[SparePartResponse] = []

    class Config:
        from_attributes = True


class InspectionSubmitted(BaseModel):
    inspection_id: int
