from core.database import Base
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime


class Inspection(Base):
    __tablename__ = "inspections"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    problems_found = Column(Text, nullable=False)
    inspected_by = Column(String(255), nullable=False)
    inspection_date = Column(Date, nullable=False)
    total_cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    spare_parts = relationship(
        "InspectionSparePart",
        back_populates="inspection",
        order_by="InspectionSparePart.id",
    )


class InspectionSparePart(Base):
    __tablename__ = "inspection_spare_parts"

    id = Column(Integer, primary_key=True, index=True)
    inspection_id = Column(Integer, ForeignKey("inspections.id"), index=True, nullable=False)
    part_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Float, nullable=False, default=0.0)

    inspection = relationship("Inspection", back_populates="spare_parts")
