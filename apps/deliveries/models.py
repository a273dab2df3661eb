from core.database import Base
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from datetime import datetime


class Delivery(Base):
    __tablename__ = "deliveries"

    id = Column(Integer, primary_key=True, index=True)
    # One delivery record per job; upserts key on this column
    job_id = Column(Integer, ForeignKey("jobs.id"), unique=True, nullable=False)
    prepared_by = Column(String(255), nullable=True)
    invoice_number = Column(String(100), nullable=True)
    invoice_amount = Column(Float, nullable=True)
    invoice_date = Column(Date, nullable=True)
    delivered_by = Column(String(255), nullable=True)
    delivery_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
