from core.database import Base
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from datetime import datetime
import enum


class QuotationStatus(str, enum.Enum):
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"


class Quotation(Base):
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    quotation_number = Column(String(100), unique=True, index=True, nullable=False)
    quotation_date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default=QuotationStatus.SENT.value)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
