from core.database import Base
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from datetime import datetime


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    invoice_number = Column(String(100), unique=True, index=True, nullable=False)
    invoice_date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
