from core.database import Base
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime


class Approval(Base):
    __tablename__ = "approvals"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    lpo_number = Column(String(100), nullable=False)
    approval_date = Column(Date, nullable=False)
    approved_by = Column(String(255), nullable=True)
    prepared_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    preparer = relationship("UserModel", foreign_keys=[prepared_by])
