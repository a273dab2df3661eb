from core.database import Base
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum


class JobType(str, enum.Enum):
    ACCREDITED = "accredited"
    NON_ACCREDITED = "non-accredited"


class JobSequence(Base):
    """Counter row per (date, job type); also backs intake job numbers."""

    __tablename__ = "job_sequences"

    sequence_date = Column(Date, primary_key=True)
    job_type = Column(String(20), primary_key=True)
    last_sequence = Column(Integer, nullable=False, default=1)


class JobRequest(Base):
    __tablename__ = "job_requests"

    id = Column(Integer, primary_key=True, index=True)
    job_number = Column(String(50), unique=True, index=True, nullable=False)
    date = Column(Date, nullable=False, index=True)
    # Stored upper case: ACCREDITED / NON-ACCREDITED
    job_type = Column(String(20), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    notifications_enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer")
