from core.database import Base
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum


class JobStatus(str, enum.Enum):
    PENDING_INSPECTION = "pending_inspection"
    PENDING_QUOTATION = "pending_quotation"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    READY_FOR_DELIVERY = "ready_for_delivery"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    job_number = Column(String(50), unique=True, index=True, nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    customer = relationship("Customer")
    taken_by = Column(String(255), nullable=False)

    # Scale information
    scale_make = Column(String(255), nullable=True)
    scale_model = Column(String(255), nullable=True)
    scale_serial = Column(String(255), nullable=True)
    remark = Column(Text, nullable=True)

    lpo_number = Column(String(100), nullable=True)

    status = Column(
        SQLEnum(
            JobStatus,
            name="job_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=JobStatus.PENDING_INSPECTION,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
