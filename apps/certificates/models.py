from core.database import Base
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Text, Boolean, ForeignKey, UniqueConstraint
)
from datetime import datetime


class CertificateSequence(Base):
    __tablename__ = "certificate_sequences"

    job_request_id = Column(Integer, ForeignKey("job_requests.id"), primary_key=True)
    last_sequence = Column(Integer, nullable=False, default=1)


class Certificate(Base):
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("job_request_id", "certificate_number", name="uq_certificates_job_request_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_request_id = Column(Integer, ForeignKey("job_requests.id"), index=True, nullable=False)
    certificate_number = Column(String(60), index=True, nullable=False)
    date_of_calibration = Column(Date, nullable=False)
    calibration_due_date = Column(Date, nullable=False)

    # Equipment information
    customer_name = Column(String(255), nullable=True)
    equipment_details = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    make = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    capacity = Column(String(100), nullable=True)
    serial_no = Column(String(100), nullable=True)
    asset_no = Column(String(100), nullable=True)

    notification_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
