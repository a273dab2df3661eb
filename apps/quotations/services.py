from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import Dict, List, Optional, Tuple
from fastapi import Depends
import logging

from apps.customers.models import Customer
from apps.jobs.models import Job, JobStatus
from apps.jobs.workflow import JobStateMachine
from apps.quotations.models import Quotation, QuotationStatus
from apps.quotations.schemas import QuotationCreate, QuotationUpdate
from core.database import get_db
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class QuotationService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def _number_taken(self, quotation_number: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Quotation.id).filter(Quotation.quotation_number == quotation_number)
        if exclude_id is not None:
            query = query.filter(Quotation.id != exclude_id)
        return query.first() is not None

    def get_quotations(
        self,
        status: Optional[str] = None,
        job_id: Optional[int] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Dict], int]:
        """Quotations joined with their job and customer, newest first"""
        query = (
            select(
                Quotation.id,
                Quotation.quotation_number,
                Quotation.quotation_date,
                Quotation.amount,
                Quotation.status,
                Job.id.label("job_id"),
                Job.job_number,
                Job.status.label("job_status"),
                Customer.id.label("customer_id"),
                Customer.name.label("customer_name"),
            )
            .join(Job, Quotation.job_id == Job.id)
            .join(Customer, Job.customer_id == Customer.id)
        )
        if status:
            query = query.where(Quotation.status == status)
        if job_id:
            query = query.where(Quotation.job_id == job_id)

        total = self.db.execute(select(func.count()).select_from(query.subquery())).scalar_one()
        rows = self.db.execute(
            query.order_by(Quotation.quotation_date.desc(), Quotation.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        ).mappings()
        return [dict(row) for row in rows], total

    def get_quotation(self, quotation_id: int) -> Dict:
        row = self.db.execute(
            select(
                Quotation,
                Job.job_number,
                Job.status.label("job_status"),
                Job.scale_make,
                Job.scale_model,
                Job.scale_serial,
                Customer.name.label("customer_name"),
                Customer.phone.label("customer_phone"),
            )
            .join(Job, Quotation.job_id == Job.id)
            .join(Customer, Job.customer_id == Customer.id)
            .where(Quotation.id == quotation_id)
        ).first()
        if row is None:
            raise NotFoundError("Quotation", quotation_id)

        quotation = row.Quotation
        return {
            "id": quotation.id,
            "job_id": quotation.job_id,
            "quotation_number": quotation.quotation_number,
            "quotation_date": quotation.quotation_date,
            "amount": quotation.amount,
            "status": quotation.status,
            "created_at": quotation.created_at,
            "updated_at": quotation.updated_at,
            "job_number": row.job_number,
            "job_status": row.job_status,
            "scale_make": row.scale_make,
            "scale_model": row.scale_model,
            "scale_serial": row.scale_serial,
            "customer_name": row.customer_name,
            "customer_phone": row.customer_phone,
        }

    def create_quotation(self, data: QuotationCreate) -> Quotation:
        """Send a quotation and move the job to pending_approval"""

        def work(db: Session) -> Quotation:
            if self._number_taken(data.quotation_number):
                raise ConflictError("Quotation number already exists")

            job = self.machine.load(data.job_id)
            self.machine.check(job, JobStatus.PENDING_APPROVAL)

            quotation = Quotation(
                job_id=job.id,
                quotation_number=data.quotation_number,
                quotation_date=data.quotation_date,
                amount=data.amount,
                status=QuotationStatus.SENT.value,
            )
            db.add(quotation)
            db.flush()

            self.machine.advance(job, JobStatus.PENDING_APPROVAL)
            return quotation

        quotation = run_transaction(self.db, work)
        logger.info(f"Quotation {quotation.quotation_number} created for job {data.job_id}")
        return quotation

    def update_quotation(self, quotation_id: int, data: QuotationUpdate) -> Quotation:
        """Edit a quotation; marking it approved also approves its job"""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise ValidationError("No fields to update")

        def work(db: Session) -> Quotation:
            quotation = db.get(Quotation, quotation_id)
            if quotation is None:
                raise NotFoundError("Quotation", quotation_id)

            number = update_data.get("quotation_number")
            if number and self._number_taken(number, exclude_id=quotation_id):
                raise ConflictError("Quotation number already exists")

            if "status" in update_data:
                update_data["status"] = QuotationStatus(update_data["status"]).value
            for field, value in update_data.items():
                setattr(quotation, field, value)
            db.flush()

            if update_data.get("status") == QuotationStatus.APPROVED.value:
                job = self.machine.load(quotation.job_id)
                self.machine.apply(job, JobStatus.APPROVED)
            return quotation

        quotation = run_transaction(self.db, work)
        logger.info(f"Quotation {quotation.quotation_number} updated")
        return quotation


# Dependency injection
def get_quotation_service(db: Session = Depends(get_db)) -> QuotationService:
    return QuotationService(db)
