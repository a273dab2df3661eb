from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from typing import Dict, List, Optional, Tuple
from datetime import date
from fastapi import Depends
import logging

from apps.auth.models import UserModel
from apps.customers.models import Customer
from apps.job_requests.models import JobRequest
from apps.job_requests.schemas import JobRequestGenerate
from core.database import get_db
from core.exceptions import NotFoundError
from core.numbering import format_job_request_number
from core.sequences import SequenceGenerator
from core.transactions import run_transaction

logger = logging.getLogger(__name__)

LIST_COLUMNS = (
    JobRequest.id,
    JobRequest.job_number,
    JobRequest.date,
    JobRequest.job_type,
    JobRequest.customer_id,
    JobRequest.created_by,
    JobRequest.notifications_enabled,
    JobRequest.created_at,
    Customer.name.label("customer_name"),
)


class JobRequestService:
    def __init__(self, db: Session):
        self.db = db
        self.sequences = SequenceGenerator(db)

    def get_job_requests(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> Tuple[List[Dict], int]:
        """Job requests with customer name, newest date first"""
        query = select(*LIST_COLUMNS).join(Customer, JobRequest.customer_id == Customer.id)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    JobRequest.job_number.like(pattern),
                    Customer.name.like(pattern),
                    JobRequest.job_type.like(pattern),
                )
            )
        if date_from:
            query = query.where(JobRequest.date >= date_from)
        if date_to:
            query = query.where(JobRequest.date <= date_to)

        total = self.db.execute(select(func.count()).select_from(query.subquery())).scalar_one()
        rows = self.db.execute(
            query.order_by(JobRequest.date.desc(), JobRequest.job_number.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        ).mappings()
        return [dict(row) for row in rows], total

    def get_job_request(self, job_request_id: int) -> Dict:
        row = self.db.execute(
            select(
                *LIST_COLUMNS,
                Customer.address,
                Customer.contact_person,
                Customer.phone,
                Customer.email,
            )
            .join(Customer, JobRequest.customer_id == Customer.id)
            .where(JobRequest.id == job_request_id)
        ).mappings().first()
        if row is None:
            raise NotFoundError("Job request", job_request_id)
        return dict(row)

    def generate(self, data: JobRequestGenerate, created_by: Optional[UserModel] = None) -> Dict:
        """
        Allocate the next ``ASC`` number for the date and job type and
        record the job request.

        The counter row and the job request commit together; a failure
        leaves both untouched.
        """
        job_type = data.jobType.value

        def work(db: Session) -> JobRequest:
            if db.get(Customer, data.customerId) is None:
                raise NotFoundError("Customer", data.customerId)

            sequence = self.sequences.next_job_request_sequence(data.date, job_type)
            job_request = JobRequest(
                job_number=format_job_request_number(data.date, job_type, sequence),
                date=data.date,
                job_type=job_type.upper(),
                customer_id=data.customerId,
                created_by=created_by.id if created_by else None,
            )
            db.add(job_request)
            db.flush()
            return job_request

        job_request = run_transaction(self.db, work)
        logger.info(f"Job request {job_request.job_number} generated")
        return self.get_job_request(job_request.id)


# Dependency injection
def get_job_request_service(db: Session = Depends(get_db)) -> JobRequestService:
    return JobRequestService(db)
