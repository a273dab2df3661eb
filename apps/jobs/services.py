from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Dict
from datetime import datetime
from fastapi import Depends
import logging

from apps.customers.models import Customer
from apps.jobs.models import Job, JobStatus
from apps.jobs.schemas import JobCreate, JobUpdate
from apps.jobs.workflow import JobStateMachine
from core.database import get_db
from core.exceptions import NotFoundError
from core.numbering import format_job_number
from core.sequences import SequenceGenerator
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class JobService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def generate_job_number(self, now: Optional[datetime] = None) -> str:
        """Next intake job number for the current month. Runs in the caller's transaction."""
        now = now or datetime.utcnow()
        sequence = SequenceGenerator(self.db).next_job_sequence(now.year, now.month)
        return format_job_number(now.year, now.month, sequence)

    def _base_query(self):
        return self.db.query(Job).options(joinedload(Job.customer))

    def job_to_response(self, job: Job) -> Dict:
        """Convert Job model to response dictionary"""
        customer = job.customer
        return {
            "id": job.id,
            "job_number": job.job_number,
            "customer_id": job.customer_id,
            "customer_name": customer.name if customer else None,
            "contact_person": customer.contact_person if customer else None,
            "phone": customer.phone if customer else None,
            "email": customer.email if customer else None,
            "taken_by": job.taken_by,
            "scale_make": job.scale_make,
            "scale_model": job.scale_model,
            "scale_serial": job.scale_serial,
            "remark": job.remark,
            "lpo_number": job.lpo_number,
            "status": job.status,
            "created_at": job.created_at,
            "updated_at": job.updated_at,
        }

    def get_job(self, job_id: int) -> Dict:
        job = self._base_query().filter(Job.id == job_id).first()
        if job is None:
            raise NotFoundError("Job", job_id)
        return self.job_to_response(job)

    def get_jobs(self, status: Optional[JobStatus] = None) -> List[Dict]:
        """Jobs joined with their customer, newest first"""
        query = self._base_query()
        if status:
            query = query.filter(Job.status == status)
        rows = query.order_by(Job.created_at.desc(), Job.id.desc()).all()
        return [self.job_to_response(job) for job in rows]

    def create_job(self, job_data: JobCreate) -> Job:
        """Create a job at the start of the pipeline"""

        def work(db: Session) -> Job:
            if db.get(Customer, job_data.customer_id) is None:
                raise NotFoundError("Customer", job_data.customer_id)
            db_job = Job(
                job_number=self.generate_job_number(),
                customer_id=job_data.customer_id,
                taken_by=job_data.taken_by,
                remark=job_data.remark,
                scale_make=job_data.make,
                scale_model=job_data.model,
                scale_serial=job_data.serial_number,
                status=JobStatus.PENDING_INSPECTION,
            )
            db.add(db_job)
            db.flush()
            return db_job

        db_job = run_transaction(self.db, work)
        logger.info(f"Created job: {db_job.job_number} for customer: {job_data.customer_id}")
        return db_job

    def update_job(self, job_id: int, job_update: JobUpdate) -> Job:
        """Update the descriptive fields of a job; status is never touched here"""

        def work(db: Session) -> Job:
            db_job = self.machine.load(job_id)
            for field, value in job_update.model_dump(exclude_unset=True).items():
                setattr(db_job, field, value)
            db.flush()
            return db_job

        db_job = run_transaction(self.db, work)
        logger.info(f"Updated job {db_job.job_number}")
        return db_job

    def update_job_status(self, job_id: int, status: JobStatus) -> Job:
        """Status-only change; stages that need child rows go through their own endpoints"""
        return run_transaction(
            self.db, lambda db: self.machine.change_status(self.machine.load(job_id), status)
        )


# Dependency injection
def get_job_service(db: Session = Depends(get_db)) -> JobService:
    return JobService(db)
