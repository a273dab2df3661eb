from sqlalchemy.orm import Session
from typing import Dict
from datetime import date
from fastapi import Depends
import logging

from apps.approvals.models import Approval
from apps.approvals.schemas import ApprovalCreate, ApprovalUpdate
from apps.auth.models import UserModel
from apps.deliveries.models import Delivery
from apps.jobs.models import Job, JobStatus
from apps.jobs.workflow import JobStateMachine
from core.database import get_db
from core.exceptions import NotFoundError
from core.transactions import run_transaction
from core.upserts import insert_or_replace

logger = logging.getLogger(__name__)


class ApprovalService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def approval_to_response(self, approval: Approval) -> Dict:
        return {
            "id": approval.id,
            "job_id": approval.job_id,
            "lpo_number": approval.lpo_number,
            "approval_date": approval.approval_date,
            "approved_by": approval.approved_by,
            "prepared_by": approval.prepared_by,
            "prepared_by_name": approval.preparer.name if approval.preparer else None,
            "notes": approval.notes,
            "created_at": approval.created_at,
        }

    def create_approval(self, data: ApprovalCreate, prepared_by: UserModel) -> Approval:
        """Record the customer's LPO and move the job to approved"""

        def work(db: Session) -> Approval:
            job = self.machine.load(data.job_id)
            self.machine.check(job, JobStatus.APPROVED)

            approval = Approval(
                job_id=job.id,
                lpo_number=data.lpo_number,
                approval_date=data.approval_date,
                prepared_by=prepared_by.id,
                notes=data.notes,
            )
            db.add(approval)
            job.lpo_number = data.lpo_number
            db.flush()

            self.machine.advance(job, JobStatus.APPROVED)
            return approval

        approval = run_transaction(self.db, work)
        logger.info(f"Job {data.job_id} approved with LPO {data.lpo_number} by {prepared_by.email}")
        return approval

    def mark_ready(self, job_id: int, prepared_by: str) -> Job:
        """Move an approved job to ready_for_delivery and open its delivery record"""

        def work(db: Session) -> Job:
            job = self.machine.load(job_id)
            self.machine.check(job, JobStatus.READY_FOR_DELIVERY)
            insert_or_replace(
                db,
                Delivery,
                {"job_id": job.id, "prepared_by": prepared_by, "delivery_date": date.today()},
                conflict_columns=("job_id",),
                update_columns=("prepared_by", "delivery_date"),
            )
            return self.machine.advance(job, JobStatus.READY_FOR_DELIVERY)

        return run_transaction(self.db, work)

    def update_approval(self, approval_id: int, data: ApprovalUpdate) -> Approval:
        """Overwrite approved_by and notes; LPO number and date change only when given"""

        def work(db: Session) -> Approval:
            approval = db.get(Approval, approval_id)
            if approval is None:
                raise NotFoundError("Approval record", approval_id)
            if data.lpoNumber:
                approval.lpo_number = data.lpoNumber
            approval.approved_by = data.approvedBy
            if data.approvalDate:
                approval.approval_date = data.approvalDate
            approval.notes = data.notes
            db.flush()
            return approval

        return run_transaction(self.db, work)


# Dependency injection
def get_approval_service(db: Session = Depends(get_db)) -> ApprovalService:
    return ApprovalService(db)
