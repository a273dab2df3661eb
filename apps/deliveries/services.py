from sqlalchemy.orm import Session
from typing import List, Optional
from fastapi import Depends
import logging

from apps.deliveries.models import Delivery
from apps.deliveries.schemas import DeliveryRecord
from apps.jobs.models import JobStatus
from apps.jobs.views import JobBoardView
from apps.jobs.workflow import JobStateMachine
from core.database import get_db
from core.transactions import run_transaction
from core.upserts import insert_or_replace

logger = logging.getLogger(__name__)

DELIVERY_FIELDS = ("invoice_number", "invoice_amount", "invoice_date", "delivered_by", "delivery_date")


class DeliveryService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def get_delivery(self, job_id: int) -> Optional[Delivery]:
        return (
            self.db.query(Delivery)
            .filter(Delivery.job_id == job_id)
            .populate_existing()
            .first()
        )

    def get_board(self, status: JobStatus = JobStatus.READY_FOR_DELIVERY) -> List[dict]:
        return JobBoardView(self.db).list_by_status(status, include_delivery=True)

    def record_delivery(self, job_id: int, data: DeliveryRecord) -> Delivery:
        """
        Upsert the job's delivery and invoice details, then apply ``data.status``.

        Repeating the call for a job overwrites the single delivery row.
        """

        def work(db: Session) -> Delivery:
            job = self.machine.load(job_id)
            self.machine.ensure_status(
                job,
                data.status or JobStatus.COMPLETED,
                JobStatus.READY_FOR_DELIVERY,
                JobStatus.COMPLETED,
            )
            values = data.model_dump(include=set(DELIVERY_FIELDS))
            insert_or_replace(
                db,
                Delivery,
                {"job_id": job.id, **values},
                conflict_columns=("job_id",),
                update_columns=DELIVERY_FIELDS,
            )
            if data.status:
                self.machine.apply(job, data.status)
            return self.get_delivery(job.id)

        delivery = run_transaction(self.db, work)
        logger.info(f"Delivery recorded for job {job_id}: invoice {data.invoice_number}")
        return delivery


# Dependency injection
def get_delivery_service(db: Session = Depends(get_db)) -> DeliveryService:
    return DeliveryService(db)
