from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
from fastapi import Depends
import logging

from apps.inspections.models import Inspection, InspectionSparePart
from apps.inspections.schemas import InspectionCreate
from apps.jobs.models import JobStatus
from apps.jobs.workflow import JobStateMachine
from core.database import get_db
from core.exceptions import NotFoundError
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class InspectionService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def get_inspection_for_job(self, job_id: int) -> Optional[Inspection]:
        return (
            self.db.query(Inspection)
            .options(selectinload(Inspection.spare_parts))
            .filter(Inspection.job_id == job_id)
            .order_by(Inspection.id)
            .first()
        )

    def get_spare_parts(self, inspection_id: int) -> List[InspectionSparePart]:
        if self.db.get(Inspection, inspection_id) is None:
            raise NotFoundError("Inspection", inspection_id)
        return (
            self.db.query(InspectionSparePart)
            .filter(InspectionSparePart.inspection_id == inspection_id)
            .order_by(InspectionSparePart.id)
            .all()
        )

    def submit_inspection(self, data: InspectionCreate) -> Inspection:
        """
        Record the technician's findings and move the job to pending_quotation.

        The inspection, its spare parts and the status change commit
        together or not at all.
        """

        def work(db: Session) -> Inspection:
            job = self.machine.load(data.job_id)
            self.machine.check(job, JobStatus.PENDING_QUOTATION)

            inspection = Inspection(
                job_id=job.id,
                problems_found=data.problems_found,
                inspected_by=data.inspected_by,
                inspection_date=data.inspection_date,
                total_cost=data.total_cost,
                notes=data.notes,
            )
            db.add(inspection)
            db.flush()

            for part in data.spare_parts:
                db.add(InspectionSparePart(
                    inspection_id=inspection.id,
                    part_name=part.part_name,
                    quantity=part.quantity,
                    unit_price=part.unit_price,
                ))
            db.flush()

            self.machine.advance(job, JobStatus.PENDING_QUOTATION)
            return inspection

        inspection = run_transaction(self.db, work)
        logger.info(
            f"Inspection {inspection.id} submitted for job {data.job_id} "
            f"with {len(data.spare_parts)} spare part(s)"
        )
        return inspection


# Dependency injection
def get_inspection_service(db: Session = Depends(get_db)) -> InspectionService:
    return InspectionService(db)
