"""Per-status job boards for the dashboard and pipeline list screens."""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from apps.approvals.models import Approval
from apps.customers.models import Customer
from apps.deliveries.models import Delivery
from apps.inspections.models import Inspection, InspectionSparePart
from apps.jobs.models import Job, JobStatus
from apps.quotations.models import Quotation


class JobBoardView:
    def __init__(self, db: Session):
        self.db = db

    def _board_query(self, include_delivery: bool):
        columns = [
            Job.id,
            Job.job_number,
            Job.created_at,
            Customer.name.label("customer_name"),
            Customer.phone.label("customer_phone"),
            Job.status,
            Job.scale_make,
            Job.scale_model,
            Job.scale_serial,
            Job.remark,
            Job.lpo_number,
            Quotation.quotation_number,
            Quotation.amount.label("quotation_amount"),
            Approval.approved_by,
            Approval.approval_date,
            Inspection.problems_found.label("inspection_problems"),
            Inspection.inspected_by,
            Inspection.inspection_date,
            Inspection.total_cost.label("inspection_total_cost"),
        ]
        if include_delivery:
            columns += [
                Delivery.invoice_number,
                Delivery.invoice_amount,
                Delivery.invoice_date,
                Delivery.delivered_by,
                Delivery.delivery_date,
            ]

        query = (
            select(*columns)
            .select_from(Job)
            .outerjoin(Customer, Job.customer_id == Customer.id)
            .outerjoin(Quotation, Quotation.job_id == Job.id)
            .outerjoin(Approval, Approval.job_id == Job.id)
            .outerjoin(Inspection, Inspection.job_id == Job.id)
        )
        if include_delivery:
            query = query.outerjoin(Delivery, Delivery.job_id == Job.id)
        return query

    def spare_parts_by_job(self, job_ids: Iterable[int]) -> Dict[int, List[dict]]:
        """One query for the spare parts of every listed job."""
        job_ids = list(set(job_ids))
        parts = defaultdict(list)
        if not job_ids:
            return parts
        rows = self.db.execute(
            select(
                Inspection.job_id,
                InspectionSparePart.id,
                InspectionSparePart.part_name,
                InspectionSparePart.quantity,
                InspectionSparePart.unit_price,
            )
            .join(Inspection, InspectionSparePart.inspection_id == Inspection.id)
            .where(Inspection.job_id.in_(job_ids))
            .order_by(InspectionSparePart.id)
        ).mappings()
        for row in rows:
            part = dict(row)
            parts[part.pop("job_id")].append(part)
        return parts

    def list_by_status(self, status: JobStatus, include_delivery: bool = False) -> List[dict]:
        query = (
            self._board_query(include_delivery)
            .where(Job.status == JobStatus(status))
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        jobs = [dict(row) for row in self.db.execute(query).mappings()]
        parts = self.spare_parts_by_job(job["id"] for job in jobs)
        for job in jobs:
            job["spare_parts"] = parts.get(job["id"], [])
        return jobs

    def status_counts(self) -> Dict[str, int]:
        rows = self.db.execute(
            select(Job.status, func.count(Job.id)).group_by(Job.status)
        ).all()
        return {status.value: count for status, count in rows}

    def list_summary(self, status: Optional[JobStatus] = None) -> List[dict]:
        query = (
            select(
                Job.id,
                Job.job_number,
                Job.status,
                Job.created_at,
                Customer.name.label("customer_name"),
            )
            .join(Customer, Job.customer_id == Customer.id)
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        if status is not None:
            query = query.where(Job.status == JobStatus(status))
        return [dict(row) for row in self.db.execute(query).mappings()]
