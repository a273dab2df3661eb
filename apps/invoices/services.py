from sqlalchemy.orm import Session
from typing import Dict, List
from fastapi import Depends
import logging

from apps.customers.models import Customer
from apps.invoices.models import Invoice
from apps.invoices.schemas import InvoiceCreate
from apps.jobs.models import Job, JobStatus
from apps.jobs.workflow import JobStateMachine
from core.database import get_db
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class InvoiceService:
    def __init__(self, db: Session):
        self.db = db
        self.machine = JobStateMachine(db)

    def get_invoices(self) -> List[Dict]:
        rows = (
            self.db.query(Invoice, Job.job_number, Customer.name.label("customer_name"))
            .join(Job, Invoice.job_id == Job.id)
            .join(Customer, Job.customer_id == Customer.id)
            .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
            .all()
        )
        return [
            {
                "id": invoice.id,
                "job_id": invoice.job_id,
                "invoice_number": invoice.invoice_number,
                "invoice_date": invoice.invoice_date,
                "amount": invoice.amount,
                "created_at": invoice.created_at,
                "job_number": job_number,
                "customer_name": customer_name,
            }
            for invoice, job_number, customer_name in rows
        ]

    def create_invoice(self, data: InvoiceCreate) -> Invoice:
        """Invoice a job that is ready for delivery and complete it in the same commit"""

        def work(db: Session) -> Invoice:
            job = self.machine.load(data.jobId)
            self.machine.check(job, JobStatus.COMPLETED)
            invoice = Invoice(
                job_id=job.id,
                invoice_number=data.invoiceNumber,
                invoice_date=data.invoiceDate,
                amount=data.amount,
            )
            db.add(invoice)
            db.flush()
            self.machine.advance(job, JobStatus.COMPLETED)
            return invoice

        invoice = run_transaction(self.db, work)
        logger.info(f"Invoice {invoice.invoice_number} issued for job {data.jobId}")
        return invoice


# Dependency injection
def get_invoice_service(db: Session = Depends(get_db)) -> InvoiceService:
    return InvoiceService(db)
