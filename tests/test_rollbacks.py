"""A failed status write undoes the rows its trigger wrote before it."""

import pytest
from sqlalchemy.exc import OperationalError

from apps.approvals.models import Approval
from apps.approvals.schemas import ApprovalCreate
from apps.approvals.services import ApprovalService
from apps.deliveries.models import Delivery
from apps.deliveries.schemas import DeliveryRecord
from apps.deliveries.services import DeliveryService
from apps.invoices.models import Invoice
from apps.invoices.schemas import InvoiceCreate
from apps.invoices.services import InvoiceService
from apps.jobs.models import Job, JobStatus
from core.exceptions import TransientStoreError


@pytest.fixture
def break_status_write(db, monkeypatch):
    """Make the service's status update fail once its child row is written."""
    written = []

    def _break(service, model):
        def failing_advance(job, target):
            written.append(db.query(model).filter(model.job_id == job.id).count())
            raise OperationalError("UPDATE jobs SET status=?", {}, Exception("disk I/O error"))

        monkeypatch.setattr(service.machine, "advance", failing_advance)
        return written

    return _break


def _status(db, job_id):
    db.expire_all()
    return db.get(Job, job_id).status


def test_failed_approval_writes_nothing(db, user, create_job, workflow, break_status_write):
    job_id = create_job()
    workflow.inspect(job_id)
    workflow.quote(job_id)
    service = ApprovalService(db)
    written = break_status_write(service, Approval)

    with pytest.raises(TransientStoreError):
        service.create_approval(
            ApprovalCreate(job_id=job_id, lpo_number="LPO-9", approval_date="2025-05-16"), user
        )

    assert written == [1]
    assert _status(db, job_id) == JobStatus.PENDING_APPROVAL
    assert db.get(Job, job_id).lpo_number is None
    assert db.query(Approval).count() == 0


def test_failed_mark_ready_writes_nothing(db, create_job, workflow, break_status_write):
    job_id = create_job()
    workflow.inspect(job_id)
    workflow.quote(job_id)
    workflow.approve(job_id)
    service = ApprovalService(db)
    written = break_status_write(service, Delivery)

    with pytest.raises(TransientStoreError):
        service.mark_ready(job_id, "Alice Admin")

    assert written == [1]
    assert _status(db, job_id) == JobStatus.APPROVED
    assert db.query(Delivery).count() == 0


def test_failed_delivery_keeps_previous_details(db, create_job, workflow, break_status_write):
    job_id = create_job()
    workflow.to_ready(job_id)
    service = DeliveryService(db)
    written = break_status_write(service, Delivery)

    with pytest.raises(TransientStoreError):
        service.record_delivery(job_id, DeliveryRecord(
            invoice_number="INV-A",
            invoice_amount=100.0,
            invoice_date="2025-05-20",
            delivered_by="Driver One",
            delivery_date="2025-05-21",
            status="completed",
        ))

    assert written == [1]
    assert _status(db, job_id) == JobStatus.READY_FOR_DELIVERY
    delivery = db.query(Delivery).filter(Delivery.job_id == job_id).one()
    assert delivery.invoice_number is None
    assert delivery.delivered_by is None


def test_failed_invoice_writes_nothing(db, create_job, workflow, break_status_write):
    job_id = create_job()
    workflow.to_ready(job_id)
    service = InvoiceService(db)
    written = break_status_write(service, Invoice)

    with pytest.raises(TransientStoreError):
        service.create_invoice(InvoiceCreate(
            jobId=job_id, invoiceNumber="INV-9", invoiceDate="2025-05-20", amount=50.0
        ))

    assert written == [1]
    assert _status(db, job_id) == JobStatus.READY_FOR_DELIVERY
    assert db.query(Invoice).count() == 0
