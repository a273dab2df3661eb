"""End-to-end job lifecycle through the HTTP API."""

from datetime import datetime

import pytest

from apps.deliveries.models import Delivery
from apps.inspections.models import Inspection, InspectionSparePart
from apps.inspections.schemas import InspectionCreate, SparePartIn
from apps.inspections.services import InspectionService
from apps.jobs.models import Job, JobStatus
from apps.jobs.services import JobService
from apps.quotations.models import Quotation
from core.exceptions import ValidationError

from conftest import API


def test_health(anon_client):
    response = anon_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "timestamp" in response.json()


def test_create_job(client, customer):
    response = client.post(f"{API}/jobs", json={
        "customer_id": customer.id,
        "taken_by": "Bob",
        "make": "Avery",
        "model": "X100",
        "serial_number": "SN-9",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "pending_inspection"
    assert body["jobNumber"].startswith("JB")
    assert len(body["jobNumber"]) == 12

    job = client.get(f"{API}/jobs/{body['jobId']}").json()["data"]
    assert job["customer_name"] == "Acme Foods"
    assert job["scale_serial"] == "SN-9"


def test_job_numbers_increase_within_a_month(db, customer):
    service = JobService(db)
    may = datetime(2025, 5, 3)
    assert service.generate_job_number(may) == "JB2025050001"
    assert service.generate_job_number(may) == "JB2025050002"
    assert service.generate_job_number(datetime(2025, 6, 1)) == "JB2025060001"
    db.rollback()


def test_create_job_for_unknown_customer(client):
    response = client.post(f"{API}/jobs", json={"customer_id": 404, "taken_by": "Bob"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "code": "NOT_FOUND", "message": "Customer not found"}


def test_missing_field_is_400(client, customer):
    response = client.post(f"{API}/jobs", json={"customer_id": customer.id})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "taken_by" in body["message"]


def test_full_lifecycle(client, db, create_job, workflow, job_status):
    job_id = create_job()
    assert job_status(job_id) == "pending_inspection"

    inspection_id = workflow.inspect(job_id)
    assert job_status(job_id) == "pending_quotation"
    db.expire_all()
    assert db.query(Inspection).filter(Inspection.job_id == job_id).count() == 1
    assert db.query(InspectionSparePart).filter(InspectionSparePart.inspection_id == inspection_id).count() == 2

    workflow.quote(job_id)
    assert job_status(job_id) == "pending_approval"

    workflow.approve(job_id, lpo="LPO-123")
    job = client.get(f"{API}/jobs/{job_id}").json()["data"]
    assert job["status"] == "approved"
    assert job["lpo_number"] == "LPO-123"

    workflow.ready(job_id)
    assert job_status(job_id) == "ready_for_delivery"

    response = client.post(f"{API}/invoices", json={
        "jobId": job_id,
        "invoiceNumber": "INV-1",
        "invoiceDate": "2025-05-20",
        "amount": 150.0,
    })
    assert response.status_code == 201, response.text
    assert job_status(job_id) == "completed"

    invoices = client.get(f"{API}/invoices").json()["data"]
    assert invoices[0]["invoice_number"] == "INV-1"
    assert invoices[0]["customer_name"] == "Acme Foods"


def test_quotation_before_inspection_is_rejected(client, create_job, job_status):
    job_id = create_job()
    response = client.post(f"{API}/quotations", json={
        "job_id": job_id,
        "quotation_number": "Q-early",
        "quotation_date": "2025-05-15",
        "amount": 10.0,
    })
    assert response.status_code == 409
    assert response.json()["code"] == "ILLEGAL_TRANSITION"
    assert job_status(job_id) == "pending_inspection"
    assert client.get(f"{API}/quotations").json()["pagination"]["total"] == 0


def test_illegal_status_patch(client, create_job, job_status):
    job_id = create_job()
    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": "completed"})
    assert response.status_code == 409
    assert response.json()["success"] is False
    assert job_status(job_id) == "pending_inspection"


def test_status_patch_can_cancel(client, create_job, job_status):
    job_id = create_job()
    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": "cancelled"})
    assert response.status_code == 200
    assert job_status(job_id) == "cancelled"

    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": "pending_inspection"})
    assert response.status_code == 409


@pytest.mark.parametrize("target", [
    "pending_quotation", "pending_approval", "approved", "ready_for_delivery",
])
def test_status_patch_cannot_skip_stage_records(client, db, create_job, job_status, target):
    job_id = create_job()
    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": target})
    assert response.status_code == 409
    assert response.json()["code"] == "ILLEGAL_TRANSITION"
    assert job_status(job_id) == "pending_inspection"
    db.expire_all()
    assert db.query(Inspection).count() == 0


def test_status_patch_after_inspection_still_needs_quotation(client, create_job, workflow, job_status):
    job_id = create_job()
    workflow.inspect(job_id)
    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": "pending_approval"})
    assert response.status_code == 409
    assert job_status(job_id) == "pending_quotation"


def test_unknown_status_value_is_400(client, create_job):
    job_id = create_job()
    response = client.patch(f"{API}/jobs/{job_id}/status", json={"status": "lost"})
    assert response.status_code == 400


def test_failed_inspection_writes_nothing(db, create_job):
    job_id = create_job()
    bad_part = SparePartIn.model_construct(part_name=None, quantity=1, unit_price=5.0)
    data = InspectionCreate(
        job_id=job_id,
        problems_found="Broken display",
        inspected_by="Tech One",
        inspection_date="2025-05-14",
        spare_parts=[bad_part],
    )

    with pytest.raises(ValidationError):
        InspectionService(db).submit_inspection(data)

    db.expire_all()
    assert db.query(Inspection).count() == 0
    assert db.query(InspectionSparePart).count() == 0
    assert db.get(Job, job_id).status == JobStatus.PENDING_INSPECTION


def test_second_inspection_is_rejected(client, create_job, workflow):
    job_id = create_job()
    workflow.inspect(job_id)
    response = client.post(f"{API}/jobs/inspections", json={
        "job_id": job_id,
        "problems_found": "Again",
        "inspected_by": "Tech Two",
        "inspection_date": "2025-05-15",
    })
    assert response.status_code == 409


def test_duplicate_quotation_number(client, db, create_job, workflow, job_status):
    first, second = create_job(), create_job()
    workflow.inspect(first)
    workflow.inspect(second)
    workflow.quote(first, number="Q-100")

    response = client.post(f"{API}/quotations", json={
        "job_id": second,
        "quotation_number": "Q-100",
        "quotation_date": "2025-05-15",
        "amount": 99.0,
    })
    assert response.status_code == 409
    assert response.json()["message"] == "Quotation number already exists"
    assert job_status(second) == "pending_quotation"
    db.expire_all()
    assert db.query(Quotation).filter(Quotation.job_id == second).count() == 0


def test_approving_quotation_approves_job(client, create_job, workflow, job_status):
    job_id = create_job()
    workflow.inspect(job_id)
    quotation_id = workflow.quote(job_id)

    response = client.patch(f"{API}/quotations/{quotation_id}", json={"status": "approved"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"
    assert job_status(job_id) == "approved"


def test_quotation_update_needs_fields(client, create_job, workflow):
    job_id = create_job()
    workflow.inspect(job_id)
    quotation_id = workflow.quote(job_id)
    response = client.patch(f"{API}/quotations/{quotation_id}", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "No fields to update"


def test_quotation_list_and_detail(client, create_job, workflow):
    for _ in range(3):
        job_id = create_job()
        workflow.inspect(job_id)
        workflow.quote(job_id)

    page = client.get(f"{API}/quotations", params={"page": 1, "limit": 2}).json()
    assert len(page["data"]) == 2
    assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    detail = client.get(f"{API}/quotations/{page['data'][0]['id']}").json()["data"]
    assert detail["customer_name"] == "Acme Foods"
    assert detail["job_status"] == "pending_approval"

    assert client.get(f"{API}/quotations/999").status_code == 404


def test_delivery_upsert_keeps_one_row(client, db, create_job, workflow, job_status):
    job_id = create_job()
    workflow.to_ready(job_id)

    first = client.put(f"{API}/jobs/{job_id}/delivery", json={
        "invoice_number": "INV-A",
        "invoice_amount": 100.0,
        "invoice_date": "2025-05-20",
        "delivered_by": "Driver One",
        "delivery_date": "2025-05-21",
        "status": "completed",
    })
    assert first.status_code == 200, first.text
    assert job_status(job_id) == "completed"

    second = client.put(f"{API}/jobs/{job_id}/delivery", json={
        "invoice_number": "INV-B",
        "invoice_amount": 120.0,
        "invoice_date": "2025-05-22",
        "delivered_by": "Driver Two",
        "delivery_date": "2025-05-23",
        "status": "completed",
    })
    assert second.status_code == 200, second.text
    assert second.json()["data"]["invoice_number"] == "INV-B"

    db.expire_all()
    deliveries = db.query(Delivery).filter(Delivery.job_id == job_id).all()
    assert len(deliveries) == 1
    assert deliveries[0].invoice_number == "INV-B"
    assert deliveries[0].delivered_by == "Driver Two"
    assert deliveries[0].prepared_by == "Alice Admin"
    assert job_status(job_id) == "completed"


def test_delivery_upsert_touches_updated_at(client, db, create_job, workflow):
    job_id = create_job()
    workflow.to_ready(job_id)
    stale = datetime(2020, 1, 1)
    db.query(Delivery).filter(Delivery.job_id == job_id).update({"updated_at": stale})
    db.commit()

    response = client.put(f"{API}/jobs/{job_id}/delivery", json={
        "invoice_number": "INV-A",
        "invoice_amount": 100.0,
        "invoice_date": "2025-05-20",
        "delivered_by": "Driver One",
        "delivery_date": "2025-05-21",
    })
    assert response.status_code == 200, response.text

    db.expire_all()
    delivery = db.query(Delivery).filter(Delivery.job_id == job_id).one()
    assert delivery.updated_at > stale


def test_delivery_before_ready_is_rejected(client, create_job, workflow):
    job_id = create_job()
    workflow.inspect(job_id)
    response = client.put(f"{API}/deliveries/{job_id}/delivery", json={
        "invoice_number": "INV-X",
        "invoice_amount": 10.0,
        "invoice_date": "2025-05-20",
        "delivered_by": "Driver",
        "delivery_date": "2025-05-21",
    })
    assert response.status_code == 409


def test_invoice_requires_ready_job(client, create_job, job_status):
    job_id = create_job()
    response = client.post(f"{API}/invoices", json={
        "jobId": job_id,
        "invoiceNumber": "INV-9",
        "invoiceDate": "2025-05-20",
        "amount": 10.0,
    })
    assert response.status_code == 409
    assert job_status(job_id) == "pending_inspection"


def test_update_job_does_not_touch_status(client, create_job, job_status):
    job_id = create_job()
    response = client.put(f"{API}/jobs/{job_id}", json={"remark": "Handle with care", "scale_make": "Mettler"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["remark"] == "Handle with care"
    assert data["scale_make"] == "Mettler"
    assert data["scale_model"] == "X100"
    assert job_status(job_id) == "pending_inspection"


def test_update_approval(client, create_job, workflow):
    job_id = create_job()
    workflow.inspect(job_id)
    workflow.quote(job_id)
    approval_id = workflow.approve(job_id)

    response = client.put(f"{API}/approvals/{approval_id}", json={"approvedBy": "Mr. Okello", "notes": "Signed"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["approved_by"] == "Mr. Okello"
    assert data["lpo_number"] == "LPO-77"
    assert data["prepared_by_name"] == "Alice Admin"


def test_ready_route_takes_the_job_id(client, create_job, workflow, job_status):
    idle, approved = create_job(), create_job()
    workflow.inspect(approved)
    workflow.quote(approved)
    approval_id = workflow.approve(approved)
    assert approval_id == idle

    # An approval id that happens to be another job's id moves nothing
    response = client.put(f"{API}/approvals/{approval_id}/ready")
    assert response.status_code == 409
    assert job_status(idle) == "pending_inspection"

    response = client.put(f"{API}/approvals/{approved}/ready")
    assert response.status_code == 200
    assert response.json()["data"]["job_id"] == approved
    assert job_status(approved) == "ready_for_delivery"
