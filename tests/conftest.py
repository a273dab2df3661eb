"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from core.database import Base, enable_sqlite_foreign_keys, get_db
from apps.auth.models import Role, UserModel
from apps.auth.services import ensure_roles, get_current_user, get_password_hash
from apps.customers.models import Customer

API = "/api/v1"


@pytest.fixture
def engine(tmp_path):
    """File-backed so several sessions can hold their own connections."""
    test_engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    ensure_roles(db)
    admin_role = db.query(Role).filter(Role.name == "admin").one()
    admin = UserModel(
        name="Alice Admin",
        email="alice@example.com",
        hashed_password=get_password_hash("secret123"),
        role=admin_role,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    assert admin.role.name == "admin"
    return admin


@pytest.fixture
def customer(db):
    acme = Customer(
        name="Acme Foods",
        address="Plot 4, Industrial Area",
        contact_person="Jane Doe",
        phone="0700000001",
        email="jane@acme.example",
    )
    db.add(acme)
    db.commit()
    db.refresh(acme)
    return acme


@pytest.fixture
def anon_client(session_factory):
    """Client that goes through real token authentication."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(anon_client, user):
    app.dependency_overrides[get_current_user] = lambda: user
    return anon_client


@pytest.fixture
def create_job(client, customer):
    def _create(**overrides):
        payload = {
            "customer_id": customer.id,
            "taken_by": "Bob",
            "make": "Avery",
            "model": "X100",
            "serial_number": "SN-001",
        }
        payload.update(overrides)
        response = client.post(f"{API}/jobs", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["jobId"]

    return _create


@pytest.fixture
def workflow(client):
    """Step helpers that drive a job along the pipeline through the API."""

    class Steps:
        def inspect(self, job_id, spare_parts=None):
            response = client.post(f"{API}/jobs/inspections", json={
                "job_id": job_id,
                "problems_found": "Load cell drift",
                "inspected_by": "Tech One",
                "inspection_date": "2025-05-14",
                "total_cost": 120.0,
                "spare_parts": spare_parts if spare_parts is not None else [
                    {"part_name": "Load cell", "quantity": 1, "unit_price": 100.0},
                    {"part_name": "Cable", "quantity": 2, "unit_price": 10.0},
                ],
            })
            assert response.status_code == 201, response.text
            return response.json()["data"]["inspection_id"]

        def quote(self, job_id, number=None):
            response = client.post(f"{API}/quotations", json={
                "job_id": job_id,
                "quotation_number": number or f"Q-{job_id}",
                "quotation_date": "2025-05-15",
                "amount": 150.0,
            })
            assert response.status_code == 201, response.text
            return response.json()["data"]["id"]

        def approve(self, job_id, lpo="LPO-77"):
            response = client.post(f"{API}/approvals", json={
                "job_id": job_id,
                "lpo_number": lpo,
                "approval_date": "2025-05-16",
            })
            assert response.status_code == 201, response.text
            return response.json()["data"]["id"]

        def ready(self, job_id):
            response = client.put(f"{API}/approvals/{job_id}/ready")
            assert response.status_code == 200, response.text

        def to_ready(self, job_id):
            self.inspect(job_id)
            self.quote(job_id)
            self.approve(job_id)
            self.ready(job_id)

    return Steps()


@pytest.fixture
def job_status(client):
    def _status(job_id):
        response = client.get(f"{API}/jobs/{job_id}")
        assert response.status_code == 200, response.text
        return response.json()["data"]["status"]

    return _status
