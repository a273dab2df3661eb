from apps.auth.models import Role
from apps.auth.services import create_access_token, ensure_roles

from conftest import API


def _login(client, email="alice@example.com", password="secret123"):
    return client.post(f"{API}/auth/token", data={"username": email, "password": password})


def test_login_and_me(anon_client, user):
    response = _login(anon_client)
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = anon_client.get(f"{API}/auth/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json() == {"id": user.id, "name": "Alice Admin", "email": "alice@example.com", "role": "admin"}


def test_wrong_password(anon_client, user):
    response = _login(anon_client, password="wrong")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Incorrect email or password"}


def test_workflow_endpoints_need_a_token(anon_client):
    response = anon_client.get(f"{API}/jobs")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_token_for_unknown_user_is_rejected(anon_client, user):
    token = create_access_token({"sub": "ghost@example.com"})
    response = anon_client.get(f"{API}/jobs", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_admin_creates_and_lists_users(anon_client, user):
    headers = {"Authorization": f"Bearer {_login(anon_client).json()['access_token']}"}
    response = anon_client.post(f"{API}/auth/users", headers=headers, json={
        "name": "Tom Tech",
        "email": "tom@example.com",
        "role": "technician",
        "password": "wrench99",
    })
    assert response.status_code == 201
    assert response.json()["role"] == "technician"

    duplicate = anon_client.post(f"{API}/auth/users", headers=headers, json={
        "name": "Tom Again",
        "email": "tom@example.com",
        "role": "clerk",
        "password": "wrench99",
    })
    assert duplicate.status_code == 409

    users = anon_client.get(f"{API}/auth/users", headers=headers).json()
    assert [u["email"] for u in users] == ["alice@example.com", "tom@example.com"]

    tech_token = _login(anon_client, "tom@example.com", "wrench99").json()["access_token"]
    forbidden = anon_client.get(f"{API}/auth/users", headers={"Authorization": f"Bearer {tech_token}"})
    assert forbidden.status_code == 403


def test_ensure_roles_is_idempotent(db):
    ensure_roles(db)
    ensure_roles(db)
    db.commit()
    assert sorted(role.name for role in db.query(Role)) == ["admin", "clerk", "technician"]
