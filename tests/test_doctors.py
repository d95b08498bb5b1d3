"""
Tests de gestión de doctores por laboratorio.
"""

from httpx import AsyncClient
from sqlalchemy import select

from app.models.user import User
from conftest import TEST_PASSWORD, auth_headers, order_payload

DOCTOR_DATA = {
    "name": "Dr. Nuevo",
    "email": "nuevo.doctor@test.com",
    "password": "secreto123",
    "phone": "5551234567",
}


async def test_lab_creates_doctor(client: AsyncClient, lab_user):
    response = await client.post("/api/doctors", json=DOCTOR_DATA, headers=auth_headers(lab_user))
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "doctor"
    assert data["status"] == "active"
    assert data["lab_id"] == str(lab_user.lab_id)
    assert "password" not in data

    login = await client.post("/api/auth/login", json={
        "email": DOCTOR_DATA["email"], "password": DOCTOR_DATA["password"],
    })
    assert login.status_code == 200


async def test_create_ignores_client_role_and_lab(client: AsyncClient, lab_user, lab2):
    response = await client.post(
        "/api/doctors",
        json={**DOCTOR_DATA, "role": "superadmin", "lab_id": str(lab2.id)},
        headers=auth_headers(lab_user),
    )
    assert response.status_code == 201
    assert response.json()["role"] == "doctor"
    assert response.json()["lab_id"] == str(lab_user.lab_id)


async def test_phone_must_be_numeric(client: AsyncClient, lab_user):
    response = await client.post(
        "/api/doctors", json={**DOCTOR_DATA, "phone": "555-ABC"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 400


async def test_duplicate_email(client: AsyncClient, lab_user, doctor):
    response = await client.post(
        "/api/doctors", json={**DOCTOR_DATA, "email": "ana@test.com"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 400


async def test_only_lab_creates(client: AsyncClient, superadmin, doctor):
    for user in (superadmin, doctor):
        response = await client.post("/api/doctors", json=DOCTOR_DATA, headers=auth_headers(user))
        assert response.status_code == 403


async def test_list_scoped_to_lab(client: AsyncClient, lab_user, doctor, doctor_b, other_lab_doctor):
    response = await client.get("/api/doctors", headers=auth_headers(lab_user))
    assert response.status_code == 200
    assert {d["id"] for d in response.json()} == {str(doctor.id), str(doctor_b.id)}


async def test_superadmin_filters_by_lab(client: AsyncClient, superadmin, lab2, doctor, other_lab_doctor):
    everyone = await client.get("/api/doctors", headers=auth_headers(superadmin))
    assert {d["id"] for d in everyone.json()} == {str(doctor.id), str(other_lab_doctor.id)}

    filtered = await client.get(
        "/api/doctors", params={"lab_id": str(lab2.id)}, headers=auth_headers(superadmin)
    )
    assert [d["id"] for d in filtered.json()] == [str(other_lab_doctor.id)]


async def test_update_doctor(client: AsyncClient, lab_user, doctor):
    response = await client.put(
        f"/api/doctors/{doctor.id}",
        json={"name": "Dra. Ana María", "phone": "5559876543", "status": "inactive"},
        headers=auth_headers(lab_user),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Dra. Ana María"
    assert data["status"] == "inactive"

    login = await client.post("/api/auth/login", json={
        "email": "ana@test.com", "password": TEST_PASSWORD,
    })
    assert login.status_code == 401


async def test_update_short_phone(client: AsyncClient, lab_user, doctor):
    response = await client.put(
        f"/api/doctors/{doctor.id}", json={"phone": "555"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 400


async def test_update_email_taken(client: AsyncClient, lab_user, doctor, doctor_b):
    response = await client.put(
        f"/api/doctors/{doctor.id}", json={"email": "beto@test.com"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 400


async def test_other_lab_cannot_manage(client: AsyncClient, lab2_user, doctor):
    update = await client.put(
        f"/api/doctors/{doctor.id}", json={"name": "Hackeado"}, headers=auth_headers(lab2_user)
    )
    assert update.status_code == 403

    delete = await client.delete(f"/api/doctors/{doctor.id}", headers=auth_headers(lab2_user))
    assert delete.status_code == 403


async def test_non_doctor_is_not_found(client: AsyncClient, superadmin, lab_user):
    response = await client.get(f"/api/doctors/{lab_user.id}", headers=auth_headers(superadmin))
    assert response.status_code == 404


async def test_delete_doctor_without_orders(client: AsyncClient, db_session, lab_user, doctor):
    response = await client.delete(f"/api/doctors/{doctor.id}", headers=auth_headers(lab_user))
    assert response.status_code == 204
    assert await db_session.scalar(select(User).where(User.id == doctor.id)) is None


async def test_delete_doctor_with_orders_fails(client: AsyncClient, db_session, lab_user, doctor):
    await client.post("/api/orders", json=order_payload(), headers=auth_headers(doctor))

    response = await client.delete(f"/api/doctors/{doctor.id}", headers=auth_headers(lab_user))
    assert response.status_code == 400
    assert "error" in response.json()
    assert await db_session.scalar(select(User).where(User.id == doctor.id)) is not None
