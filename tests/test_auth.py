"""
Tests de autenticación: login, registro y resolución del token.
"""

import asyncio
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.auth.jwt import create_access_token
from app.core.exceptions import ConflictException
from app.models.user import User, UserRole, UserStatus
from app.storage import SQLStorage
from conftest import TEST_PASSWORD, auth_headers, make_user, test_session_factory


async def test_login_success(client: AsyncClient, doctor):
    response = await client.post("/api/auth/login", json={
        "email": "ana@test.com",
        "password": TEST_PASSWORD,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["id"] == str(doctor.id)
    assert data["user"]["role"] == "doctor"
    assert data["user"]["lab_id"] == str(doctor.lab_id)
    assert "password" not in data["user"]


async def test_login_errors_have_same_shape(client: AsyncClient, doctor):
    wrong_password = await client.post("/api/auth/login", json={
        "email": "ana@test.com",
        "password": "incorrecta",
    })
    unknown_email = await client.post("/api/auth/login", json={
        "email": "nadie@test.com",
        "password": TEST_PASSWORD,
    })
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert set(wrong_password.json()) == {"error"}


async def test_login_malformed_email_is_invalid_credentials(client: AsyncClient, doctor):
    malformed = await client.post("/api/auth/login", json={
        "email": "nobody",
        "password": TEST_PASSWORD,
    })
    unknown_email = await client.post("/api/auth/login", json={
        "email": "nadie@test.com",
        "password": TEST_PASSWORD,
    })
    assert malformed.status_code == 401
    assert malformed.json() == unknown_email.json()


async def test_login_inactive_user(client: AsyncClient, db_session, lab1):
    await make_user(
        db_session, "Inactivo", "inactivo@test.com", UserRole.DOCTOR,
        lab1.id, status=UserStatus.INACTIVE,
    )
    response = await client.post("/api/auth/login", json={
        "email": "inactivo@test.com",
        "password": TEST_PASSWORD,
    })
    assert response.status_code == 401


async def test_register_returns_public_user(client: AsyncClient, lab1):
    response = await client.post("/api/auth/register", json={
        "name": "Nuevo Doctor",
        "email": "nuevo@test.com",
        "password": "secreto123",
        "role": "doctor",
        "lab_id": str(lab1.id),
    })
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "nuevo@test.com"
    assert data["role"] == "doctor"
    assert "password" not in data


async def test_register_duplicate_email(client: AsyncClient, db_session, doctor):
    response = await client.post("/api/auth/register", json={
        "name": "Otra Ana",
        "email": "ana@test.com",
        "password": "secreto123",
    })
    assert response.status_code == 400
    assert "error" in response.json()

    count = await db_session.scalar(
        select(func.count()).select_from(User).where(User.email == "ana@test.com")
    )
    assert count == 1


async def test_concurrent_register_same_email(isolated_client: AsyncClient, db_session):
    payload = {"name": "Doble Registro", "email": "doble@test.com", "password": "secreto123"}
    responses = await asyncio.gather(
        isolated_client.post("/api/auth/register", json=payload),
        isolated_client.post("/api/auth/register", json=payload),
    )

    assert sorted(r.status_code for r in responses) == [201, 400]
    rejected = next(r for r in responses if r.status_code == 400)
    assert rejected.json() == {"error": "El email ya está registrado"}

    count = await db_session.scalar(
        select(func.count()).select_from(User).where(User.email == "doble@test.com")
    )
    assert count == 1


async def test_storage_duplicate_email_is_conflict(doctor):
    async with test_session_factory() as session:
        storage = SQLStorage(session)
        with pytest.raises(ConflictException) as exc:
            await storage.create_user({
                "name": "Copia",
                "email": "ana@test.com",
                "password": "x",
                "role": UserRole.DOCTOR,
            })
        assert exc.value.status_code == 400
        await session.rollback()


async def test_register_superadmin_forbidden(client: AsyncClient):
    response = await client.post("/api/auth/register", json={
        "name": "Intruso",
        "email": "intruso@test.com",
        "password": "secreto123",
        "role": "superadmin",
    })
    assert response.status_code == 403


async def test_register_unknown_lab(client: AsyncClient):
    response = await client.post("/api/auth/register", json={
        "name": "Sin Lab",
        "email": "sinlab@test.com",
        "password": "secreto123",
        "lab_id": str(uuid4()),
    })
    assert response.status_code == 400


async def test_register_invalid_payload(client: AsyncClient):
    response = await client.post("/api/auth/register", json={"email": "no-es-email"})
    assert response.status_code == 400
    assert response.json()["error"] == "Datos inválidos"


async def test_missing_token(client: AsyncClient):
    response = await client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Token de acceso requerido"}


async def test_invalid_token(client: AsyncClient):
    response = await client.get(
        "/api/users/me", headers={"Authorization": "Bearer no.es.un.token"}
    )
    assert response.status_code == 401


async def test_token_for_missing_user(client: AsyncClient):
    token = create_access_token(uuid4())
    response = await client.get(
        "/api/users/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


async def test_token_for_deactivated_user(client: AsyncClient, db_session, doctor):
    headers = auth_headers(doctor)
    doctor.status = UserStatus.INACTIVE
    await db_session.commit()

    response = await client.get("/api/users/me", headers=headers)
    assert response.status_code == 401


async def test_me_includes_lab_name(client: AsyncClient, doctor):
    response = await client.get("/api/users/me", headers=auth_headers(doctor))
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "ana@test.com"
    assert data["lab_name"] == "Laboratorio Uno"
