"""
Tests de notificaciones: destinatarios y marcado como leído.
"""

from uuid import uuid4

from httpx import AsyncClient

from conftest import auth_headers, order_payload


async def test_lab_sees_lab_addressed_notifications(client: AsyncClient, doctor, lab_user, lab2_user):
    await client.post("/api/orders", json=order_payload(), headers=auth_headers(doctor))

    own = await client.get("/api/notifications", headers=auth_headers(lab_user))
    assert len(own.json()) == 1

    other = await client.get("/api/notifications", headers=auth_headers(lab2_user))
    assert other.json() == []

    creator = await client.get("/api/notifications", headers=auth_headers(doctor))
    assert creator.json() == []


async def test_mark_read(client: AsyncClient, doctor, lab_user):
    await client.post("/api/orders", json=order_payload(), headers=auth_headers(doctor))
    notification = (await client.get("/api/notifications", headers=auth_headers(lab_user))).json()[0]

    response = await client.put(
        f"/api/notifications/{notification['id']}/read", headers=auth_headers(lab_user)
    )
    assert response.status_code == 204

    listing = (await client.get("/api/notifications", headers=auth_headers(lab_user))).json()
    assert listing[0]["status"] == "read"


async def test_mark_read_not_recipient(client: AsyncClient, doctor, lab_user, lab2_user):
    await client.post("/api/orders", json=order_payload(), headers=auth_headers(doctor))
    notification = (await client.get("/api/notifications", headers=auth_headers(lab_user))).json()[0]

    response = await client.put(
        f"/api/notifications/{notification['id']}/read", headers=auth_headers(lab2_user)
    )
    assert response.status_code == 404


async def test_mark_read_missing(client: AsyncClient, doctor):
    response = await client.put(
        f"/api/notifications/{uuid4()}/read", headers=auth_headers(doctor)
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Notificación no encontrada"}
