"""
Tests de la tabla de transiciones de estado de órdenes.
"""

import pytest
from httpx import AsyncClient

from app.config import get_settings
from app.models.order import OrderStatus
from app.services.order_service import is_allowed_transition
from conftest import auth_headers, order_payload

S = OrderStatus


@pytest.mark.parametrize("current,new", [
    (S.PENDIENTE, S.INICIADA),
    (S.PENDIENTE, S.EN_PROCESO),
    (S.PENDIENTE, S.CANCELADA),
    (S.INICIADA, S.EN_PROCESO),
    (S.EN_PROCESO, S.TERMINADA),
    (S.EN_PROCESO, S.CANCELADA),
    (S.TERMINADA, S.TERMINADA),
])
def test_allowed(current, new):
    assert is_allowed_transition(current, new)


@pytest.mark.parametrize("current,new", [
    (S.TERMINADA, S.PENDIENTE),
    (S.CANCELADA, S.EN_PROCESO),
    (S.PENDIENTE, S.TERMINADA),
    (S.EN_PROCESO, S.PENDIENTE),
])
def test_disallowed(current, new):
    assert not is_allowed_transition(current, new)


async def _finished_order(client: AsyncClient, doctor, lab_user) -> str:
    order = (await client.post(
        "/api/orders", json=order_payload(), headers=auth_headers(doctor)
    )).json()
    for status in ("en_proceso", "terminada"):
        response = await client.put(
            f"/api/orders/{order['id']}/progress",
            json={"status": status},
            headers=auth_headers(lab_user),
        )
        assert response.status_code == 200
    return order["id"]


async def test_permissive_by_default(client: AsyncClient, doctor, lab_user):
    order_id = await _finished_order(client, doctor, lab_user)
    response = await client.put(
        f"/api/orders/{order_id}", json={"status": "pendiente"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 200
    assert response.json()["status"] == "pendiente"


async def test_enforced_transitions(client: AsyncClient, monkeypatch, doctor, lab_user):
    order_id = await _finished_order(client, doctor, lab_user)
    monkeypatch.setattr(get_settings(), "ENFORCE_STATUS_TRANSITIONS", True)

    response = await client.put(
        f"/api/orders/{order_id}", json={"status": "pendiente"}, headers=auth_headers(lab_user)
    )
    assert response.status_code == 400
    assert "error" in response.json()

    progress = await client.put(
        f"/api/orders/{order_id}/progress", json={"status": "cancelada"},
        headers=auth_headers(lab_user),
    )
    assert progress.status_code == 400


async def test_terminated_progress_is_100(client: AsyncClient, doctor, lab_user):
    order_id = await _finished_order(client, doctor, lab_user)
    detail = await client.get(f"/api/orders/{order_id}", headers=auth_headers(doctor))
    assert detail.json()["progress_percentage"] == "100"


async def test_cancel_keeps_progress(client: AsyncClient, doctor, lab_user):
    order = (await client.post(
        "/api/orders", json=order_payload(), headers=auth_headers(doctor)
    )).json()
    await client.put(
        f"/api/orders/{order['id']}/progress",
        json={"status": "en_proceso", "progress_percentage": 70},
        headers=auth_headers(lab_user),
    )
    response = await client.put(
        f"/api/orders/{order['id']}/progress",
        json={"status": "cancelada"},
        headers=auth_headers(lab_user),
    )
    assert response.json()["status"] == "cancelada"
    assert response.json()["progress_percentage"] == "70"
