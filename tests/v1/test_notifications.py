# mypy: ignore-errors
# tests/v1/test_notifications.py
"""Tests for notification endpoints."""

from fastapi import status

from dossier_hub.db import get_store
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import get_gateway


def _notify(recipient: str, message: str):
    return NotificationService(get_store(), get_gateway()).notify(recipient, message)


def test_list_notifications_with_read_flag(client) -> None:
    client.post("/api/contacts/request", json={"sender": "Omar", "recipient": "Achraf"})

    response = client.get("/api/notifications/Achraf")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 1
    assert data[0]["type"] == "contact_request"
    assert data[0]["recipient"] == "Achraf"
    assert data[0]["read"] is False
    assert client.get("/api/notifications/Omar").json() == []


def test_agent_name_is_case_insensitive(client) -> None:
    _notify("Omar", "hello")

    assert len(client.get("/api/notifications/omar").json()) == 1


def test_mark_direct_notification_read(client) -> None:
    note = _notify("Omar", "hello")

    response = client.put(f"/api/notifications/mark-read/{note.id}", json={"agentName": "Omar"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Notification marked as read."}
    assert client.get("/api/notifications/Omar").json() == []


def test_mark_broadcast_read_for_one_agent(client) -> None:
    note = _notify("all", "maintenance tonight")

    client.put(f"/api/notifications/mark-read/{note.id}", json={"agentName": "Omar"})

    assert client.get("/api/notifications/Omar").json() == []
    assert [n["id"] for n in client.get("/api/notifications/Achraf").json()] == [note.id]


def test_mark_unknown_notification_read(client) -> None:
    response = client.put("/api/notifications/mark-read/999", json={"agentName": "Omar"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_all_read(client) -> None:
    broadcast = _notify("all", "X")
    _notify("Omar", "direct")

    response = client.delete("/api/notifications/all/Omar")

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/notifications/Omar").json() == []
    assert [n["id"] for n in client.get("/api/notifications/Achraf").json()] == [broadcast.id]


def test_delete_notification(client) -> None:
    broadcast = _notify("all", "X")

    response = client.delete(f"/api/notifications/{broadcast.id}")

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/notifications/Achraf").json() == []
