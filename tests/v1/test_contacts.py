# mypy: ignore-errors
# tests/v1/test_contacts.py
"""Tests for contact request endpoints."""

from fastapi import status


def _request(client, sender="Omar", recipient="Achraf"):
    return client.post("/api/contacts/request", json={"sender": sender, "recipient": recipient})


def _pending_id(client, agent="Achraf") -> int:
    records = client.get(f"/api/contacts/{agent}").json()
    return next(r["id"] for r in records if r["status"] == "pending")


def test_request_contact(client) -> None:
    response = _request(client)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"message": "Contact request sent."}
    records = client.get("/api/contacts/Omar").json()
    assert len(records) == 1
    assert records[0]["agent1"] == "Omar"
    assert records[0]["agent2"] == "Achraf"
    assert records[0]["initiator"] == "Omar"
    assert records[0]["status"] == "pending"
    assert records[0]["acceptedAt"] is None


def test_duplicate_request_returns_conflict(client) -> None:
    _request(client)

    response = _request(client)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert "already pending" in response.json()["detail"]


def test_request_to_self_is_invalid(client) -> None:
    response = _request(client, "Omar", "omar")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_request_to_unknown_agent(client) -> None:
    response = _request(client, "Omar", "Ghost")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "The recipient is not a valid agent."


def test_request_missing_fields_is_unprocessable(client) -> None:
    response = client.post("/api/contacts/request", json={"sender": "Omar"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_accept_contact(client) -> None:
    _request(client)
    contact_id = _pending_id(client)

    response = client.post(
        "/api/contacts/accept",
        json={"contactId": contact_id, "acceptorAgentName": "Achraf"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Contact request accepted."}
    record = client.get("/api/contacts/Achraf").json()[0]
    assert record["status"] == "accepted"
    assert record["acceptedAt"] is not None


def test_accept_by_sender_is_not_found(client) -> None:
    _request(client)
    contact_id = _pending_id(client)

    response = client.post(
        "/api/contacts/accept",
        json={"contactId": contact_id, "acceptorAgentName": "Omar"},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/contacts/Omar").json()[0]["status"] == "pending"


def test_decline_contact_allows_new_request(client) -> None:
    _request(client)
    contact_id = _pending_id(client)

    response = client.post(
        "/api/contacts/decline",
        json={"contactId": contact_id, "declinerAgentName": "Achraf"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/contacts/Omar").json() == []
    assert _request(client).status_code == status.HTTP_201_CREATED


def test_list_contacts_for_agent_without_contacts(client) -> None:
    response = client.get("/api/contacts/Fatou")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
