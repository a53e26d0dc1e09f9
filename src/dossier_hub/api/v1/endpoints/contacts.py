"""Contact request endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from dossier_hub.api.v1.dependencies import ContactServiceDep
from dossier_hub.schemas.common import Ack
from dossier_hub.schemas.contact import (
    ContactAccept,
    ContactDecline,
    ContactRecord,
    ContactRequestCreate,
)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("/request", response_model=Ack, status_code=status.HTTP_201_CREATED)
async def request_contact(body: ContactRequestCreate, contacts: ContactServiceDep) -> Ack:
    """Send a contact request to another agent."""
    contacts.request_contact(body.sender, body.recipient)
    return Ack(message="Contact request sent.")


@router.post("/accept", response_model=Ack)
async def accept_contact(body: ContactAccept, contacts: ContactServiceDep) -> Ack:
    """Accept a pending request; only the invited agent may do so."""
    contacts.accept_contact(body.contact_id, body.acceptor_agent_name)
    return Ack(message="Contact request accepted.")


@router.post("/decline", response_model=Ack)
async def decline_contact(body: ContactDecline, contacts: ContactServiceDep) -> Ack:
    contacts.decline_contact(body.contact_id, body.decliner_agent_name)
    return Ack(message="Contact request declined.")


@router.get("/{agent_name}", response_model=list[ContactRecord])
async def list_contacts(agent_name: str, contacts: ContactServiceDep) -> list[ContactRecord]:
    """Return every contact record involving the agent, whatever its status."""
    return contacts.list_contacts(agent_name)
