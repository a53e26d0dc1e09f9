"""Contact requests between agents.

A request is stored as ``pending`` and only the invited agent (``agent2``)
may accept or decline it. Accepting opens the pair's conversation in the
same write; declining deletes the record, so the pair may ask again later.
"""

from __future__ import annotations

import logging
from typing import Any

from dossier_hub.core.errors import ConflictError, InvalidInputError, NotFoundError
from dossier_hub.db.store import MESSAGES, DocumentStore
from dossier_hub.db.time import next_id, now_ms
from dossier_hub.schemas.contact import ContactRecord, ContactStatus
from dossier_hub.schemas.message import Conversation, MessagingDocument
from dossier_hub.schemas.notification import NotificationType
from dossier_hub.services.agents import AgentService
from dossier_hub.services.contact_graph import ContactGraph
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import RealtimeGateway

logger = logging.getLogger(__name__)

__all__ = ["ContactService", "ensure_conversation"]


def _payload(record: ContactRecord) -> dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


def ensure_conversation(state: MessagingDocument, first: str, second: str) -> Conversation:
    """Return the pair's conversation, creating it once if absent."""
    conversation = state.conversation_between(first, second)
    if conversation is None:
        conversation = Conversation(id=next_id(), participants=[first, second], messages=[])
        state.conversations.append(conversation)
        logger.info("Opened conversation %d between %s and %s", conversation.id, first, second)
    return conversation


class ContactService:
    """Request, accept, decline and list contacts."""

    def __init__(
        self,
        store: DocumentStore,
        gateway: RealtimeGateway,
        notifications: NotificationService,
        agents: AgentService | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.notifications = notifications
        self.agents = agents or AgentService(store)
        self.graph = ContactGraph(store)

    def request_contact(self, sender: str, recipient: str) -> ContactRecord:
        """Create a pending request from ``sender`` to ``recipient``.

        Raises:
            InvalidInputError: If a name is missing or both names are the same agent.
            NotFoundError: If either agent is unknown.
            ConflictError: If a pending or accepted record already links the pair.
        """
        if not sender or not recipient:
            raise InvalidInputError("Sender and recipient are required.")
        if sender.strip().casefold() == recipient.strip().casefold():
            raise InvalidInputError("You cannot add yourself as a contact.")
        sender = self.agents.resolve(sender)
        try:
            recipient = self.agents.resolve(recipient)
        except NotFoundError as exc:
            raise NotFoundError("The recipient is not a valid agent.") from exc

        with self.store.edit(MESSAGES, MessagingDocument) as state:
            existing = next(
                (
                    record
                    for record in state.contacts
                    if record.status != ContactStatus.DECLINED
                    and record.links_casefold(sender, recipient)
                ),
                None,
            )
            if existing is not None:
                if existing.is_accepted:
                    raise ConflictError("You are already in contact with this agent.")
                raise ConflictError("A contact request is already pending between these agents.")

            created = now_ms()
            record = ContactRecord(
                id=next_id(),
                agent1=sender,
                agent2=recipient,
                status=ContactStatus.PENDING,
                initiator=sender,
                timestamp=created,
            )
            state.contacts.append(record)

        logger.info("Contact request %d from %s to %s", record.id, sender, recipient)
        self.notifications.notify(
            recipient,
            f"{sender} sent you a contact request.",
            NotificationType.CONTACT_REQUEST,
            origin_author=sender,
            contact_id=record.id,
        )
        self.gateway.emit_to_room(recipient, "contact_request_received", _payload(record))
        return record

    def _take_pending(
        self, state: MessagingDocument, contact_id: int, invitee: str
    ) -> ContactRecord:
        record = next(
            (
                c
                for c in state.contacts
                if c.id == contact_id and c.agent2 == invitee and c.status == ContactStatus.PENDING
            ),
            None,
        )
        if record is None:
            raise NotFoundError("Contact request not found or no longer valid.")
        return record

    def accept_contact(self, contact_id: int, acceptor: str) -> ContactRecord:
        """Accept a pending request addressed to ``acceptor``.

        Raises:
            NotFoundError: Unless a pending record with that id invites ``acceptor``.
        """
        acceptor = self.agents.canonical(acceptor)
        with self.store.edit(MESSAGES, MessagingDocument) as state:
            record = self._take_pending(state, contact_id, acceptor)
            record.status = ContactStatus.ACCEPTED
            record.accepted_at = now_ms()
            ensure_conversation(state, record.agent1, record.agent2)

        logger.info("Contact %d accepted by %s", record.id, acceptor)
        self.notifications.notify(
            record.initiator,
            f"{acceptor} accepted your contact request.",
            NotificationType.CONTACT_ACCEPTED,
            origin_author=acceptor,
            contact_id=record.id,
        )
        payload = _payload(record)
        self.gateway.emit_to_room(record.initiator, "contact_accepted_event", payload)
        self.gateway.emit_to_room(acceptor, "contact_accepted_event", payload)
        return record

    def decline_contact(self, contact_id: int, decliner: str) -> ContactRecord:
        """Delete a pending request addressed to ``decliner``.

        Raises:
            NotFoundError: Unless a pending record with that id invites ``decliner``.
        """
        decliner = self.agents.canonical(decliner)
        with self.store.edit(MESSAGES, MessagingDocument) as state:
            record = self._take_pending(state, contact_id, decliner)
            state.contacts.remove(record)
        record.status = ContactStatus.DECLINED

        logger.info("Contact %d declined by %s", record.id, decliner)
        self.notifications.notify(
            record.initiator,
            f"{decliner} declined your contact request.",
            NotificationType.CONTACT_DECLINED,
            origin_author=decliner,
            contact_id=record.id,
        )
        payload = _payload(record)
        self.gateway.emit_to_room(record.initiator, "contact_declined_event", payload)
        self.gateway.emit_to_room(decliner, "contact_declined_event", payload)
        return record

    def list_contacts(self, agent: str) -> list[ContactRecord]:
        return self.graph.contacts_of(self.agents.canonical(agent))

    def is_accepted_friend(self, first: str, second: str) -> bool:
        return self.graph.is_accepted_friend(first, second)
