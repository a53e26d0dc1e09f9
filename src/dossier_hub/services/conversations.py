"""Private conversations between accepted contacts."""
from __future__ import annotations

import logging
from typing import Any

from dossier_hub.core.errors import ForbiddenError, InvalidInputError, NotFoundError
from dossier_hub.db.store import MESSAGES, DocumentStore
from dossier_hub.db.time import next_id, utc_isoformat
from dossier_hub.schemas.common import MediaRef
from dossier_hub.schemas.message import Message, MessagingDocument, Reaction
from dossier_hub.schemas.notification import NotificationType
from dossier_hub.services.agents import AgentService
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import RealtimeGateway

logger = logging.getLogger(__name__)

__all__ = ["ConversationService"]


def _serialize(model: Message | Reaction) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


class ConversationService:
    """Read threads, send messages and react to them."""

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

    def get_conversation(self, first: str, second: str) -> list[Message]:
        """Return the pair's messages, or an empty list when no thread exists."""
        state = self.store.load_model(MESSAGES, MessagingDocument)
        conversation = state.conversation_between(
            self.agents.canonical(first), self.agents.canonical(second)
        )
        return conversation.messages if conversation is not None else []

    def send_message(
        self,
        sender: str,
        recipient: str,
        text: str | None = None,
        media: MediaRef | None = None,
        transfer_from_message_id: int | None = None,
    ) -> Message:
        """Append a message to the thread between two accepted contacts.

        Raises:
            InvalidInputError: If neither text nor media is supplied.
            ForbiddenError: If the agents are not accepted contacts with a thread.
        """
        if not sender or not recipient:
            raise InvalidInputError("Sender and recipient are required.")
        if not (text and text.strip()) and media is None:
            raise InvalidInputError("A message needs text or media.")
        sender = self.agents.canonical(sender)
        recipient = self.agents.canonical(recipient)

        with self.store.edit(MESSAGES, MessagingDocument) as state:
            conversation = state.conversation_between(sender, recipient)
            if conversation is None or not state.accepted_between(sender, recipient):
                raise ForbiddenError("Conversation not found or contact not accepted.")
            message = Message(
                id=next_id(),
                sender=sender,
                text=(text or "").strip() or None,
                media=media,
                timestamp=utc_isoformat(),
                reactions=[],
                transfer_from_message_id=transfer_from_message_id,
            )
            conversation.messages.append(message)

        logger.info("Message %d from %s to %s", message.id, sender, recipient)
        payload = _serialize(message)
        self.gateway.emit_to_room(
            sender, "new_private_message", {"recipient": recipient, "message": payload}
        )
        self.gateway.emit_to_room(
            recipient, "new_private_message", {"sender": sender, "message": payload}
        )
        self.notifications.notify(
            recipient,
            f"{sender} sent you a message.",
            NotificationType.NEW_MESSAGE,
            origin_author=sender,
            message_id=message.id,
        )
        return message

    def react(self, message_id: int, agent: str, emoji: str) -> list[Reaction]:
        """Toggle ``agent``'s ``emoji`` on a message in any conversation.

        Raises:
            InvalidInputError: If the agent or emoji is missing.
            NotFoundError: If no message has that id.
        """
        if not agent or not emoji:
            raise InvalidInputError("Agent name and emoji are required.")
        agent = self.agents.canonical(agent)

        with self.store.edit(MESSAGES, MessagingDocument) as state:
            for conversation in state.conversations:
                message = conversation.find_message(message_id)
                if message is not None:
                    break
            else:
                raise NotFoundError("Message not found.")
            reactions = message.toggle_reaction(agent, emoji)
            participants = list(conversation.participants)

        update = {
            "messageId": message.id,
            "reactions": [_serialize(reaction) for reaction in reactions],
            "reactor": agent,
            "emoji": emoji,
        }
        for participant in participants:
            self.gateway.emit_to_room(participant, "message_reaction_update", update)

        if message.sender != agent:
            self.notifications.notify(
                message.sender,
                f"{agent} reacted to your message with {emoji}.",
                NotificationType.MESSAGE_REACTION,
                origin_author=agent,
                message_id=message.id,
                emoji=emoji,
                reactor=agent,
            )
        return reactions
