"""Private message Pydantic schemas."""

from __future__ import annotations

from pydantic import Field

from .common import CamelModel, MediaRef
from .contact import ContactRecord


class Reaction(CamelModel):
    """One agent's emoji on a message; at most one per agent."""

    agent: str
    emoji: str


class Message(CamelModel):
    """A message inside a two-party conversation."""

    id: int
    sender: str
    text: str | None = None
    media: MediaRef | None = None
    timestamp: str
    reactions: list[Reaction] = Field(default_factory=list)
    transfer_from_message_id: int | None = None

    def toggle_reaction(self, agent: str, emoji: str) -> list[Reaction]:
        """Apply ``emoji`` from ``agent``.

        The same emoji again removes the agent's reaction, a different one
        replaces it in place.
        """
        for index, reaction in enumerate(self.reactions):
            if reaction.agent != agent:
                continue
            if reaction.emoji == emoji:
                del self.reactions[index]
            else:
                reaction.emoji = emoji
            return self.reactions
        self.reactions.append(Reaction(agent=agent, emoji=emoji))
        return self.reactions


class Conversation(CamelModel):
    """Message thread between exactly two participants."""

    id: int
    participants: list[str]
    messages: list[Message] = Field(default_factory=list)

    def is_between(self, first: str, second: str) -> bool:
        """Return True for a two-party thread joining ``first`` and ``second``."""
        return len(self.participants) == 2 and set(self.participants) == {first, second}

    def find_message(self, message_id: int) -> Message | None:
        return next((message for message in self.messages if message.id == message_id), None)


class MessagingDocument(CamelModel):
    """Shape of the ``messages`` document: the contact graph plus all threads."""

    contacts: list[ContactRecord] = Field(default_factory=list)
    conversations: list[Conversation] = Field(default_factory=list)

    def conversation_between(self, first: str, second: str) -> Conversation | None:
        return next(
            (conv for conv in self.conversations if conv.is_between(first, second)),
            None,
        )

    def accepted_between(self, first: str, second: str) -> bool:
        return any(c.is_accepted and c.links(first, second) for c in self.contacts)


class MessageCreate(CamelModel):
    """Body of ``POST /messages``."""

    sender: str = Field(..., min_length=1)
    recipient: str = Field(..., min_length=1)
    text: str | None = None
    media: MediaRef | None = None
    transfer_from_message_id: int | None = None


class ReactionCreate(CamelModel):
    """Body of ``POST /messages/{message_id}/react``."""

    agent_name: str
    emoji: str
