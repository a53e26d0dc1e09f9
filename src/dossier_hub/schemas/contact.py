"""Contact-related Pydantic schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from .common import CamelModel


class ContactStatus(str, Enum):
    """Lifecycle of a contact request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class ContactRecord(CamelModel):
    """Relationship between two agents.

    ``agent1`` is the sender and ``agent2`` the invited recipient, but the
    pair is unordered for every lookup.
    """

    id: int
    agent1: str
    agent2: str
    status: ContactStatus = ContactStatus.PENDING
    initiator: str
    timestamp: int
    accepted_at: int | None = None

    def involves(self, agent: str) -> bool:
        return agent in (self.agent1, self.agent2)

    def links(self, first: str, second: str) -> bool:
        """Return True if the record joins ``first`` and ``second`` in any order."""
        return {self.agent1, self.agent2} == {first, second} and first != second

    def links_casefold(self, first: str, second: str) -> bool:
        return {self.agent1.casefold(), self.agent2.casefold()} == {
            first.casefold(),
            second.casefold(),
        }

    def counterpart(self, agent: str) -> str:
        return self.agent2 if self.agent1 == agent else self.agent1

    @property
    def is_accepted(self) -> bool:
        return self.status == ContactStatus.ACCEPTED


class ContactRequestCreate(CamelModel):
    """Body of ``POST /contacts/request``."""

    sender: str = Field(..., min_length=1)
    recipient: str = Field(..., min_length=1)


class ContactAccept(CamelModel):
    """Body of ``POST /contacts/accept``."""

    contact_id: int
    acceptor_agent_name: str = Field(..., min_length=1)


class ContactDecline(CamelModel):
    """Body of ``POST /contacts/decline``."""

    contact_id: int
    decliner_agent_name: str = Field(..., min_length=1)
