"""Read-only view of the contact graph."""
from __future__ import annotations

from dossier_hub.db.store import MESSAGES, DocumentStore
from dossier_hub.schemas.contact import ContactRecord
from dossier_hub.schemas.message import MessagingDocument

__all__ = ["ContactGraph"]


class ContactGraph:
    """Derive friendship from accepted contact records.

    Friendship is always computed from the current ``messages`` document,
    never cached, so accepting or declining is visible on the next query.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _state(self) -> MessagingDocument:
        return self.store.load_model(MESSAGES, MessagingDocument)

    def contacts_of(self, agent: str) -> list[ContactRecord]:
        """Return every record where ``agent`` is either party, any status."""
        return [record for record in self._state().contacts if record.involves(agent)]

    def is_accepted_friend(self, first: str, second: str) -> bool:
        return self._state().accepted_between(first, second)

    def accepted_friends(self, agent: str) -> set[str]:
        """Return the names of every agent with an accepted record with ``agent``."""
        return {
            record.counterpart(agent)
            for record in self._state().contacts
            if record.is_accepted and record.involves(agent)
        }
