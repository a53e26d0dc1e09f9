"""Agent directory and identity resolution."""
from __future__ import annotations

from dossier_hub.core.errors import NotFoundError
from dossier_hub.db.store import AGENTS, DocumentStore
from dossier_hub.schemas.agent import Agent, AgentsDocument

__all__ = ["AgentService"]


class AgentService:
    """Read access to the agents document.

    Agent names are matched case-insensitively on input and replaced with the
    stored spelling, so every later comparison can be a plain equality.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def list_agents(self) -> list[Agent]:
        return self.store.load_model(AGENTS, AgentsDocument).agents

    def find(self, name: str) -> Agent | None:
        """Return the agent named ``name``, preferring an exact match."""
        name = (name or "").strip()
        agents = self.list_agents()
        for agent in agents:
            if agent.name == name:
                return agent
        folded = name.casefold()
        return next((agent for agent in agents if agent.name.casefold() == folded), None)

    def resolve(self, name: str) -> str:
        """Return the canonical spelling of a known agent.

        Raises:
            NotFoundError: If no agent matches ``name``.
        """
        agent = self.find(name)
        if agent is None:
            raise NotFoundError(f"Agent not found: {name}")
        return agent.name

    def canonical(self, name: str) -> str:
        """Like :meth:`resolve` but returns the trimmed input for unknown names."""
        agent = self.find(name)
        return agent.name if agent is not None else (name or "").strip()
