"""Startup initialization of the document store."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from dossier_hub.core.errors import StorageIOError
from dossier_hub.core.settings import settings
from dossier_hub.db.store import AGENTS, DOCUMENT_ORDER, DocumentStore
from dossier_hub.schemas.agent import Agent, AgentsDocument

logger = logging.getLogger(__name__)

__all__ = ["initialize_store", "seed_agents"]


def seed_agents(
    store: DocumentStore,
    names: Iterable[str] | None = None,
    code: str | None = None,
) -> list[Agent]:
    """Write the default agents when the agents document holds none.

    Returns:
        The agents present after seeding.
    """
    with store.edit(AGENTS, AgentsDocument) as state:
        if not state.agents:
            seed = names if names is not None else settings.default_agents
            state.agents = [
                Agent(name=name, code=code if code is not None else settings.default_agent_code)
                for name in seed
            ]
            logger.info("Seeded %d default agents", len(state.agents))
        return list(state.agents)


def initialize_store(store: DocumentStore) -> None:
    """Create the backing storage, seed agents and repair every document.

    Raises:
        StorageIOError: If the storage cannot be read or written.
    """
    logger.info("Initializing %s", type(store).__name__)
    try:
        store.initialize()
        seed_agents(store)
        for name in DOCUMENT_ORDER:
            if name != AGENTS:
                store.ensure(name)
                logger.debug("Document %s ready", name)
    except StorageIOError:
        logger.error("Document store initialization failed", exc_info=True)
        raise
