"""Business logic services for the Dossier Hub application."""

from .agents import AgentService
from .bootstrap import initialize_store, seed_agents
from .contact_graph import ContactGraph
from .contacts import ContactService
from .conversations import ConversationService
from .dossiers import DossierService
from .notifications import NotificationService
from .realtime import RealtimeGateway, Subscription, get_gateway

__all__ = [
    "AgentService",
    "ContactGraph",
    "ContactService",
    "ConversationService",
    "DossierService",
    "NotificationService",
    "RealtimeGateway",
    "Subscription",
    "get_gateway",
    "initialize_store",
    "seed_agents",
]
