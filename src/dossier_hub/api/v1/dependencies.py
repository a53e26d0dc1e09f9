"""Shared API dependencies wiring services to the document store and gateway."""

from typing import Annotated

from fastapi import Depends

from dossier_hub.db import DocumentStore, get_store
from dossier_hub.services.agents import AgentService
from dossier_hub.services.contacts import ContactService
from dossier_hub.services.conversations import ConversationService
from dossier_hub.services.dossiers import DossierService
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import RealtimeGateway, get_gateway


def get_store_dep() -> DocumentStore:
    """Return the process-wide document store."""
    return get_store()


def get_gateway_dep() -> RealtimeGateway:
    """Return the process-wide realtime gateway."""
    return get_gateway()


# Type aliases for the shared singletons
StoreDep = Annotated[DocumentStore, Depends(get_store_dep)]
GatewayDep = Annotated[RealtimeGateway, Depends(get_gateway_dep)]


def get_agent_service(store: StoreDep) -> AgentService:
    return AgentService(store)


AgentServiceDep = Annotated[AgentService, Depends(get_agent_service)]


def get_notification_service(store: StoreDep, gateway: GatewayDep) -> NotificationService:
    return NotificationService(store, gateway)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_contact_service(
    store: StoreDep,
    gateway: GatewayDep,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> ContactService:
    return ContactService(store, gateway, notifications, agents)


def get_conversation_service(
    store: StoreDep,
    gateway: GatewayDep,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> ConversationService:
    return ConversationService(store, gateway, notifications, agents)


def get_dossier_service(
    store: StoreDep,
    gateway: GatewayDep,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> DossierService:
    return DossierService(store, gateway, notifications, agents=agents)


ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
ConversationServiceDep = Annotated[ConversationService, Depends(get_conversation_service)]
DossierServiceDep = Annotated[DossierService, Depends(get_dossier_service)]
