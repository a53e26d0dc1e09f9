"""Version 1 API endpoints."""

from .endpoints import (
    agents_router,
    contacts_router,
    dossiers_router,
    messages_router,
    notifications_router,
    realtime_router,
)

__all__ = [
    "agents_router",
    "dossiers_router",
    "contacts_router",
    "messages_router",
    "notifications_router",
    "realtime_router",
]
