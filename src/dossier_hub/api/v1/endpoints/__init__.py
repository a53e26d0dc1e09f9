"""API endpoint modules for version 1."""

from .agents import router as agents_router
from .contacts import router as contacts_router
from .dossiers import router as dossiers_router
from .messages import router as messages_router
from .notifications import router as notifications_router
from .realtime import router as realtime_router

__all__ = [
    "agents_router",
    "dossiers_router",
    "contacts_router",
    "messages_router",
    "notifications_router",
    "realtime_router",
]
