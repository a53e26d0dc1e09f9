# src/dossier_hub/schemas/__init__.py
"""
Pydantic schemas for stored documents and API request/response models.

These schemas define the structure of persisted and API data for
serialization and validation.
"""

from .agent import Agent, AgentResponse, AgentsDocument
from .common import Ack, CamelModel, MediaRef
from .contact import (
    ContactAccept,
    ContactDecline,
    ContactRecord,
    ContactRequestCreate,
    ContactStatus,
)
from .dossier import (
    ActionPerformer,
    Comment,
    CommentCreate,
    CommentLikeToggle,
    CommentUpdate,
    Dossier,
    DossierCreate,
    DossierReactionToggle,
    DossiersDocument,
    DossierUpdate,
    RepostToggle,
)
from .message import (
    Conversation,
    Message,
    MessageCreate,
    MessagingDocument,
    Reaction,
    ReactionCreate,
)
from .notification import (
    BROADCAST_RECIPIENT,
    FriendPostNotification,
    MarkReadRequest,
    Notification,
    NotificationBase,
    NotificationsDocument,
    NotificationType,
)

__all__ = [
    "Ack", "CamelModel", "MediaRef",
    "Agent", "AgentResponse", "AgentsDocument",
    "ContactAccept", "ContactDecline", "ContactRecord", "ContactRequestCreate", "ContactStatus",
    "ActionPerformer", "Comment", "CommentCreate", "CommentLikeToggle", "CommentUpdate",
    "Dossier", "DossierCreate", "DossierReactionToggle", "DossiersDocument", "DossierUpdate",
    "RepostToggle",
    "Conversation", "Message", "MessageCreate", "MessagingDocument", "Reaction", "ReactionCreate",
    "BROADCAST_RECIPIENT", "FriendPostNotification", "MarkReadRequest", "Notification",
    "NotificationBase", "NotificationsDocument", "NotificationType",
]
