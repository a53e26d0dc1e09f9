"""Notification Pydantic schemas.

Notifications are a closed family keyed by ``type``. Each kind carries only
the context it needs (the reacting agent and emoji for a message reaction,
the performer for a moderation action, ...), and :data:`Notification` is the
discriminated union used to read and write the ``notifications`` document.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Final, Literal, Union

from pydantic import Field, TypeAdapter

from .common import CamelModel

BROADCAST_RECIPIENT: Final[str] = "all"


class NotificationType(str, Enum):
    GENERAL = "general"
    ADMIN_ACTION = "admin_action"
    LIKE_DOSSIER = "like_dossier"
    DISLIKE_DOSSIER = "dislike_dossier"
    REPOST_DOSSIER = "repost_dossier"
    NEW_COMMENT_DOSSIER = "new_comment_dossier"
    REPLY_COMMENT = "reply_comment"
    EDIT_COMMENT = "edit_comment"
    DELETE_COMMENT = "delete_comment"
    LIKE_COMMENT = "like_comment"
    CONTACT_REQUEST = "contact_request"
    CONTACT_ACCEPTED = "contact_accepted"
    CONTACT_DECLINED = "contact_declined"
    NEW_MESSAGE = "new_message"
    MESSAGE_REACTION = "message_reaction"
    NEW_POST_FRIEND = "new_post_friend"


class NotificationBase(CamelModel):
    """Fields shared by every notification kind."""

    id: int
    recipient: str
    message: str
    timestamp: str
    origin_author: str | None = None
    read_by: list[str] = Field(default_factory=list)

    @property
    def is_broadcast(self) -> bool:
        return self.recipient == BROADCAST_RECIPIENT

    def is_read_by(self, agent: str) -> bool:
        return agent in self.read_by

    def mark_read_by(self, agent: str) -> None:
        if agent not in self.read_by:
            self.read_by.append(agent)


class GeneralNotification(NotificationBase):
    type: Literal[NotificationType.GENERAL] = NotificationType.GENERAL


class AdminActionNotification(NotificationBase):
    """Moderation performed on the recipient's dossier."""

    type: Literal[NotificationType.ADMIN_ACTION] = NotificationType.ADMIN_ACTION
    performer: str | None = None
    dossier_id: int | None = None


class DossierActivityNotification(NotificationBase):
    """Someone reacted to or commented on the recipient's dossier."""

    type: Literal[
        NotificationType.LIKE_DOSSIER,
        NotificationType.DISLIKE_DOSSIER,
        NotificationType.REPOST_DOSSIER,
        NotificationType.NEW_COMMENT_DOSSIER,
    ]
    dossier_id: int | None = None


class CommentActivityNotification(NotificationBase):
    """Someone touched one of the recipient's comments."""

    type: Literal[
        NotificationType.REPLY_COMMENT,
        NotificationType.EDIT_COMMENT,
        NotificationType.DELETE_COMMENT,
        NotificationType.LIKE_COMMENT,
    ]
    dossier_id: int | None = None
    comment_id: int | None = None


class ContactNotification(NotificationBase):
    type: Literal[
        NotificationType.CONTACT_REQUEST,
        NotificationType.CONTACT_ACCEPTED,
        NotificationType.CONTACT_DECLINED,
    ]
    contact_id: int | None = None


class NewMessageNotification(NotificationBase):
    type: Literal[NotificationType.NEW_MESSAGE] = NotificationType.NEW_MESSAGE
    message_id: int | None = None


class MessageReactionNotification(NotificationBase):
    type: Literal[NotificationType.MESSAGE_REACTION] = NotificationType.MESSAGE_REACTION
    message_id: int | None = None
    emoji: str | None = None
    reactor: str | None = None


class FriendPostNotification(NotificationBase):
    """A new dossier by ``origin_author``.

    Stored once as a broadcast; visibility is derived per reader from the
    contact graph instead of being written per friend.
    """

    type: Literal[NotificationType.NEW_POST_FRIEND] = NotificationType.NEW_POST_FRIEND
    dossier_id: int | None = None


Notification = Annotated[
    Union[
        GeneralNotification,
        AdminActionNotification,
        DossierActivityNotification,
        CommentActivityNotification,
        ContactNotification,
        NewMessageNotification,
        MessageReactionNotification,
        FriendPostNotification,
    ],
    Field(discriminator="type"),
]

notification_adapter: TypeAdapter[Any] = TypeAdapter(Notification)


class NotificationsDocument(CamelModel):
    """Shape of the ``notifications`` document."""

    notifications: list[Notification] = Field(default_factory=list)

    def find(self, notification_id: int) -> NotificationBase | None:
        return next((n for n in self.notifications if n.id == notification_id), None)


class MarkReadRequest(CamelModel):
    """Body of ``PUT /notifications/mark-read/{id}``."""

    agent_name: str = Field(..., min_length=1)
