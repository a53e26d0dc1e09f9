"""Notification engine: creation, per-agent visibility and retirement.

Three audiences exist:

* direct notifications, addressed to one agent, consumed (deleted) on read;
* broadcast notifications (``recipient == "all"``), stored once, with the
  agents that read them tracked in ``read_by``;
* friend-scoped notifications (``new_post_friend``), stored once as a
  broadcast and shown only to accepted contacts of the author.
"""

from __future__ import annotations

import logging
from typing import Any

from dossier_hub.core.errors import NotFoundError
from dossier_hub.db.store import NOTIFICATIONS, DocumentStore
from dossier_hub.db.time import next_id, utc_isoformat
from dossier_hub.schemas.notification import (
    BROADCAST_RECIPIENT,
    FriendPostNotification,
    NotificationBase,
    NotificationsDocument,
    NotificationType,
    notification_adapter,
)
from dossier_hub.services.contact_graph import ContactGraph
from dossier_hub.services.realtime import RealtimeGateway

logger = logging.getLogger(__name__)

__all__ = ["NotificationService"]


def _serialize(notification: NotificationBase) -> dict[str, Any]:
    return notification.model_dump(mode="json", by_alias=True)


def is_visible_to(
    notification: NotificationBase,
    agent: str,
    friends: set[str],
) -> bool:
    """Return True if ``agent`` should currently see ``notification``."""
    if isinstance(notification, FriendPostNotification):
        if notification.recipient == agent:
            return True
        author = notification.origin_author
        return (
            author is not None
            and author != agent
            and author in friends
            and not notification.is_read_by(agent)
        )
    if notification.recipient == agent:
        return True
    return notification.is_broadcast and not notification.is_read_by(agent)


class NotificationService:
    """Persist notifications and push them to the realtime gateway."""

    def __init__(
        self,
        store: DocumentStore,
        gateway: RealtimeGateway,
        graph: ContactGraph | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.graph = graph or ContactGraph(store)

    def notify(
        self,
        recipient: str,
        message: str,
        type: NotificationType = NotificationType.GENERAL,
        origin_author: str | None = None,
        **details: Any,
    ) -> NotificationBase:
        """Append a notification and emit ``new_notification``.

        Args:
            recipient: Agent name, or ``"all"`` for a broadcast.
            message: Human-readable text.
            type: Notification kind.
            origin_author: Agent whose action caused the notification.
            **details: Kind-specific fields (``dossier_id``, ``emoji``, ...).

        Returns:
            The stored notification.
        """
        notification = notification_adapter.validate_python(
            {
                "id": next_id(),
                "recipient": recipient,
                "message": message,
                "timestamp": utc_isoformat(),
                "type": type,
                "origin_author": origin_author,
                "read_by": [],
                **details,
            }
        )
        with self.store.edit(NOTIFICATIONS, NotificationsDocument) as state:
            state.notifications.append(notification)

        logger.info(
            "Notification %d (%s) for %s",
            notification.id,
            NotificationType(notification.type).value,
            recipient,
        )
        self._publish(notification)
        return notification

    def _publish(self, notification: NotificationBase) -> None:
        payload = _serialize(notification)
        if isinstance(notification, FriendPostNotification) and notification.is_broadcast:
            author = notification.origin_author
            if author is None:
                return
            for friend in sorted(self.graph.accepted_friends(author)):
                self.gateway.emit_to_room(friend, "new_notification", payload)
        elif notification.is_broadcast:
            self.gateway.emit_global("new_notification", payload)
        else:
            self.gateway.emit_to_room(notification.recipient, "new_notification", payload)

    def _visible(self, agent: str) -> list[NotificationBase]:
        state = self.store.load_model(NOTIFICATIONS, NotificationsDocument)
        friends = self.graph.accepted_friends(agent)
        return [n for n in state.notifications if is_visible_to(n, agent, friends)]

    def list_visible(self, agent: str) -> list[dict[str, Any]]:
        """Return the notifications ``agent`` can see, each with a transient ``read`` flag."""
        return [
            {**_serialize(notification), "read": notification.is_read_by(agent)}
            for notification in self._visible(agent)
        ]

    def unread_count(self, agent: str) -> int:
        return sum(1 for n in self._visible(agent) if not n.is_read_by(agent))

    def mark_read(self, notification_id: int, agent: str) -> None:
        """Retire a notification for ``agent``.

        Broadcasts record the reader; direct notifications are deleted.

        Raises:
            NotFoundError: If no notification has that id.
        """
        with self.store.edit(NOTIFICATIONS, NotificationsDocument) as state:
            notification = state.find(notification_id)
            if notification is None:
                raise NotFoundError("Notification not found.")
            if notification.is_broadcast:
                notification.mark_read_by(agent)
            else:
                state.notifications.remove(notification)

    def mark_all_read(self, agent: str) -> None:
        """Mark every broadcast read by ``agent`` and delete its direct notifications."""
        with self.store.edit(NOTIFICATIONS, NotificationsDocument) as state:
            kept = []
            for notification in state.notifications:
                if notification.is_broadcast:
                    notification.mark_read_by(agent)
                    kept.append(notification)
                elif notification.recipient != agent:
                    kept.append(notification)
            state.notifications = kept

        self.gateway.emit_to_room(agent, "delete_all_notifications_client", {"agentName": agent})

    def delete_notification(self, notification_id: int) -> None:
        """Delete a notification for everyone; unknown ids are ignored."""
        with self.store.edit(NOTIFICATIONS, NotificationsDocument) as state:
            notification = state.find(notification_id)
            if notification is not None:
                state.notifications.remove(notification)

        payload = {"notificationId": notification_id}
        if notification is not None and not notification.is_broadcast:
            self.gateway.emit_to_room(notification.recipient, "delete_notification_client", payload)
        else:
            self.gateway.emit_global("delete_notification_client", payload)
