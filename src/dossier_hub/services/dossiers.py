"""Dossier (post) lifecycle and social reactions.

Every mutation rewrites the ``dossiers`` document, emits the matching
realtime event to all clients and, when another agent is affected, raises a
notification for them. Notifications are created after the dossier write
completes so the two documents are never locked together.
"""

from __future__ import annotations

import logging
from typing import Any

from dossier_hub.core.errors import InvalidInputError, NotFoundError
from dossier_hub.core.settings import settings
from dossier_hub.db.store import DOSSIERS, DocumentStore
from dossier_hub.db.time import next_id, utc_isoformat
from dossier_hub.schemas.dossier import (
    Comment,
    Dossier,
    DossierCreate,
    DossiersDocument,
    DossierUpdate,
)
from dossier_hub.schemas.notification import BROADCAST_RECIPIENT, NotificationType
from dossier_hub.services.agents import AgentService
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import RealtimeGateway

logger = logging.getLogger(__name__)

__all__ = ["DossierService"]


def _serialize(model: Dossier | Comment) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _toggle(members: list[str], agent: str) -> bool:
    """Add or remove ``agent``; return True when it was added."""
    if agent in members:
        members.remove(agent)
        return False
    members.append(agent)
    return True


def _admin_message(before: Dossier, update: DossierUpdate) -> str:
    title = before.title
    if update.is_hidden is True and not before.is_hidden:
        return f'The Agency hid your dossier: "{title}"'
    if update.is_hidden is False and before.is_hidden:
        return f'The Agency restored your dossier: "{title}"'
    if update.image_hidden is True and not before.image_hidden:
        return f'The Agency hid the media of your dossier: "{title}"'
    if update.image_hidden is False and before.image_hidden:
        return f'The Agency restored the media of your dossier: "{title}"'
    return f'The Agency modified your dossier: "{title}"'


class DossierService:
    """Create, edit and react to dossiers and their comments."""

    def __init__(
        self,
        store: DocumentStore,
        gateway: RealtimeGateway,
        notifications: NotificationService,
        admin_agent: str | None = None,
        agents: AgentService | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.notifications = notifications
        self.admin_agent = admin_agent or settings.admin_agent_name
        self.agents = agents or AgentService(store)

    def _is_admin_action(self, performer: str | None, author: str) -> bool:
        return performer == self.admin_agent and author != self.admin_agent

    @staticmethod
    def _get_dossier(state: DossiersDocument, dossier_id: int) -> Dossier:
        dossier = state.find(dossier_id)
        if dossier is None:
            raise NotFoundError("Dossier not found.")
        return dossier

    @staticmethod
    def _get_comment(dossier: Dossier, comment_id: int) -> Comment:
        comment = dossier.find_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found.")
        return comment

    def list_dossiers(self) -> list[Dossier]:
        return self.store.load_model(DOSSIERS, DossiersDocument).dossiers

    def create_dossier(self, data: DossierCreate) -> Dossier:
        """Publish a dossier and tell the author's contacts about it.

        Raises:
            InvalidInputError: If title, description or author is empty.
            NotFoundError: If the author is not a known agent.
        """
        if not (data.title and data.desc and data.author):
            raise InvalidInputError("Title, description and author are required.")
        author = self.agents.resolve(data.author)

        dossier = Dossier(
            id=next_id(),
            title=data.title,
            desc=data.desc,
            media=data.media,
            author=author,
            is_hidden=data.is_hidden,
            image_hidden=data.image_hidden,
        )
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            state.dossiers.insert(0, dossier)

        logger.info("Dossier %d created by %s", dossier.id, dossier.author)
        self.gateway.emit_global("new_dossier", _serialize(dossier))
        self.notifications.notify(
            BROADCAST_RECIPIENT,
            f'{dossier.author} posted a new dossier: "{dossier.title}"',
            NotificationType.NEW_POST_FRIEND,
            origin_author=dossier.author,
            dossier_id=dossier.id,
        )
        return dossier

    def update_dossier(self, dossier_id: int, update: DossierUpdate) -> Dossier:
        """Apply the supplied fields to a dossier.

        Raises:
            NotFoundError: If the dossier does not exist.
        """
        changes = update.model_dump(exclude_unset=True, exclude={"action_performer"})
        performer = update.action_performer
        if performer:
            performer = self.agents.canonical(performer)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            before = dossier.model_copy(deep=True)
            for field, value in changes.items():
                if value is None:
                    continue
                if field == "media":
                    value = update.media
                setattr(dossier, field, value)

        self.gateway.emit_global("update_dossier", _serialize(dossier))
        if self._is_admin_action(performer, before.author):
            self.notifications.notify(
                before.author,
                _admin_message(before, update),
                NotificationType.ADMIN_ACTION,
                origin_author=self.admin_agent,
                performer=self.admin_agent,
                dossier_id=dossier.id,
            )
        return dossier

    def delete_dossier(self, dossier_id: int, action_performer: str | None = None) -> Dossier:
        """Remove a dossier.

        Raises:
            NotFoundError: If the dossier does not exist.
        """
        if action_performer:
            action_performer = self.agents.canonical(action_performer)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            state.dossiers.remove(dossier)

        logger.info("Dossier %d deleted", dossier_id)
        self.gateway.emit_global("delete_dossier", {"id": dossier_id})
        if self._is_admin_action(action_performer, dossier.author):
            self.notifications.notify(
                dossier.author,
                f'The Agency deleted your dossier: "{dossier.title}"',
                NotificationType.ADMIN_ACTION,
                origin_author=self.admin_agent,
                performer=self.admin_agent,
                dossier_id=dossier.id,
            )
        return dossier

    def toggle_reaction(self, dossier_id: int, agent: str, is_like: bool = True) -> dict[str, int]:
        """Toggle a like (or dislike); the two are mutually exclusive.

        Returns:
            Current like and dislike counts.
        """
        if not agent:
            raise InvalidInputError("Agent name is required.")
        agent = self.agents.canonical(agent)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            chosen, opposite = (
                (dossier.likes, dossier.dislikes) if is_like else (dossier.dislikes, dossier.likes)
            )
            added = _toggle(chosen, agent)
            if added and agent in opposite:
                opposite.remove(agent)

        self.gateway.emit_global(
            "update_dossier_likes",
            {"dossierId": dossier.id, "likes": dossier.likes, "dislikes": dossier.dislikes},
        )
        if added and dossier.author != agent:
            if is_like:
                text = f'{agent} liked your dossier "{dossier.title}"'
                kind = NotificationType.LIKE_DOSSIER
            else:
                text = f'{agent} disliked your dossier "{dossier.title}"'
                kind = NotificationType.DISLIKE_DOSSIER
            self.notifications.notify(
                dossier.author, text, kind, origin_author=agent, dossier_id=dossier.id
            )
        return {"likes": len(dossier.likes), "dislikes": len(dossier.dislikes)}

    def toggle_repost(self, dossier_id: int, agent: str) -> dict[str, int]:
        if not agent:
            raise InvalidInputError("Agent name is required.")
        agent = self.agents.canonical(agent)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            added = _toggle(dossier.reposts, agent)

        self.gateway.emit_global(
            "update_dossier_reposts", {"dossierId": dossier.id, "reposts": dossier.reposts}
        )
        if added and dossier.author != agent:
            self.notifications.notify(
                dossier.author,
                f'{agent} reposted your dossier "{dossier.title}"',
                NotificationType.REPOST_DOSSIER,
                origin_author=agent,
                dossier_id=dossier.id,
            )
        return {"reposts": len(dossier.reposts)}

    def add_comment(
        self, dossier_id: int, text: str, author: str, parent_id: int | None = None
    ) -> Comment:
        """Comment on a dossier, optionally replying to another comment."""
        if not text or not author:
            raise InvalidInputError("Comment text and author are required.")
        author = self.agents.resolve(author)
        comment = Comment(
            id=next_id(),
            text=text,
            author=author,
            timestamp=utc_isoformat(),
            parent_id=parent_id,
        )
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            parent = dossier.find_comment(parent_id) if parent_id is not None else None
            dossier.comments.append(comment)

        self.gateway.emit_global(
            "new_comment", {"dossierId": dossier.id, "comment": _serialize(comment)}
        )
        if dossier.author != author:
            self.notifications.notify(
                dossier.author,
                f'{author} commented on your dossier "{dossier.title}"',
                NotificationType.NEW_COMMENT_DOSSIER,
                origin_author=author,
                dossier_id=dossier.id,
            )
        if parent is not None and parent.author != author:
            self.notifications.notify(
                parent.author,
                f'{author} replied to your comment on "{dossier.title}"',
                NotificationType.REPLY_COMMENT,
                origin_author=author,
                dossier_id=dossier.id,
                comment_id=comment.id,
            )
        return comment

    def edit_comment(
        self,
        dossier_id: int,
        comment_id: int,
        text: str,
        action_performer: str | None = None,
        no_modified_tag: bool = False,
    ) -> Comment:
        if not text:
            raise InvalidInputError("Comment text is required.")
        if action_performer:
            action_performer = self.agents.canonical(action_performer)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            comment = self._get_comment(dossier, comment_id)
            comment.text = text
            comment.modified = not no_modified_tag
            comment.timestamp = utc_isoformat()

        self.gateway.emit_global(
            "update_comment", {"dossierId": dossier.id, "comment": _serialize(comment)}
        )
        if action_performer and comment.author != action_performer:
            self.notifications.notify(
                comment.author,
                f'{action_performer} edited a comment on the dossier "{dossier.title}"',
                NotificationType.EDIT_COMMENT,
                origin_author=action_performer,
                dossier_id=dossier.id,
                comment_id=comment.id,
            )
        return comment

    def delete_comment(
        self, dossier_id: int, comment_id: int, action_performer: str | None = None
    ) -> Comment:
        """Delete a comment together with every reply beneath it."""
        if action_performer:
            action_performer = self.agents.canonical(action_performer)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            deleted = self._get_comment(dossier, comment_id)
            doomed = {comment_id}
            frontier = [comment_id]
            while frontier:
                current = frontier.pop()
                for reply in dossier.comments:
                    if reply.parent_id == current and reply.id not in doomed:
                        doomed.add(reply.id)
                        frontier.append(reply.id)
            dossier.comments = [c for c in dossier.comments if c.id not in doomed]

        logger.info("Deleted %d comment(s) from dossier %d", len(doomed), dossier_id)
        self.gateway.emit_global(
            "delete_comment", {"dossierId": dossier.id, "commentId": comment_id}
        )
        if action_performer and deleted.author != action_performer:
            self.notifications.notify(
                deleted.author,
                f'{action_performer} deleted a comment on the dossier "{dossier.title}"',
                NotificationType.DELETE_COMMENT,
                origin_author=action_performer,
                dossier_id=dossier.id,
                comment_id=comment_id,
            )
        return deleted

    def toggle_comment_like(self, dossier_id: int, comment_id: int, agent: str) -> dict[str, int]:
        if not agent:
            raise InvalidInputError("Agent name is required.")
        agent = self.agents.canonical(agent)
        with self.store.edit(DOSSIERS, DossiersDocument) as state:
            dossier = self._get_dossier(state, dossier_id)
            comment = self._get_comment(dossier, comment_id)
            added = _toggle(comment.likes, agent)

        self.gateway.emit_global(
            "update_comment_likes",
            {"dossierId": dossier.id, "commentId": comment.id, "likes": comment.likes},
        )
        if added and comment.author != agent:
            self.notifications.notify(
                comment.author,
                f'{agent} liked your comment on "{dossier.title}"',
                NotificationType.LIKE_COMMENT,
                origin_author=agent,
                dossier_id=dossier.id,
                comment_id=comment.id,
            )
        return {"likes": len(comment.likes)}
